"""Reservation admission and lifecycle."""
from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from barbooking.core.config import get_settings
from barbooking.models.drink_option import DrinkOption, DrinkOptionType
from barbooking.models.profile import Profile
from barbooking.models.reservation import (
    Reservation,
    ReservationDrink,
    ReservationStatus,
)
from barbooking.models.seat_option import SeatOption, SeatOptionType
from barbooking.services import bar_service, calendar_service
from barbooking.services.capacity_service import counts_toward_capacity
from barbooking.services.errors import (
    BarClosed,
    BookingError,
    BookingWarning,
    DrinkMinimumNotMet,
    InvalidInput,
    NotFound,
    PartySizeOutOfRange,
    SeatTypeUnavailable,
    SoldOut,
    StorageUnavailable,
    drink_attachment_failed,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.CONFIRMED: {
        ReservationStatus.CANCELLED,
        ReservationStatus.COMPLETED,
        ReservationStatus.NO_SHOW,
    },
    ReservationStatus.CANCELLED: set(),
    ReservationStatus.COMPLETED: set(),
    ReservationStatus.NO_SHOW: set(),
}

_CENTS = Decimal("0.01")


@dataclass(slots=True, frozen=True)
class DrinkLine:
    """Requested drink pre-order."""

    drink_option_id: uuid.UUID
    quantity: int


@dataclass(slots=True, frozen=True)
class DrinkSnapshot:
    """Drink line priced and named from the menu at booking time."""

    drink_option_id: uuid.UUID
    name: str
    type: DrinkOptionType
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(slots=True)
class ReservationOutcome:
    """Result of a reservation request."""

    reservation: Reservation
    warnings: list[BookingWarning] = field(default_factory=list)
    replayed: bool = False


def _reservation_query():
    return select(Reservation).options(selectinload(Reservation.drinks))


async def get_reservation(
    session: AsyncSession,
    *,
    reservation_id: uuid.UUID,
) -> Reservation | None:
    stmt = (
        _reservation_query()
        .where(Reservation.id == reservation_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def _reload(session: AsyncSession, reservation_id: uuid.UUID) -> Reservation:
    reservation = await get_reservation(session, reservation_id=reservation_id)
    if reservation is None:
        raise NotFound("Reservation not found", resource="reservation")
    return reservation


async def list_customer_reservations(
    session: AsyncSession,
    *,
    customer_id: uuid.UUID,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = (
        _reservation_query()
        .where(Reservation.customer_id == customer_id)
        .order_by(Reservation.reservation_date.desc(), Reservation.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().all()


async def list_bar_reservations(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    reservation_date: date | None = None,
    status: ReservationStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = _reservation_query().where(Reservation.bar_id == bar_id)
    if reservation_date is not None:
        stmt = stmt.where(Reservation.reservation_date == reservation_date)
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    stmt = (
        stmt.order_by(Reservation.reservation_date.asc(), Reservation.created_at.asc())
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().all()


def _coerce_seat_type(value: SeatOptionType | str) -> SeatOptionType:
    try:
        return SeatOptionType(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown seat type {value!r}", field="seat_type") from exc


def check_party_size(option: SeatOption, party_size: int) -> None:
    if not option.min_people <= party_size <= option.max_people:
        raise PartySizeOutOfRange(
            f"{option.type.value.capitalize()} seating accommodates "
            f"{option.min_people}-{option.max_people} guests",
            min_people=option.min_people,
            max_people=option.max_people,
            party_size=party_size,
        )


async def resolve_drink_lines(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    lines: Sequence[DrinkLine],
) -> list[DrinkSnapshot]:
    """Snapshot each requested drink from the bar's current menu."""
    if not lines:
        return []
    requested = {line.drink_option_id for line in lines}
    result = await session.execute(
        select(DrinkOption).where(
            DrinkOption.id.in_(requested),
            DrinkOption.bar_id == bar_id,
        )
    )
    menu = {drink.id: drink for drink in result.scalars().all()}
    missing = sorted(str(drink_id) for drink_id in requested - menu.keys())
    if missing:
        raise NotFound(
            "Drink option not found for this bar",
            resource="drink_option",
            ids=missing,
        )
    return [
        DrinkSnapshot(
            drink_option_id=line.drink_option_id,
            name=menu[line.drink_option_id].name,
            type=menu[line.drink_option_id].type,
            price=Decimal(menu[line.drink_option_id].price),
            quantity=line.quantity,
        )
        for line in lines
    ]


def check_drink_minimums(
    restrictions: Mapping[str, Any] | None,
    snapshots: Iterable[DrinkSnapshot],
) -> None:
    """Enforce the seat type's bottle and consumption minimums."""
    if not restrictions:
        return
    snapshots = list(snapshots)

    min_bottles = restrictions.get("min_bottles")
    if min_bottles is not None:
        required = int(min_bottles)
        bottles = sum(s.quantity for s in snapshots if s.type == DrinkOptionType.BOTTLE)
        if bottles < required:
            shortfall = required - bottles
            raise DrinkMinimumNotMet(
                f"This seating requires at least {required} bottle(s); "
                f"add {shortfall} more",
                restriction="min_bottles",
                required=required,
                provided=bottles,
                shortfall=shortfall,
            )

    min_consumption = restrictions.get("min_consumption")
    if min_consumption is not None:
        required_amount = Decimal(str(min_consumption)).quantize(_CENTS)
        spent = sum((s.line_total for s in snapshots), Decimal("0")).quantize(_CENTS)
        if spent < required_amount:
            shortfall_amount = required_amount - spent
            raise DrinkMinimumNotMet(
                f"This seating requires a minimum spend of {required_amount}; "
                f"add {shortfall_amount} more",
                restriction="min_consumption",
                required=str(required_amount),
                provided=str(spent),
                shortfall=str(shortfall_amount),
            )


async def _find_by_idempotency_key(
    session: AsyncSession,
    *,
    customer_id: uuid.UUID,
    idempotency_key: str,
) -> Reservation | None:
    result = await session.execute(
        select(Reservation).where(
            Reservation.customer_id == customer_id,
            Reservation.idempotency_key == idempotency_key,
        )
    )
    return result.scalar_one_or_none()


def _ensure_replay_matches(
    existing: Reservation,
    *,
    bar_id: uuid.UUID,
    reservation_date: date,
    seat_type: SeatOptionType,
) -> None:
    if (
        existing.bar_id != bar_id
        or existing.reservation_date != reservation_date
        or existing.seat_type != seat_type
    ):
        raise InvalidInput(
            "Idempotency key was already used for a different reservation",
            field="idempotency_key",
        )


async def _claim_seat_unit(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
    reservation_date: date,
) -> tuple[uuid.UUID, int]:
    """Lock the seat option, re-count bookings and pick a free unit number."""
    option_row = (
        await session.execute(
            select(SeatOption.id, SeatOption.enabled, SeatOption.available_count)
            .where(SeatOption.bar_id == bar_id, SeatOption.type == seat_type)
            .with_for_update()
        )
    ).one_or_none()
    if option_row is None or not option_row.enabled:
        raise SeatTypeUnavailable(
            f"{seat_type.value.capitalize()} seating is not available at this bar",
            seat_type=seat_type.value,
        )

    held_units = (
        await session.execute(
            select(Reservation.seat_unit).where(
                Reservation.bar_id == bar_id,
                Reservation.reservation_date == reservation_date,
                Reservation.seat_type == seat_type,
                counts_toward_capacity(),
            )
        )
    ).scalars().all()
    if len(held_units) >= option_row.available_count:
        logger.info(
            "Sold out: bar %s %s %s (%d/%d held)",
            bar_id,
            reservation_date,
            seat_type.value,
            len(held_units),
            option_row.available_count,
        )
        raise SoldOut(
            f"{seat_type.value.capitalize()} seating is sold out for "
            f"{reservation_date.isoformat()}",
            seat_type=seat_type.value,
            reservation_date=reservation_date.isoformat(),
        )
    taken = {unit for unit in held_units if unit is not None}
    unit = next(
        number
        for number in range(1, option_row.available_count + 1)
        if number not in taken
    )
    return option_row.id, unit


async def _commit_reservation(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    customer_id: uuid.UUID,
    seat_type: SeatOptionType,
    reservation_date: date,
    party_size: int,
    special_requests: str | None,
    idempotency_key: str | None,
) -> tuple[uuid.UUID, bool]:
    """Insert the reservation in the transaction that re-derived capacity.

    Returns the reservation id and whether it was a concurrent duplicate of
    the same idempotency key.
    """
    settings = get_settings()
    attempts = settings.reservation_commit_attempts
    last_error: SQLAlchemyError | None = None
    for attempt in range(1, attempts + 1):
        try:
            seat_option_id, seat_unit = await _claim_seat_unit(
                session,
                bar_id=bar_id,
                seat_type=seat_type,
                reservation_date=reservation_date,
            )
            reservation = Reservation(
                bar_id=bar_id,
                customer_id=customer_id,
                seat_option_id=seat_option_id,
                seat_type=seat_type,
                reservation_date=reservation_date,
                party_size=party_size,
                special_requests=special_requests,
                status=ReservationStatus.CONFIRMED,
                seat_unit=seat_unit,
                idempotency_key=idempotency_key,
            )
            session.add(reservation)
            await session.commit()
            return reservation.id, False
        except BookingError:
            await session.rollback()
            raise
        except IntegrityError as exc:
            await session.rollback()
            last_error = exc
            if idempotency_key:
                existing = await _find_by_idempotency_key(
                    session, customer_id=customer_id, idempotency_key=idempotency_key
                )
                if existing is not None:
                    _ensure_replay_matches(
                        existing,
                        bar_id=bar_id,
                        reservation_date=reservation_date,
                        seat_type=seat_type,
                    )
                    logger.info(
                        "Concurrent duplicate of idempotency key for reservation %s",
                        existing.id,
                    )
                    return existing.id, True
            logger.info(
                "Seat unit taken concurrently for bar %s %s %s (attempt %d/%d)",
                bar_id,
                reservation_date,
                seat_type.value,
                attempt,
                attempts,
            )
        except OperationalError as exc:
            await session.rollback()
            last_error = exc
            logger.warning(
                "Reservation commit contention for bar %s (attempt %d/%d): %s",
                bar_id,
                attempt,
                attempts,
                exc,
            )
        if attempt < attempts:
            await asyncio.sleep(settings.reservation_retry_backoff_seconds * attempt)

    raise StorageUnavailable(
        "Could not secure a seat right now; please try again",
        retryable=True,
    ) from last_error


async def _insert_drink_lines(
    session: AsyncSession,
    *,
    reservation_id: uuid.UUID,
    snapshots: Sequence[DrinkSnapshot],
) -> None:
    session.add_all(
        [
            ReservationDrink(
                reservation_id=reservation_id,
                drink_option_id=snapshot.drink_option_id,
                name_at_booking=snapshot.name,
                type_at_booking=snapshot.type,
                price_at_booking=snapshot.price,
                quantity=snapshot.quantity,
            )
            for snapshot in snapshots
        ]
    )
    await session.commit()


async def create_reservation(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    customer_id: uuid.UUID,
    reservation_date: str | date,
    seat_type: SeatOptionType | str,
    party_size: int,
    special_requests: str | None = None,
    drink_lines: Sequence[DrinkLine] = (),
    idempotency_key: str | None = None,
    today: date | None = None,
) -> ReservationOutcome:
    """Validate a booking request and commit it if a seat unit is free.

    Checks run in a fixed order and the first failure is raised: bar open
    on the date, seat type offered, party size within bounds, drink
    minimums, and finally capacity inside the write transaction.
    """
    target = calendar_service.parse_iso_date(reservation_date, field="reservation_date")
    seat = _coerce_seat_type(seat_type)
    if party_size < 1:
        raise InvalidInput("party_size must be at least 1", field="party_size")
    if any(line.quantity < 1 for line in drink_lines):
        raise InvalidInput("Drink quantities must be at least 1", field="drinks")

    bar = await bar_service.get_bar(session, bar_id=bar_id)
    if await session.get(Profile, customer_id) is None:
        raise NotFound("Customer not found", resource="profile")
    reference = today or bar_service.local_today(bar)

    if idempotency_key:
        existing = await _find_by_idempotency_key(
            session, customer_id=customer_id, idempotency_key=idempotency_key
        )
        if existing is not None:
            _ensure_replay_matches(
                existing, bar_id=bar_id, reservation_date=target, seat_type=seat
            )
            logger.info("Replaying reservation %s for idempotency key", existing.id)
            replay = await _reload(session, existing.id)
            return ReservationOutcome(reservation=replay, replayed=True)

    bar_service.ensure_within_window(target, target, today=reference)

    resolution = await calendar_service.resolve_date(
        session, bar_id=bar_id, target=target
    )
    if not resolution.is_open:
        raise BarClosed(
            f"The bar is closed on {target.isoformat()}",
            reservation_date=target.isoformat(),
        )

    option = (
        await session.execute(
            select(SeatOption).where(
                SeatOption.bar_id == bar_id, SeatOption.type == seat
            )
        )
    ).scalar_one_or_none()
    if option is None or not option.enabled:
        raise SeatTypeUnavailable(
            f"{seat.value.capitalize()} seating is not offered by this bar",
            seat_type=seat.value,
        )

    check_party_size(option, party_size)
    restrictions = dict(option.restrictions) if option.restrictions else None

    snapshots = await resolve_drink_lines(session, bar_id=bar_id, lines=drink_lines)
    check_drink_minimums(restrictions, snapshots)

    reservation_id, replayed = await _commit_reservation(
        session,
        bar_id=bar_id,
        customer_id=customer_id,
        seat_type=seat,
        reservation_date=target,
        party_size=party_size,
        special_requests=special_requests,
        idempotency_key=idempotency_key,
    )

    warnings: list[BookingWarning] = []
    if snapshots and not replayed:
        try:
            await _insert_drink_lines(
                session, reservation_id=reservation_id, snapshots=snapshots
            )
        except SQLAlchemyError:
            await session.rollback()
            logger.exception(
                "Failed to attach %d drink line(s) to reservation %s",
                len(snapshots),
                reservation_id,
            )
            warnings.append(drink_attachment_failed())

    reservation = await _reload(session, reservation_id)
    if not replayed:
        logger.info(
            "Reservation %s confirmed for bar %s on %s (%s, party of %d)",
            reservation_id,
            bar_id,
            target,
            seat.value,
            party_size,
        )
    return ReservationOutcome(reservation=reservation, warnings=warnings, replayed=replayed)


def _validate_status_transition(current: ReservationStatus, target: ReservationStatus) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise InvalidInput(
            f"Invalid status transition from {current.value} to {target.value}",
            field="status",
        )


async def update_status(
    session: AsyncSession,
    *,
    reservation: Reservation,
    status: ReservationStatus,
) -> Reservation:
    """Move a reservation along its lifecycle; cancelling frees its seat unit."""
    _validate_status_transition(reservation.status, status)
    reservation.status = status
    if status == ReservationStatus.CANCELLED:
        reservation.seat_unit = None
    await session.commit()
    return await _reload(session, reservation.id)


async def cancel_reservation(
    session: AsyncSession, *, reservation: Reservation
) -> Reservation:
    return await update_status(
        session, reservation=reservation, status=ReservationStatus.CANCELLED
    )


async def check_in_reservation(
    session: AsyncSession,
    *,
    reservation: Reservation,
    today: date,
    checked_in_at: datetime | None = None,
) -> Reservation:
    if reservation.status != ReservationStatus.CONFIRMED:
        raise InvalidInput("Only confirmed reservations can be checked in")
    if reservation.reservation_date != today:
        raise InvalidInput("Reservations can only be checked in on their date")
    reservation.checked_in_at = checked_in_at or datetime.now(UTC)
    await session.commit()
    return await _reload(session, reservation.id)
