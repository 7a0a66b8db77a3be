"""Seat inventory management for bar owners."""
from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.reservation import Reservation
from barbooking.models.seat_option import SeatOption, SeatOptionType
from barbooking.schemas.seat_option import SeatOptionUpsert
from barbooking.services.capacity_service import seat_type_sort_key
from barbooking.services.errors import InvalidInput, NotFound


async def list_seat_options(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
) -> list[SeatOption]:
    """Return every seat option of a bar, enabled or not, in canonical order."""
    result = await session.execute(
        select(SeatOption).where(SeatOption.bar_id == bar_id)
    )
    options = list(result.scalars().all())
    options.sort(key=lambda option: seat_type_sort_key(option.type))
    return options


async def get_seat_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
) -> SeatOption | None:
    result = await session.execute(
        select(SeatOption).where(
            SeatOption.bar_id == bar_id, SeatOption.type == seat_type
        )
    )
    return result.scalar_one_or_none()


async def upsert_seat_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
    payload: SeatOptionUpsert,
) -> SeatOption:
    """Create or replace the configuration of one seat type.

    Lowering ``available_count`` below the bookings already taken does not
    touch those reservations; the type simply reports zero remaining.
    """
    option = await get_seat_option(session, bar_id=bar_id, seat_type=seat_type)
    if option is None:
        option = SeatOption(bar_id=bar_id, type=seat_type)
        session.add(option)
    option.enabled = payload.enabled
    option.available_count = payload.available_count
    option.min_people = payload.min_people
    option.max_people = payload.max_people
    option.restrictions = (
        payload.restrictions.to_storage() if payload.restrictions else None
    )
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise InvalidInput("Seat option violates inventory constraints") from exc
    await session.refresh(option)
    return option


async def delete_seat_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
) -> None:
    """Remove a seat type; types with booking history can only be disabled."""
    option = await get_seat_option(session, bar_id=bar_id, seat_type=seat_type)
    if option is None:
        raise NotFound("Seat option not found", resource="seat_option")
    booked = await session.scalar(
        select(func.count(Reservation.id)).where(Reservation.seat_option_id == option.id)
    )
    if booked:
        raise InvalidInput(
            "Seat option has reservations; disable it instead of deleting it",
            reservations=booked,
        )
    await session.delete(option)
    await session.commit()
