"""Remaining seat capacity per bar, date and seat type.

These are lock-free reads computed at request time. The admission path in
``reservation_service`` re-derives capacity inside its own write transaction
and never trusts these numbers for the final decision.
"""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.reservation import Reservation, ReservationStatus
from barbooking.models.seat_option import SEAT_TYPE_ORDER, SeatOption, SeatOptionType


@dataclass(slots=True, frozen=True)
class SeatCapacity:
    """Capacity snapshot of one enabled seat type on one date."""

    seat_type: SeatOptionType
    available_count: int
    booked: int
    min_people: int
    max_people: int
    restrictions: dict[str, Any] | None = field(default=None)

    @property
    def remaining(self) -> int:
        return max(self.available_count - self.booked, 0)

    @property
    def has_availability(self) -> bool:
        return self.remaining > 0


def seat_type_sort_key(seat_type: SeatOptionType) -> int:
    return SEAT_TYPE_ORDER.index(seat_type)


def compute_capacity(option: SeatOption, booked: int) -> SeatCapacity:
    return SeatCapacity(
        seat_type=option.type,
        available_count=option.available_count,
        booked=booked,
        min_people=option.min_people,
        max_people=option.max_people,
        restrictions=dict(option.restrictions) if option.restrictions else None,
    )


def counts_toward_capacity():
    """SQL criterion selecting reservations that occupy a seat unit."""
    return Reservation.status != ReservationStatus.CANCELLED


async def list_enabled_seat_options(
    session: AsyncSession, *, bar_id: uuid.UUID
) -> list[SeatOption]:
    """Return the bar's enabled seat options in canonical type order."""
    result = await session.execute(
        select(SeatOption).where(
            SeatOption.bar_id == bar_id,
            SeatOption.enabled.is_(True),
        )
    )
    options = list(result.scalars().all())
    options.sort(key=lambda option: seat_type_sort_key(option.type))
    return options


async def count_reservations(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    dates: Sequence[date],
) -> dict[tuple[date, SeatOptionType], int]:
    """Count seat-occupying reservations grouped by date and seat type."""
    if not dates:
        return {}
    result = await session.execute(
        select(
            Reservation.reservation_date,
            Reservation.seat_type,
            func.count(Reservation.id),
        )
        .where(
            Reservation.bar_id == bar_id,
            Reservation.reservation_date.in_(list(dates)),
            counts_toward_capacity(),
        )
        .group_by(Reservation.reservation_date, Reservation.seat_type)
    )
    return {(day, seat_type): count for day, seat_type, count in result.all()}


async def remaining_capacity_for_dates(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    dates: Sequence[date],
) -> dict[date, dict[SeatOptionType, SeatCapacity]]:
    """Compute capacity of every enabled seat type for each requested date."""
    if not dates:
        return {}
    options = await list_enabled_seat_options(session, bar_id=bar_id)
    counts: dict[tuple[date, SeatOptionType], int] = {}
    if options:
        counts = await count_reservations(session, bar_id=bar_id, dates=dates)
    return {
        day: {
            option.type: compute_capacity(option, counts.get((day, option.type), 0))
            for option in options
        }
        for day in dates
    }


async def remaining_capacity(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    target: date,
) -> dict[SeatOptionType, SeatCapacity]:
    """Return the capacity of each enabled seat type on ``target``."""
    by_date = await remaining_capacity_for_dates(
        session, bar_id=bar_id, dates=[target]
    )
    return by_date[target]
