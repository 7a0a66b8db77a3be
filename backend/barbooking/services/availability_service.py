"""Read-only availability queries for the booking flow."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.seat_option import SeatOptionType
from barbooking.services import bar_service, calendar_service, capacity_service


@dataclass(slots=True, frozen=True)
class DateStatus:
    """Bookability summary of one date."""

    is_open: bool
    is_exception: bool = False
    open_time: time | None = None
    close_time: time | None = None
    is_fully_booked: bool = False
    available_seat_types: list[SeatOptionType] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class SeatDetail:
    """Remaining capacity and limits of one enabled seat type."""

    type: SeatOptionType
    remaining_count: int
    min_people: int
    max_people: int
    restrictions: dict[str, Any] | None = None


def summarize_day(
    resolution: calendar_service.DayResolution,
    capacities: dict[SeatOptionType, capacity_service.SeatCapacity],
) -> DateStatus:
    """Build the date status of an open day from its seat capacities.

    A bar without any enabled seat type is open with nothing to offer,
    which is reported as not fully booked with an empty seat list.
    """
    available = [
        seat_type
        for seat_type, capacity in capacities.items()
        if capacity.has_availability
    ]
    fully_booked = bool(capacities) and not available
    return DateStatus(
        is_open=True,
        is_exception=resolution.is_exception,
        open_time=resolution.open_time,
        close_time=resolution.close_time,
        is_fully_booked=fully_booked,
        available_seat_types=available,
    )


async def range_summary(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    start_date: str | date,
    end_date: str | date,
    today: date | None = None,
) -> dict[date, DateStatus]:
    """Summarize every date of a range inside the booking window."""
    start = calendar_service.parse_iso_date(start_date, field="start_date")
    end = calendar_service.parse_iso_date(end_date, field="end_date")
    bar = await bar_service.get_bar(session, bar_id=bar_id)
    reference = today or bar_service.local_today(bar)
    bar_service.ensure_within_window(start, end, today=reference)

    resolutions = await calendar_service.resolve_range(
        session, bar_id=bar_id, start_date=start, end_date=end
    )
    open_dates = [day for day, resolution in resolutions.items() if resolution.is_open]
    capacities = await capacity_service.remaining_capacity_for_dates(
        session, bar_id=bar_id, dates=open_dates
    )

    summary: dict[date, DateStatus] = {}
    for day, resolution in resolutions.items():
        if not resolution.is_open:
            summary[day] = DateStatus(
                is_open=False, is_exception=resolution.is_exception
            )
            continue
        summary[day] = summarize_day(resolution, capacities[day])
    return summary


async def date_detail(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    target_date: str | date,
    today: date | None = None,
) -> list[SeatDetail]:
    """List enabled seat types of a date with their remaining counts."""
    target = calendar_service.parse_iso_date(target_date, field="target_date")
    bar = await bar_service.get_bar(session, bar_id=bar_id)
    reference = today or bar_service.local_today(bar)
    bar_service.ensure_within_window(target, target, today=reference)

    capacities = await capacity_service.remaining_capacity(
        session, bar_id=bar_id, target=target
    )
    return [
        SeatDetail(
            type=capacity.seat_type,
            remaining_count=capacity.remaining,
            min_people=capacity.min_people,
            max_people=capacity.max_people,
            restrictions=capacity.restrictions,
        )
        for capacity in capacities.values()
    ]
