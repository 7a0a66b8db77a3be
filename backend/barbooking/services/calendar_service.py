"""Resolve whether a bar is open on a calendar date."""
from __future__ import annotations

import re
import uuid
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.operating_hours import BarException, OperatingHour
from barbooking.services.errors import InvalidInput

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(slots=True, frozen=True)
class DayResolution:
    """Effective opening state of a bar on one date."""

    is_open: bool
    is_exception: bool = False
    open_time: time | None = None
    close_time: time | None = None
    closes_next_day: bool = False


CLOSED = DayResolution(is_open=False)


def parse_iso_date(value: str | date, *, field: str = "date") -> date:
    """Parse ``YYYY-MM-DD`` strictly, rejecting non-calendar dates."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidInput(f"{field} must be formatted as YYYY-MM-DD", field=field)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInput(f"{field} is not a valid calendar date", field=field) from exc


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def resolve_day(
    target: date,
    weekly_hours: Mapping[int, OperatingHour],
    exception: BarException | None,
) -> DayResolution:
    """Resolve one date against the weekly template and its exception.

    An exception for the date is authoritative. Without one, the weekday row
    (ISO numbering, 1=Monday) decides and a missing row means closed.
    """
    if exception is not None:
        if exception.is_closed:
            return DayResolution(is_open=False, is_exception=True)
        return DayResolution(
            is_open=True,
            is_exception=True,
            open_time=exception.open_time,
            close_time=exception.close_time,
            closes_next_day=bool(exception.closes_next_day),
        )

    hour = weekly_hours.get(target.isoweekday())
    if hour is None:
        return CLOSED
    return DayResolution(
        is_open=True,
        open_time=hour.open_time,
        close_time=hour.close_time,
        closes_next_day=hour.closes_next_day,
    )


async def load_weekly_hours(
    session: AsyncSession, *, bar_id: uuid.UUID
) -> dict[int, OperatingHour]:
    result = await session.execute(
        select(OperatingHour).where(OperatingHour.bar_id == bar_id)
    )
    return {hour.day_of_week: hour for hour in result.scalars().all()}


async def load_exceptions(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> dict[date, BarException]:
    result = await session.execute(
        select(BarException).where(
            BarException.bar_id == bar_id,
            BarException.exception_date >= start_date,
            BarException.exception_date <= end_date,
        )
    )
    return {exc.exception_date: exc for exc in result.scalars().all()}


async def resolve_range(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> dict[date, DayResolution]:
    """Resolve every date in ``start_date..end_date`` (inclusive)."""
    weekly_hours = await load_weekly_hours(session, bar_id=bar_id)
    exceptions = await load_exceptions(
        session, bar_id=bar_id, start_date=start_date, end_date=end_date
    )
    return {
        day: resolve_day(day, weekly_hours, exceptions.get(day))
        for day in iter_dates(start_date, end_date)
    }


async def resolve_date(
    session: AsyncSession, *, bar_id: uuid.UUID, target: date
) -> DayResolution:
    resolved = await resolve_range(
        session, bar_id=bar_id, start_date=target, end_date=target
    )
    return resolved[target]
