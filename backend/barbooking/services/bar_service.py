"""Bar lookups shared by the booking services."""
from __future__ import annotations

import logging
import uuid
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.core.config import get_settings
from barbooking.models.bar import Bar
from barbooking.services.errors import InvalidRange, NotFound

logger = logging.getLogger(__name__)


async def get_bar(session: AsyncSession, *, bar_id: uuid.UUID) -> Bar:
    bar = await session.get(Bar, bar_id)
    if bar is None:
        raise NotFound("Bar not found", resource="bar")
    return bar


def _resolve_timezone(bar: Bar) -> ZoneInfo:
    try:
        return ZoneInfo(bar.timezone or "UTC")
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone %r for bar %s; using UTC", bar.timezone, bar.id)
        return ZoneInfo("UTC")


def local_today(bar: Bar, *, now: datetime | None = None) -> date:
    """Return the current calendar date in the bar's timezone."""
    moment = now or datetime.now(UTC)
    return moment.astimezone(_resolve_timezone(bar)).date()


def booking_window(today: date) -> tuple[date, date]:
    """First and last bookable dates relative to ``today`` (inclusive)."""
    return today, today + timedelta(days=get_settings().booking_window_days)


def ensure_within_window(start_date: date, end_date: date, *, today: date) -> None:
    """Reject ranges that are inverted or leave the booking window."""
    if start_date > end_date:
        raise InvalidRange(
            "start_date must be on or before end_date",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )
    first, last = booking_window(today)
    if start_date < first or end_date > last:
        raise InvalidRange(
            f"Dates must fall between {first.isoformat()} and {last.isoformat()}",
            window_start=first.isoformat(),
            window_end=last.isoformat(),
        )
