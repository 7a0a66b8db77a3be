"""Manage weekly operating hours and date exceptions of a bar."""
from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.operating_hours import BarException, OperatingHour
from barbooking.schemas.operating_hours import BarExceptionCreate, OperatingHourCreate
from barbooking.services.errors import NotFound


async def list_hours(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
) -> list[OperatingHour]:
    stmt: Select[tuple[OperatingHour]] = (
        select(OperatingHour)
        .where(OperatingHour.bar_id == bar_id)
        .order_by(OperatingHour.day_of_week.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def upsert_hour(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    payload: OperatingHourCreate,
) -> OperatingHour:
    existing_stmt = select(OperatingHour).where(
        OperatingHour.bar_id == bar_id,
        OperatingHour.day_of_week == payload.day_of_week,
    )
    hour = (await session.execute(existing_stmt)).scalar_one_or_none()
    if hour is None:
        hour = OperatingHour(bar_id=bar_id, day_of_week=payload.day_of_week)
        session.add(hour)
    hour.open_time = payload.open_time
    hour.close_time = payload.close_time
    hour.closes_next_day = payload.closes_next_day
    await session.commit()
    await session.refresh(hour)
    return hour


async def delete_hour(
    session: AsyncSession, *, bar_id: uuid.UUID, day_of_week: int
) -> None:
    """Remove a weekday row, which closes the bar on that weekday."""
    hour = (
        await session.execute(
            select(OperatingHour).where(
                OperatingHour.bar_id == bar_id,
                OperatingHour.day_of_week == day_of_week,
            )
        )
    ).scalar_one_or_none()
    if hour is None:
        raise NotFound("Operating hours not found", resource="operating_hour")
    await session.delete(hour)
    await session.commit()


async def list_exceptions(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    from_date: date | None = None,
) -> list[BarException]:
    stmt: Select[tuple[BarException]] = select(BarException).where(
        BarException.bar_id == bar_id
    )
    if from_date is not None:
        stmt = stmt.where(BarException.exception_date >= from_date)
    result = await session.execute(stmt.order_by(BarException.exception_date.asc()))
    return list(result.scalars().all())


async def upsert_exception(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    payload: BarExceptionCreate,
) -> BarException:
    existing_stmt = select(BarException).where(
        BarException.bar_id == bar_id,
        BarException.exception_date == payload.exception_date,
    )
    exception = (await session.execute(existing_stmt)).scalar_one_or_none()
    if exception is None:
        exception = BarException(bar_id=bar_id, exception_date=payload.exception_date)
        session.add(exception)
    exception.is_closed = payload.is_closed
    exception.open_time = payload.open_time
    exception.close_time = payload.close_time
    exception.closes_next_day = payload.closes_next_day
    exception.reason = payload.reason
    await session.commit()
    await session.refresh(exception)
    return exception


async def delete_exception(
    session: AsyncSession, *, bar_id: uuid.UUID, exception_id: uuid.UUID
) -> None:
    exception = await session.get(BarException, exception_id)
    if exception is None or exception.bar_id != bar_id:
        raise NotFound("Exception not found", resource="bar_exception")
    await session.delete(exception)
    await session.commit()
