"""Operating hours and date exception endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.api import deps
from barbooking.api.errors import to_http_exception
from barbooking.models.profile import Profile
from barbooking.schemas.operating_hours import (
    BarExceptionCreate,
    BarExceptionRead,
    OperatingHourCreate,
    OperatingHourRead,
)
from barbooking.security.permissions import require_bar_owner, require_bar_staff
from barbooking.services import operating_hours_service
from barbooking.services.errors import BookingError

router = APIRouter(prefix="/bars/{bar_id}")


@router.get("/hours", response_model=list[OperatingHourRead], summary="List weekly hours")
async def list_operating_hours(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> list[OperatingHourRead]:
    await require_bar_staff(session, current_profile, bar_id)
    hours = await operating_hours_service.list_hours(session, bar_id=bar_id)
    return [OperatingHourRead.model_validate(hour) for hour in hours]


@router.put("/hours", response_model=OperatingHourRead, summary="Upsert weekly hour")
async def upsert_operating_hour(
    bar_id: uuid.UUID,
    payload: OperatingHourCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> OperatingHourRead:
    await require_bar_owner(session, current_profile, bar_id)
    hour = await operating_hours_service.upsert_hour(
        session, bar_id=bar_id, payload=payload
    )
    return OperatingHourRead.model_validate(hour)


@router.delete(
    "/hours/{day_of_week}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete weekly hour",
)
async def delete_operating_hour(
    bar_id: uuid.UUID,
    day_of_week: Annotated[int, Path(ge=1, le=7)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> None:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        await operating_hours_service.delete_hour(
            session, bar_id=bar_id, day_of_week=day_of_week
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return None


@router.get(
    "/exceptions", response_model=list[BarExceptionRead], summary="List date exceptions"
)
async def list_bar_exceptions(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
    from_date: date | None = Query(default=None),
) -> list[BarExceptionRead]:
    await require_bar_staff(session, current_profile, bar_id)
    exceptions = await operating_hours_service.list_exceptions(
        session, bar_id=bar_id, from_date=from_date
    )
    return [BarExceptionRead.model_validate(item) for item in exceptions]


@router.put(
    "/exceptions", response_model=BarExceptionRead, summary="Upsert date exception"
)
async def upsert_bar_exception(
    bar_id: uuid.UUID,
    payload: BarExceptionCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> BarExceptionRead:
    await require_bar_owner(session, current_profile, bar_id)
    exception = await operating_hours_service.upsert_exception(
        session, bar_id=bar_id, payload=payload
    )
    return BarExceptionRead.model_validate(exception)


@router.delete(
    "/exceptions/{exception_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete date exception",
)
async def delete_bar_exception(
    bar_id: uuid.UUID,
    exception_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> None:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        await operating_hours_service.delete_exception(
            session, bar_id=bar_id, exception_id=exception_id
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return None
