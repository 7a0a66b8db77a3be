"""Availability endpoints used by the booking calendar."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.api import deps
from barbooking.api.errors import bounded_read, to_http_exception
from barbooking.core.config import get_settings
from barbooking.models.profile import Profile
from barbooking.schemas.availability import (
    AvailabilityResponse,
    DateStatusRead,
    SeatDetailRead,
    SeatDetailsResponse,
)
from barbooking.services import availability_service
from barbooking.services.errors import BookingError

router = APIRouter(
    prefix="/bars/{bar_id}",
    dependencies=[deps.rate_limit(get_settings().rate_limit_default)],
)


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    summary="Date statuses for a range",
)
async def get_availability(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Profile, Depends(deps.get_current_profile)],
    start_date: Annotated[str, Query(description="YYYY-MM-DD")],
    end_date: Annotated[str, Query(description="YYYY-MM-DD")],
) -> AvailabilityResponse:
    try:
        summary = await bounded_read(
            availability_service.range_summary(
                session, bar_id=bar_id, start_date=start_date, end_date=end_date
            )
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return AvailabilityResponse(
        date_status={
            day.isoformat(): DateStatusRead.model_validate(status)
            for day, status in summary.items()
        }
    )


@router.get(
    "/seats",
    response_model=SeatDetailsResponse,
    summary="Remaining seats per type for a date",
)
async def get_seat_details(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Profile, Depends(deps.get_current_profile)],
    target_date: Annotated[str, Query(description="YYYY-MM-DD")],
) -> SeatDetailsResponse:
    try:
        details = await bounded_read(
            availability_service.date_detail(
                session, bar_id=bar_id, target_date=target_date
            )
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return SeatDetailsResponse(
        seat_details=[SeatDetailRead.model_validate(detail) for detail in details]
    )
