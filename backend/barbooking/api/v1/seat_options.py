"""Seat option inventory endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.api import deps
from barbooking.api.errors import to_http_exception
from barbooking.models.profile import Profile
from barbooking.models.seat_option import SeatOptionType
from barbooking.schemas.seat_option import SeatOptionRead, SeatOptionUpsert
from barbooking.security.permissions import require_bar_owner, require_bar_staff
from barbooking.services import seat_option_service
from barbooking.services.errors import BookingError

router = APIRouter(prefix="/bars/{bar_id}/seat-options")


@router.get("", response_model=list[SeatOptionRead], summary="List seat options")
async def list_seat_options(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> list[SeatOptionRead]:
    await require_bar_staff(session, current_profile, bar_id)
    options = await seat_option_service.list_seat_options(session, bar_id=bar_id)
    return [SeatOptionRead.model_validate(option) for option in options]


@router.put(
    "/{seat_type}", response_model=SeatOptionRead, summary="Configure a seat type"
)
async def upsert_seat_option(
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
    payload: SeatOptionUpsert,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> SeatOptionRead:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        option = await seat_option_service.upsert_seat_option(
            session, bar_id=bar_id, seat_type=seat_type, payload=payload
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return SeatOptionRead.model_validate(option)


@router.delete(
    "/{seat_type}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete seat type",
)
async def delete_seat_option(
    bar_id: uuid.UUID,
    seat_type: SeatOptionType,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> None:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        await seat_option_service.delete_seat_option(
            session, bar_id=bar_id, seat_type=seat_type
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return None
