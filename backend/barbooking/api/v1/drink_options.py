"""Drink menu endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.api import deps
from barbooking.api.errors import to_http_exception
from barbooking.models.profile import Profile
from barbooking.schemas.drink_option import (
    DrinkOptionCreate,
    DrinkOptionRead,
    DrinkOptionUpdate,
)
from barbooking.security.permissions import require_bar_owner
from barbooking.services import drink_option_service
from barbooking.services.errors import BookingError

router = APIRouter(prefix="/bars/{bar_id}/drink-options")


@router.get("", response_model=list[DrinkOptionRead], summary="List drink options")
async def list_drink_options(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Profile, Depends(deps.get_current_profile)],
) -> list[DrinkOptionRead]:
    options = await drink_option_service.list_drink_options(session, bar_id=bar_id)
    return [DrinkOptionRead.model_validate(option) for option in options]


@router.post(
    "",
    response_model=DrinkOptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add drink option",
)
async def create_drink_option(
    bar_id: uuid.UUID,
    payload: DrinkOptionCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> DrinkOptionRead:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        option = await drink_option_service.create_drink_option(
            session, bar_id=bar_id, payload=payload
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return DrinkOptionRead.model_validate(option)


@router.patch(
    "/{drink_option_id}",
    response_model=DrinkOptionRead,
    summary="Update drink option",
)
async def update_drink_option(
    bar_id: uuid.UUID,
    drink_option_id: uuid.UUID,
    payload: DrinkOptionUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> DrinkOptionRead:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        option = await drink_option_service.update_drink_option(
            session, bar_id=bar_id, drink_option_id=drink_option_id, payload=payload
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return DrinkOptionRead.model_validate(option)


@router.delete(
    "/{drink_option_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete drink option",
)
async def delete_drink_option(
    bar_id: uuid.UUID,
    drink_option_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> None:
    await require_bar_owner(session, current_profile, bar_id)
    try:
        await drink_option_service.delete_drink_option(
            session, bar_id=bar_id, drink_option_id=drink_option_id
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return None
