"""Reservation endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.api import deps
from barbooking.api.errors import bounded_read, to_http_exception
from barbooking.core.config import get_settings
from barbooking.models.profile import Profile
from barbooking.models.reservation import Reservation, ReservationStatus
from barbooking.schemas.reservation import (
    BookingWarningRead,
    ReservationCheckInRequest,
    ReservationCreate,
    ReservationCreateResponse,
    ReservationRead,
    ReservationStatusUpdate,
)
from barbooking.security.permissions import require_bar_staff
from barbooking.services import bar_service, calendar_service, reservation_service
from barbooking.services.errors import BookingError

_settings = get_settings()

router = APIRouter()
bar_router = APIRouter(prefix="/bars/{bar_id}")


async def _get_visible_reservation(
    session: AsyncSession, profile: Profile, reservation_id: uuid.UUID
) -> Reservation:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    if reservation.customer_id != profile.id:
        await require_bar_staff(session, profile, reservation.bar_id)
    return reservation


@router.post(
    "",
    response_model=ReservationCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
    dependencies=[deps.rate_limit(_settings.rate_limit_booking, fallback=(20, 60))],
)
async def create_reservation(
    payload: ReservationCreate,
    response: Response,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
    idempotency_key: Annotated[str | None, Header(alias="Idempotency-Key")] = None,
) -> ReservationCreateResponse:
    customer_id = payload.customer_id or current_profile.id
    if customer_id != current_profile.id:
        await require_bar_staff(session, current_profile, payload.bar_id)
    try:
        outcome = await reservation_service.create_reservation(
            session,
            bar_id=payload.bar_id,
            customer_id=customer_id,
            reservation_date=payload.reservation_date,
            seat_type=payload.seat_type,
            party_size=payload.party_size,
            special_requests=payload.special_requests,
            drink_lines=[
                reservation_service.DrinkLine(
                    drink_option_id=line.drink_option_id, quantity=line.quantity
                )
                for line in payload.drinks
            ],
            idempotency_key=idempotency_key or payload.idempotency_key,
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    if outcome.replayed:
        response.status_code = status.HTTP_200_OK
    return ReservationCreateResponse(
        reservation=ReservationRead.model_validate(outcome.reservation),
        warnings=[
            BookingWarningRead(code=warning.code, message=warning.message)
            for warning in outcome.warnings
        ],
        replayed=outcome.replayed,
    )


@router.get("", response_model=list[ReservationRead], summary="List my reservations")
async def list_my_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
) -> list[ReservationRead]:
    try:
        reservations = await bounded_read(
            reservation_service.list_customer_reservations(
                session, customer_id=current_profile.id, skip=skip, limit=limit
            )
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return [ReservationRead.model_validate(item) for item in reservations]


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> ReservationRead:
    reservation = await _get_visible_reservation(session, current_profile, reservation_id)
    return ReservationRead.model_validate(reservation)


@router.post(
    "/{reservation_id}/cancel",
    response_model=ReservationRead,
    summary="Cancel reservation",
)
async def cancel_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> ReservationRead:
    reservation = await _get_visible_reservation(session, current_profile, reservation_id)
    try:
        cancelled = await reservation_service.cancel_reservation(
            session, reservation=reservation
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return ReservationRead.model_validate(cancelled)


@router.patch(
    "/{reservation_id}/status",
    response_model=ReservationRead,
    summary="Change reservation status",
)
async def update_reservation_status(
    reservation_id: uuid.UUID,
    payload: ReservationStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    await require_bar_staff(session, current_profile, reservation.bar_id)
    try:
        updated = await reservation_service.update_status(
            session, reservation=reservation, status=payload.status
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return ReservationRead.model_validate(updated)


@router.post(
    "/{reservation_id}/check-in",
    response_model=ReservationRead,
    summary="Check in reservation",
)
async def check_in_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
    payload: ReservationCheckInRequest | None = None,
) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    bar = await require_bar_staff(session, current_profile, reservation.bar_id)
    try:
        checked_in = await reservation_service.check_in_reservation(
            session,
            reservation=reservation,
            today=bar_service.local_today(bar),
            checked_in_at=payload.checked_in_at if payload else None,
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return ReservationRead.model_validate(checked_in)


@bar_router.get(
    "/reservations",
    response_model=list[ReservationRead],
    summary="List bar reservations",
)
async def list_bar_reservations(
    bar_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_profile: Annotated[Profile, Depends(deps.get_current_profile)],
    reservation_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    reservation_status: ReservationStatus | None = Query(default=None, alias="status"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
) -> list[ReservationRead]:
    await require_bar_staff(session, current_profile, bar_id)
    try:
        target: date | None = None
        if reservation_date is not None:
            target = calendar_service.parse_iso_date(
                reservation_date, field="reservation_date"
            )
        reservations = await bounded_read(
            reservation_service.list_bar_reservations(
                session,
                bar_id=bar_id,
                reservation_date=target,
                status=reservation_status,
                skip=skip,
                limit=limit,
            )
        )
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return [ReservationRead.model_validate(item) for item in reservations]
