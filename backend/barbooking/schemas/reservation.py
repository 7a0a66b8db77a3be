"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from barbooking.models.drink_option import DrinkOptionType
from barbooking.models.reservation import ReservationStatus
from barbooking.models.seat_option import SeatOptionType
from barbooking.schemas.base import CamelModel


class DrinkLineCreate(CamelModel):
    """Drink pre-order line submitted with a reservation."""

    drink_option_id: uuid.UUID
    quantity: int = Field(ge=1, le=100)


class ReservationCreate(CamelModel):
    """Payload for creating reservations."""

    bar_id: uuid.UUID
    customer_id: uuid.UUID | None = None
    reservation_date: str
    seat_type: SeatOptionType
    party_size: int
    special_requests: str | None = Field(default=None, max_length=1000)
    drinks: list[DrinkLineCreate] = Field(default_factory=list, max_length=50)
    idempotency_key: str | None = Field(default=None, min_length=1, max_length=128)


class ReservationDrinkRead(CamelModel):
    id: uuid.UUID
    drink_option_id: uuid.UUID | None = None
    name_at_booking: str
    type_at_booking: DrinkOptionType
    price_at_booking: Decimal
    quantity: int


class ReservationRead(CamelModel):
    """Serialized reservation representation."""

    id: uuid.UUID
    bar_id: uuid.UUID
    customer_id: uuid.UUID
    seat_type: SeatOptionType
    reservation_date: date
    party_size: int
    special_requests: str | None = None
    status: ReservationStatus
    checked_in_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    drinks: list[ReservationDrinkRead] = Field(default_factory=list)


class BookingWarningRead(CamelModel):
    code: str
    message: str


class ReservationCreateResponse(CamelModel):
    """Created (or replayed) reservation plus non-fatal warnings."""

    reservation: ReservationRead
    warnings: list[BookingWarningRead] = Field(default_factory=list)
    replayed: bool = False


class ReservationStatusUpdate(CamelModel):
    status: ReservationStatus


class ReservationCheckInRequest(CamelModel):
    """Payload for reservation check-in."""

    checked_in_at: datetime | None = None
