"""Availability query schemas."""

from __future__ import annotations

from datetime import time
from typing import Any

from barbooking.models.seat_option import SeatOptionType
from barbooking.schemas.base import CamelModel


class DateStatusRead(CamelModel):
    """Bookability of a single date."""

    is_open: bool
    is_exception: bool = False
    open_time: time | None = None
    close_time: time | None = None
    is_fully_booked: bool = False
    available_seat_types: list[SeatOptionType] = []


class AvailabilityResponse(CamelModel):
    """Date statuses keyed by ``YYYY-MM-DD``."""

    date_status: dict[str, DateStatusRead]


class SeatDetailRead(CamelModel):
    """Remaining capacity of one enabled seat type."""

    type: SeatOptionType
    remaining_count: int
    min_people: int
    max_people: int
    restrictions: dict[str, Any] | None = None


class SeatDetailsResponse(CamelModel):
    seat_details: list[SeatDetailRead]
