"""Business errors raised by the booking services.

Every error subclasses ``ValueError`` so callers that only care about
"request rejected" can keep catching that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class BookingError(ValueError):
    """Base class for booking rejections."""

    code = "booking_error"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.extra}


class NotFound(BookingError):
    """Bar, seat option, drink option or reservation does not exist."""

    code = "not_found"


class InvalidInput(BookingError):
    """Malformed request data such as a non-calendar date."""

    code = "invalid_input"


class InvalidRange(BookingError):
    """Dates outside the bookable window or an inverted range."""

    code = "invalid_range"


class BarClosed(BookingError):
    code = "bar_closed"


class SeatTypeUnavailable(BookingError):
    """Seat type disabled or not configured for the bar."""

    code = "seat_type_unavailable"


class PartySizeOutOfRange(BookingError):
    code = "party_size_out_of_range"


class DrinkMinimumNotMet(BookingError):
    """Bottle count or consumption minimum of the seat type is not reached."""

    code = "drink_minimum_not_met"


class SoldOut(BookingError):
    """No unit of the seat type was left when the booking was committed."""

    code = "sold_out"


class StorageUnavailable(BookingError):
    """The database could not complete the request; safe to retry reads."""

    code = "storage_unavailable"


@dataclass(slots=True, frozen=True)
class BookingWarning:
    """Non-fatal problem reported next to a successful booking."""

    code: str
    message: str


def drink_attachment_failed() -> BookingWarning:
    return BookingWarning(
        code="drink_attachment_failed",
        message="Reservation confirmed, but the pre-ordered drinks could not be saved.",
    )


__all__ = [
    "BarClosed",
    "BookingError",
    "BookingWarning",
    "DrinkMinimumNotMet",
    "InvalidInput",
    "InvalidRange",
    "NotFound",
    "PartySizeOutOfRange",
    "SeatTypeUnavailable",
    "SoldOut",
    "StorageUnavailable",
    "drink_attachment_failed",
]
