"""Schema exports."""

from barbooking.schemas.availability import (
    AvailabilityResponse,
    DateStatusRead,
    SeatDetailRead,
    SeatDetailsResponse,
)
from barbooking.schemas.drink_option import (
    DrinkOptionCreate,
    DrinkOptionRead,
    DrinkOptionUpdate,
)
from barbooking.schemas.operating_hours import (
    BarExceptionCreate,
    BarExceptionRead,
    OperatingHourCreate,
    OperatingHourRead,
)
from barbooking.schemas.reservation import (
    BookingWarningRead,
    DrinkLineCreate,
    ReservationCheckInRequest,
    ReservationCreate,
    ReservationCreateResponse,
    ReservationDrinkRead,
    ReservationRead,
    ReservationStatusUpdate,
)
from barbooking.schemas.seat_option import (
    SeatOptionRead,
    SeatOptionUpsert,
    SeatRestrictions,
)

__all__ = [
    "AvailabilityResponse",
    "BarExceptionCreate",
    "BarExceptionRead",
    "BookingWarningRead",
    "DateStatusRead",
    "DrinkLineCreate",
    "DrinkOptionCreate",
    "DrinkOptionRead",
    "DrinkOptionUpdate",
    "OperatingHourCreate",
    "OperatingHourRead",
    "ReservationCheckInRequest",
    "ReservationCreate",
    "ReservationCreateResponse",
    "ReservationDrinkRead",
    "ReservationRead",
    "ReservationStatusUpdate",
    "SeatDetailRead",
    "SeatDetailsResponse",
    "SeatOptionRead",
    "SeatOptionUpsert",
    "SeatRestrictions",
]
