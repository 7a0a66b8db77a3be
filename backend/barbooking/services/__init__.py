"""Service layer exports."""
from barbooking.services import (
    availability_service,
    bar_service,
    calendar_service,
    capacity_service,
    drink_option_service,
    operating_hours_service,
    reservation_service,
    seat_option_service,
)

__all__ = [
    "availability_service",
    "bar_service",
    "calendar_service",
    "capacity_service",
    "drink_option_service",
    "operating_hours_service",
    "reservation_service",
    "seat_option_service",
]
