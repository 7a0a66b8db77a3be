"""ORM models package export."""

from barbooking.models.bar import Bar, StaffAssignment
from barbooking.models.drink_option import DrinkOption, DrinkOptionType
from barbooking.models.operating_hours import BarException, OperatingHour
from barbooking.models.profile import Profile, ProfileRole
from barbooking.models.reservation import (
    Reservation,
    ReservationDrink,
    ReservationStatus,
)
from barbooking.models.seat_option import SEAT_TYPE_ORDER, SeatOption, SeatOptionType

__all__ = [
    "Bar",
    "BarException",
    "DrinkOption",
    "DrinkOptionType",
    "OperatingHour",
    "Profile",
    "ProfileRole",
    "Reservation",
    "ReservationDrink",
    "ReservationStatus",
    "SEAT_TYPE_ORDER",
    "SeatOption",
    "SeatOptionType",
    "StaffAssignment",
]
