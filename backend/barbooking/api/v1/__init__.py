"""Versioned API router."""

from fastapi import APIRouter

from . import (
    availability,
    drink_options,
    health,
    operating_hours,
    reservations,
    seat_options,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(availability.router, tags=["availability"])
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)
router.include_router(reservations.bar_router, tags=["reservations"])
router.include_router(operating_hours.router, tags=["operating-hours"])
router.include_router(seat_options.router, tags=["seat-options"])
router.include_router(drink_options.router, tags=["drink-options"])

__all__ = ["router"]
