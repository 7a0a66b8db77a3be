"""Translate booking errors into HTTP responses."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import HTTPException, status
from sqlalchemy.exc import OperationalError

from barbooking.core.config import get_settings
from barbooking.services.errors import (
    BarClosed,
    BookingError,
    DrinkMinimumNotMet,
    InvalidInput,
    InvalidRange,
    NotFound,
    PartySizeOutOfRange,
    SeatTypeUnavailable,
    SoldOut,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_AFTER_SECONDS = "1"

# Starlette renamed HTTP_422_UNPROCESSABLE_ENTITY.
HTTP_422 = 422

_STATUS_BY_ERROR: dict[type[BookingError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    InvalidRange: status.HTTP_400_BAD_REQUEST,
    BarClosed: status.HTTP_409_CONFLICT,
    SeatTypeUnavailable: status.HTTP_409_CONFLICT,
    SoldOut: status.HTTP_409_CONFLICT,
    PartySizeOutOfRange: HTTP_422,
    DrinkMinimumNotMet: HTTP_422,
    StorageUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(exc: BookingError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    headers = None
    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        headers = {"Retry-After": RETRY_AFTER_SECONDS}
    return HTTPException(status_code=status_code, detail=exc.to_dict(), headers=headers)


async def bounded_read(awaitable: Awaitable[T]) -> T:
    """Await a read query under the configured timeout.

    Timeouts and database connectivity errors surface as
    ``StorageUnavailable`` so clients know the read is safe to retry.
    """
    timeout = get_settings().query_timeout_seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except TimeoutError as exc:
        logger.warning("Read query exceeded %ss", timeout)
        raise StorageUnavailable(
            "Availability is temporarily unavailable", retryable=True
        ) from exc
    except OperationalError as exc:
        logger.warning("Read query failed: %s", exc)
        raise StorageUnavailable(
            "Availability is temporarily unavailable", retryable=True
        ) from exc


__all__ = ["bounded_read", "to_http_exception"]
