"""Schemas for weekly operating hours and date exceptions."""

from __future__ import annotations

import uuid
from datetime import date, time

from pydantic import Field, model_validator

from barbooking.schemas.base import CamelModel


class OperatingHourCreate(CamelModel):
    day_of_week: int = Field(ge=1, le=7)
    open_time: time
    close_time: time
    closes_next_day: bool = False


class OperatingHourRead(OperatingHourCreate):
    id: uuid.UUID
    bar_id: uuid.UUID


class BarExceptionCreate(CamelModel):
    exception_date: date
    is_closed: bool = False
    open_time: time | None = None
    close_time: time | None = None
    closes_next_day: bool | None = None
    reason: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _require_hours_when_open(self) -> "BarExceptionCreate":
        if self.is_closed:
            self.open_time = None
            self.close_time = None
            self.closes_next_day = None
            return self
        if self.open_time is None or self.close_time is None:
            raise ValueError("open_time and close_time are required unless is_closed")
        if self.closes_next_day is None:
            self.closes_next_day = False
        return self


class BarExceptionRead(CamelModel):
    id: uuid.UUID
    bar_id: uuid.UUID
    exception_date: date
    is_closed: bool
    open_time: time | None = None
    close_time: time | None = None
    closes_next_day: bool | None = None
    reason: str | None = None
