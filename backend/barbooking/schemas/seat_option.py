"""Seat option schemas."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import ConfigDict, Field, model_validator

from barbooking.models.seat_option import SeatOptionType
from barbooking.schemas.base import CamelModel


class SeatRestrictions(CamelModel):
    """Consumption rules attached to a seat type; unknown keys are kept."""

    min_bottles: int | None = Field(default=None, ge=0)
    min_consumption: float | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="allow")

    def to_storage(self) -> dict[str, Any] | None:
        stored = self.model_dump(exclude_none=True)
        return stored or None


class SeatOptionUpsert(CamelModel):
    enabled: bool = True
    available_count: int = Field(ge=0)
    min_people: int = Field(ge=1)
    max_people: int = Field(ge=1)
    restrictions: SeatRestrictions | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "SeatOptionUpsert":
        if self.min_people > self.max_people:
            raise ValueError("min_people must not exceed max_people")
        return self


class SeatOptionRead(CamelModel):
    id: uuid.UUID
    bar_id: uuid.UUID
    type: SeatOptionType
    enabled: bool
    available_count: int
    min_people: int
    max_people: int
    restrictions: dict[str, Any] | None = None
