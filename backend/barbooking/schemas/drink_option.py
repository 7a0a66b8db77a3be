"""Drink option schemas."""

from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import Field, model_validator

from barbooking.models.drink_option import DrinkOptionType
from barbooking.schemas.base import CamelModel


class DrinkOptionCreate(CamelModel):
    type: DrinkOptionType
    name: str | None = Field(default=None, max_length=255)
    price: Decimal = Field(gt=Decimal("0"), max_digits=8, decimal_places=2)

    @model_validator(mode="after")
    def _require_bottle_name(self) -> "DrinkOptionCreate":
        if self.type == DrinkOptionType.BOTTLE and not (self.name or "").strip():
            raise ValueError("Bottles require a name")
        return self


class DrinkOptionUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    price: Decimal | None = Field(
        default=None, gt=Decimal("0"), max_digits=8, decimal_places=2
    )


class DrinkOptionRead(CamelModel):
    id: uuid.UUID
    bar_id: uuid.UUID
    type: DrinkOptionType
    name: str
    price: Decimal
