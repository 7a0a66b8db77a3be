"""Drinks a bar sells for pre-ordering."""
from __future__ import annotations

import enum
import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from barbooking.db.base import Base
from barbooking.models.mixins import TimestampMixin


class DrinkOptionType(str, enum.Enum):
    """Kinds of drinks on a bar's menu."""

    SINGLE_DRINK = "single-drink"
    BOTTLE = "bottle"


SINGLE_DRINK_NAME = "Single Drink"


class DrinkOption(TimestampMixin, Base):
    """A priced drink offered by a bar."""

    __tablename__ = "drink_options"
    __table_args__ = (
        UniqueConstraint("bar_id", "type", "name", name="uq_drink_options_bar_type_name"),
        CheckConstraint("price > 0", name="ck_drink_options_price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[DrinkOptionType] = mapped_column(Enum(DrinkOptionType), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
