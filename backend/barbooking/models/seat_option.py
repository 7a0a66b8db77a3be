"""Seat inventory configuration per seat type."""
from __future__ import annotations

import enum
import uuid
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Enum,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from barbooking.db.base import Base
from barbooking.models.mixins import TimestampMixin


class SeatOptionType(str, enum.Enum):
    """Seating categories a bar can sell."""

    TABLE = "table"
    BAR = "bar"
    VIP = "vip"


# Canonical presentation order; the client renders every type in this order.
SEAT_TYPE_ORDER: tuple[SeatOptionType, ...] = (
    SeatOptionType.TABLE,
    SeatOptionType.BAR,
    SeatOptionType.VIP,
)


class SeatOption(TimestampMixin, Base):
    """Sellable units of one seat type per operating day."""

    __tablename__ = "seat_options"
    __table_args__ = (
        UniqueConstraint("bar_id", "type", name="uq_seat_options_bar_type"),
        CheckConstraint("available_count >= 0", name="ck_seat_options_available"),
        CheckConstraint("min_people > 0", name="ck_seat_options_min_people"),
        CheckConstraint("max_people >= min_people", name="ck_seat_options_max_people"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[SeatOptionType] = mapped_column(Enum(SeatOptionType), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    available_count: Mapped[int] = mapped_column(Integer, nullable=False)
    min_people: Mapped[int] = mapped_column(Integer, nullable=False)
    max_people: Mapped[int] = mapped_column(Integer, nullable=False)
    restrictions: Mapped[dict[str, Any] | None] = mapped_column(JSON)
