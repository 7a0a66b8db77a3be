"""Weekly operating hours and date-specific exceptions."""
from __future__ import annotations

import uuid
from datetime import date, time

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from barbooking.db.base import Base
from barbooking.models.mixins import TimestampMixin


class OperatingHour(TimestampMixin, Base):
    """Opening window for one weekday (1=Monday .. 7=Sunday)."""

    __tablename__ = "operating_hours"
    __table_args__ = (
        UniqueConstraint("bar_id", "day_of_week", name="uq_operating_hours_bar_day"),
        CheckConstraint(
            "day_of_week BETWEEN 1 AND 7", name="ck_operating_hours_day_of_week"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    open_time: Mapped[time] = mapped_column(Time(), nullable=False)
    close_time: Mapped[time] = mapped_column(Time(), nullable=False)
    closes_next_day: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )


class BarException(TimestampMixin, Base):
    """Override of the weekly template for a single calendar date."""

    __tablename__ = "bar_exceptions"
    __table_args__ = (
        UniqueConstraint("bar_id", "exception_date", name="uq_bar_exceptions_bar_date"),
        CheckConstraint(
            "is_closed OR (open_time IS NOT NULL AND close_time IS NOT NULL"
            " AND closes_next_day IS NOT NULL)",
            name="ck_bar_exceptions_hours",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exception_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    open_time: Mapped[time | None] = mapped_column(Time())
    close_time: Mapped[time | None] = mapped_column(Time())
    closes_next_day: Mapped[bool | None] = mapped_column(Boolean)
    reason: Mapped[str | None] = mapped_column(String(255))
