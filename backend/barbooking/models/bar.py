"""Bar model."""
from __future__ import annotations

import uuid
from datetime import time

from sqlalchemy import Boolean, ForeignKey, String, Text, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from barbooking.db.base import Base
from barbooking.models.mixins import TimestampMixin


class Bar(TimestampMixin, Base):
    """A venue that takes reservations."""

    __tablename__ = "bars"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(String(20))
    website: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text())
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    reservation_hold_until: Mapped[time | None] = mapped_column(Time())
    live: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class StaffAssignment(TimestampMixin, Base):
    """Grants a staff profile access to one bar."""

    __tablename__ = "staff_assignments"
    __table_args__ = (
        UniqueConstraint("staff_id", "bar_id", name="uq_staff_assignments_staff_bar"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    staff_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_by_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
