"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from barbooking.db.base import Base
from barbooking.models.drink_option import DrinkOptionType
from barbooking.models.mixins import CreatedAtMixin, TimestampMixin
from barbooking.models.seat_option import SeatOptionType


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class Reservation(TimestampMixin, Base):
    """A committed booking of one seat unit for a date.

    ``seat_unit`` numbers the unit this booking occupies within the seat
    type's daily inventory. The unique constraint on it rejects a second
    booking of the same unit at commit time; cancelling clears it.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint(
            "bar_id",
            "reservation_date",
            "seat_type",
            "seat_unit",
            name="uq_reservations_seat_unit",
        ),
        UniqueConstraint(
            "customer_id", "idempotency_key", name="uq_reservations_idempotency"
        ),
        CheckConstraint("party_size > 0", name="ck_reservations_party_size"),
        Index("ix_reservations_bar_date", "bar_id", "reservation_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    bar_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bars.id", ondelete="CASCADE"), nullable=False
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    seat_option_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("seat_options.id", ondelete="RESTRICT"), nullable=False
    )
    seat_type: Mapped[SeatOptionType] = mapped_column(
        Enum(SeatOptionType), nullable=False
    )
    reservation_date: Mapped[date] = mapped_column(Date, nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text())
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.CONFIRMED, nullable=False
    )
    seat_unit: Mapped[int | None] = mapped_column(Integer)
    idempotency_key: Mapped[str | None] = mapped_column(String(128))
    checked_in_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    drinks: Mapped[list["ReservationDrink"]] = relationship(
        "ReservationDrink",
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationDrink.created_at",
    )


class ReservationDrink(CreatedAtMixin, Base):
    """Drink line item priced and named as it was when booked."""

    __tablename__ = "reservation_drinks"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_reservation_drinks_quantity"),
        CheckConstraint(
            "price_at_booking >= 0", name="ck_reservation_drinks_price"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    drink_option_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("drink_options.id", ondelete="SET NULL")
    )
    name_at_booking: Mapped[str] = mapped_column(String(255), nullable=False)
    type_at_booking: Mapped[DrinkOptionType] = mapped_column(
        Enum(DrinkOptionType), nullable=False
    )
    price_at_booking: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    reservation: Mapped[Reservation] = relationship(
        "Reservation", back_populates="drinks"
    )
