"""Initial bar reservation schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

profile_role_enum = postgresql.ENUM(
    "CUSTOMER", "STAFF", "OWNER", name="profilerole", create_type=False
)
seat_type_enum = postgresql.ENUM(
    "TABLE", "BAR", "VIP", name="seatoptiontype", create_type=False
)
drink_type_enum = postgresql.ENUM(
    "SINGLE_DRINK", "BOTTLE", name="drinkoptiontype", create_type=False
)
reservation_status_enum = postgresql.ENUM(
    "CONFIRMED",
    "CANCELLED",
    "COMPLETED",
    "NO_SHOW",
    name="reservationstatus",
    create_type=False,
)

_ENUMS = (profile_role_enum, seat_type_enum, drink_type_enum, reservation_status_enum)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for enum in _ENUMS:
        enum.create(bind, checkfirst=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255)),
        sa.Column("role", profile_role_enum, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "bars",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20)),
        sa.Column("website", sa.String(length=255)),
        sa.Column("description", sa.Text()),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.Column("reservation_hold_until", sa.Time()),
        sa.Column("live", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "operating_hours",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("open_time", sa.Time(), nullable=False),
        sa.Column("close_time", sa.Time(), nullable=False),
        sa.Column(
            "closes_next_day", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        *_timestamps(),
        sa.UniqueConstraint("bar_id", "day_of_week", name="uq_operating_hours_bar_day"),
        sa.CheckConstraint(
            "day_of_week BETWEEN 1 AND 7", name="ck_operating_hours_day_of_week"
        ),
    )
    op.create_index("ix_operating_hours_bar_id", "operating_hours", ["bar_id"])

    op.create_table(
        "bar_exceptions",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("exception_date", sa.Date(), nullable=False),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("open_time", sa.Time()),
        sa.Column("close_time", sa.Time()),
        sa.Column("closes_next_day", sa.Boolean()),
        sa.Column("reason", sa.String(length=255)),
        *_timestamps(),
        sa.UniqueConstraint("bar_id", "exception_date", name="uq_bar_exceptions_bar_date"),
        sa.CheckConstraint(
            "is_closed OR (open_time IS NOT NULL AND close_time IS NOT NULL"
            " AND closes_next_day IS NOT NULL)",
            name="ck_bar_exceptions_hours",
        ),
    )
    op.create_index("ix_bar_exceptions_bar_id", "bar_exceptions", ["bar_id"])

    op.create_table(
        "seat_options",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", seat_type_enum, nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("available_count", sa.Integer(), nullable=False),
        sa.Column("min_people", sa.Integer(), nullable=False),
        sa.Column("max_people", sa.Integer(), nullable=False),
        sa.Column("restrictions", sa.JSON()),
        *_timestamps(),
        sa.UniqueConstraint("bar_id", "type", name="uq_seat_options_bar_type"),
        sa.CheckConstraint("available_count >= 0", name="ck_seat_options_available"),
        sa.CheckConstraint("min_people > 0", name="ck_seat_options_min_people"),
        sa.CheckConstraint(
            "max_people >= min_people", name="ck_seat_options_max_people"
        ),
    )
    op.create_index("ix_seat_options_bar_id", "seat_options", ["bar_id"])

    op.create_table(
        "drink_options",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", drink_type_enum, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(8, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "bar_id", "type", "name", name="uq_drink_options_bar_type_name"
        ),
        sa.CheckConstraint("price > 0", name="ck_drink_options_price"),
    )
    op.create_index("ix_drink_options_bar_id", "drink_options", ["bar_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "seat_option_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("seat_options.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("seat_type", seat_type_enum, nullable=False),
        sa.Column("reservation_date", sa.Date(), nullable=False),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("special_requests", sa.Text()),
        sa.Column("status", reservation_status_enum, nullable=False),
        sa.Column("seat_unit", sa.Integer()),
        sa.Column("idempotency_key", sa.String(length=128)),
        sa.Column("checked_in_at", sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.UniqueConstraint(
            "bar_id",
            "reservation_date",
            "seat_type",
            "seat_unit",
            name="uq_reservations_seat_unit",
        ),
        sa.UniqueConstraint(
            "customer_id", "idempotency_key", name="uq_reservations_idempotency"
        ),
        sa.CheckConstraint("party_size > 0", name="ck_reservations_party_size"),
    )
    op.create_index(
        "ix_reservations_bar_date", "reservations", ["bar_id", "reservation_date"]
    )
    op.create_index("ix_reservations_customer_id", "reservations", ["customer_id"])

    op.create_table(
        "reservation_drinks",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "drink_option_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("drink_options.id", ondelete="SET NULL"),
        ),
        sa.Column("name_at_booking", sa.String(length=255), nullable=False),
        sa.Column("type_at_booking", drink_type_enum, nullable=False),
        sa.Column("price_at_booking", sa.Numeric(8, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("quantity > 0", name="ck_reservation_drinks_quantity"),
        sa.CheckConstraint(
            "price_at_booking >= 0", name="ck_reservation_drinks_price"
        ),
    )
    op.create_index(
        "ix_reservation_drinks_reservation_id", "reservation_drinks", ["reservation_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_reservation_drinks_reservation_id", table_name="reservation_drinks")
    op.drop_table("reservation_drinks")
    op.drop_index("ix_reservations_customer_id", table_name="reservations")
    op.drop_index("ix_reservations_bar_date", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_drink_options_bar_id", table_name="drink_options")
    op.drop_table("drink_options")
    op.drop_index("ix_seat_options_bar_id", table_name="seat_options")
    op.drop_table("seat_options")
    op.drop_index("ix_bar_exceptions_bar_id", table_name="bar_exceptions")
    op.drop_table("bar_exceptions")
    op.drop_index("ix_operating_hours_bar_id", table_name="operating_hours")
    op.drop_table("operating_hours")
    op.drop_table("bars")
    op.drop_table("profiles")

    bind = op.get_bind()
    for enum in reversed(_ENUMS):
        enum.drop(bind, checkfirst=True)
