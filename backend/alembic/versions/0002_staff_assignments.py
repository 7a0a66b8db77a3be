"""Staff assignments per bar.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "staff_assignments",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "staff_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "bar_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "assigned_by_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
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
        sa.UniqueConstraint("staff_id", "bar_id", name="uq_staff_assignments_staff_bar"),
    )
    op.create_index("ix_staff_assignments_staff_id", "staff_assignments", ["staff_id"])
    op.create_index("ix_staff_assignments_bar_id", "staff_assignments", ["bar_id"])


def downgrade() -> None:
    op.drop_index("ix_staff_assignments_bar_id", table_name="staff_assignments")
    op.drop_index("ix_staff_assignments_staff_id", table_name="staff_assignments")
    op.drop_table("staff_assignments")
