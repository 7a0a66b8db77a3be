"""Profile model mirroring identities issued by the authentication provider."""
from __future__ import annotations

import enum
import uuid

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from barbooking.db.base import Base
from barbooking.models.mixins import TimestampMixin


class ProfileRole(str, enum.Enum):
    """Role enumeration for platform permissions."""

    CUSTOMER = "customer"
    STAFF = "staff"
    OWNER = "owner"


class Profile(TimestampMixin, Base):
    """An authenticated person: customer, bar staff or bar owner."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[ProfileRole] = mapped_column(
        Enum(ProfileRole), default=ProfileRole.CUSTOMER, nullable=False
    )
