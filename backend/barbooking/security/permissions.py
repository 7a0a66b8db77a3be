"""Ownership and staff-assignment helpers for explicit authorization checks."""

from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.bar import Bar, StaffAssignment
from barbooking.models.profile import Profile, ProfileRole


def owns_bar(profile: Profile, bar: Bar) -> bool:
    return profile.role == ProfileRole.OWNER and bar.owner_id == profile.id


async def is_assigned_staff(
    session: AsyncSession, profile: Profile, bar_id: uuid.UUID
) -> bool:
    if profile.role != ProfileRole.STAFF:
        return False
    result = await session.execute(
        select(StaffAssignment.id).where(
            StaffAssignment.staff_id == profile.id,
            StaffAssignment.bar_id == bar_id,
        )
    )
    return result.first() is not None


async def _get_bar_or_404(session: AsyncSession, bar_id: uuid.UUID) -> Bar:
    bar = await session.get(Bar, bar_id)
    if bar is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bar not found")
    return bar


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions",
    )


async def require_bar_owner(
    session: AsyncSession, profile: Profile, bar_id: uuid.UUID
) -> Bar:
    """Return the bar if the profile owns it."""
    bar = await _get_bar_or_404(session, bar_id)
    if not owns_bar(profile, bar):
        raise _forbidden()
    return bar


async def require_bar_staff(
    session: AsyncSession, profile: Profile, bar_id: uuid.UUID
) -> Bar:
    """Return the bar if the profile owns it or is staff assigned to it."""
    bar = await _get_bar_or_404(session, bar_id)
    if owns_bar(profile, bar) or await is_assigned_staff(session, profile, bar.id):
        return bar
    raise _forbidden()


__all__ = ["is_assigned_staff", "owns_bar", "require_bar_owner", "require_bar_staff"]
