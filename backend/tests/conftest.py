"""Test fixtures for the bar reservation backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import time
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("RESERVATION_RETRY_BACKOFF_SECONDS", "0.01")

from barbooking.core.config import get_settings
from barbooking.core.security import create_access_token
from barbooking.db.base import Base
from barbooking.db.session import dispose_engine, get_sessionmaker
from barbooking.main import app
from barbooking.models import (
    Bar,
    DrinkOption,
    DrinkOptionType,
    OperatingHour,
    Profile,
    ProfileRole,
    SeatOption,
    SeatOptionType,
    StaffAssignment,
)
from barbooking.models.drink_option import SINGLE_DRINK_NAME


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


async def seed_bar(session: AsyncSession) -> dict[str, Any]:
    """Create a bar open Monday to Saturday with all three seat types.

    Sunday has no weekly hours. Inventory: 2 tables (2-6 guests), 3 bar
    seats (1-2 guests) and 1 VIP booth (4-10 guests, two bottles minimum).
    The staff profile is assigned to the bar.
    """
    owner = Profile(email="owner@example.com", name="Olive Owner", role=ProfileRole.OWNER)
    customer = Profile(email="guest@example.com", name="Gus Guest")
    other_customer = Profile(email="other@example.com", name="Ona Other")
    staff = Profile(email="staff@example.com", name="Sid Staff", role=ProfileRole.STAFF)
    outsider = Profile(
        email="rival@example.com", name="Rita Rival", role=ProfileRole.OWNER
    )
    session.add_all([owner, customer, other_customer, staff, outsider])
    await session.flush()

    bar = Bar(
        owner_id=owner.id,
        name="The Copper Still",
        address="12 Market Street",
        timezone="UTC",
        live=True,
    )
    session.add(bar)
    await session.flush()
    session.add(
        StaffAssignment(staff_id=staff.id, bar_id=bar.id, assigned_by_id=owner.id)
    )

    for day_of_week in range(1, 7):
        session.add(
            OperatingHour(
                bar_id=bar.id,
                day_of_week=day_of_week,
                open_time=time(18, 0),
                close_time=time(2, 0),
                closes_next_day=True,
            )
        )

    table = SeatOption(
        bar_id=bar.id,
        type=SeatOptionType.TABLE,
        enabled=True,
        available_count=2,
        min_people=2,
        max_people=6,
    )
    bar_seat = SeatOption(
        bar_id=bar.id,
        type=SeatOptionType.BAR,
        enabled=True,
        available_count=3,
        min_people=1,
        max_people=2,
    )
    vip = SeatOption(
        bar_id=bar.id,
        type=SeatOptionType.VIP,
        enabled=True,
        available_count=1,
        min_people=4,
        max_people=10,
        restrictions={"min_bottles": 2},
    )
    single = DrinkOption(
        bar_id=bar.id,
        type=DrinkOptionType.SINGLE_DRINK,
        name=SINGLE_DRINK_NAME,
        price=Decimal("12.00"),
    )
    bottle = DrinkOption(
        bar_id=bar.id,
        type=DrinkOptionType.BOTTLE,
        name="House Vodka",
        price=Decimal("150.00"),
    )
    session.add_all([table, bar_seat, vip, single, bottle])
    await session.commit()

    return {
        "bar_id": bar.id,
        "owner_id": owner.id,
        "customer_id": customer.id,
        "other_customer_id": other_customer.id,
        "staff_id": staff.id,
        "outsider_id": outsider.id,
        "table_option_id": table.id,
        "bar_option_id": bar_seat.id,
        "vip_option_id": vip.id,
        "single_drink_id": single.id,
        "bottle_id": bottle.id,
    }


@pytest_asyncio.fixture()
async def bar_context(reset_database: None, db_url: str) -> dict[str, Any]:
    """Seed one bar with inventory and return its identifiers."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        return await seed_bar(session)


def auth_headers(profile_id: Any) -> dict[str, str]:
    token = create_access_token(str(profile_id))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def app_context(bar_context: dict[str, Any]) -> AsyncIterator[dict[str, Any]]:
    """Yield an async client plus seeded bar data and bearer headers."""
    context = dict(bar_context)
    context["customer_headers"] = auth_headers(bar_context["customer_id"])
    context["other_customer_headers"] = auth_headers(bar_context["other_customer_id"])
    context["owner_headers"] = auth_headers(bar_context["owner_id"])
    context["staff_headers"] = auth_headers(bar_context["staff_id"])
    context["outsider_headers"] = auth_headers(bar_context["outsider_id"])

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
