"""Availability API integration tests."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from barbooking.services import availability_service

pytestmark = pytest.mark.asyncio


def _today() -> date:
    return datetime.now(UTC).date()


async def test_range_returns_camel_case_statuses(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    start = _today()
    end = start + timedelta(days=6)
    response = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/availability",
        params={"start_date": start.isoformat(), "end_date": end.isoformat()},
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 200
    date_status = response.json()["dateStatus"]
    assert len(date_status) == 7
    for key, status in date_status.items():
        day = date.fromisoformat(key)
        if day.isoweekday() == 7:
            assert status["isOpen"] is False
            assert status["availableSeatTypes"] == []
        else:
            assert status["isOpen"] is True
            assert status["isException"] is False
            assert status["openTime"] == "18:00:00"
            assert status["closeTime"] == "02:00:00"
            assert status["isFullyBooked"] is False
            assert status["availableSeatTypes"] == ["table", "bar", "vip"]


async def test_range_beyond_window_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    start = _today()
    response = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/availability",
        params={
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(days=45)).isoformat(),
        },
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_range"


async def test_malformed_dates_are_invalid_input(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/seats",
        params={"target_date": "2026-02-30"},
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "invalid_input"
    assert detail["field"] == "target_date"


async def test_seat_details_list_remaining_counts(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/seats",
        params={"target_date": _today().isoformat()},
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 200
    details = response.json()["seatDetails"]
    assert [detail["type"] for detail in details] == ["table", "bar", "vip"]
    assert details[0] == {
        "type": "table",
        "remainingCount": 2,
        "minPeople": 2,
        "maxPeople": 6,
        "restrictions": None,
    }
    assert details[2]["restrictions"] == {"min_bottles": 2}


async def test_unknown_bar_and_missing_token(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    today = _today().isoformat()
    missing = await client.get(
        f"/api/v1/bars/{uuid.uuid4()}/seats",
        params={"target_date": today},
        headers=app_context["customer_headers"],
    )
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "not_found"

    anonymous = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/seats", params={"target_date": today}
    )
    assert anonymous.status_code == 401


async def test_storage_failure_is_retryable(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _unavailable(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(availability_service, "range_summary", _unavailable)

    client: AsyncClient = app_context["client"]
    today = _today().isoformat()
    response = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/availability",
        params={"start_date": today, "end_date": today},
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 503
    assert response.headers["Retry-After"] == "1"
    detail = response.json()["detail"]
    assert detail["code"] == "storage_unavailable"
    assert detail["retryable"] is True
