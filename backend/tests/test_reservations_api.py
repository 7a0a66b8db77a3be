"""Reservation API integration tests."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

import pytest
from httpx import AsyncClient

from barbooking.db.session import get_sessionmaker
from barbooking.models import BarException

pytestmark = pytest.mark.asyncio


def _next_open_day(days_ahead: int = 1) -> date:
    day = datetime.now(UTC).date() + timedelta(days=days_ahead)
    while day.isoweekday() == 7:
        day += timedelta(days=1)
    return day


def _payload(context: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "barId": str(context["bar_id"]),
        "reservationDate": _next_open_day().isoformat(),
        "seatType": "table",
        "partySize": 4,
    }
    payload.update(overrides)
    return payload


async def test_create_and_replay_reservation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = {**app_context["customer_headers"], "Idempotency-Key": "booking-1"}
    payload = _payload(
        app_context,
        specialRequests="Birthday",
        drinks=[{"drinkOptionId": str(app_context["single_drink_id"]), "quantity": 2}],
    )

    created = await client.post("/api/v1/reservations", json=payload, headers=headers)
    assert created.status_code == 201
    body = created.json()
    assert body["replayed"] is False
    assert body["warnings"] == []
    reservation = body["reservation"]
    assert reservation["status"] == "confirmed"
    assert reservation["seatType"] == "table"
    assert reservation["partySize"] == 4
    assert reservation["customerId"] == str(app_context["customer_id"])
    assert reservation["specialRequests"] == "Birthday"
    assert reservation["drinks"][0]["nameAtBooking"] == "Single Drink"
    assert reservation["drinks"][0]["quantity"] == 2

    replay = await client.post("/api/v1/reservations", json=payload, headers=headers)
    assert replay.status_code == 200
    assert replay.json()["replayed"] is True
    assert replay.json()["reservation"]["id"] == reservation["id"]

    listing = await client.get(
        "/api/v1/reservations", headers=app_context["customer_headers"]
    )
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [reservation["id"]]


async def test_body_idempotency_key_is_honoured(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    payload = _payload(app_context, seatType="bar", partySize=2, idempotencyKey="body-key")
    first = await client.post(
        "/api/v1/reservations", json=payload, headers=app_context["customer_headers"]
    )
    second = await client.post(
        "/api/v1/reservations", json=payload, headers=app_context["customer_headers"]
    )
    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["reservation"]["id"] == first.json()["reservation"]["id"]


async def test_rejections_map_to_http_statuses(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["customer_headers"]

    party = await client.post(
        "/api/v1/reservations", json=_payload(app_context, partySize=9), headers=headers
    )
    assert party.status_code == 422
    assert party.json()["detail"]["code"] == "party_size_out_of_range"
    assert party.json()["detail"]["max_people"] == 6

    bottles = await client.post(
        "/api/v1/reservations",
        json=_payload(
            app_context,
            seatType="vip",
            partySize=5,
            drinks=[{"drinkOptionId": str(app_context["bottle_id"]), "quantity": 1}],
        ),
        headers=headers,
    )
    assert bottles.status_code == 422
    assert bottles.json()["detail"]["shortfall"] == 1

    vip = _payload(
        app_context,
        seatType="vip",
        partySize=5,
        drinks=[{"drinkOptionId": str(app_context["bottle_id"]), "quantity": 2}],
    )
    assert (
        await client.post("/api/v1/reservations", json=vip, headers=headers)
    ).status_code == 201
    sold_out = await client.post(
        "/api/v1/reservations", json=vip, headers=app_context["other_customer_headers"]
    )
    assert sold_out.status_code == 409
    assert sold_out.json()["detail"]["code"] == "sold_out"

    far = await client.post(
        "/api/v1/reservations",
        json=_payload(
            app_context,
            reservationDate=(datetime.now(UTC).date() + timedelta(days=40)).isoformat(),
        ),
        headers=headers,
    )
    assert far.status_code == 400
    assert far.json()["detail"]["code"] == "invalid_range"


async def test_closed_day_is_conflict(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    day = datetime.now(UTC).date() + timedelta(days=1)
    while day.isoweekday() != 7:
        day += timedelta(days=1)
    response = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context, reservationDate=day.isoformat()),
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "bar_closed"


async def test_cannot_book_for_someone_else(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context, customerId=str(app_context["other_customer_id"])),
        headers=app_context["customer_headers"],
    )
    assert response.status_code == 403

    on_behalf = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context, customerId=str(app_context["other_customer_id"])),
        headers=app_context["staff_headers"],
    )
    assert on_behalf.status_code == 201
    assert on_behalf.json()["reservation"]["customerId"] == str(
        app_context["other_customer_id"]
    )

    ghost = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context, customerId=str(uuid.uuid4())),
        headers=app_context["staff_headers"],
    )
    assert ghost.status_code == 404
    assert ghost.json()["detail"]["resource"] == "profile"

    owner_for_customer = await client.post(
        "/api/v1/reservations",
        json=_payload(
            app_context,
            seatType="bar",
            partySize=2,
            customerId=str(app_context["customer_id"]),
        ),
        headers=app_context["outsider_headers"],
    )
    assert owner_for_customer.status_code == 403


async def test_visibility_cancel_and_owner_status(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    created = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context),
        headers=app_context["customer_headers"],
    )
    reservation_id = created.json()["reservation"]["id"]

    assert (
        await client.get(
            f"/api/v1/reservations/{reservation_id}",
            headers=app_context["other_customer_headers"],
        )
    ).status_code == 403
    assert (
        await client.get(
            f"/api/v1/reservations/{reservation_id}",
            headers=app_context["owner_headers"],
        )
    ).status_code == 200

    denied = await client.patch(
        f"/api/v1/reservations/{reservation_id}/status",
        json={"status": "completed"},
        headers=app_context["customer_headers"],
    )
    assert denied.status_code == 403

    cancelled = await client.post(
        f"/api/v1/reservations/{reservation_id}/cancel",
        headers=app_context["customer_headers"],
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    reopened = await client.patch(
        f"/api/v1/reservations/{reservation_id}/status",
        json={"status": "confirmed"},
        headers=app_context["owner_headers"],
    )
    assert reopened.status_code == 400
    assert reopened.json()["detail"]["code"] == "invalid_input"


async def test_owner_lists_and_checks_in_tonight(
    app_context: dict[str, Any], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]
    today = datetime.now(UTC).date()
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add(
            BarException(
                bar_id=app_context["bar_id"],
                exception_date=today,
                is_closed=False,
                open_time=time(17, 0),
                close_time=time(23, 0),
                closes_next_day=False,
            )
        )
        await session.commit()

    created = await client.post(
        "/api/v1/reservations",
        json=_payload(app_context, reservationDate=today.isoformat()),
        headers=app_context["customer_headers"],
    )
    assert created.status_code == 201
    reservation_id = created.json()["reservation"]["id"]

    listing = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/reservations",
        params={"reservation_date": today.isoformat()},
        headers=app_context["owner_headers"],
    )
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [reservation_id]

    outsider = await client.get(
        f"/api/v1/bars/{app_context['bar_id']}/reservations",
        headers=app_context["outsider_headers"],
    )
    assert outsider.status_code == 403

    checked_in = await client.post(
        f"/api/v1/reservations/{reservation_id}/check-in",
        headers=app_context["owner_headers"],
    )
    assert checked_in.status_code == 200
    assert checked_in.json()["checkedInAt"] is not None

    completed = await client.patch(
        f"/api/v1/reservations/{reservation_id}/status",
        json={"status": "completed"},
        headers=app_context["owner_headers"],
    )
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"
