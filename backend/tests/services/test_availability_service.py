"""Tests for range and date availability queries."""

from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import Any

import pytest
from sqlalchemy import update

from barbooking.db.session import get_sessionmaker
from barbooking.models import (
    BarException,
    Reservation,
    ReservationStatus,
    SeatOption,
    SeatOptionType,
)
from barbooking.services import availability_service, capacity_service
from barbooking.services.errors import InvalidInput, InvalidRange, NotFound

pytestmark = pytest.mark.asyncio

TODAY = date(2026, 6, 1)  # Monday
SUNDAY = date(2026, 6, 7)


def _booking(
    context: dict[str, Any], seat_type: SeatOptionType, day: date, unit: int | None, **kwargs
):
    option_key = {
        SeatOptionType.TABLE: "table_option_id",
        SeatOptionType.BAR: "bar_option_id",
        SeatOptionType.VIP: "vip_option_id",
    }[seat_type]
    return Reservation(
        bar_id=context["bar_id"],
        customer_id=context["customer_id"],
        seat_option_id=context[option_key],
        seat_type=seat_type,
        reservation_date=day,
        party_size=kwargs.pop("party_size", 2),
        seat_unit=unit,
        **kwargs,
    )


async def test_range_summary_reports_open_and_closed_days(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        summary = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date="2026-06-01",
            end_date="2026-06-07",
            today=TODAY,
        )
    assert len(summary) == 7
    monday = summary[TODAY]
    assert monday.is_open is True
    assert monday.is_fully_booked is False
    assert monday.available_seat_types == [
        SeatOptionType.TABLE,
        SeatOptionType.BAR,
        SeatOptionType.VIP,
    ]
    sunday = summary[SUNDAY]
    assert sunday.is_open is False
    assert sunday.available_seat_types == []
    assert sunday.is_fully_booked is False


async def test_closed_days_never_query_reservation_counts(
    bar_context: dict[str, Any], db_url: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[list[date]] = []
    original = capacity_service.count_reservations

    async def _spy(session, *, bar_id, dates):
        calls.append(list(dates))
        return await original(session, bar_id=bar_id, dates=dates)

    monkeypatch.setattr(capacity_service, "count_reservations", _spy)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add(
            BarException(
                bar_id=bar_context["bar_id"], exception_date=date(2026, 6, 6), is_closed=True
            )
        )
        await session.commit()

        weekend = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=date(2026, 6, 6),
            end_date=SUNDAY,
            today=TODAY,
        )
        assert all(not status.is_open for status in weekend.values())
        assert calls == []

        await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=date(2026, 6, 5),
            end_date=SUNDAY,
            today=TODAY,
        )
    assert calls == [[date(2026, 6, 5)]]


async def test_remaining_capacity_never_goes_negative(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add_all(
            [
                _booking(bar_context, SeatOptionType.TABLE, TODAY, 1),
                _booking(bar_context, SeatOptionType.TABLE, TODAY, 2),
            ]
        )
        await session.commit()
        # Owner shrinks inventory below what is already booked.
        await session.execute(
            update(SeatOption)
            .where(SeatOption.id == bar_context["table_option_id"])
            .values(available_count=1)
        )
        await session.commit()

        details = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date=TODAY, today=TODAY
        )
        summary = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=TODAY,
            today=TODAY,
        )
    by_type = {detail.type: detail for detail in details}
    assert by_type[SeatOptionType.TABLE].remaining_count == 0
    assert SeatOptionType.TABLE not in summary[TODAY].available_seat_types


async def test_cancelled_reservations_do_not_consume_capacity(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add_all(
            [
                _booking(bar_context, SeatOptionType.BAR, TODAY, 1),
                _booking(
                    bar_context,
                    SeatOptionType.BAR,
                    TODAY,
                    None,
                    status=ReservationStatus.CANCELLED,
                ),
                _booking(
                    bar_context,
                    SeatOptionType.BAR,
                    TODAY,
                    2,
                    status=ReservationStatus.COMPLETED,
                ),
            ]
        )
        await session.commit()
        details = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date="2026-06-01", today=TODAY
        )
    by_type = {detail.type: detail for detail in details}
    assert by_type[SeatOptionType.BAR].remaining_count == 1


async def test_fully_booked_when_every_enabled_type_is_sold_out(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add_all(
            [
                _booking(bar_context, SeatOptionType.TABLE, TODAY, 1),
                _booking(bar_context, SeatOptionType.TABLE, TODAY, 2),
                _booking(bar_context, SeatOptionType.VIP, TODAY, 1, party_size=4),
            ]
        )
        await session.execute(
            update(SeatOption)
            .where(SeatOption.id == bar_context["bar_option_id"])
            .values(enabled=False)
        )
        await session.commit()

        summary = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=date(2026, 6, 2),
            today=TODAY,
        )
    assert summary[TODAY].is_open is True
    assert summary[TODAY].is_fully_booked is True
    assert summary[TODAY].available_seat_types == []
    assert summary[date(2026, 6, 2)].is_fully_booked is False


async def test_open_day_without_enabled_seats_is_not_fully_booked(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await session.execute(
            update(SeatOption)
            .where(SeatOption.bar_id == bar_context["bar_id"])
            .values(enabled=False)
        )
        await session.commit()
        summary = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=TODAY,
            today=TODAY,
        )
        details = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date=TODAY, today=TODAY
        )
    assert summary[TODAY].is_open is True
    assert summary[TODAY].is_fully_booked is False
    assert summary[TODAY].available_seat_types == []
    assert details == []


async def test_repeated_queries_return_identical_results(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add(_booking(bar_context, SeatOptionType.TABLE, TODAY, 1))
        await session.commit()
        first = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=TODAY + timedelta(days=13),
            today=TODAY,
        )
        second = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=TODAY + timedelta(days=13),
            today=TODAY,
        )
        detail_first = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date=TODAY, today=TODAY
        )
        detail_second = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date=TODAY, today=TODAY
        )
    assert first == second
    assert detail_first == detail_second


async def test_seat_details_follow_canonical_order_with_limits(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        details = await availability_service.date_detail(
            session, bar_id=bar_context["bar_id"], target_date=TODAY, today=TODAY
        )
    assert [detail.type for detail in details] == [
        SeatOptionType.TABLE,
        SeatOptionType.BAR,
        SeatOptionType.VIP,
    ]
    vip = details[2]
    assert (vip.min_people, vip.max_people, vip.remaining_count) == (4, 10, 1)
    assert vip.restrictions == {"min_bottles": 2}


async def test_range_is_capped_to_the_booking_window(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        full_window = await availability_service.range_summary(
            session,
            bar_id=bar_context["bar_id"],
            start_date=TODAY,
            end_date=TODAY + timedelta(days=30),
            today=TODAY,
        )
        assert len(full_window) == 31

        with pytest.raises(InvalidRange):
            await availability_service.range_summary(
                session,
                bar_id=bar_context["bar_id"],
                start_date=TODAY,
                end_date=TODAY + timedelta(days=45),
                today=TODAY,
            )
        with pytest.raises(InvalidRange):
            await availability_service.range_summary(
                session,
                bar_id=bar_context["bar_id"],
                start_date=TODAY,
                end_date=TODAY + timedelta(days=31),
                today=TODAY,
            )
        with pytest.raises(InvalidRange):
            await availability_service.range_summary(
                session,
                bar_id=bar_context["bar_id"],
                start_date=TODAY - timedelta(days=1),
                end_date=TODAY,
                today=TODAY,
            )
        with pytest.raises(InvalidRange):
            await availability_service.date_detail(
                session,
                bar_id=bar_context["bar_id"],
                target_date=TODAY + timedelta(days=31),
                today=TODAY,
            )


async def test_inverted_range_and_bad_input_are_rejected(
    bar_context: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(InvalidRange):
            await availability_service.range_summary(
                session,
                bar_id=bar_context["bar_id"],
                start_date="2026-06-05",
                end_date="2026-06-02",
                today=TODAY,
            )
        with pytest.raises(InvalidInput):
            await availability_service.range_summary(
                session,
                bar_id=bar_context["bar_id"],
                start_date="2026-06-31",
                end_date="2026-07-02",
                today=TODAY,
            )


async def test_unknown_bar_is_not_found(reset_database: None, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(NotFound):
            await availability_service.date_detail(
                session, bar_id=uuid.uuid4(), target_date=TODAY, today=TODAY
            )
