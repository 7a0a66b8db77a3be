"""Drink menu management for bar owners."""
from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from barbooking.models.drink_option import SINGLE_DRINK_NAME, DrinkOption, DrinkOptionType
from barbooking.models.reservation import ReservationDrink
from barbooking.schemas.drink_option import DrinkOptionCreate, DrinkOptionUpdate
from barbooking.services.errors import InvalidInput, NotFound


async def list_drink_options(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
) -> list[DrinkOption]:
    stmt = (
        select(DrinkOption)
        .where(DrinkOption.bar_id == bar_id)
        .order_by(DrinkOption.type.asc(), DrinkOption.name.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def _get_owned(
    session: AsyncSession, *, bar_id: uuid.UUID, drink_option_id: uuid.UUID
) -> DrinkOption:
    option = await session.get(DrinkOption, drink_option_id)
    if option is None or option.bar_id != bar_id:
        raise NotFound("Drink option not found", resource="drink_option")
    return option


async def create_drink_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    payload: DrinkOptionCreate,
) -> DrinkOption:
    """Add a drink to the menu.

    A bar carries at most one single-drink entry; it is always stored
    under the generic single drink name.
    """
    if payload.type == DrinkOptionType.SINGLE_DRINK:
        name = SINGLE_DRINK_NAME
    else:
        name = (payload.name or "").strip()
    option = DrinkOption(bar_id=bar_id, type=payload.type, name=name, price=payload.price)
    session.add(option)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise InvalidInput(
            "Drink option already exists", drink_type=payload.type.value, name=name
        ) from exc
    await session.refresh(option)
    return option


async def update_drink_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    drink_option_id: uuid.UUID,
    payload: DrinkOptionUpdate,
) -> DrinkOption:
    """Change price or name; existing bookings keep their snapshot."""
    option = await _get_owned(session, bar_id=bar_id, drink_option_id=drink_option_id)
    data = payload.model_dump(exclude_unset=True)
    if "name" in data and option.type == DrinkOptionType.BOTTLE:
        name = (data["name"] or "").strip()
        if not name:
            raise InvalidInput("Bottles require a name")
        option.name = name
    if data.get("price") is not None:
        option.price = data["price"]
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise InvalidInput("Drink option already exists", name=option.name) from exc
    await session.refresh(option)
    return option


async def delete_drink_option(
    session: AsyncSession,
    *,
    bar_id: uuid.UUID,
    drink_option_id: uuid.UUID,
) -> None:
    option = await _get_owned(session, bar_id=bar_id, drink_option_id=drink_option_id)
    # Booked lines keep their name and price snapshot.
    await session.execute(
        update(ReservationDrink)
        .where(ReservationDrink.drink_option_id == option.id)
        .values(drink_option_id=None)
    )
    await session.delete(option)
    await session.commit()
