"""Seed default seat options for bars that have none configured."""
from __future__ import annotations

import asyncio
from collections.abc import Iterable

from sqlalchemy import select

from barbooking.db.session import get_sessionmaker
from barbooking.models.bar import Bar
from barbooking.models.seat_option import SeatOption, SeatOptionType

# type: (available_count, min_people, max_people, restrictions)
DEFAULT_SEAT_OPTIONS: dict[SeatOptionType, tuple[int, int, int, dict | None]] = {
    SeatOptionType.TABLE: (10, 2, 6, None),
    SeatOptionType.BAR: (12, 1, 2, None),
    SeatOptionType.VIP: (2, 4, 12, {"min_bottles": 1}),
}


async def seed_seat_options() -> None:
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        bars: Iterable[Bar] = (await session.execute(select(Bar))).scalars()
        created = 0
        for bar in bars:
            for seat_type, (count, min_people, max_people, restrictions) in (
                DEFAULT_SEAT_OPTIONS.items()
            ):
                existing = await session.execute(
                    select(SeatOption).where(
                        SeatOption.bar_id == bar.id,
                        SeatOption.type == seat_type,
                    )
                )
                if existing.scalar_one_or_none() is None:
                    session.add(
                        SeatOption(
                            bar_id=bar.id,
                            type=seat_type,
                            enabled=True,
                            available_count=count,
                            min_people=min_people,
                            max_people=max_people,
                            restrictions=restrictions,
                        )
                    )
                    created += 1
        if created:
            await session.commit()
        print(f"Seeded {created} seat option(s).")


def main() -> None:
    asyncio.run(seed_seat_options())


if __name__ == "__main__":
    main()
