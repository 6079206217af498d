"""Seed development data: a few accounts, a designer profile and messages."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from dm_service.domain.value_objects.enums import AccountRole
from dm_service.infrastructure.db.models import AccountModel, DesignerProfileModel
from dm_service.infrastructure.db.session import create_tables, get_engine, get_sessionmaker
from dm_service.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

ACCOUNTS = [
    (1, "Admin", AccountRole.ADMIN),
    (42, "Alice", AccountRole.USER),
    (43, "Bob", AccountRole.USER),
    (50, "Dana", AccountRole.DESIGNER),
]

# (sender, receiver, content, minutes ago)
MESSAGES = [
    (42, 50, "Hi Dana, is the linen jacket still available?", 30),
    (50, 42, "It is! Which size do you need?", 25),
    (42, 50, "Medium, please.", 20),
    (43, 42, "Are we still on for Friday?", 5),
]


async def seed() -> None:
    await create_tables(get_engine())

    async with get_sessionmaker()() as session:
        for account_id, name, role in ACCOUNTS:
            await session.merge(AccountModel(id=account_id, display_name=name, role=role.value))
        await session.merge(
            DesignerProfileModel(id=7, user_id=50, display_name="Dana Atelier", avatar_ref=None)
        )
        await session.flush()

        uow = SqlAlchemyUoW(session)
        now = datetime.now(timezone.utc)
        for sender_id, receiver_id, content, minutes_ago in MESSAGES:
            await uow.messages_w.create_message(
                sender_id,
                receiver_id,
                content,
                now - timedelta(minutes=minutes_ago),
            )
        await uow.commit()

    logger.info("Seeded %d accounts and %d messages", len(ACCOUNTS), len(MESSAGES))
    await get_engine().dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
