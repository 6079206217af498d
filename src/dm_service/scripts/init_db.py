"""Create the ``users``, ``designers`` and ``messages`` tables if missing."""
from __future__ import annotations

import asyncio
import logging

from dm_service.config import settings
from dm_service.infrastructure.db.session import create_tables, get_engine

logger = logging.getLogger(__name__)


async def init_db() -> None:
    if settings.STORE_BACKEND == "memory":
        logger.info("STORE_BACKEND=memory, nothing to create")
        return
    engine = get_engine()
    try:
        await create_tables(engine)
        logger.info("Tables created on %s", settings.STORE_BACKEND)
    finally:
        await engine.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(init_db())


if __name__ == "__main__":
    main()
