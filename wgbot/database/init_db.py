"""Create the database tables.

Usage: python -m wgbot.database.init_db
"""

import asyncio
import logging

from wgbot.config.settings import settings
from wgbot.database.base import Base
from wgbot.database.session import sessionmanager
from wgbot.database import models  # noqa: F401  registers the tables

logger = logging.getLogger(__name__)


async def init_db() -> None:
    sessionmanager.init(settings.database_url)
    try:
        async with sessionmanager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Tables created: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        await sessionmanager.close()


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    asyncio.run(init_db())
