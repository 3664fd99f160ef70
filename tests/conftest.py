"""Root conftest: settings env and an in-memory database per test."""

import os

# Settings are read at import time
os.environ.setdefault("BOT_TOKEN", "123456:test-token")
os.environ.setdefault("DB_PASSWORD", "test-password")
os.environ.setdefault("ADMIN_USER_IDS", "1000")
os.environ.setdefault("TIMEZONE", "Europe/Berlin")
os.environ.setdefault("EPOCH_DATE", "2024-01-07")

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wgbot.database import Base
from wgbot.database.session import DatabaseSessionManager
from wgbot.services.person_service import PersonService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(test_engine):
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
async def session_manager():
    """A DatabaseSessionManager over its own in-memory database."""
    manager = DatabaseSessionManager()
    manager.init(TEST_DATABASE_URL, poolclass=StaticPool)
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.close()


@pytest.fixture
def add_people(session):
    """Register people in rotation order; Telegram IDs start at 101."""

    async def _add(*names, with_chat=True):
        service = PersonService(session)
        first_id = 101 + len(await service.get_roster())
        people = []
        for i, name in enumerate(names):
            telegram_user_id = first_id + i
            people.append(await service.add_person(
                name,
                telegram_user_id=telegram_user_id,
                chat_id=telegram_user_id if with_chat else None
            ))
        return people

    return _add
