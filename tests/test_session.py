"""Tests for the transaction boundary."""

import pytest
from sqlalchemy import select

from wgbot.database.models import Person
from wgbot.errors import StorageError


async def test_commits_on_success(session_manager):
    async with session_manager.session() as session:
        session.add(Person(display_name="Alice", telegram_user_id=1))

    async with session_manager.session() as session:
        result = await session.execute(select(Person.display_name))
        assert result.scalars().all() == ["Alice"]


async def test_database_error_becomes_storage_error(session_manager):
    async with session_manager.session() as session:
        session.add(Person(display_name="Alice", telegram_user_id=1))

    with pytest.raises(StorageError):
        async with session_manager.session() as session:
            session.add(Person(display_name="Bob", telegram_user_id=2))
            session.add(Person(display_name="Alice", telegram_user_id=3))

    async with session_manager.session() as session:
        result = await session.execute(select(Person.display_name))
        assert result.scalars().all() == ["Alice"]


async def test_other_errors_roll_back(session_manager):
    with pytest.raises(RuntimeError):
        async with session_manager.session() as session:
            session.add(Person(display_name="Alice", telegram_user_id=1))
            await session.flush()
            raise RuntimeError("handler failed")

    async with session_manager.session() as session:
        result = await session.execute(select(Person))
        assert result.scalars().all() == []


async def test_uninitialized_manager():
    from wgbot.database.session import DatabaseSessionManager

    with pytest.raises(RuntimeError):
        async with DatabaseSessionManager().session():
            pass
