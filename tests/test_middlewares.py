"""Tests for the admin guard on flagged handlers."""

from types import SimpleNamespace

import pytest

from wgbot.middlewares.admin import AdminMiddleware
from wgbot.utils.constants import ERR_NO_PERMISSION

ADMIN_ID = 1000


class FakeMessage:

    def __init__(self):
        self.answers = []

    async def answer(self, text, **kwargs):
        self.answers.append(text)


@pytest.fixture
def middleware():
    return AdminMiddleware(is_admin=lambda user_id: user_id == ADMIN_ID)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def handler(calls):
    async def _handler(event, data):
        calls.append(data["is_admin"])
        return "handled"

    return _handler


def handler_data(user_id, admin_only):
    flags = {"admin": True} if admin_only else {}
    return {"user_id": user_id, "handler": SimpleNamespace(flags=flags)}


async def test_non_admin_blocked_from_admin_handler(middleware, handler, calls):
    message = FakeMessage()

    result = await middleware(handler, message, handler_data(101, admin_only=True))

    assert result is None
    assert calls == []
    assert message.answers == [ERR_NO_PERMISSION]


async def test_admin_runs_admin_handler(middleware, handler, calls):
    message = FakeMessage()

    result = await middleware(handler, message, handler_data(ADMIN_ID, admin_only=True))

    assert result == "handled"
    assert calls == [True]
    assert message.answers == []


@pytest.mark.parametrize("user_id, expected", [(101, False), (ADMIN_ID, True)])
async def test_unflagged_handler_runs_for_everyone(middleware, handler, calls, user_id, expected):
    message = FakeMessage()

    result = await middleware(handler, message, handler_data(user_id, admin_only=False))

    assert result == "handled"
    assert calls == [expected]


async def test_missing_user_is_not_admin(middleware, handler, calls):
    message = FakeMessage()

    await middleware(handler, message, handler_data(None, admin_only=True))

    assert calls == []
    assert message.answers == [ERR_NO_PERMISSION]
