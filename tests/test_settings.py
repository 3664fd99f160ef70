"""Tests for configuration loading."""

from datetime import date

import pydantic
import pytest

from wgbot.config.settings import Settings


def make_settings(**overrides):
    values = {"BOT_TOKEN": "123:abc", "DB_PASSWORD": "secret"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults():
    config = make_settings(TIMEZONE="Europe/Berlin", EPOCH_DATE="2024-01-07")

    assert config.epoch_date == date(2024, 1, 7)
    assert config.tz.zone == "Europe/Berlin"
    assert config.database_url.startswith("postgresql+asyncpg://")


def test_non_sunday_epoch_moves_back():
    # Wednesday
    config = make_settings(EPOCH_DATE="2024-01-10")

    assert config.epoch_date == date(2024, 1, 7)


def test_unknown_timezone_rejected():
    with pytest.raises(pydantic.ValidationError):
        make_settings(TIMEZONE="Mars/Olympus_Mons")


def test_missing_token_rejected(monkeypatch):
    monkeypatch.delenv("BOT_TOKEN", raising=False)

    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None, DB_PASSWORD="secret")


def test_admin_ids():
    config = make_settings(ADMIN_USER_IDS=" 1, 2 ,")

    assert config.is_admin(1)
    assert config.is_admin(2)
    assert not config.is_admin(3)


def test_log_level_upper_cased():
    assert make_settings(LOG_LEVEL="debug").log_level == "DEBUG"
