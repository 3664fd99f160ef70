"""Handlers package."""

from wgbot.handlers import (
    start,
    admin,
    tasks,
    balance,
    expense,
    errors
)

__all__ = [
    "start",
    "admin",
    "tasks",
    "balance",
    "expense",
    "errors"
]
