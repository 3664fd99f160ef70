"""Database models for the WG bot."""

from wgbot.database.models.person import Person
from wgbot.database.models.expense import Expense
from wgbot.database.models.debt import DebtEdge, EPSILON

__all__ = [
    "Person",
    "Expense",
    "DebtEdge",
    "EPSILON",
]
