"""States package."""

from wgbot.states.forms import ExpenseForm
from wgbot.states.expense_dialog import ExpenseDialog, ExpenseDraft

__all__ = [
    "ExpenseForm",
    "ExpenseDialog",
    "ExpenseDraft"
]
