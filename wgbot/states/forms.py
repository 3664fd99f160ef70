"""FSM states for multi-step forms."""

from aiogram.fsm.state import State, StatesGroup


class ExpenseForm(StatesGroup):
    """States for adding an expense."""
    amount = State()  # awaiting amount
    description = State()  # awaiting description
