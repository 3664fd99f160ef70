"""Two-step "add expense" conversation, one per Telegram user."""

from dataclasses import dataclass
from decimal import Decimal

from aiogram.fsm.context import FSMContext

from wgbot.errors import ValidationError
from wgbot.states.forms import ExpenseForm
from wgbot.utils.validators import validate_amount, validate_description


@dataclass(frozen=True)
class ExpenseDraft:
    """Completed dialog input, ready to be recorded."""
    amount: Decimal
    description: str


class ExpenseDialog:
    """
    Drives ExpenseForm for one user: amount first, then description.

    Invalid input raises ValidationError and leaves the state unchanged so the
    user can try again.
    """

    def __init__(self, state: FSMContext):
        self.state = state

    async def start(self) -> None:
        await self.state.set_data({})
        await self.state.set_state(ExpenseForm.amount)

    async def submit_amount(self, text: str) -> Decimal:
        if await self.state.get_state() != ExpenseForm.amount.state:
            raise ValidationError("❌ Start with /addexpense")

        is_valid, amount, error = validate_amount(text)
        if not is_valid:
            raise ValidationError(error)

        # FSM data must stay JSON-serializable for Redis storage
        await self.state.update_data(amount=str(amount))
        await self.state.set_state(ExpenseForm.description)
        return amount

    async def submit_description(self, text: str) -> ExpenseDraft:
        if await self.state.get_state() != ExpenseForm.description.state:
            raise ValidationError("❌ Start with /addexpense")

        is_valid, error = validate_description(text)
        if not is_valid:
            raise ValidationError(error)

        data = await self.state.get_data()
        await self.state.clear()
        return ExpenseDraft(amount=Decimal(data["amount"]), description=text.strip())

    async def cancel(self) -> bool:
        """Abort the dialog. Returns False if none was active."""
        active = await self.state.get_state() is not None
        await self.state.clear()
        return active
