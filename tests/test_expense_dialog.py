"""Tests for the two-step add-expense conversation."""

from decimal import Decimal

import pytest
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from wgbot.errors import ValidationError
from wgbot.handlers.expense import command_during_dialog
from wgbot.states import ExpenseDialog, ExpenseDraft, ExpenseForm


@pytest.fixture
def storage():
    return MemoryStorage()


def context(storage, user_id=1):
    return FSMContext(storage=storage, key=StorageKey(bot_id=42, chat_id=user_id, user_id=user_id))


async def test_full_dialog(storage):
    dialog = ExpenseDialog(context(storage))

    await dialog.start()
    amount = await dialog.submit_amount("12,50")
    draft = await dialog.submit_description("  Toilet paper ")

    assert amount == Decimal("12.50")
    assert draft == ExpenseDraft(amount=Decimal("12.50"), description="Toilet paper")
    assert await context(storage).get_state() is None


async def test_invalid_amount_keeps_state(storage):
    state = context(storage)
    dialog = ExpenseDialog(state)
    await dialog.start()

    with pytest.raises(ValidationError):
        await dialog.submit_amount("a lot")

    assert await state.get_state() == ExpenseForm.amount.state
    await dialog.submit_amount("3")
    assert await state.get_state() == ExpenseForm.description.state


async def test_amount_stored_as_text(storage):
    state = context(storage)
    dialog = ExpenseDialog(state)
    await dialog.start()

    await dialog.submit_amount("7")

    assert await state.get_data() == {"amount": "7.00"}


async def test_empty_description_keeps_state(storage):
    state = context(storage)
    dialog = ExpenseDialog(state)
    await dialog.start()
    await dialog.submit_amount("5")

    with pytest.raises(ValidationError):
        await dialog.submit_description("   ")

    assert await state.get_state() == ExpenseForm.description.state


async def test_description_before_amount(storage):
    dialog = ExpenseDialog(context(storage))
    await dialog.start()

    with pytest.raises(ValidationError):
        await dialog.submit_description("Soap")


async def test_amount_without_dialog(storage):
    with pytest.raises(ValidationError):
        await ExpenseDialog(context(storage)).submit_amount("5")


async def test_cancel(storage):
    state = context(storage)
    dialog = ExpenseDialog(state)
    await dialog.start()
    await dialog.submit_amount("5")

    assert await dialog.cancel() is True
    assert await state.get_state() is None
    assert await state.get_data() == {}
    assert await dialog.cancel() is False


async def test_dialogs_are_per_user(storage):
    alice = ExpenseDialog(context(storage, user_id=1))
    bob = ExpenseDialog(context(storage, user_id=2))

    await alice.start()
    await alice.submit_amount("10")
    await bob.start()

    draft = await alice.submit_description("Milk")

    assert draft.amount == Decimal("10.00")
    assert await context(storage, user_id=2).get_state() == ExpenseForm.amount.state


async def test_other_command_ends_dialog_and_falls_through(storage):
    state = context(storage)
    dialog = ExpenseDialog(state)
    await dialog.start()
    await dialog.submit_amount("5")

    with pytest.raises(SkipHandler):
        await command_during_dialog(None, state)

    assert await state.get_state() is None
    assert await state.get_data() == {}
