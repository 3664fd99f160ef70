"""Handlers for adding shared expenses."""

import logging
from datetime import datetime
from html import escape

from aiogram import Router, F
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.config.settings import settings
from wgbot.database.models import Person
from wgbot.errors import StorageError, ValidationError
from wgbot.services.ledger_service import LedgerService
from wgbot.states.expense_dialog import ExpenseDialog
from wgbot.states.forms import ExpenseForm
from wgbot.utils.constants import (
    CMD_ADD_EXPENSE, CMD_CANCEL, BTN_ADD_EXPENSE, BTN_CANCEL, ERR_DATABASE
)
from wgbot.utils.formatters import format_expense_added
from wgbot.keyboards.reply import get_cancel_keyboard, get_main_menu_keyboard

logger = logging.getLogger(__name__)

router = Router()


@router.message(Command(CMD_ADD_EXPENSE))
@router.message(F.text == BTN_ADD_EXPENSE)
async def cmd_add_expense(message: Message, state: FSMContext, person: Person):
    """Start adding an expense."""
    await ExpenseDialog(state).start()
    logger.info(f"Expense dialog started by {person.display_name}")

    await message.answer(
        "💰 How much was the expense? (e.g. 12.50)",
        reply_markup=get_cancel_keyboard()
    )


@router.message(Command(CMD_CANCEL))
@router.message(F.text == BTN_CANCEL)
async def cmd_cancel(message: Message, state: FSMContext):
    """Abort the expense dialog."""
    if await ExpenseDialog(state).cancel():
        text = "❌ Adding the expense was cancelled"
    else:
        text = "Nothing to cancel"
    await message.answer(text, reply_markup=get_main_menu_keyboard())


@router.message(StateFilter(ExpenseForm), F.text.startswith("/"))
async def command_during_dialog(message: Message, state: FSMContext):
    """Any other command ends the dialog; skipping passes it on to its own handler."""
    await ExpenseDialog(state).cancel()
    raise SkipHandler()


@router.message(ExpenseForm.amount, F.text)
async def process_expense_amount(message: Message, state: FSMContext):
    """Process expense amount."""
    try:
        await ExpenseDialog(state).submit_amount(message.text)
    except ValidationError as e:
        await message.answer(e.message)
        return

    await message.answer("📝 What was it for? (e.g. Toilet paper)")


@router.message(ExpenseForm.description, F.text)
async def process_expense_description(
        message: Message,
        state: FSMContext,
        session: AsyncSession,
        person: Person
):
    """Process description, then record and split the expense across the roster."""
    try:
        draft = await ExpenseDialog(state).submit_description(message.text)
    except ValidationError as e:
        await message.answer(e.message)
        return

    try:
        await LedgerService(session).record_expense(
            payer=person.display_name,
            amount=draft.amount,
            description=draft.description,
            spent_on=datetime.now(settings.tz).date()
        )
    except ValidationError as e:
        await message.answer(escape(e.message), reply_markup=get_main_menu_keyboard())
        return
    except StorageError:
        await message.answer(ERR_DATABASE, reply_markup=get_main_menu_keyboard())
        return

    await message.answer(
        format_expense_added(draft.amount, draft.description),
        reply_markup=get_main_menu_keyboard()
    )
