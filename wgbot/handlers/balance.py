"""Handlers for balances and settling debts."""

import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.database.models import Person
from wgbot.errors import StorageError
from wgbot.services.ledger_service import LedgerService, PersonBalance
from wgbot.utils.constants import CMD_MY_BALANCE, BTN_MY_BALANCE, CB_SETTLE, ERR_DATABASE
from wgbot.utils.formatters import format_balance
from wgbot.keyboards.inline import get_settle_keyboard

logger = logging.getLogger(__name__)

router = Router()


@router.message(Command(CMD_MY_BALANCE))
@router.message(F.text == BTN_MY_BALANCE)
async def cmd_my_balance(message: Message, session: AsyncSession, person: Person):
    """Show what the user owes and is owed."""
    logger.info(f"/mybalance for {person.display_name}")

    balances = await LedgerService(session).aggregate()
    balance = balances.get(person.display_name, PersonBalance())

    await message.answer(
        format_balance(person.display_name, balance),
        reply_markup=get_settle_keyboard()
    )


@router.callback_query(F.data == f"{CB_SETTLE}:mine")
async def callback_settle_my_debts(
        callback: CallbackQuery,
        session: AsyncSession,
        person: Person
):
    """Clear everything the user owes; money owed to them stays."""
    logger.info(f"Settle requested by {person.display_name}")

    try:
        cleared = await LedgerService(session).settle(person.display_name)
    except StorageError:
        await callback.answer("❌ Error settling debts. Please try again.", show_alert=True)
        await callback.message.answer(ERR_DATABASE)
        return

    if cleared:
        text = f"✅ Your debts to others are cleared ({cleared} entries). Money owed to you remains."
    else:
        text = "✅ You had no debts to clear. Money owed to you remains."

    await callback.message.edit_text(text)
    await callback.answer()
