"""Admin handlers for managing the flat."""

import logging
from datetime import datetime
from html import escape

from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import Message, CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.config.settings import settings
from wgbot.errors import StorageError, WGBotError
from wgbot.services.expense_service import ExpenseService
from wgbot.services.ledger_service import LedgerService
from wgbot.services.person_service import PersonService
from wgbot.services.rotation_service import RotationService
from wgbot.services.scheduler_service import NotificationJobs
from wgbot.utils.constants import (
    CB_ADMIN, CMD_ADMIN, CMD_ALL_EXPENSES, CMD_ADD_PERSON, CMD_REMOVE_PERSON,
    CMD_ADMIN_EXPENSE, CMD_SEND_WEEKLY, MSG_ADMIN_HELP, ERR_DATABASE
)
from wgbot.utils.formatters import (
    format_schedule,
    format_balances_overview,
    format_expenses_list,
    format_expense_summary,
    format_expense_added,
    format_date,
)
from wgbot.utils.validators import validate_amount, validate_description, validate_person_name, parse_telegram_id
from wgbot.keyboards.inline import get_admin_menu_keyboard, get_admin_back_keyboard

logger = logging.getLogger(__name__)

router = Router()

ADMIN = {"admin": True}
MENU_TEXT = "👨‍💼 <b>Admin dashboard</b>\n\nChoose an action:"


@router.message(Command(CMD_ADMIN), flags=ADMIN)
async def cmd_admin_menu(message: Message):
    """Show admin menu."""
    await message.answer(MENU_TEXT, reply_markup=get_admin_menu_keyboard())


@router.callback_query(F.data == f"{CB_ADMIN}:menu", flags=ADMIN)
async def callback_admin_back_to_menu(callback: CallbackQuery):
    """Handle back to menu button click."""
    await callback.message.edit_text(MENU_TEXT, reply_markup=get_admin_menu_keyboard())
    await callback.answer()


@router.callback_query(F.data == f"{CB_ADMIN}:schedule", flags=ADMIN)
async def callback_admin_schedule(
        callback: CallbackQuery,
        session: AsyncSession
):
    """Four-week rotation preview."""
    rotation = RotationService(session, settings.epoch_date, settings.tz)
    weeks = await rotation.get_upcoming_schedule(weeks=4)

    await callback.message.edit_text(format_schedule(weeks), reply_markup=get_admin_back_keyboard())
    await callback.answer()


@router.callback_query(F.data == f"{CB_ADMIN}:balances", flags=ADMIN)
async def callback_admin_balances(
        callback: CallbackQuery,
        session: AsyncSession
):
    """Everyone's balances."""
    balances = await LedgerService(session).aggregate()

    await callback.message.edit_text(
        format_balances_overview(balances),
        reply_markup=get_admin_back_keyboard()
    )
    await callback.answer()


@router.callback_query(F.data == f"{CB_ADMIN}:expenses", flags=ADMIN)
async def callback_admin_expenses(
        callback: CallbackQuery,
        session: AsyncSession
):
    """Latest expenses and totals."""
    expense_service = ExpenseService(session)
    expenses = await expense_service.get_expenses(limit=4)
    summary = await expense_service.get_expense_summary()

    msg = format_expenses_list(expenses)
    if expenses:
        msg += format_expense_summary(summary)

    await callback.message.edit_text(msg, reply_markup=get_admin_back_keyboard())
    await callback.answer()


@router.callback_query(F.data == f"{CB_ADMIN}:help", flags=ADMIN)
async def callback_admin_help(callback: CallbackQuery):
    """Handle help button click."""
    await callback.message.edit_text(MSG_ADMIN_HELP, reply_markup=get_admin_back_keyboard())
    await callback.answer()


@router.message(Command(CMD_ALL_EXPENSES), flags=ADMIN)
async def cmd_all_expenses(message: Message, session: AsyncSession):
    """Show the full expense history."""
    expenses = await ExpenseService(session).get_expenses()
    await message.answer(format_expenses_list(expenses))


@router.message(Command(CMD_ADD_PERSON), flags=ADMIN)
async def cmd_add_person(
        message: Message,
        command: CommandObject,
        session: AsyncSession
):
    """Register a roommate. Usage: /add_person <telegram_id> <name>"""
    parts = (command.args or "").split(maxsplit=1)
    if len(parts) < 2:
        await message.answer(f"❌ Usage: /{CMD_ADD_PERSON} &lt;telegram_id&gt; &lt;name&gt;")
        return

    telegram_user_id = parse_telegram_id(parts[0])
    if telegram_user_id is None:
        await message.answer("❌ Invalid Telegram ID")
        return

    name = parts[1].strip()
    is_valid, error = validate_person_name(name)
    if not is_valid:
        await message.answer(error)
        return

    try:
        await PersonService(session).add_person(name, telegram_user_id=telegram_user_id)
    except WGBotError as e:
        await message.answer(escape(e.message))
        return

    logger.info(f"Admin {message.from_user.id} added {name}")
    await message.answer(
        f"✅ {escape(name)} was added to the rotation. They should send /start to the bot once."
    )


@router.message(Command(CMD_REMOVE_PERSON), flags=ADMIN)
async def cmd_remove_person(
        message: Message,
        command: CommandObject,
        session: AsyncSession
):
    """Remove a roommate. Usage: /remove_person <name>"""
    name = (command.args or "").strip()
    if not name:
        await message.answer(f"❌ Usage: /{CMD_REMOVE_PERSON} &lt;name&gt;")
        return

    try:
        await PersonService(session).remove_person(name)
    except WGBotError as e:
        await message.answer(escape(e.message))
        return

    logger.info(f"Admin {message.from_user.id} removed {name}")
    await message.answer(f"✅ {escape(name)} was removed. The rotation now uses the remaining roster.")


@router.message(Command(CMD_ADMIN_EXPENSE), flags=ADMIN)
async def cmd_admin_expense(
        message: Message,
        command: CommandObject,
        session: AsyncSession
):
    """Record an expense for someone. Usage: /admin_expense <payer> <amount> <description>"""
    parts = (command.args or "").split(maxsplit=2)
    if len(parts) < 3:
        await message.answer(
            f"❌ Usage: /{CMD_ADMIN_EXPENSE} &lt;payer&gt; &lt;amount&gt; &lt;description&gt;"
        )
        return

    payer, amount_text, description = parts

    is_valid, amount, error = validate_amount(amount_text)
    if not is_valid:
        await message.answer(error)
        return

    is_valid, error = validate_description(description)
    if not is_valid:
        await message.answer(error)
        return

    try:
        await LedgerService(session).record_expense(
            payer=payer,
            amount=amount,
            description=description.strip(),
            spent_on=datetime.now(settings.tz).date()
        )
    except StorageError:
        await message.answer(ERR_DATABASE)
        return
    except WGBotError as e:
        await message.answer(escape(e.message))
        return

    await message.answer(format_expense_added(amount, description.strip()))


@router.message(Command(CMD_SEND_WEEKLY), flags=ADMIN)
async def cmd_send_weekly(message: Message, jobs: NotificationJobs):
    """
    Push the weekly announcement now, including people without a task.

    Like the Sunday job, this announces the week starting on the upcoming
    Sunday (today if it is Sunday).
    """
    report = await jobs.send_weekly_assignments(force=True)
    if report.week_start is None:
        await message.answer("❌ Nobody is registered yet")
        return

    msg = (
        f"✅ Assignments for the week starting {format_date(report.week_start)} "
        f"sent to {report.sent} people."
    )
    if report.unreachable:
        names = ", ".join(escape(p.display_name) for p in report.unreachable)
        msg += f"\n⚠️ Unreachable: {names}"
    await message.answer(msg)
