"""Handlers for start and help commands."""

import logging
from html import escape

from aiogram import Router, F
from aiogram.filters import Command, CommandStart
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.services.person_service import PersonService
from wgbot.utils.constants import (
    MSG_HELP, MSG_ADMIN_HELP, MSG_WELCOME_BACK, MSG_NOT_REGISTERED, BTN_HELP, CMD_HELP
)
from wgbot.keyboards.reply import get_main_menu_keyboard

logger = logging.getLogger(__name__)

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message, session: AsyncSession, user_id: int):
    """Register the private chat of a known roommate."""
    logger.info(f"/start from user {user_id} in chat {message.chat.id}")

    person = await PersonService(session).register_chat(user_id, message.chat.id)
    if person is None:
        await message.answer(
            MSG_NOT_REGISTERED.format(
                first_name=escape(message.from_user.first_name or "there"),
                user_id=user_id
            )
        )
        return

    await message.answer(
        MSG_WELCOME_BACK.format(name=escape(person.display_name)),
        reply_markup=get_main_menu_keyboard()
    )


@router.message(Command(CMD_HELP))
@router.message(F.text == BTN_HELP)
async def cmd_help(message: Message, is_admin: bool):
    """Handle /help command."""
    text = MSG_HELP
    if is_admin:
        text += MSG_ADMIN_HELP
    await message.answer(text)
