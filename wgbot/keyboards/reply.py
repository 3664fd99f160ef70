"""Reply keyboards for the bot."""

from aiogram.types import ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

from wgbot.utils.constants import (
    BTN_MY_TASK, BTN_SCHEDULE, BTN_MY_BALANCE, BTN_ADD_EXPENSE, BTN_HELP, BTN_CANCEL
)


def get_main_menu_keyboard() -> ReplyKeyboardMarkup:
    """Create main menu keyboard."""
    builder = ReplyKeyboardBuilder()

    builder.button(text=BTN_MY_TASK)
    builder.button(text=BTN_SCHEDULE)
    builder.button(text=BTN_MY_BALANCE)
    builder.button(text=BTN_ADD_EXPENSE)
    builder.button(text=BTN_HELP)

    builder.adjust(2, 2, 1)  # 2-2-1 layout
    return builder.as_markup(resize_keyboard=True)


def get_cancel_keyboard() -> ReplyKeyboardMarkup:
    """Create keyboard with cancel button."""
    builder = ReplyKeyboardBuilder()
    builder.button(text=BTN_CANCEL)
    return builder.as_markup(resize_keyboard=True)
