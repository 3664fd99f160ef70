"""Inline keyboards for the bot."""

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from wgbot.utils.constants import CB_SETTLE, CB_ADMIN


def get_settle_keyboard() -> InlineKeyboardMarkup:
    """Button under /mybalance that clears what the user owes."""
    builder = InlineKeyboardBuilder()
    builder.button(
        text="🔄 Settle my debts (clear what I owe)",
        callback_data=f"{CB_SETTLE}:mine"
    )
    return builder.as_markup()


def get_admin_menu_keyboard() -> InlineKeyboardMarkup:
    """Create admin menu keyboard."""
    builder = InlineKeyboardBuilder()

    builder.button(text="📅 Schedule", callback_data=f"{CB_ADMIN}:schedule")
    builder.button(text="⚖️ Balances", callback_data=f"{CB_ADMIN}:balances")
    builder.button(text="💰 Recent expenses", callback_data=f"{CB_ADMIN}:expenses")
    builder.button(text="❓ Help", callback_data=f"{CB_ADMIN}:help")

    builder.adjust(1)  # All buttons in separate rows
    return builder.as_markup()


def get_admin_back_keyboard() -> InlineKeyboardMarkup:
    """Create keyboard with back to admin menu button."""
    builder = InlineKeyboardBuilder()
    builder.button(text="◀️ Back", callback_data=f"{CB_ADMIN}:menu")
    return builder.as_markup()
