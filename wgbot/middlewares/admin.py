"""Admin middleware: marks admins and guards admin-only handlers."""

import logging
from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.dispatcher.flags import get_flag
from aiogram.types import TelegramObject, CallbackQuery

from wgbot.config.settings import settings
from wgbot.utils.constants import ERR_NO_PERMISSION

logger = logging.getLogger(__name__)


class AdminMiddleware(BaseMiddleware):
    """
    Sets ``is_admin`` for every handler.

    Handlers flagged ``admin`` only run for admins; everyone else gets a
    "no permission" answer.
    """

    def __init__(self, is_admin: Callable[[int], bool] = settings.is_admin):
        self.is_admin = is_admin

    async def __call__(
            self,
            handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
            event: TelegramObject,
            data: Dict[str, Any]
    ) -> Any:
        user_id = data.get("user_id")
        data["is_admin"] = bool(user_id) and self.is_admin(user_id)

        if get_flag(data, "admin") and not data["is_admin"]:
            logger.info(f"User {user_id} tried an admin-only action")
            if isinstance(event, CallbackQuery):
                await event.answer(ERR_NO_PERMISSION, show_alert=True)
            else:
                await event.answer(ERR_NO_PERMISSION)
            return None

        return await handler(event, data)
