"""Authentication and authorization middleware."""

import logging
from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.dispatcher.flags import get_flag
from aiogram.types import TelegramObject, Message, CallbackQuery

from wgbot.config.settings import settings
from wgbot.services.person_service import PersonService
from wgbot.utils.constants import ERR_NOT_AUTHORIZED, CMD_START

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseMiddleware):
    """Resolve the Telegram user to a roommate and stop strangers."""

    async def __call__(
            self,
            handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
            event: TelegramObject,
            data: Dict[str, Any],
    ) -> Any:
        """
        Inject user data and the matching Person.

        Args:
            handler: Handler function
            event: Telegram event
            data: Handler data dictionary (needs "session" from DatabaseMiddleware)

        Returns:
            Handler result, or None when the user is not registered
        """
        user = None
        if isinstance(event, (Message, CallbackQuery)):
            user = event.from_user

        if user is None:
            return await handler(event, data)

        data["user_id"] = user.id
        data["username"] = user.username
        data["full_name"] = user.full_name

        person = await PersonService(data["session"]).get_by_telegram_id(user.id)
        data["person"] = person

        if person is None and not self._is_start(event) and not self._admin_bypass(user.id, data):
            logger.info(f"Unauthorized access attempt by Telegram user {user.id} ({user.full_name})")
            if isinstance(event, CallbackQuery):
                await event.answer(ERR_NOT_AUTHORIZED, show_alert=True)
            else:
                await event.answer(ERR_NOT_AUTHORIZED)
            return None

        return await handler(event, data)

    @staticmethod
    def _admin_bypass(user_id: int, data: Dict[str, Any]) -> bool:
        """Admins reach handlers flagged `admin` without being on the roster."""
        return bool(get_flag(data, "admin")) and settings.is_admin(user_id)

    @staticmethod
    def _is_start(event: TelegramObject) -> bool:
        return (
            isinstance(event, Message)
            and bool(event.text)
            and event.text.split()[0].split("@")[0] == f"/{CMD_START}"
        )
