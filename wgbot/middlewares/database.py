"""Database middleware for injecting session into handlers."""

from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from wgbot.database.session import DatabaseSessionManager, sessionmanager


class DatabaseMiddleware(BaseMiddleware):
    """One session (one transaction) per update."""

    def __init__(self, sessions: DatabaseSessionManager = sessionmanager):
        self.sessions = sessions

    async def __call__(
            self,
            handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
            event: TelegramObject,
            data: Dict[str, Any],
    ) -> Any:
        """
        Inject database session into handler data.

        The session commits after the handler returns and rolls back if it raises.
        """
        async with self.sessions.session() as session:
            data["session"] = session
            return await handler(event, data)
