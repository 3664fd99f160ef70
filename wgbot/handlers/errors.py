"""Last-resort handling of errors raised by handlers."""

import logging

from aiogram import Router
from aiogram.filters import ExceptionTypeFilter
from aiogram.types import ErrorEvent

from wgbot.errors import StorageError
from wgbot.utils.constants import ERR_DATABASE

logger = logging.getLogger(__name__)

router = Router()


@router.error(ExceptionTypeFilter(StorageError))
async def storage_error(event: ErrorEvent):
    """The transaction was rolled back; tell the user to try again."""
    logger.error(f"Storage failure during update {event.update.update_id}: {event.exception}")

    if event.update.message:
        await event.update.message.answer(ERR_DATABASE)
    elif event.update.callback_query:
        await event.update.callback_query.answer(ERR_DATABASE, show_alert=True)
