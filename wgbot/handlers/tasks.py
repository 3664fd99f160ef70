"""Handlers for cleaning tasks."""

import logging
from datetime import datetime

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.config.settings import settings
from wgbot.database.models import Person
from wgbot.services.rotation_service import RotationService, tasks_for
from wgbot.utils.constants import CMD_MY_TASK, CMD_SCHEDULE, BTN_MY_TASK, BTN_SCHEDULE
from wgbot.utils.formatters import format_person_tasks, format_schedule, format_date

logger = logging.getLogger(__name__)

router = Router()


def get_rotation_service(session: AsyncSession) -> RotationService:
    return RotationService(session, settings.epoch_date, settings.tz)


@router.message(Command(CMD_MY_TASK))
@router.message(F.text == BTN_MY_TASK)
async def cmd_my_task(message: Message, session: AsyncSession, person: Person):
    """Show the user's tasks for the upcoming week."""
    logger.info(f"/mytask for {person.display_name}")

    rotation = get_rotation_service(session)
    now = datetime.now(settings.tz)
    week = await rotation.get_week(now)
    tasks = tasks_for(week.assignments, person.display_name)

    text = format_person_tasks(person.display_name, week.week_start, tasks, week.toilet_reminder)
    if not tasks:
        next_week = await rotation.get_next_task_week(person.display_name, today=now)
        if next_week is not None:
            text += f"\n\n📆 Your next turn is the week of {format_date(next_week.week_start)}."

    await message.answer(text)


@router.message(Command(CMD_SCHEDULE))
@router.message(F.text == BTN_SCHEDULE)
async def cmd_schedule(message: Message, session: AsyncSession):
    """Show the rotation for the next four weeks."""
    weeks = await get_rotation_service(session).get_upcoming_schedule(weeks=4)
    await message.answer(format_schedule(weeks))
