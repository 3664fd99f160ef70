"""Service for sending cleaning notifications."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramForbiddenError

from wgbot.database.models import Person
from wgbot.services.rotation_service import WeekAssignment, tasks_for
from wgbot.utils.constants import CleaningTask
from wgbot.utils.formatters import (
    format_person_tasks,
    format_no_tasks_ping,
    format_toilet_reminder,
)

logger = logging.getLogger(__name__)


@dataclass
class DeliveryReport:
    """Outcome of a notification run."""
    sent: int = 0
    unreachable: List[Person] = field(default_factory=list)
    week_start: Optional[date] = None


class NotificationService:
    """Service for sending notifications to roommates."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_weekly_assignments(
            self,
            people: Sequence[Person],
            week: WeekAssignment,
            force: bool = False
    ) -> DeliveryReport:
        """
        Send everyone their tasks for the week.

        Args:
            people: roster
            week: assignments for the week being announced
            force: also message people without a task this week
        """
        report = DeliveryReport(week_start=week.week_start)

        for person in people:
            if not person.chat_id:
                logger.info(f"Skipping weekly notification for {person.display_name}, no chat_id")
                continue

            tasks = tasks_for(week.assignments, person.display_name)
            if tasks:
                message = format_person_tasks(
                    person.display_name, week.week_start, tasks, week.toilet_reminder
                )
            elif force:
                message = format_no_tasks_ping(person.display_name)
            else:
                continue

            await self._deliver(person, message, report)

        logger.info(f"Sent {report.sent} weekly assignment messages")
        return report

    async def send_toilet_reminders(
            self,
            people: Sequence[Person],
            week: WeekAssignment
    ) -> DeliveryReport:
        """Remind this week's toilet assignees of their Wednesday turn."""
        report = DeliveryReport(week_start=week.week_start)
        assignees = week.assignments.get(CleaningTask.TOILET, [])

        if not assignees:
            logger.info("Nobody is assigned to Toilet this week, no reminder to send")
            return report

        by_name = {p.display_name: p for p in people}
        for name in assignees:
            person = by_name.get(name)
            if person is None or not person.chat_id:
                logger.warning(f"Cannot remind {name} of toilet cleaning, no chat_id")
                continue

            await self._deliver(person, format_toilet_reminder(week.toilet_reminder), report)

        return report

    async def _deliver(self, person: Person, message: str, report: DeliveryReport) -> None:
        try:
            await self.bot.send_message(person.chat_id, message)
            report.sent += 1
            logger.info(f"Sent notification to {person.display_name}")
        except TelegramForbiddenError as e:
            # Bot blocked or chat gone; the job clears the stale chat_id
            logger.warning(f"Chat of {person.display_name} is unreachable: {e.message}")
            report.unreachable.append(person)
        except TelegramAPIError as e:
            logger.error(f"Failed to send notification to {person.display_name}: {e.message}")
