"""Time-triggered notification jobs."""

import logging
from datetime import date, datetime
from typing import List, Optional

from aiogram import Bot
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from wgbot.config.settings import Settings
from wgbot.database.models import Person
from wgbot.database.session import DatabaseSessionManager
from wgbot.errors import StorageError
from wgbot.services.notification_service import DeliveryReport, NotificationService
from wgbot.services.person_service import PersonService
from wgbot.services.rotation_service import WeekAssignment, assign, target_sunday, week_start

logger = logging.getLogger(__name__)


class NotificationJobs:
    """Weekly assignment push and Wednesday toilet reminder."""

    def __init__(self, bot: Bot, sessions: DatabaseSessionManager, config: Settings):
        self.bot = bot
        self.sessions = sessions
        self.config = config

    async def send_weekly_assignments(
            self,
            force: bool = False,
            now: Optional[datetime] = None
    ) -> DeliveryReport:
        """Announce the week starting on the upcoming (or current) Sunday."""
        now = now or datetime.now(self.config.tz)
        logger.info("Running weekly assignment job")

        people = await self._load_roster()
        if not people:
            logger.info("No people registered for assignments, skipping")
            return DeliveryReport()

        week = self._build_week(people, target_sunday(now, 0, self.config.tz))

        report = await NotificationService(self.bot).send_weekly_assignments(
            people, week, force=force
        )
        await self._forget_unreachable(report)
        return report

    async def send_toilet_reminders(self, now: Optional[datetime] = None) -> DeliveryReport:
        """Remind the current week's toilet assignees."""
        now = now or datetime.now(self.config.tz)
        logger.info("Running Wednesday toilet reminder job")

        people = await self._load_roster()
        if not people:
            logger.info("No people registered, skipping Wednesday reminders")
            return DeliveryReport()

        week = self._build_week(people, week_start(now, self.config.tz))

        report = await NotificationService(self.bot).send_toilet_reminders(people, week)
        await self._forget_unreachable(report)
        return report

    async def _load_roster(self) -> List[Person]:
        # Session is closed again before any message goes out
        async with self.sessions.session() as session:
            return await PersonService(session).get_roster()

    def _build_week(self, people: List[Person], sunday: date) -> WeekAssignment:
        return WeekAssignment(
            week_start=sunday,
            assignments=assign(people, sunday, self.config.epoch_date)
        )

    async def _forget_unreachable(self, report: DeliveryReport) -> None:
        if not report.unreachable:
            return

        names = ", ".join(p.display_name for p in report.unreachable)
        try:
            async with self.sessions.session() as session:
                person_service = PersonService(session)
                for person in report.unreachable:
                    await person_service.clear_chat_ref(person.id)
            logger.info(f"Cleared chat_id for {names} after delivery failure")
        except StorageError as e:
            logger.error(f"Failed to clear chat_id for {names}: {e.message}")

    async def run_weekly(self) -> None:
        try:
            await self.send_weekly_assignments()
        except Exception:
            logger.exception("Unhandled error in weekly assignment job")

    async def run_reminders(self) -> None:
        try:
            await self.send_toilet_reminders()
        except Exception:
            logger.exception("Unhandled error in Wednesday reminder job")


def setup_scheduler(jobs: NotificationJobs, config: Settings) -> AsyncIOScheduler:
    """Create a scheduler with the Sunday push and the Wednesday reminder."""
    scheduler = AsyncIOScheduler(timezone=config.tz)

    scheduler.add_job(
        jobs.run_weekly,
        CronTrigger(day_of_week="sun", hour=config.weekly_notification_hour, minute=0, timezone=config.tz),
        id="weekly_assignments",
        replace_existing=True,
    )
    scheduler.add_job(
        jobs.run_reminders,
        CronTrigger(day_of_week="wed", hour=config.reminder_hour, minute=0, timezone=config.tz),
        id="toilet_reminders",
        replace_existing=True,
    )

    logger.info(f"Notification jobs scheduled in timezone {config.timezone}")
    return scheduler
