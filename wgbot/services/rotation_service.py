"""Weekly cleaning rotation.

The rotation is stateless: the assignment for a week depends only on the
roster (in registration order), the week's Sunday and a fixed epoch Sunday.
Re-running a job or looking weeks ahead always gives the same answer.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.database.models import Person
from wgbot.services.person_service import PersonService
from wgbot.utils.constants import CleaningTask

Assignments = Dict[CleaningTask, List[str]]

# Toilet is cleaned again on Wednesday of the same week
TOILET_REMINDER_OFFSET = timedelta(days=3)


@dataclass(frozen=True)
class WeekAssignment:
    """Assignments for one calendar week (Sunday to Saturday)."""
    week_start: date
    assignments: Assignments

    @property
    def toilet_reminder(self) -> date:
        return toilet_reminder_date(self.week_start)


def _calendar_day(reference, tz: Optional[tzinfo] = None) -> date:
    """Reduce a date or datetime to a calendar day in ``tz``."""
    if isinstance(reference, datetime):
        if reference.tzinfo is not None and tz is not None:
            reference = reference.astimezone(tz)
        return reference.date()
    return reference


def target_sunday(reference, week_offset: int = 0, tz: Optional[tzinfo] = None) -> date:
    """
    Sunday on or after the reference day, moved ``week_offset`` weeks ahead.

    Args:
        reference: date or datetime; aware datetimes are converted to ``tz`` first
        week_offset: additional whole weeks, must be >= 0
        tz: display timezone

    Returns:
        Calendar date of the Sunday that begins the target week
    """
    if week_offset < 0:
        raise ValueError("week_offset must be >= 0")

    day = _calendar_day(reference, tz)
    # date.weekday(): Monday == 0 ... Sunday == 6
    days_until_sunday = (6 - day.weekday()) % 7
    return day + timedelta(days=days_until_sunday + 7 * week_offset)


def week_start(reference, tz: Optional[tzinfo] = None) -> date:
    """Sunday on or before the reference day."""
    day = _calendar_day(reference, tz)
    return day - timedelta(days=(day.weekday() + 1) % 7)


def toilet_reminder_date(sunday: date) -> date:
    return sunday + TOILET_REMINDER_OFFSET


def weeks_since_epoch(sunday: date, epoch: date) -> int:
    # Floor division keeps weeks before the epoch negative
    return (sunday - epoch).days // 7


def _empty_assignments() -> Assignments:
    return {task: [] for task in CleaningTask}


def assign(roster: Sequence[Person], target_week_date, epoch: date) -> Assignments:
    """
    Compute who cleans what in the week of ``target_week_date``.

    Args:
        roster: people in registration order
        target_week_date: any day; normalized to the upcoming Sunday
        epoch: Sunday from which weeks are counted

    Returns:
        Mapping of every task to a list of display names. Roster sizes
        outside 1..4 are not supported and give empty lists.
    """
    n = len(roster)
    if n == 0:
        return _empty_assignments()

    sunday = target_sunday(target_week_date, 0)
    phase = ((weeks_since_epoch(sunday, epoch) % n) + n) % n
    rotated = [roster[(i + phase) % n].display_name for i in range(n)]

    if n == 1:
        return {
            CleaningTask.KITCHEN: [rotated[0]],
            CleaningTask.BATHROOM: [rotated[0]],
            CleaningTask.TOILET: [rotated[0]],
        }
    if n == 2:
        return {
            CleaningTask.KITCHEN: [rotated[0]],
            CleaningTask.BATHROOM: [rotated[1]],
            CleaningTask.TOILET: [rotated[0]],
        }
    if n == 3:
        return {
            CleaningTask.KITCHEN: [rotated[0]],
            CleaningTask.BATHROOM: [rotated[1]],
            CleaningTask.TOILET: [rotated[2]],
        }
    if n == 4:
        return {
            CleaningTask.KITCHEN: [rotated[0], rotated[1]],
            CleaningTask.BATHROOM: [rotated[2]],
            CleaningTask.TOILET: [rotated[3]],
        }
    return _empty_assignments()


def tasks_for(assignments: Assignments, display_name: str) -> List[CleaningTask]:
    """Tasks assigned to one person, in task order."""
    return [task for task in CleaningTask if display_name in assignments.get(task, [])]


class RotationService:
    """Roster-backed access to the rotation."""

    def __init__(self, session: AsyncSession, epoch: date, tz: Optional[tzinfo] = None):
        self.session = session
        self.epoch = epoch
        self.tz = tz

    async def get_week(self, reference, week_offset: int = 0) -> WeekAssignment:
        """Assignments for the week starting at ``target_sunday(reference, week_offset)``."""
        roster = await PersonService(self.session).get_roster()
        return self.build_week(roster, target_sunday(reference, week_offset, self.tz))

    def build_week(self, roster: Sequence[Person], sunday: date) -> WeekAssignment:
        return WeekAssignment(
            week_start=sunday,
            assignments=assign(roster, sunday, self.epoch)
        )

    async def get_upcoming_schedule(
            self,
            weeks: int = 4,
            today: Optional[datetime] = None
    ) -> List[WeekAssignment]:
        """Assignments for the next ``weeks`` weeks, starting with the upcoming Sunday."""
        roster = await PersonService(self.session).get_roster()
        if not roster:
            return []

        today = today or datetime.now(self.tz)
        return [
            self.build_week(roster, target_sunday(today, offset, self.tz))
            for offset in range(weeks)
        ]

    async def get_next_task_week(
            self,
            display_name: str,
            today: Optional[datetime] = None,
            horizon: int = 10
    ) -> Optional[WeekAssignment]:
        """First week within ``horizon`` weeks in which the person has a task."""
        roster = await PersonService(self.session).get_roster()
        today = today or datetime.now(self.tz)

        for offset in range(horizon):
            week = self.build_week(roster, target_sunday(today, offset, self.tz))
            if tasks_for(week.assignments, display_name):
                return week
        return None
