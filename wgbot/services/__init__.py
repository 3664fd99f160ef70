"""Services package."""

from wgbot.services.person_service import PersonService
from wgbot.services.rotation_service import RotationService
from wgbot.services.ledger_service import LedgerService
from wgbot.services.expense_service import ExpenseService
from wgbot.services.notification_service import NotificationService
from wgbot.services.scheduler_service import NotificationJobs

__all__ = [
    "PersonService",
    "RotationService",
    "LedgerService",
    "ExpenseService",
    "NotificationService",
    "NotificationJobs"
]
