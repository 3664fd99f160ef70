"""Service for managing roommates."""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, update, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.database.models import Person, DebtEdge
from wgbot.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class PersonService:
    """Service for person operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_roster(self, lock: bool = False) -> List[Person]:
        """
        Get all people in rotation order.

        Args:
            lock: lock the rows until the transaction ends (SELECT ... FOR UPDATE)
        """
        query = select(Person).order_by(Person.id)
        if lock:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def lock_people(self, display_names: Sequence[str]) -> List[Person]:
        """Lock the given people's rows in id order and return them."""
        result = await self.session.execute(
            select(Person)
            .where(Person.display_name.in_(list(display_names)))
            .order_by(Person.id)
            .with_for_update()
        )
        return list(result.scalars().all())

    async def get_by_telegram_id(self, telegram_user_id: int) -> Optional[Person]:
        """Get person by Telegram user ID."""
        result = await self.session.execute(
            select(Person).where(Person.telegram_user_id == telegram_user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, display_name: str) -> Optional[Person]:
        """Get person by display name."""
        result = await self.session.execute(
            select(Person).where(Person.display_name == display_name)
        )
        return result.scalar_one_or_none()

    async def add_person(
            self,
            display_name: str,
            telegram_user_id: Optional[int] = None,
            chat_id: Optional[int] = None
    ) -> Person:
        """
        Register a roommate. New people join the end of the rotation.

        Raises:
            ValidationError: name or Telegram ID already taken
        """
        if await self.get_by_name(display_name):
            raise ValidationError(f"❌ {display_name} is already registered")

        if telegram_user_id is not None and await self.get_by_telegram_id(telegram_user_id):
            raise ValidationError(f"❌ Telegram ID {telegram_user_id} is already registered")

        person = Person(
            display_name=display_name,
            telegram_user_id=telegram_user_id,
            chat_id=chat_id
        )
        self.session.add(person)
        await self.session.flush()

        logger.info(f"Registered {display_name} (person id {person.id})")
        return person

    async def remove_person(self, display_name: str) -> None:
        """
        Remove a roommate. Refused while they still owe or are owed money.

        Raises:
            NotFoundError: unknown name
            ValidationError: outstanding balances
        """
        person = await self.get_by_name(display_name)
        if not person:
            raise NotFoundError(f"❌ {display_name} is not registered")

        result = await self.session.execute(
            select(func.count())
            .select_from(DebtEdge)
            .where(or_(
                DebtEdge.debtor == display_name,
                DebtEdge.creditor == display_name
            ))
        )
        if result.scalar():
            raise ValidationError(
                f"❌ {display_name} still has open balances. Settle them first."
            )

        await self.session.delete(person)
        await self.session.flush()
        logger.info(f"Removed {display_name} from the roster")

    async def register_chat(self, telegram_user_id: int, chat_id: int) -> Optional[Person]:
        """Store the private chat ID of a registered person. Returns None for strangers."""
        person = await self.get_by_telegram_id(telegram_user_id)
        if person is None:
            return None

        person.chat_id = chat_id
        await self.session.flush()
        logger.info(f"Updated chat_id for {person.display_name}")
        return person

    async def clear_chat_ref(self, person_id: int) -> None:
        """Forget a chat we can no longer deliver to. Clearing twice is a no-op."""
        await self.session.execute(
            update(Person)
            .where(Person.id == person_id)
            .values(chat_id=None)
        )
