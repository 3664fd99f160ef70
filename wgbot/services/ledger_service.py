"""Service for splitting expenses into pairwise debts."""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Optional, Sequence

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.database.models import DebtEdge, Expense, EPSILON
from wgbot.errors import StorageError, ValidationError
from wgbot.services.person_service import PersonService

logger = logging.getLogger(__name__)

SHARE_QUANTUM = Decimal("0.0001")
CENT = Decimal("0.01")


@dataclass
class PersonBalance:
    """What one person owes, is owed, and the signed net (positive = is owed)."""
    owes: Dict[str, Decimal] = field(default_factory=dict)
    owed_by: Dict[str, Decimal] = field(default_factory=dict)
    net: Decimal = Decimal(0)


class LedgerService:
    """Service for expense splitting, balances and settling."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_expense(
            self,
            payer: str,
            amount: Decimal,
            description: str,
            participants: Optional[Sequence[str]] = None,
            spent_on: Optional[date] = None
    ) -> Expense:
        """
        Record an expense and split it equally among participants.

        Each participant's share is first netted against what the payer
        already owes them; only the remainder becomes new debt. Expense and
        edge changes are written in the caller's transaction together.

        Args:
            payer: display name of the person who paid
            amount: total amount, must be positive
            description: what it was for
            participants: display names to split among; None means the whole
                roster. The payer is added if missing.
            spent_on: expense date, defaults to today

        Returns:
            Created expense

        Raises:
            ValidationError: bad amount, unknown payer or nobody to split with
            StorageError: database failure, nothing was written
        """
        amount = self._to_cents(amount)

        person_service = PersonService(self.session)
        try:
            if participants is None:
                people = await person_service.get_roster(lock=True)
                names = [p.display_name for p in people]
            else:
                names = list(dict.fromkeys(participants))
                if not names:
                    raise ValidationError("❌ Nobody to split the expense with")
                if payer not in names:
                    names.append(payer)
                people = await person_service.lock_people(names)

            if not names:
                raise ValidationError("❌ No people in the system to split expenses with")

            known = {p.display_name for p in people}
            if payer not in known:
                raise ValidationError(f"❌ Unknown payer: {payer}")
            unknown = [name for name in names if name not in known]
            if unknown:
                raise ValidationError(f"❌ Unknown participants: {', '.join(unknown)}")

            expense = Expense(
                payer=payer,
                amount=amount,
                description=description,
                spent_on=spent_on or date.today()
            )
            self.session.add(expense)

            share = (amount / len(names)).quantize(SHARE_QUANTUM, rounding=ROUND_HALF_UP)
            for debtor in names:
                if debtor == payer:
                    continue
                await self._add_debt(debtor=debtor, creditor=payer, share=share)

            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to record expense by {payer}: {e}")
            raise StorageError("Could not record the expense", "record_expense") from e

        logger.info(
            f"Expense of {amount} by {payer} for '{description}' "
            f"split among {len(names)} people"
        )
        return expense

    @staticmethod
    def _to_cents(amount) -> Decimal:
        """Expense amounts are stored in cents; shares are split from the rounded value."""
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError("❌ Invalid amount")
        if not amount.is_finite():
            raise ValidationError("❌ Invalid amount")

        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        if amount <= 0:
            raise ValidationError("❌ Amount must be greater than zero")
        return amount

    async def _add_debt(self, debtor: str, creditor: str, share: Decimal) -> None:
        """Make ``debtor`` owe ``creditor`` ``share`` more, netting the reverse edge first."""
        to_settle = share

        reverse = await self._get_edge(debtor=creditor, creditor=debtor)
        if reverse is not None:
            if reverse.amount >= share:
                remaining = reverse.amount - share
                if remaining <= EPSILON:
                    await self.session.delete(reverse)
                else:
                    reverse.amount = remaining
                to_settle = Decimal(0)
            else:
                to_settle = share - reverse.amount
                await self.session.delete(reverse)

        if to_settle > EPSILON:
            forward = await self._get_edge(debtor=debtor, creditor=creditor)
            if forward is not None:
                forward.amount = forward.amount + to_settle
            else:
                self.session.add(DebtEdge(debtor=debtor, creditor=creditor, amount=to_settle))

        # Deletes must reach the database before a later pair re-reads edges
        await self.session.flush()

    async def _get_edge(self, debtor: str, creditor: str) -> Optional[DebtEdge]:
        result = await self.session.execute(
            select(DebtEdge)
            .where(DebtEdge.debtor == debtor, DebtEdge.creditor == creditor)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def aggregate(self) -> Dict[str, PersonBalance]:
        """
        Per-person balances from a single scan of all debt edges.

        Every roster member is present, with empty maps if they have no debts.
        """
        roster = await PersonService(self.session).get_roster()
        balances = {p.display_name: PersonBalance() for p in roster}

        result = await self.session.execute(
            select(DebtEdge)
            .where(DebtEdge.amount > EPSILON)
            .order_by(DebtEdge.debtor, DebtEdge.creditor)
        )
        for edge in result.scalars().all():
            debtor = balances.setdefault(edge.debtor, PersonBalance())
            debtor.owes[edge.creditor] = debtor.owes.get(edge.creditor, Decimal(0)) + edge.amount
            debtor.net -= edge.amount

            creditor = balances.setdefault(edge.creditor, PersonBalance())
            creditor.owed_by[edge.debtor] = creditor.owed_by.get(edge.debtor, Decimal(0)) + edge.amount
            creditor.net += edge.amount

        return balances

    async def settle(self, person: str) -> int:
        """
        Clear everything ``person`` owes to others.

        Money owed to them stays untouched.

        Returns:
            Number of removed debt edges
        """
        try:
            await PersonService(self.session).lock_people([person])
            result = await self.session.execute(
                delete(DebtEdge).where(DebtEdge.debtor == person)
            )
            cleared = result.rowcount
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to settle debts for {person}: {e}")
            raise StorageError("Could not settle debts", "settle") from e

        logger.info(f"Settled {cleared} debt entries for {person}")
        return cleared
