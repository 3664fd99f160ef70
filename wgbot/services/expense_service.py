"""Service for reading the expense log."""

from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wgbot.database.models import Expense


class ExpenseService:
    """Read-only queries over recorded expenses."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_expenses(self, limit: Optional[int] = None) -> List[Expense]:
        """Get expenses, newest first."""
        query = select(Expense).order_by(Expense.spent_on.desc(), Expense.id.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_expense_summary(self) -> Dict:
        """
        Get expense totals.

        Returns:
            Dict with:
            - total_amount: Total spent
            - expense_count: Number of expenses
            - by_payer: Breakdown by who paid
        """
        expenses = await self.get_expenses()

        by_payer: Dict[str, Decimal] = {}
        for expense in expenses:
            by_payer[expense.payer] = by_payer.get(expense.payer, Decimal(0)) + expense.amount

        return {
            "total_amount": sum((e.amount for e in expenses), Decimal(0)),
            "expense_count": len(expenses),
            "by_payer": by_payer
        }
