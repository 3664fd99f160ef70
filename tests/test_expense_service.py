"""Tests for the expense log queries."""

from datetime import date
from decimal import Decimal

from wgbot.services.expense_service import ExpenseService
from wgbot.services.ledger_service import LedgerService


async def test_expenses_newest_first(session, add_people):
    await add_people("A", "B")
    ledger = LedgerService(session)
    await ledger.record_expense("A", Decimal("10"), "Milk", spent_on=date(2024, 1, 8))
    await ledger.record_expense("B", Decimal("30"), "Soap", spent_on=date(2024, 1, 9))
    await ledger.record_expense("A", Decimal("5"), "Bread", spent_on=date(2024, 1, 9))

    expenses = await ExpenseService(session).get_expenses()

    assert [e.description for e in expenses] == ["Bread", "Soap", "Milk"]
    assert len(await ExpenseService(session).get_expenses(limit=2)) == 2


async def test_summary(session, add_people):
    await add_people("A", "B")
    ledger = LedgerService(session)
    await ledger.record_expense("A", Decimal("10"), "Milk")
    await ledger.record_expense("B", Decimal("30"), "Soap")
    await ledger.record_expense("A", Decimal("5"), "Bread")

    summary = await ExpenseService(session).get_expense_summary()

    assert summary["expense_count"] == 3
    assert summary["total_amount"] == Decimal("45")
    assert summary["by_payer"] == {"A": Decimal("15"), "B": Decimal("30")}


async def test_empty_summary(session):
    summary = await ExpenseService(session).get_expense_summary()

    assert summary == {"total_amount": Decimal(0), "expense_count": 0, "by_payer": {}}
