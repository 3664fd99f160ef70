"""Tests for message formatting."""

from datetime import date
from decimal import Decimal

from wgbot.services.ledger_service import PersonBalance
from wgbot.services.rotation_service import WeekAssignment
from wgbot.utils.constants import CleaningTask
from wgbot.utils.formatters import (
    format_amount,
    format_balance,
    format_balances_overview,
    format_expense_summary,
    format_person_tasks,
    format_schedule,
)


def test_format_amount():
    assert format_amount(Decimal("3.3333")) == "€3.33"
    assert format_amount(Decimal("10")) == "€10.00"


def test_person_tasks_mentions_wednesday_for_toilet():
    text = format_person_tasks(
        "Dave", date(2024, 1, 7), [CleaningTask.TOILET], date(2024, 1, 10)
    )

    assert "Toilet" in text
    assert "07/01/2024" in text
    assert "Wednesday, 10/01/2024" in text


def test_person_without_tasks():
    text = format_person_tasks("Eve", date(2024, 1, 7), [], date(2024, 1, 10))

    assert "no specific tasks" in text


def test_names_are_escaped():
    text = format_person_tasks("<b>Eve</b>", date(2024, 1, 7), [], date(2024, 1, 10))

    assert "&lt;b&gt;Eve&lt;/b&gt;" in text


def test_schedule_shows_every_task():
    week = WeekAssignment(
        week_start=date(2024, 1, 7),
        assignments={
            CleaningTask.KITCHEN: ["Alice", "Bob"],
            CleaningTask.BATHROOM: ["Carol"],
            CleaningTask.TOILET: [],
        },
    )

    text = format_schedule([week])

    assert "Kitchen: Alice &amp; Bob" in text
    assert "Bathroom: Carol" in text
    assert "Toilet: N/A" in text


def test_balance():
    balance = PersonBalance(
        owes={"X": Decimal("5")},
        owed_by={"Z": Decimal("8")},
        net=Decimal("3"),
    )

    text = format_balance("P", balance)

    assert "You owe X: €5.00" in text
    assert "Z owes you: €8.00" in text
    assert "Net balance: €3.00" in text
    assert "you are owed" in text


def test_settled_balance():
    text = format_balance("P", PersonBalance())

    assert "You currently owe nothing" in text
    assert "No one currently owes you" in text
    assert "settled" in text


def test_balances_overview():
    text = format_balances_overview({
        "A": PersonBalance(owed_by={"B": Decimal("10")}, net=Decimal("10")),
        "B": PersonBalance(owes={"A": Decimal("10")}, net=Decimal("-10")),
    })

    assert "<b>A</b>: net €10.00" in text
    assert "→ A: €10.00" in text


def test_expense_summary():
    text = format_expense_summary({
        "total_amount": Decimal("40"),
        "expense_count": 2,
        "by_payer": {"A": Decimal("30"), "B": Decimal("10")},
    })

    assert "€40.00" in text
    assert "A: €30.00 (75.0%)" in text
