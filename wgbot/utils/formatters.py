"""Formatters for displaying data in messages."""

from datetime import date
from decimal import Decimal
from html import escape
from typing import Dict, List, Sequence

from wgbot.database.models import Expense, EPSILON
from wgbot.utils.constants import CleaningTask, TASK_ICONS, CURRENCY


def format_amount(amount: Decimal) -> str:
    """Format amount with currency."""
    return f"{CURRENCY}{amount:.2f}"


def format_date(day: date) -> str:
    """Format a calendar date for display (dd/mm/yyyy)."""
    return day.strftime("%d/%m/%Y")


def format_names(names: Sequence[str]) -> str:
    return " &amp; ".join(escape(n) for n in names) or "N/A"


def format_person_tasks(
        name: str,
        week_start: date,
        tasks: List[CleaningTask],
        toilet_reminder: date
) -> str:
    """Tasks of one person for one week; Toilet also mentions the Wednesday turn."""
    if not tasks:
        return (
            f"🎉 Hi {escape(name)}, no specific tasks for the week of "
            f"{format_date(week_start)}."
        )

    message = (
        f"🧹 Hi {escape(name)}, your tasks for the week starting Sunday, "
        f"{format_date(week_start)}:\n\n"
    )
    for task in tasks:
        message += f"{TASK_ICONS[task]} <b>{task.value}</b> (mainly on {format_date(week_start)})\n"
        if task == CleaningTask.TOILET:
            message += f"   Also on Wednesday, {format_date(toilet_reminder)}\n"
    return message


def format_no_tasks_ping(name: str) -> str:
    return (
        f"👋 Hi {escape(name)}, this is your weekly cleaning schedule ping! "
        f"No specific tasks assigned to you this week."
    )


def format_toilet_reminder(day: date) -> str:
    return f"🧹 Reminder: today, {format_date(day)}, is your mid-week toilet cleaning day!"


def format_schedule(weeks) -> str:
    """Format upcoming weeks as a schedule table."""
    if not weeks:
        return "❌ Nobody is registered yet"

    message = "<b>📅 Cleaning schedule</b>\n\n"
    for week in weeks:
        message += f"<b>{format_date(week.week_start)}</b>\n"
        for task in CleaningTask:
            message += f"  {TASK_ICONS[task]} {task.value}: {format_names(week.assignments.get(task, []))}\n"
        message += "\n"
    return message


def format_balance(name: str, balance) -> str:
    """Format one person's balance for /mybalance."""
    message = f"<b>💸 {escape(name)}'s balances</b>\n\n"

    owes = {k: v for k, v in balance.owes.items() if v > EPSILON}
    if owes:
        for creditor, amount in owes.items():
            message += f"➡️ You owe {escape(creditor)}: {format_amount(amount)}\n"
    else:
        message += "✅ You currently owe nothing to anyone!\n"

    message += "\n"

    owed_by = {k: v for k, v in balance.owed_by.items() if v > EPSILON}
    if owed_by:
        for debtor, amount in owed_by.items():
            message += f"⬅️ {escape(debtor)} owes you: {format_amount(amount)}\n"
    else:
        message += "✅ No one currently owes you anything!\n"

    message += f"\n<b>Net balance: {format_amount(balance.net)}</b>\n"
    if balance.net > EPSILON:
        message += "(Overall, you are owed this much)"
    elif balance.net < -EPSILON:
        message += "(Overall, you owe this much)"
    else:
        message += "(Overall, your balances are settled)"

    return message


def format_balances_overview(balances: Dict) -> str:
    """Format everyone's balances for the admin dashboard."""
    if not balances:
        return "❌ Nobody is registered yet"

    message = "<b>⚖️ Balances</b>\n\n"
    for name, balance in balances.items():
        message += f"<b>{escape(name)}</b>: net {format_amount(balance.net)}\n"
        for creditor, amount in balance.owes.items():
            message += f"  → {escape(creditor)}: {format_amount(amount)}\n"
    return message


def format_expenses_list(expenses: List[Expense]) -> str:
    """Format list of expenses."""
    if not expenses:
        return "❌ No expenses yet"

    message = "<b>💰 Expenses:</b>\n\n"

    for i, expense in enumerate(expenses, 1):
        message += f"{i}. <b>{escape(expense.description)}</b>\n"
        message += f"   Amount: {format_amount(expense.amount)}\n"
        message += f"   Paid by: {escape(expense.payer)}\n"
        message += f"   Date: {format_date(expense.spent_on)}\n"
        message += "\n"

    return message


def format_expense_summary(summary: Dict) -> str:
    """Format expense summary statistics."""
    message = "<b>📊 Expense statistics</b>\n\n"
    message += f"<b>Total spent:</b> {format_amount(summary['total_amount'])}\n"
    message += f"<b>Number of expenses:</b> {summary['expense_count']}\n\n"

    if summary['by_payer']:
        message += "<b>Who paid how much:</b>\n"
        for payer, amount in sorted(
                summary['by_payer'].items(),
                key=lambda x: x[1],
                reverse=True
        ):
            percentage = (amount / summary['total_amount'] * 100) if summary['total_amount'] > 0 else 0
            message += f"  • {escape(payer)}: {format_amount(amount)} ({percentage:.1f}%)\n"

    return message


def format_expense_added(amount: Decimal, description: str) -> str:
    return f"✅ Expense of {format_amount(amount)} for \"{escape(description)}\" added and split!"
