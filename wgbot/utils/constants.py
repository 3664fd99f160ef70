"""Constants used throughout the bot."""

from enum import Enum


class CleaningTask(str, Enum):
    """Weekly cleaning tasks, in display order."""
    KITCHEN = "Kitchen"
    BATHROOM = "Bathroom"
    TOILET = "Toilet"


TASK_ICONS = {
    CleaningTask.KITCHEN: "🍽",
    CleaningTask.BATHROOM: "🛁",
    CleaningTask.TOILET: "🚽",
}

CURRENCY = "€"

# Bot commands
CMD_START = "start"
CMD_HELP = "help"
CMD_MY_TASK = "mytask"
CMD_SCHEDULE = "schedule"
CMD_MY_BALANCE = "mybalance"
CMD_ADD_EXPENSE = "addexpense"
CMD_CANCEL = "cancel"

CMD_ADMIN = "admin"
CMD_ALL_EXPENSES = "expenses"
CMD_ADD_PERSON = "add_person"
CMD_REMOVE_PERSON = "remove_person"
CMD_ADMIN_EXPENSE = "admin_expense"
CMD_SEND_WEEKLY = "send_weekly"

# Callback data prefixes
CB_SETTLE = "settle"
CB_ADMIN = "admin"

# Reply keyboard buttons
BTN_MY_TASK = "🧹 My tasks"
BTN_SCHEDULE = "📅 Schedule"
BTN_MY_BALANCE = "💸 My balance"
BTN_ADD_EXPENSE = "💰 Add expense"
BTN_HELP = "ℹ️ Help"
BTN_CANCEL = "❌ Cancel"

# Messages
MSG_WELCOME_BACK = "👋 Welcome back, {name}! Your chat is registered. Use /help for commands."

MSG_NOT_REGISTERED = (
    "👋 Hi {first_name}! Your Telegram ID <code>{user_id}</code> isn't registered.\n"
    "Ask an admin to add you."
)

MSG_HELP = """
📖 <b>Available commands:</b>

<b>Cleaning:</b>
/mytask - your cleaning tasks for the upcoming week
/schedule - rotation for the next four weeks

<b>Money:</b>
/mybalance - what you owe and are owed, settle your debts
/addexpense - add a shared expense
/cancel - cancel adding an expense
"""

MSG_ADMIN_HELP = """
👨‍💼 <b>Admin commands:</b>

/admin - dashboard
/expenses - full expense history
/add_person &lt;telegram_id&gt; &lt;name&gt; - register a roommate
/remove_person &lt;name&gt; - remove a roommate
/admin_expense &lt;payer&gt; &lt;amount&gt; &lt;description&gt; - add an expense for someone
/send_weekly - send this week's assignments now
"""

# Error messages
ERR_NOT_AUTHORIZED = (
    "⛔ Sorry, you are not authorized to use this bot. "
    "Ask an admin to add your Telegram User ID."
)
ERR_NO_PERMISSION = "❌ This command is for admins only"
ERR_DATABASE = "❌ Sorry, something went wrong with the database. Please try again later."
