"""Validators for user input."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple


def validate_amount(text: str) -> Tuple[bool, Optional[Decimal], Optional[str]]:
    """
    Validate and parse amount from text.

    Args:
        text: User input text

    Returns:
        Tuple of (is_valid, amount, error_message)
    """
    # Remove spaces and currency sign, accept comma as decimal separator
    text = text.strip().replace(" ", "").replace("€", "").replace(",", ".")

    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        return False, None, "❌ Invalid amount. Use a number, e.g. 12 or 12.50"

    if not amount.is_finite():
        return False, None, "❌ Invalid amount. Use a number, e.g. 12 or 12.50"

    if amount <= 0:
        return False, None, "❌ Amount must be greater than zero"

    if amount > Decimal("100000"):
        return False, None, "❌ Amount is too large (maximum 100,000)"

    # Round to 2 decimal places
    amount = amount.quantize(Decimal("0.01"))

    if amount <= 0:
        return False, None, "❌ Amount must be at least 0.01"

    return True, amount, None


def validate_description(description: str) -> Tuple[bool, Optional[str]]:
    """
    Validate expense description.

    Returns:
        Tuple of (is_valid, error_message)
    """
    description = description.strip()

    if not description:
        return False, "❌ Description can't be empty"

    if len(description) > 200:
        return False, "❌ Description is too long (maximum 200 characters)"

    return True, None


def validate_person_name(name: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a roommate's display name.

    Returns:
        Tuple of (is_valid, error_message)
    """
    name = name.strip()

    if not name:
        return False, "❌ Name can't be empty"

    if len(name) < 2:
        return False, "❌ Name is too short (minimum 2 characters)"

    if len(name) > 50:
        return False, "❌ Name is too long (maximum 50 characters)"

    return True, None


def parse_telegram_id(text: str) -> Optional[int]:
    """Parse a numeric Telegram user ID."""
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text)
