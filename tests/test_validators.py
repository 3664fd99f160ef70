"""Tests for user input validation."""

from decimal import Decimal

import pytest

from wgbot.utils.validators import (
    parse_telegram_id,
    validate_amount,
    validate_description,
    validate_person_name,
)


@pytest.mark.parametrize("text,expected", [
    ("12", Decimal("12.00")),
    ("12.5", Decimal("12.50")),
    ("12,5", Decimal("12.50")),
    (" €7 ", Decimal("7.00")),
    ("1 000", Decimal("1000.00")),
    ("0.006", Decimal("0.01")),
])
def test_valid_amounts(text, expected):
    is_valid, amount, error = validate_amount(text)

    assert is_valid
    assert amount == expected
    assert error is None


@pytest.mark.parametrize("text", ["", "abc", "0", "-3", "0.001", "NaN", "Infinity", "100001"])
def test_invalid_amounts(text):
    is_valid, amount, error = validate_amount(text)

    assert not is_valid
    assert amount is None
    assert error


def test_description_length():
    assert validate_description("Soap") == (True, None)
    assert not validate_description("   ")[0]
    assert not validate_description("x" * 201)[0]


def test_person_name_length():
    assert validate_person_name("Al") == (True, None)
    assert not validate_person_name("A")[0]
    assert not validate_person_name("x" * 51)[0]


def test_parse_telegram_id():
    assert parse_telegram_id(" 12345 ") == 12345
    assert parse_telegram_id("-1") is None
    assert parse_telegram_id("abc") is None
