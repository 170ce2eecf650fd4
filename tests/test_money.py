from __future__ import annotations

from decimal import Decimal

from hypothesis import given, strategies as st

from money import MAX_AMOUNT, MAX_CENTS, Money, ZERO, sanitize_amount_input
from utils import safe_decimal


def test_parse_plain_amounts() -> None:
    assert Money.parse("12.34") == Money(1234)
    assert Money.parse("12") == Money(1200)
    assert Money.parse("0.5") == Money(50)
    assert Money.parse("-10") == Money(-1000)


def test_parse_truncates_extra_decimals() -> None:
    assert Money.parse("1.999") == Money(199)
    assert Money.parse("-1.999") == Money(-199)


def test_parse_is_tolerant() -> None:
    for text in ("", "abc", "1.2.3", "nan", "inf", None):
        assert Money.parse(text) == ZERO


def test_parse_caps_at_max() -> None:
    assert Money.parse("123456789012") == MAX_AMOUNT
    assert Money.parse("-123456789012") == Money(-MAX_CENTS)
    assert len(MAX_AMOUNT.to_text()) == 12


def test_huge_or_tiny_exponents_do_not_raise() -> None:
    assert Money.parse("1e30") == ZERO
    assert Money.parse("9" * 29) == ZERO
    assert Money.parse("1e-999999") == ZERO
    assert Money.from_decimal(Decimal("1e30")) == MAX_AMOUNT
    assert Money.from_decimal(Decimal("-1e30")) == Money(-MAX_CENTS)
    assert safe_decimal("1e-999999") == 0
    assert safe_decimal("1e30", Decimal(-1)) == Decimal(-1)


def test_arithmetic_and_ordering() -> None:
    a, b = Money(150), Money(50)
    assert a + b == Money(200)
    assert a - b == Money(100)
    assert -a == Money(-150)
    assert abs(Money(-3)) == Money(3)
    assert b < a
    assert Money.total([a, b, b]) == Money(250)


def test_to_text() -> None:
    assert Money(3334).to_text() == "33.34"
    assert str(Money(5)) == "0.05"
    assert Money(-5).to_text() == "-0.05"
    assert Money(0).to_decimal() == Decimal(0)


def test_sanitize_amount_input() -> None:
    assert sanitize_amount_input("$1,234.567") == "1234.56"
    assert sanitize_amount_input("1.2.3") == "1.23"
    assert sanitize_amount_input("-5") == "5"
    assert sanitize_amount_input("abc") == ""
    assert sanitize_amount_input("9999999999") == "999999999.99"


@given(st.integers(min_value=-MAX_CENTS, max_value=MAX_CENTS))
def test_text_parse_preserves_cents(cents: int) -> None:
    assert Money.parse(Money(cents).to_text()) == Money(cents)
