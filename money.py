"""
Fixed-point money in integer cents
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import Iterable, Optional

from utils import safe_decimal

MAX_CENTS = 99_999_999_999  # 999,999,999.99
_CENT = Decimal("0.01")


@dataclass(frozen=True, order=True)
class Money:
    """Amount in minor units (cents). All arithmetic stays in integer space."""
    cents: int = 0

    @classmethod
    def from_decimal(cls, value: Decimal) -> Money:
        """Truncate a decimal amount toward zero to whole cents"""
        limit = Decimal(MAX_CENTS) / 100
        value = max(-limit, min(limit, value))
        q = value.quantize(_CENT, rounding=ROUND_DOWN)
        return cls(int(q * 100))

    @classmethod
    def parse(cls, text: Optional[str]) -> Money:
        """
        Parse decimal text. Unparsable or absurdly large text is zero, extra
        fractional digits are truncated and the magnitude is capped at
        MAX_CENTS.
        """
        return cls.from_decimal(safe_decimal(text))

    @classmethod
    def total(cls, amounts: Iterable[Money]) -> Money:
        return cls(sum(m.cents for m in amounts))

    def to_decimal(self) -> Decimal:
        return Decimal(self.cents) / 100

    def to_text(self) -> str:
        """Two-decimal text, e.g. "33.34" """
        return f"{self.to_decimal():.2f}"

    def is_positive(self) -> bool:
        return self.cents > 0

    def __add__(self, other: Money) -> Money:
        return Money(self.cents + other.cents)

    def __sub__(self, other: Money) -> Money:
        return Money(self.cents - other.cents)

    def __neg__(self) -> Money:
        return Money(-self.cents)

    def __abs__(self) -> Money:
        return Money(abs(self.cents))

    def __str__(self) -> str:
        return self.to_text()


ZERO = Money(0)
MAX_AMOUNT = Money(MAX_CENTS)


def sanitize_amount_input(text: str) -> str:
    """
    Keep only characters valid in an amount: digits and a single decimal
    point with at most two fractional digits. Values above MAX_AMOUNT are
    replaced by MAX_AMOUNT's text.
    """
    out = []
    has_point = False
    decimals = 0
    for ch in text:
        if ch.isdigit() and ch.isascii():
            if has_point:
                if decimals < 2:
                    out.append(ch)
                    decimals += 1
            else:
                out.append(ch)
        elif ch == "." and not has_point:
            has_point = True
            out.append(ch)
    result = "".join(out)
    if safe_decimal(result) > MAX_AMOUNT.to_decimal():
        return MAX_AMOUNT.to_text()
    return result
