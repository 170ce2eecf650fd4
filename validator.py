"""
Draft validation: first failing rule wins
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from config import EngineSettings
from models import Draft, SplitMethod, ValidationError
from money import Money


@dataclass(frozen=True)
class ValidationResult:
    """Live validity flag plus the message to show"""
    is_valid: bool
    error: Optional[ValidationError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


def total_raw_value(draft: Draft) -> Decimal:
    return sum((draft.raw_value(pid) for pid in draft.participants), Decimal(0))


def total_raw_amount(draft: Draft) -> Money:
    return Money.total(Money.parse(draft.raw_inputs.get(pid)) for pid in draft.participants)


def _method_error(draft: Draft, settings: EngineSettings) -> Optional[ValidationError]:
    method = draft.method
    if method is SplitMethod.PERCENTAGE:
        if abs(total_raw_value(draft) - 100) > settings.percentage_tolerance:
            return ValidationError.PERCENTAGE_MISMATCH
    elif method is SplitMethod.AMOUNT:
        if total_raw_amount(draft) != draft.total_amount:
            return ValidationError.AMOUNT_MISMATCH
    elif method is SplitMethod.ADJUSTMENT:
        if total_raw_amount(draft) > draft.total_amount:
            return ValidationError.ADJUSTMENTS_EXCEED_TOTAL
    elif method is SplitMethod.SHARES:
        if total_raw_value(draft) <= 0:
            return ValidationError.NO_SHARES
    return None


def validate(draft: Draft, settings: Optional[EngineSettings] = None) -> Optional[ValidationError]:
    """The first rule the draft breaks, or None when it can be finalized"""
    settings = settings or EngineSettings()
    if settings.require_title and not draft.title.strip():
        return ValidationError.EMPTY_TITLE
    if not draft.total_amount.is_positive():
        return ValidationError.NON_POSITIVE_AMOUNT
    if not draft.participants:
        return ValidationError.EMPTY_PARTICIPANTS
    if not draft.is_paid_by_balanced():
        return ValidationError.PAYERS_UNBALANCED
    return _method_error(draft, settings)


def check(draft: Draft, settings: Optional[EngineSettings] = None) -> ValidationResult:
    error = validate(draft, settings)
    return ValidationResult(is_valid=error is None, error=error)
