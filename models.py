"""
Data models for SplitLedger engine
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Set

from money import Money, ZERO, sanitize_amount_input
from utils import safe_decimal, today_str

ParticipantId = str


class SplitMethod(Enum):
    """Allocation method; values are the persisted names"""
    EQUAL = "equal"
    AMOUNT = "amount"  # exact amount per person
    PERCENTAGE = "percentage"
    SHARES = "shares"
    ADJUSTMENT = "adjustment"  # equal split with +/- adjustments

    @property
    def display_name(self) -> str:
        return _METHOD_NAMES[self]


_METHOD_NAMES = {
    SplitMethod.EQUAL: "Equally",
    SplitMethod.AMOUNT: "By Amount",
    SplitMethod.PERCENTAGE: "By Percent",
    SplitMethod.SHARES: "By Shares",
    SplitMethod.ADJUSTMENT: "Adjustments",
}


class ValidationError(Enum):
    """Every reason a draft can fail to finalize"""
    EMPTY_TITLE = "empty_title"
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    EMPTY_PARTICIPANTS = "empty_participants"
    PAYERS_UNBALANCED = "payers_unbalanced"
    PERCENTAGE_MISMATCH = "percentage_mismatch"
    AMOUNT_MISMATCH = "amount_mismatch"
    ADJUSTMENTS_EXCEED_TOTAL = "adjustments_exceed_total"
    NO_SHARES = "no_shares"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    ValidationError.EMPTY_TITLE: "Please enter a title",
    ValidationError.NON_POSITIVE_AMOUNT: "Amount must be greater than zero",
    ValidationError.EMPTY_PARTICIPANTS: "Select at least one person to split with",
    ValidationError.PAYERS_UNBALANCED: "Paid-by amounts must equal the total",
    ValidationError.PERCENTAGE_MISMATCH: "Percentages must add up to 100%",
    ValidationError.AMOUNT_MISMATCH: "Amounts must equal the total",
    ValidationError.ADJUSTMENTS_EXCEED_TOTAL: "Adjustments cannot exceed the total amount",
    ValidationError.NO_SHARES: "Enter shares for at least one person",
}


@dataclass(frozen=True)
class Participant:
    """Person known to the directory; name only drives ordering"""
    id: ParticipantId
    name: str = ""


@dataclass
class Draft:
    """In-progress transaction, owned by one caller until finalized"""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    total_amount: Money = ZERO
    date: str = field(default_factory=today_str)  # YYYY-MM-DD
    note: str = ""
    category: Optional[str] = None
    method: SplitMethod = SplitMethod.EQUAL
    participants: Set[ParticipantId] = field(default_factory=set)
    payers: Set[ParticipantId] = field(default_factory=set)  # empty -> current user pays
    payer_raw_amounts: Dict[ParticipantId, str] = field(default_factory=dict)
    raw_inputs: Dict[ParticipantId, str] = field(default_factory=dict)

    def set_total_text(self, text: str) -> None:
        self.total_amount = Money.parse(sanitize_amount_input(text))

    def toggle_participant(self, pid: ParticipantId) -> None:
        if pid in self.participants:
            self.participants.discard(pid)
        else:
            self.participants.add(pid)

    def toggle_payer(self, pid: ParticipantId) -> None:
        """Toggle a payer; a new payer also joins the split"""
        if pid in self.payers:
            self.payers.discard(pid)
            self.payer_raw_amounts.pop(pid, None)
        else:
            self.payers.add(pid)
            self.participants.add(pid)

    def select_members(self, members: Iterable[ParticipantId]) -> None:
        """Add every member of a group to the split"""
        self.participants.update(members)

    def set_raw_input(self, pid: ParticipantId, text: str) -> None:
        self.raw_inputs[pid] = text

    def set_payer_amount(self, pid: ParticipantId, text: str) -> None:
        self.payer_raw_amounts[pid] = text

    def initialize_default_raw_inputs(self, method: SplitMethod) -> None:
        """Switch method and seed every participant with a sensible default"""
        self.method = method
        self.raw_inputs = {}
        count = max(1, len(self.participants))
        for pid in self.participants:
            if method is SplitMethod.PERCENTAGE:
                self.raw_inputs[pid] = f"{Decimal(100) / count:.1f}"
            elif method is SplitMethod.SHARES:
                self.raw_inputs[pid] = "1"
            elif method is SplitMethod.AMOUNT:
                # even shares to 2 places; 100.00 over 3 seeds 33.33 each and
                # stays AMOUNT_MISMATCH until the user fixes one of them
                self.raw_inputs[pid] = f"{self.total_amount.to_decimal() / count:.2f}"
            elif method is SplitMethod.ADJUSTMENT:
                self.raw_inputs[pid] = "0"

    def total_paid_by_payers(self) -> Money:
        return Money.total(Money.parse(self.payer_raw_amounts.get(pid)) for pid in self.payers)

    def is_paid_by_balanced(self) -> bool:
        if len(self.payers) <= 1:
            return True  # single payer auto-fills to total
        return self.total_paid_by_payers() == self.total_amount

    def raw_value(self, pid: ParticipantId) -> Decimal:
        return safe_decimal(self.raw_inputs.get(pid))


@dataclass(frozen=True)
class Ledger:
    """Finalized allocation of one transaction"""
    id: str
    title: str
    date: str
    note: str
    method: SplitMethod
    total: Money
    paid_by: Mapping[ParticipantId, Money]
    owed_by: Mapping[ParticipantId, Money]
    raw_inputs: Mapping[ParticipantId, str] = field(default_factory=dict)  # verbatim user input

    def __post_init__(self) -> None:
        object.__setattr__(self, "paid_by", MappingProxyType(dict(self.paid_by)))
        object.__setattr__(self, "owed_by", MappingProxyType(dict(self.owed_by)))
        object.__setattr__(self, "raw_inputs", MappingProxyType(dict(self.raw_inputs)))

    @property
    def participants(self) -> Set[ParticipantId]:
        return set(self.owed_by)

    @property
    def payers(self) -> Set[ParticipantId]:
        return set(self.paid_by)

    def owed_total(self) -> Money:
        return Money.total(self.owed_by.values())

    def paid_total(self) -> Money:
        return Money.total(self.paid_by.values())

    def is_balanced(self) -> bool:
        """Whether owed shares add up to the total, cent for cent"""
        return self.owed_total() == self.total

    def net_positions(self) -> Dict[ParticipantId, int]:
        """paid - owed per person, in cents"""
        net: Dict[ParticipantId, int] = {}
        for pid, m in self.paid_by.items():
            net[pid] = net.get(pid, 0) + m.cents
        for pid, m in self.owed_by.items():
            net[pid] = net.get(pid, 0) - m.cents
        return net
