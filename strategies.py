"""
Split strategies: one allocation algorithm per SplitMethod.

Every strategy receives the participants already sorted by display name.
That order decides who gets the leftover cents, so it must be the same each
time a transaction is computed.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping

import deal

from models import ParticipantId, SplitMethod
from money import MAX_CENTS, Money
from utils import safe_decimal

Allocation = Dict[ParticipantId, int]


@deal.pre(lambda total_cents, ordered_ids: len(ordered_ids) > 0, message="at least one participant")
@deal.ensure(
    lambda total_cents, ordered_ids, result: sum(result.values()) == total_cents,
    message="shares must add up to the total",
)
def split_evenly(total_cents: int, ordered_ids: List[ParticipantId]) -> Allocation:
    """Equal split; the first `remainder` participants get one extra cent"""
    base, remainder = divmod(total_cents, len(ordered_ids))
    return {pid: base + (1 if i < remainder else 0) for i, pid in enumerate(ordered_ids)}


def round_cents(value: Decimal) -> int:
    """Standard (half-up) rounding to whole cents, capped at MAX_CENTS"""
    limit = Decimal(MAX_CENTS)
    value = max(-limit, min(limit, value))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def raw_decimal(raw_inputs: Mapping[ParticipantId, str], pid: ParticipantId) -> Decimal:
    return safe_decimal(raw_inputs.get(pid))


def raw_cents(raw_inputs: Mapping[ParticipantId, str], pid: ParticipantId) -> int:
    return Money.parse(raw_inputs.get(pid)).cents


class SplitStrategy(ABC):
    """Base class for split strategies"""
    method: SplitMethod

    @abstractmethod
    def allocate(
        self,
        total_cents: int,
        ordered_participants: List[ParticipantId],
        raw_inputs: Mapping[ParticipantId, str],
    ) -> Allocation:
        """Cents owed by each participant"""


class EqualSplit(SplitStrategy):
    method = SplitMethod.EQUAL

    def allocate(self, total_cents, ordered_participants, raw_inputs):
        if not ordered_participants:
            return {}
        return split_evenly(total_cents, ordered_participants)


class PercentageSplit(SplitStrategy):
    """Each share is rounded on its own; the sum may miss the total"""
    method = SplitMethod.PERCENTAGE

    def allocate(self, total_cents, ordered_participants, raw_inputs):
        total = Decimal(total_cents)
        return {
            pid: round_cents(total * raw_decimal(raw_inputs, pid) / 100)
            for pid in ordered_participants
        }


class ExactAmountSplit(SplitStrategy):
    method = SplitMethod.AMOUNT

    def allocate(self, total_cents, ordered_participants, raw_inputs):
        return {pid: raw_cents(raw_inputs, pid) for pid in ordered_participants}


class AdjustmentSplit(SplitStrategy):
    """
    Adjustments are taken off the top, the rest is split evenly, then each
    person's adjustment is added back. Always sums to the total.
    """
    method = SplitMethod.ADJUSTMENT

    def allocate(self, total_cents, ordered_participants, raw_inputs):
        if not ordered_participants:
            return {}
        adjustments = {pid: raw_cents(raw_inputs, pid) for pid in ordered_participants}
        base = split_evenly(total_cents - sum(adjustments.values()), ordered_participants)
        return {pid: base[pid] + adjustments[pid] for pid in ordered_participants}


class SharesSplit(SplitStrategy):
    """
    Proportional to share counts. Each share is rounded independently, so
    the sum can drift from the total by a few cents as participants grow.
    """
    method = SplitMethod.SHARES

    def allocate(self, total_cents, ordered_participants, raw_inputs):
        shares = {pid: raw_decimal(raw_inputs, pid) for pid in ordered_participants}
        total_shares = sum(shares.values(), Decimal(0))
        if total_shares <= 0:
            return {pid: 0 for pid in ordered_participants}
        total = Decimal(total_cents)
        return {pid: round_cents(total * shares[pid] / total_shares) for pid in ordered_participants}


_STRATEGIES: Dict[SplitMethod, SplitStrategy] = {
    s.method: s
    for s in (EqualSplit(), PercentageSplit(), ExactAmountSplit(), AdjustmentSplit(), SharesSplit())
}


def get_split_strategy(method: SplitMethod) -> SplitStrategy:
    """Strategy bound to a split method"""
    return _STRATEGIES[method]


def allocate(
    method: SplitMethod,
    total_cents: int,
    ordered_participants: List[ParticipantId],
    raw_inputs: Mapping[ParticipantId, str],
) -> Allocation:
    return get_split_strategy(method).allocate(total_cents, ordered_participants, raw_inputs)
