"""
Balances and settlement across finalized ledgers
"""
from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from models import Ledger, ParticipantId
from strategies import round_cents
from utils import parse_date


def pairwise_balance(ledger: Ledger, a: ParticipantId, b: ParticipantId) -> int:
    """
    Cents b owes a within one transaction (negative when a owes b).
    A debtor's debt is spread over all creditors in proportion to each
    creditor's share of the total credit.
    """
    net = ledger.net_positions()
    net_a = net.get(a, 0)
    net_b = net.get(b, 0)
    total_credit = sum(v for v in net.values() if v > 0)
    if total_credit <= 0:
        return 0
    if net_a > 0 and net_b < 0:
        return round_cents(Decimal(-net_b) * net_a / total_credit)
    if net_a < 0 and net_b > 0:
        return -round_cents(Decimal(-net_a) * net_b / total_credit)
    return 0


def filter_ledgers_by_date(
    ledgers: Iterable[Ledger],
    start: Optional[date],
    end: Optional[date]
) -> List[Ledger]:
    """Filter ledgers by date range"""
    out = []
    for led in ledgers:
        d = parse_date(led.date)
        if start and d < start:
            continue
        if end and d > end:
            continue
        out.append(led)
    return out


def compute_summary(
    ledgers: Iterable[Ledger],
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Dict[ParticipantId, dict]:
    """
    Compute summary for each person appearing in any ledger.
    Returns dict mapping person -> {paid, owed, net} in cents
    """
    paid: Dict[ParticipantId, int] = {}
    owed: Dict[ParticipantId, int] = {}
    for led in filter_ledgers_by_date(ledgers, start, end):
        for pid, m in led.paid_by.items():
            paid[pid] = paid.get(pid, 0) + m.cents
        for pid, m in led.owed_by.items():
            owed[pid] = owed.get(pid, 0) + m.cents

    people = sorted(set(paid) | set(owed))
    return {
        p: {
            "paid": paid.get(p, 0),
            "owed": owed.get(p, 0),
            "net": paid.get(p, 0) - owed.get(p, 0),  # positive -> should receive
        } for p in people
    }


def compute_transfers(net: Dict[ParticipantId, int]) -> List[Tuple[ParticipantId, ParticipantId, int]]:
    """
    Compute transfers to settle debts.
    Greedy settlement: largest debtors pay largest creditors. net>0 creditor; net<0 debtor.
    Returns list of (debtor, creditor, cents) tuples.
    """
    creditors = [[p, v] for p, v in net.items() if v > 0]
    debtors = [[p, -v] for p, v in net.items() if v < 0]
    creditors.sort(key=lambda x: (-x[1], x[0]))
    debtors.sort(key=lambda x: (-x[1], x[0]))

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        x = min(debtors[i][1], creditors[j][1])
        transfers.append((debtors[i][0], creditors[j][0], x))
        debtors[i][1] -= x
        creditors[j][1] -= x
        if debtors[i][1] == 0:
            i += 1
        if creditors[j][1] == 0:
            j += 1

    return transfers
