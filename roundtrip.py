"""
Rebuild an editable Draft from a finalized Ledger.

Percentage, shares and adjustment inputs come back exactly as the user typed
them when the ledger kept them; only when they are missing (older records) are
they derived from the stored cents. Exact amounts are always taken from the
stored cents.
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Dict, Optional

from directory import ParticipantDirectory
from models import Draft, Ledger, ParticipantId, SplitMethod
from utils import split_note

logger = logging.getLogger(__name__)


def format_raw_value(value: Decimal, method: SplitMethod) -> str:
    """Text for a numeric raw value as the input field shows it"""
    if method is SplitMethod.SHARES:
        return str(int(value))
    if method is SplitMethod.PERCENTAGE:
        if value == value.to_integral_value():
            return f"{value:.0f}"
        return f"{value:.1f}"
    if value == 0:
        return "0"
    return f"{value:.2f}"


def _raw_input_for(ledger: Ledger, pid: ParticipantId) -> Optional[str]:
    stored = ledger.raw_inputs.get(pid)
    method = ledger.method
    if method is SplitMethod.EQUAL:
        return None
    if method is SplitMethod.AMOUNT:
        return ledger.owed_by[pid].to_text()
    if stored is not None:
        return stored
    if method is SplitMethod.PERCENTAGE:
        if not ledger.total.is_positive():
            return None
        pct = Decimal(ledger.owed_by[pid].cents) * 100 / ledger.total.cents
        return format_raw_value(pct, method)
    if method is SplitMethod.SHARES:
        return "1"
    return format_raw_value(Decimal(0), method)


def draft_from_ledger(ledger: Ledger, directory: ParticipantDirectory) -> Draft:
    """Editable draft carrying the same id, payers, participants and inputs"""
    category, note = split_note(ledger.note)

    payers = set(ledger.paid_by)
    payer_raw_amounts: Dict[ParticipantId, str] = {}
    if len(payers) == 1 and directory.is_current_user(next(iter(payers))):
        payers = set()  # implicit default payer
    elif len(payers) > 1:
        payer_raw_amounts = {pid: m.to_text() for pid, m in ledger.paid_by.items()}

    raw_inputs: Dict[ParticipantId, str] = {}
    for pid in ledger.owed_by:
        raw = _raw_input_for(ledger, pid)
        if raw is not None:
            raw_inputs[pid] = raw
    if ledger.method is not SplitMethod.EQUAL and len(raw_inputs) < len(ledger.owed_by):
        logger.debug("ledger %s: raw inputs missing for some participants", ledger.id)

    return Draft(
        id=ledger.id,
        title=ledger.title,
        total_amount=ledger.total,
        date=ledger.date,
        note=note,
        category=category,
        method=ledger.method,
        participants=set(ledger.owed_by),
        payers=payers,
        payer_raw_amounts=payer_raw_amounts,
        raw_inputs=raw_inputs,
    )
