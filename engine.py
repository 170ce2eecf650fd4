"""
Allocation engine: turns a valid Draft into an immutable Ledger.

finalize() is pure. It validates first and either returns a complete Ledger
or the reason it could not, never a partial result. preview() and the balance
helpers compute the same numbers without validating, for live display while
the draft is being edited.
"""
from __future__ import annotations
import logging
from typing import Dict, Optional

from config import EngineSettings
from directory import ParticipantDirectory
from models import Draft, Ledger, ParticipantId, SplitMethod, ValidationError
from money import Money
from result import Err, Ok, Result
from strategies import allocate
from utils import compose_note
from validator import validate

logger = logging.getLogger(__name__)


def payer_contributions(draft: Draft, directory: ParticipantDirectory) -> Dict[ParticipantId, Money]:
    """
    Who paid how much. No payers means the current user paid everything; a
    single payer is always credited the full total.
    """
    if not draft.payers:
        return {directory.current_user_id: draft.total_amount}
    if len(draft.payers) == 1:
        return {next(iter(draft.payers)): draft.total_amount}
    return {pid: Money.parse(draft.payer_raw_amounts.get(pid)) for pid in draft.payers}


def legacy_payer(draft: Draft, directory: ParticipantDirectory) -> ParticipantId:
    """Single payer for stores that only keep one"""
    if not draft.payers:
        return directory.current_user_id
    if directory.current_user_id in draft.payers:
        return directory.current_user_id
    return directory.sorted_ids(draft.payers)[0]


def preview(draft: Draft, directory: ParticipantDirectory) -> Dict[ParticipantId, Money]:
    """Per-person amounts for the draft as it stands, valid or not"""
    ordered = directory.sorted_ids(draft.participants)
    cents = allocate(draft.method, draft.total_amount.cents, ordered, draft.raw_inputs)
    return {pid: Money(c) for pid, c in cents.items()}


def remaining_balance(draft: Draft, directory: ParticipantDirectory) -> Money:
    """Total minus everything allocated; negative when over-allocated"""
    return draft.total_amount - Money.total(preview(draft, directory).values())


def balance_message(draft: Draft, directory: ParticipantDirectory) -> Optional[str]:
    balance = remaining_balance(draft, directory)
    if balance.cents == 0:
        return None
    if balance.cents > 0:
        return f"Remaining: {balance}"
    return f"Over by: {abs(balance)}"


def new_draft(settings: Optional[EngineSettings] = None, **fields) -> Draft:
    """Empty draft using the configured default split method"""
    settings = settings or EngineSettings()
    fields.setdefault("method", settings.default_method)
    return Draft(**fields)


def finalize(
    draft: Draft,
    directory: ParticipantDirectory,
    settings: Optional[EngineSettings] = None,
) -> Result[Ledger, ValidationError]:
    """Validate the draft and compute its ledger"""
    error = validate(draft, settings)
    if error is not None:
        logger.info("draft %s not finalized: %s", draft.id, error.value)
        return Err(error)

    ordered = directory.sorted_ids(draft.participants)
    owed = allocate(draft.method, draft.total_amount.cents, ordered, draft.raw_inputs)
    if draft.method is SplitMethod.EQUAL:
        raw_inputs = {}
    else:
        raw_inputs = {pid: draft.raw_inputs[pid] for pid in ordered if pid in draft.raw_inputs}

    ledger = Ledger(
        id=draft.id,
        title=draft.title.strip(),
        date=draft.date,
        note=compose_note(draft.note, draft.category),
        method=draft.method,
        total=draft.total_amount,
        paid_by=payer_contributions(draft, directory),
        owed_by={pid: Money(c) for pid, c in owed.items()},
        raw_inputs=raw_inputs,
    )
    if not ledger.is_balanced():
        logger.debug(
            "ledger %s owes %s of %s (%s rounding)",
            ledger.id, ledger.owed_total(), ledger.total, ledger.method.value,
        )
    logger.debug("finalized ledger %s: %d participants, %d payers", ledger.id, len(owed), len(ledger.paid_by))
    return Ok(ledger)
