"""
Configuration and record conversion for SplitLedger engine
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from directory import ParticipantDirectory
from models import Ledger, Participant, SplitMethod
from money import Money
from roundtrip import format_raw_value
from utils import app_dir, safe_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    """Tunable validation behaviour"""
    percentage_tolerance: Decimal = Decimal("0.1")
    require_title: bool = False  # title is usually checked by the caller
    default_method: SplitMethod = SplitMethod.EQUAL


def load_settings(path: Optional[str] = None) -> EngineSettings:
    """Load engine settings from JSON; missing file or keys give defaults"""
    path = path or os.path.join(app_dir(), "settings.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return EngineSettings()

    defaults = EngineSettings()
    if not isinstance(data, dict):
        logger.warning("ignoring %s: expected a JSON object", path)
        return defaults

    tolerance = defaults.percentage_tolerance
    if "percentage_tolerance" in data:
        parsed = safe_decimal(data["percentage_tolerance"], Decimal(-1))
        if parsed >= 0:
            tolerance = parsed
        else:
            logger.warning("ignoring invalid percentage_tolerance %r in %s", data["percentage_tolerance"], path)

    require_title = defaults.require_title
    if "require_title" in data:
        if isinstance(data["require_title"], bool):
            require_title = data["require_title"]
        else:
            logger.warning("ignoring invalid require_title %r in %s", data["require_title"], path)

    method = defaults.default_method
    if "default_method" in data:
        try:
            method = SplitMethod(data["default_method"])
        except ValueError:
            logger.warning("ignoring unknown default_method %r in %s", data["default_method"], path)

    return EngineSettings(
        percentage_tolerance=tolerance,
        require_title=require_title,
        default_method=method,
    )


def load_directory(path: Optional[str] = None) -> ParticipantDirectory:
    """
    Load people and groups from JSON:
    {"current_user": id, "people": [{"id", "name"}], "groups": {group_id: [ids]}}
    """
    path = path or os.path.join(app_dir(), "people.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        data = {}
    if not isinstance(data, dict):
        logger.warning("ignoring %s: expected a JSON object", path)
        data = {}

    people = [Participant(id=str(p["id"]), name=str(p.get("name", ""))) for p in data.get("people", [])]
    current = str(data.get("current_user") or "me")  # fallback
    if current not in {p.id for p in people}:
        people.append(Participant(id=current, name="You"))
    groups = {str(k): [str(m) for m in v] for k, v in data.get("groups", {}).items()}
    return ParticipantDirectory(people, current_user_id=current, groups=groups)


def ledger_to_dict(ledger: Ledger) -> dict:
    """
    Convert a Ledger into the transaction store's record shape: one
    transaction record, one payer record per payer and one split record per
    participant carrying the raw input verbatim.
    """
    return {
        "transaction": {
            "id": ledger.id,
            "title": ledger.title,
            "date": ledger.date,
            "note": ledger.note,
            "split_method": ledger.method.value,
            "amount": ledger.total.to_text(),
        },
        "payers": [
            {"paid_by": pid, "amount": m.to_text()} for pid, m in sorted(ledger.paid_by.items())
        ],
        "splits": [
            {"owed_by": pid, "amount": m.to_text(), "raw_amount": ledger.raw_inputs.get(pid)}
            for pid, m in sorted(ledger.owed_by.items())
        ],
    }


def dict_to_ledger(d: dict) -> Ledger:
    """Convert stored records back to a Ledger; numeric raw amounts are legacy data"""
    t = d["transaction"]
    method = SplitMethod(t.get("split_method") or SplitMethod.EQUAL.value)

    raw_inputs = {}
    for s in d.get("splits", []):
        raw = s.get("raw_amount")
        if raw is None:
            continue
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            value = safe_decimal(repr(raw))
            # legacy stores wrote 0 when nothing was entered
            if value <= 0 and method in (SplitMethod.PERCENTAGE, SplitMethod.SHARES):
                continue
            raw = format_raw_value(value, method)
        raw_inputs[str(s["owed_by"])] = str(raw)

    return Ledger(
        id=str(t.get("id", "")),
        title=t.get("title", ""),
        date=t.get("date", ""),
        note=t.get("note") or "",
        method=method,
        total=Money.parse(str(t.get("amount", "0"))),
        paid_by={str(p["paid_by"]): Money.parse(str(p.get("amount", "0"))) for p in d.get("payers", [])},
        owed_by={str(s["owed_by"]): Money.parse(str(s.get("amount", "0"))) for s in d.get("splits", [])},
        raw_inputs=raw_inputs,
    )
