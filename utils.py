"""
Utility functions for SplitLedger engine
"""
from __future__ import annotations
import os
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

_CATEGORY_PREFIX = re.compile(r"^\[category:([^\]]*)\]")

# adjusted exponent range accepted from user-entered numbers
_MAX_EXPONENT = 15
_MIN_EXPONENT = -12


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string"""
    return datetime.strptime(s.strip(), "%Y-%m-%d").date()


def safe_decimal(x: Optional[str], default: Decimal = Decimal(0)) -> Decimal:
    """
    Convert text to a finite Decimal, returning default on error or when
    the magnitude is outside 1e-12 .. 1e15
    """
    if x is None:
        return default
    try:
        d = Decimal(str(x).strip())
    except (InvalidOperation, ValueError):
        return default
    if not d.is_finite():
        return default
    if d and not (_MIN_EXPONENT <= d.adjusted() <= _MAX_EXPONENT):
        return default
    return d


def compose_note(note: str, category: Optional[str] = None) -> str:
    """Prefix a note with its category tag, e.g. "[category:food] lunch" """
    trimmed = note.strip()
    full = f"[category:{category}]" if category else ""
    if trimmed:
        full += (" " if full else "") + trimmed
    return full


def split_note(raw: Optional[str]) -> Tuple[Optional[str], str]:
    """Split a stored note into (category, note)"""
    raw = raw or ""
    m = _CATEGORY_PREFIX.match(raw)
    if not m:
        return None, raw
    return (m.group(1) or None), raw[m.end():].strip()


def app_dir() -> str:
    """
    Get application data directory: $SPLITLEDGER_HOME or ~/.splitledger
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SPLITLEDGER_HOME") or os.path.expanduser("~/.splitledger")
    os.makedirs(path, exist_ok=True)
    return path
