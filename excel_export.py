"""
Excel export functionality for SplitLedger engine
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from computations import compute_summary, compute_transfers, filter_ledgers_by_date
from directory import ParticipantDirectory
from models import Ledger

logger = logging.getLogger(__name__)

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill("solid", fgColor="4F81BD")
_THIN = Side(style="thin", color="A0A0A0")
_HEADER_ALIGN = Alignment(horizontal="center", vertical="center")
_HEADER_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_TITLE_FILL = PatternFill("solid", fgColor="D9E1F2")
_MONEY_FORMAT = "0.00"


def _new_sheet(wb: Workbook, title: str, headers: List[str]):
    """Sheet with a styled, frozen header row"""
    ws = wb.create_sheet(title)
    ws.append(headers)
    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGN
        cell.border = _HEADER_BORDER
    ws.freeze_panes = "A2"
    return ws


def _finish_sheet(ws, money_columns: Iterable[int], min_width: int = 10, max_width: int = 45) -> None:
    """Format money columns and fit column widths to their text"""
    money_columns = set(money_columns)
    for column in ws.iter_cols(min_row=1, max_row=ws.max_row):
        idx = column[0].column
        if idx in money_columns:
            for cell in column[1:]:
                cell.number_format = _MONEY_FORMAT
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = max(min_width, min(max_width, longest + 2))


def export_excel(
    ledgers: Iterable[Ledger],
    directory: ParticipantDirectory,
    filepath: str,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> None:
    """
    Export ledgers to an Excel file with three sheets:
    - Transactions: one row per participant per transaction
    - Summary: paid/owed/net per person
    - Transfers: who pays whom to settle up
    """
    wb = Workbook()
    wb.remove(wb.active)
    leds = sorted(filter_ledgers_by_date(ledgers, start, end), key=lambda led: (led.date, led.title))

    ws = _new_sheet(wb, "Transactions", ["date", "title", "method", "person", "paid", "owed", "raw input"])
    for led in leds:
        ws.append([led.date, led.title, led.method.display_name, "", float(led.total.to_decimal()), "", ""])
        title_row = ws.max_row
        ws.cell(title_row, 2).font = Font(bold=True)
        for c in range(1, 8):
            ws.cell(title_row, c).fill = _TITLE_FILL

        for pid in directory.sorted_ids(led.participants | led.payers):
            paid = led.paid_by.get(pid)
            owed = led.owed_by.get(pid)
            ws.append([
                "",
                "",
                "",
                directory.display_name(pid) or pid,
                float(paid.to_decimal()) if paid else None,
                float(owed.to_decimal()) if owed else None,
                led.raw_inputs.get(pid, ""),
            ])
    _finish_sheet(ws, (5, 6))

    summary = compute_summary(leds)
    people = directory.sorted_ids(summary)

    ws = _new_sheet(wb, "Summary", ["Person", "Paid", "Owed", "Net (Paid-Owed)"])
    for p in people:
        s = summary[p]
        ws.append([directory.display_name(p) or p, s["paid"] / 100, s["owed"] / 100, s["net"] / 100])
    _finish_sheet(ws, (2, 3, 4))

    ws = _new_sheet(wb, "Transfers", ["From (Debtor)", "To (Creditor)", "Amount"])
    for debtor, creditor, cents in compute_transfers({p: summary[p]["net"] for p in people}):
        ws.append([directory.display_name(debtor) or debtor, directory.display_name(creditor) or creditor, cents / 100])
    _finish_sheet(ws, (3,))

    wb.save(filepath)
    logger.info("exported %d transactions to %s", len(leds), filepath)
