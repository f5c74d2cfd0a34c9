from __future__ import annotations

import io
from typing import List, Sequence, Tuple

from openpyxl import Workbook

from . import rules
from .compare import ComparisonResult

Sheet = Tuple[str, List[List[str]]]


def _sheet(title: str, names: Sequence[str]) -> List[List[str]]:
    return [[title], [""]] + [[name] for name in names]


def export_sheets(result: ComparisonResult) -> List[Sheet]:
    """Lay out both missing lists as named sheets: title row, blank row, one name per row."""
    return [
        (rules.SHEET_MISSING_IN_FIRST, _sheet(rules.TITLE_MISSING_IN_FIRST, result.missing_in_first)),
        (rules.SHEET_MISSING_IN_SECOND, _sheet(rules.TITLE_MISSING_IN_SECOND, result.missing_in_second)),
    ]


def write_workbook(sheets: Sequence[Sheet]) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets:
        # Excel caps sheet titles at 31 characters
        ws = wb.create_sheet(title=name[:31])
        for row in rows:
            ws.append(row)

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()
