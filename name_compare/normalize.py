"""
Cell normalization.

Every comparison goes through the two functions here:
- display_value: the trimmed text a person sees (original casing kept)
- normalize: the key two cells are matched on (display value, lowercased)

Blank cells come back as None from both and are dropped by callers.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Optional, Union

Cell = Union[str, int, float, bool, datetime, date, time, None]


def cell_text(cell: Cell) -> str:
    """Text form of a raw cell, the way a spreadsheet would show it."""
    if cell is None:
        return ""
    if isinstance(cell, bool):
        return "true" if cell else "false"
    if isinstance(cell, float):
        if math.isfinite(cell) and cell.is_integer():
            return str(int(cell))
        return str(cell)
    if isinstance(cell, (datetime, date, time)):
        return cell.isoformat()
    return str(cell)


def display_value(cell: Cell) -> Optional[str]:
    text = cell_text(cell).strip()
    if text == "":
        return None
    return text


def normalize(cell: Cell) -> Optional[str]:
    display = display_value(cell)
    if display is None:
        return None
    return display.lower()
