"""
Session state for one person comparing two files.

The session is a plain frozen record owned by the caller. Each transition
returns a new session; a transition that raises leaves the caller holding the
previous one, so a failed read or comparison never clobbers an earlier result.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Optional

from .compare import ComparisonResult, SelectionError, compare
from .export import export_sheets, write_workbook
from .normalize import Cell
from .reader import default_column, read_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonSession:
    first: Optional[List[List[Cell]]] = None
    second: Optional[List[List[Cell]]] = None
    column_first: str = ""
    column_second: str = ""
    result: Optional[ComparisonResult] = None


def _fields_for(slot: int):
    if slot == 1:
        return "first", "column_first"
    if slot == 2:
        return "second", "column_second"
    raise ValueError(f"slot must be 1 or 2, got {slot!r}")


def load_dataset(session: ComparisonSession, slot: int, raw: bytes, filename: str) -> ComparisonSession:
    """Read an upload into ``slot`` and preselect its first header as the name column."""
    data_field, column_field = _fields_for(slot)
    dataset = read_table(raw, filename)
    return dataclasses.replace(
        session, **{data_field: dataset, column_field: default_column(dataset)}
    )


def select_column(session: ComparisonSession, slot: int, name: str) -> ComparisonSession:
    _, column_field = _fields_for(slot)
    return dataclasses.replace(session, **{column_field: name})


def run_comparison(session: ComparisonSession) -> ComparisonSession:
    if session.first is None or session.second is None:
        logger.warning("comparison requested before both files were loaded")
        raise SelectionError("Load both files before comparing")
    result = compare(session.first, session.column_first, session.second, session.column_second)
    return dataclasses.replace(session, result=result)


def export_results(session: ComparisonSession) -> Optional[bytes]:
    """Workbook bytes for the last result, or None when nothing has been compared yet."""
    if session.result is None:
        return None
    return write_workbook(export_sheets(session.result))
