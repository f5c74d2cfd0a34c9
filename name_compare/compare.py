"""
Two-way comparison of one name column per dataset.

A name is matched on its normalized key, so "Ana", " ana " and "ANA" are the
same entry. Each missing list keeps the first display form seen for a key, in
the order the source dataset lists them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

from .normalize import Cell, cell_text, display_value, normalize

logger = logging.getLogger(__name__)

Row = Sequence[Cell]
Dataset = Sequence[Row]
Entry = Tuple[str, str]  # (display value, normalized key)


class SelectionError(ValueError):
    """The chosen column cannot be used for a comparison."""


@dataclass(frozen=True)
class ComparisonResult:
    missing_in_first: Tuple[str, ...]
    missing_in_second: Tuple[str, ...]
    total_first: int
    total_second: int

    @property
    def missing_in_first_count(self) -> int:
        return len(self.missing_in_first)

    @property
    def missing_in_second_count(self) -> int:
        return len(self.missing_in_second)


def resolve_column(header: Row, name: str) -> int:
    """Index of the first header cell whose text equals ``name``."""
    for index, cell in enumerate(header):
        if cell_text(cell) == name:
            return index
    raise SelectionError(f"Column '{name}' not found in header")


def project_entries(dataset: Dataset, index: int) -> List[Entry]:
    entries: List[Entry] = []
    for row in dataset[1:]:
        # short rows have an empty cell at the selected column
        cell = row[index] if index < len(row) else None
        display = display_value(cell)
        if display is None:
            continue
        entries.append((display, normalize(display)))
    return entries


def _missing(entries: List[Entry], other_keys: Set[str]) -> Tuple[str, ...]:
    seen: Set[str] = set()
    missing: List[str] = []
    for display, key in entries:
        if key in other_keys or key in seen:
            continue
        seen.add(key)
        missing.append(display)
    return tuple(missing)


def _entries_for(dataset: Dataset, column: str, label: str) -> List[Entry]:
    if not dataset:
        raise SelectionError(f"{label} has no rows")
    if not column:
        raise SelectionError(f"No column selected for {label}")
    try:
        index = resolve_column(dataset[0], column)
    except SelectionError as exc:
        raise SelectionError(f"{label}: {exc}") from exc
    return project_entries(dataset, index)


def compare(dataset_a: Dataset, column_a: str, dataset_b: Dataset, column_b: str) -> ComparisonResult:
    """
    Report the names each dataset lacks relative to the other.

    Raises SelectionError before any work is done if a dataset is empty or a
    column is not in its header.
    """
    entries_a = _entries_for(dataset_a, column_a, "Dataset 1")
    entries_b = _entries_for(dataset_b, column_b, "Dataset 2")

    keys_a = {key for _, key in entries_a}
    keys_b = {key for _, key in entries_b}

    result = ComparisonResult(
        missing_in_first=_missing(entries_b, keys_a),
        missing_in_second=_missing(entries_a, keys_b),
        total_first=len(entries_a),
        total_second=len(entries_b),
    )
    logger.info(
        "compared %s/%s entries: %s missing in first, %s missing in second",
        result.total_first,
        result.total_second,
        result.missing_in_first_count,
        result.missing_in_second_count,
    )
    return result
