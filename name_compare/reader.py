"""
Reading uploaded spreadsheets into rows.

Only the first sheet is read. Row 0 is the header; rows keep whatever length
the file gives them (trailing blank cells are dropped), so callers must treat
a missing cell as empty.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import List

import openpyxl
import xlrd
from charset_normalizer import from_bytes

from . import rules
from .normalize import Cell, cell_text

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Uploaded bytes could not be read as a table."""


def extension_of(filename: str) -> str:
    name = (filename or "").lower()
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


def _trim_row(row) -> List[Cell]:
    cells = list(row)
    while cells and (cells[-1] is None or cells[-1] == ""):
        cells.pop()
    return cells


def _read_xlsx(raw: bytes) -> List[List[Cell]]:
    try:
        wb = openpyxl.load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except Exception as exc:
        raise ParseError(f"Not a valid Excel workbook: {exc}") from exc
    try:
        ws = wb.worksheets[0]
        return [_trim_row(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _xls_cell(cell, datemode: int) -> Cell:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    if cell.ctype == xlrd.XL_CELL_NUMBER:
        value = float(cell.value)
        return int(value) if value.is_integer() else value
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value


def _read_xls(raw: bytes) -> List[List[Cell]]:
    try:
        book = xlrd.open_workbook(file_contents=raw)
    except Exception as exc:
        raise ParseError(f"Not a valid Excel 97-2003 workbook: {exc}") from exc
    sheet = book.sheet_by_index(0)
    return [
        _trim_row(_xls_cell(cell, book.datemode) for cell in sheet.row(r))
        for r in range(sheet.nrows)
    ]


def _decode_text(raw: bytes) -> str:
    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else rules.CSV_FALLBACK_ENCODING
    # don't carry a UTF-8 BOM into the first header cell
    if raw.startswith(b"\xef\xbb\xbf") and encoding.lower().replace("-", "_") in ("utf_8", "utf8"):
        encoding = "utf-8-sig"
    logger.debug("csv encoding detected: %s", encoding)
    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise ParseError(f"Could not decode CSV text: {exc}") from exc


def _read_csv(raw: bytes) -> List[List[Cell]]:
    text = _decode_text(raw)
    try:
        dialect = csv.Sniffer().sniff(text[:4096], delimiters=rules.CSV_DELIMITERS)
        delimiter = dialect.delimiter
    except csv.Error:
        delimiter = ","
    logger.debug("csv delimiter detected: %r", delimiter)
    try:
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
        return [_trim_row(row) for row in reader]
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc


def read_table(raw: bytes, filename: str) -> List[List[Cell]]:
    """
    Parse an uploaded file into header + data rows.

    Raises ParseError for unsupported extensions, unreadable bytes, or a file
    without any rows. No partial table is returned.
    """
    ext = extension_of(filename)
    if ext in (".xlsx", ".xlsm"):
        rows = _read_xlsx(raw)
    elif ext == ".xls":
        rows = _read_xls(raw)
    elif ext == ".csv":
        rows = _read_csv(raw)
    else:
        raise ParseError(f"Unsupported file type: {filename!r}")

    # the header is the first non-empty row, as in the sheet's used range
    start = 0
    while start < len(rows) and not rows[start]:
        start += 1
    rows = rows[start:]

    if not rows:
        raise ParseError(f"{filename!r} contains no rows")

    logger.info("read %s: %s columns, %s data rows", filename, len(rows[0]), len(rows) - 1)
    return rows


def header_names(dataset) -> List[str]:
    if not dataset:
        return []
    return [cell_text(cell) for cell in dataset[0]]


def default_column(dataset) -> str:
    names = header_names(dataset)
    return names[0] if names else ""
