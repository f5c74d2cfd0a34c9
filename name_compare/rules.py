"""
Fixed conventions for reading uploads and writing comparison results.

This file exists to keep sheet names, file names and limits in one place.
"""

import os

SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm", ".xls", ".csv")

CSV_DELIMITERS = [",", ";", "\t", "|"]
CSV_FALLBACK_ENCODING = "utf-8-sig"

MAX_UPLOAD_BYTES = int(os.environ.get("NAME_COMPARE_MAX_UPLOAD_BYTES", 10 * 1024 * 1024))
LOG_LEVEL = os.environ.get("NAME_COMPARE_LOG_LEVEL", "INFO").upper()

SHEET_MISSING_IN_FIRST = "Missing in Dataset 1"
SHEET_MISSING_IN_SECOND = "Missing in Dataset 2"
TITLE_MISSING_IN_FIRST = "Names in dataset 2 but NOT in dataset 1"
TITLE_MISSING_IN_SECOND = "Names in dataset 1 but NOT in dataset 2"

EXPORT_FILENAME = "comparison_results.xlsx"
EXPORT_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
