import io

import pytest
from openpyxl import Workbook


def _xlsx_bytes(rows, title="Sheet1"):
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


@pytest.fixture
def make_xlsx():
    return _xlsx_bytes
