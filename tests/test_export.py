import io

from openpyxl import load_workbook

from name_compare import rules
from name_compare.compare import ComparisonResult
from name_compare.export import export_sheets, write_workbook

RESULT = ComparisonResult(
    missing_in_first=("Carla", "Dani"),
    missing_in_second=("Beto",),
    total_first=2,
    total_second=3,
)


def test_export_sheets_layout():
    sheets = export_sheets(RESULT)

    assert [name for name, _ in sheets] == [rules.SHEET_MISSING_IN_FIRST, rules.SHEET_MISSING_IN_SECOND]
    assert sheets[0][1] == [[rules.TITLE_MISSING_IN_FIRST], [""], ["Carla"], ["Dani"]]
    assert sheets[1][1] == [[rules.TITLE_MISSING_IN_SECOND], [""], ["Beto"]]

def test_empty_result_still_has_both_sheets():
    empty = ComparisonResult((), (), 0, 0)
    assert [len(rows) for _, rows in export_sheets(empty)] == [2, 2]

def test_write_workbook_round_trip():
    wb = load_workbook(io.BytesIO(write_workbook(export_sheets(RESULT))))

    assert wb.sheetnames == [rules.SHEET_MISSING_IN_FIRST, rules.SHEET_MISSING_IN_SECOND]
    ws = wb[rules.SHEET_MISSING_IN_FIRST]
    assert ws["A1"].value == rules.TITLE_MISSING_IN_FIRST
    assert ws["A2"].value in (None, "")
    assert [ws["A3"].value, ws["A4"].value] == ["Carla", "Dani"]
