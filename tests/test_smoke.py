import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from name_compare import rules
from name_compare.main import app

client = TestClient(app)

CSV1 = ("Name,Team\nAna,red\nBeto,blue\n,green\n", "one.csv")
CSV2 = ("Nombre\nana\nCarla\nCARLA\n", "two.csv")


def _files(first=CSV1, second=CSV2):
    return {
        "file1": (first[1], first[0].encode("utf-8"), "text/csv"),
        "file2": (second[1], second[0].encode("utf-8"), "text/csv"),
    }

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_inspect_dataset(make_xlsx):
    raw = make_xlsx([["Id", "Full name"], [1, "Ana"], [2, "Beto"]])
    files = {"file": ("people.xlsx", raw, rules.EXPORT_MEDIA_TYPE)}

    r = client.post("/datasets/inspect", files=files)
    assert r.status_code == 200
    assert r.json() == {
        "filename": "people.xlsx",
        "headers": ["Id", "Full name"],
        "default_column": "Id",
        "rows": 2,
    }

def test_compare_defaults_to_first_columns():
    r = client.post("/compare", files=_files())
    assert r.status_code == 200

    data = r.json()
    assert data["missing_in_first"] == ["Carla"]
    assert data["missing_in_second"] == ["Beto"]
    assert data["total_first"] == 2
    assert data["total_second"] == 3
    assert data["missing_in_first_count"] == 1
    assert data["missing_in_second_count"] == 1

def test_compare_xlsx_against_csv_with_chosen_columns(make_xlsx):
    raw = make_xlsx([["Id", "Name"], [1, "JOHN"], [2, "Mary"]])
    files = {
        "file1": ("base.xlsx", raw, rules.EXPORT_MEDIA_TYPE),
        "file2": ("check.csv", b"Code;Person\nx;john\ny;Lee\n", "text/csv"),
    }

    r = client.post("/compare", files=files, data={"column1": "Name", "column2": "Person"})
    assert r.status_code == 200
    assert r.json()["missing_in_first"] == ["Lee"]
    assert r.json()["missing_in_second"] == ["Mary"]

def test_unknown_column_is_422():
    r = client.post("/compare", files=_files(), data={"column2": "Apellido"})
    assert r.status_code == 422
    assert "Apellido" in r.json()["detail"]

def test_unsupported_file_type_is_422():
    files = _files()
    files["file1"] = ("notes.txt", b"Name\nAna\n", "text/plain")
    r = client.post("/compare", files=files)
    assert r.status_code == 422

def test_unreadable_workbook_is_422():
    files = _files()
    files["file2"] = ("broken.xlsx", b"not a zip", rules.EXPORT_MEDIA_TYPE)
    r = client.post("/compare", files=files)
    assert r.status_code == 422
    assert r.json()["detail"].startswith("Could not read file")

def test_export_download():
    r = client.post("/compare/export", files=_files())
    assert r.status_code == 200
    assert r.headers["content-type"] == rules.EXPORT_MEDIA_TYPE
    assert rules.EXPORT_FILENAME in r.headers["content-disposition"]

    wb = load_workbook(io.BytesIO(r.content))
    first = wb[rules.SHEET_MISSING_IN_FIRST]
    second = wb[rules.SHEET_MISSING_IN_SECOND]
    assert first["A1"].value == rules.TITLE_MISSING_IN_FIRST
    assert first["A3"].value == "Carla"
    assert first.max_row == 3
    assert second["A3"].value == "Beto"

def test_oversized_upload_is_413(monkeypatch):
    monkeypatch.setattr(rules, "MAX_UPLOAD_BYTES", 5)
    r = client.post("/compare", files=_files())
    assert r.status_code == 413
    assert "one.csv" in r.json()["detail"]

def test_inspect_uses_first_non_empty_row_as_header(make_xlsx):
    raw = make_xlsx([[], ["Name"], ["Ana"]])
    files = {"file": ("late.xlsx", raw, rules.EXPORT_MEDIA_TYPE)}
    r = client.post("/datasets/inspect", files=files)
    assert r.json()["headers"] == ["Name"]
    assert r.json()["default_column"] == "Name"
    assert r.json()["rows"] == 1

def test_app_starts_with_lifespan():
    with TestClient(app) as started:
        assert started.get("/health").json() == {"ok": True}
