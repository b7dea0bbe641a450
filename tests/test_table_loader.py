import io
import json

import pandas as pd
import pytest

from figspec.services import ParseError, TableLoader, UnsupportedFormatError
from figspec.services.table_loader import coerce_cell, detect_delimiter


def _workbook() -> bytes:
    df = pd.DataFrame(
        {
            "Date": pd.date_range("2024-01-01", periods=3, freq="D"),
            "Region": ["East", "West", "East"],
            "Sales": [100, 120, 130],
        }
    )
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Sheet1")
    return buffer.getvalue()


def test_coerce_cell():
    assert coerce_cell("12") == 12
    assert coerce_cell(" 1.5 ") == 1.5
    assert coerce_cell("") is None
    assert coerce_cell(float("nan")) is None
    assert coerce_cell("East") == "East"
    assert coerce_cell("inf") == "inf"
    assert coerce_cell(7) == 7


def test_detect_delimiter():
    assert detect_delimiter("a\tb\n1\t2") == "\t"
    assert detect_delimiter("a;b\n1;2") == ";"
    assert detect_delimiter("a|b") == "|"
    assert detect_delimiter("a,b") == ","


def test_load_csv_types_cells():
    dataset = TableLoader().load("sales.csv", b"Month,Sales\nJan,10\nFeb,\nMar,2.5\n")
    assert dataset.headers == ("Month", "Sales")
    assert dataset.rows == (("Jan", 10), ("Feb", None), ("Mar", 2.5))


def test_load_csv_with_bom_and_tsv():
    dataset = TableLoader().load("bom.csv", "\ufeffa,b\n1,2\n".encode("utf-8"))
    assert dataset.headers == ("a", "b")
    tsv = TableLoader().load("t.tsv", b"a\tb\nx\t3\n")
    assert tsv.rows == (("x", 3),)


def test_load_txt_detects_semicolon():
    dataset = TableLoader().load("data.TXT", b"a;b\n1;2.5\n")
    assert dataset.headers == ("a", "b")
    assert dataset.rows == ((1, 2.5),)


def test_load_json_array_and_envelope():
    rows = [{"name": "A", "value": 1}, {"name": "B", "value": 2}]
    plain = TableLoader().load("d.json", json.dumps(rows).encode())
    wrapped = TableLoader().load("d.json", json.dumps({"data": rows}).encode())
    assert plain == wrapped
    assert plain.headers == ("name", "value")
    assert plain.rows == (("A", 1), ("B", 2))


@pytest.mark.parametrize("payload", [b"[]", b"{\"data\": 1}", b"[1, 2]", b"{not json"])
def test_load_json_rejects_bad_payloads(payload):
    with pytest.raises(ParseError):
        TableLoader().load("d.json", payload)


def test_load_workbook():
    dataset = TableLoader().load("book.xlsx", _workbook())
    assert dataset.headers == ("Date", "Region", "Sales")
    assert dataset.row_count == 3
    assert dataset.rows[0][0].startswith("2024-01-01")
    assert [int(v) for v in dataset.column(2)] == [100, 120, 130]


def test_unsupported_and_malformed_inputs():
    loader = TableLoader()
    with pytest.raises(UnsupportedFormatError):
        loader.load("report.pdf", b"%PDF")
    with pytest.raises(ParseError):
        loader.load("header_only.csv", b"a,b\n")
    with pytest.raises(ParseError):
        loader.load("latin.csv", b"a,b\n\xff\xfe,1\n")
    with pytest.raises(ParseError):
        loader.load("broken.xlsx", b"not a workbook")


def test_load_csv_tolerates_rows_wider_than_header():
    dataset = TableLoader().load("a.csv", b"Month,Sales\nJan,10\nFeb,20,\nMar,15\n")
    assert dataset.headers == ("Month", "Sales")
    assert dataset.rows == (("Jan", 10), ("Feb", 20), ("Mar", 15))


def test_xls_uses_xlrd_engine(monkeypatch):
    seen = {}

    def fake_read_excel(buffer, **kwargs):
        seen.update(kwargs)
        return pd.DataFrame([["Region", "Sales"], ["East", 100]], dtype=object)

    monkeypatch.setattr(pd, "read_excel", fake_read_excel)
    dataset = TableLoader().load("legacy.xls", b"\xd0\xcf\x11\xe0")
    assert seen["engine"] == "xlrd"
    assert dataset.headers == ("Region", "Sales")
    assert dataset.rows == (("East", 100),)


def test_missing_excel_reader_is_not_a_parse_error(monkeypatch):
    def fake_read_excel(buffer, **kwargs):
        raise ImportError("Install xlrd >= 2.0.1 for xls Excel support")

    monkeypatch.setattr(pd, "read_excel", fake_read_excel)
    with pytest.raises(ImportError):
        TableLoader().load("legacy.xls", b"\xd0\xcf\x11\xe0")


def test_corrupt_xls_is_a_parse_error():
    with pytest.raises(ParseError):
        TableLoader().load("legacy.xls", b"not a workbook")
