from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from services.errors import InternalError, SpreadsheetParseError
from services.spreadsheet_parser import file_extension, parse_spreadsheet


def test_parse_csv_as_strings(tmp_path: Path):
    path = tmp_path / "contacts.csv"
    path.write_text("firstName,phone,notes\nAna,0015550101,\n Ben , 555 ,vip\n", encoding="utf-8")

    rows = parse_spreadsheet(path)

    assert rows == [
        {"firstName": "Ana", "phone": "0015550101", "notes": ""},
        {"firstName": "Ben", "phone": "555", "notes": "vip"},
    ]


def test_parse_csv_skips_empty_rows(tmp_path: Path):
    path = tmp_path / "contacts.csv"
    path.write_text("firstName,phone\nAna,1\n,\n\nBen,2\n", encoding="utf-8")

    assert [r["firstName"] for r in parse_spreadsheet(path)] == ["Ana", "Ben"]


def test_parse_xlsx_first_sheet(tmp_path: Path):
    path = tmp_path / "contacts.xlsx"
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame({"FirstName": ["Ana", "Ben"], "Mobile": ["555", "556"]}).to_excel(
            writer, sheet_name="Main", index=False
        )
        pd.DataFrame({"other": ["x"]}).to_excel(writer, sheet_name="Other", index=False)

    rows = parse_spreadsheet(path)

    assert rows == [
        {"FirstName": "Ana", "Mobile": "555"},
        {"FirstName": "Ben", "Mobile": "556"},
    ]


def test_corrupt_workbook_raises_parse_error(tmp_path: Path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip archive")

    with pytest.raises(SpreadsheetParseError) as info:
        parse_spreadsheet(path)

    assert isinstance(info.value, InternalError)


def test_unknown_extension_raises_parse_error(tmp_path: Path):
    path = tmp_path / "contacts.txt"
    path.write_text("firstName,phone\n", encoding="utf-8")

    with pytest.raises(SpreadsheetParseError):
        parse_spreadsheet(path)


def test_file_extension():
    assert file_extension("Contacts.XLSX") == ".xlsx"
    assert file_extension("archive.tar.csv") == ".csv"
    assert file_extension(None) == ""
    assert file_extension("noext") == ""


def test_parse_latin1_csv(tmp_path: Path):
    path = tmp_path / "contacts.csv"
    path.write_bytes("firstName,phone\nJosé,555\n".encode("latin-1"))

    assert parse_spreadsheet(path) == [{"firstName": "José", "phone": "555"}]


def test_parse_utf8_csv_with_bom(tmp_path: Path):
    path = tmp_path / "contacts.csv"
    path.write_bytes("firstName,phone\nZoë,555\n".encode("utf-8-sig"))

    assert parse_spreadsheet(path) == [{"firstName": "Zoë", "phone": "555"}]


def test_blank_lines_only_csv_has_no_rows(tmp_path: Path):
    path = tmp_path / "contacts.csv"
    path.write_bytes(b"\n\n")

    assert parse_spreadsheet(path) == []
