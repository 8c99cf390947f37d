from pathlib import Path

import pandas as pd

from services.errors import SpreadsheetParseError

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS


def file_extension(filename: str | None) -> str:
    return Path(filename or "").suffix.lower()


def _read_csv(path: Path) -> pd.DataFrame:
    options = {"dtype": str, "keep_default_na": False, "skip_blank_lines": True}
    try:
        return pd.read_csv(path, encoding="utf-8-sig", **options)
    except UnicodeDecodeError:
        # Excel "Save as CSV" writes cp1252; latin-1 decodes any byte
        return pd.read_csv(path, encoding="latin-1", **options)


def _read_frame(path: Path) -> pd.DataFrame:
    ext = file_extension(path.name)
    if ext in CSV_EXTENSIONS:
        return _read_csv(path)
    if ext in EXCEL_EXTENSIONS:
        # first worksheet only
        return pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    raise SpreadsheetParseError(f"No parser for '{ext or path.name}'")


def _cell(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def parse_spreadsheet(path: str | Path) -> list[dict[str, str]]:
    """
    Read a CSV/XLSX/XLS file into header -> string rows.
    Headers and cells are trimmed; blank-header columns and empty rows are
    dropped.
    """
    path = Path(path)
    try:
        df = _read_frame(path)
    except pd.errors.EmptyDataError:
        # blank lines only; the validator reports the empty batch
        return []
    except SpreadsheetParseError:
        raise
    except Exception as exc:
        raise SpreadsheetParseError(f"Failed to parse file: {exc}") from exc

    headers = [_cell(col) for col in df.columns]
    keep = [
        (idx, header)
        for idx, header in enumerate(headers)
        if header and not header.startswith("Unnamed:")
    ]

    rows: list[dict[str, str]] = []
    for values in df.itertuples(index=False, name=None):
        row = {header: _cell(values[idx]) for idx, header in keep}
        if any(row.values()):
            rows.append(row)
    return rows
