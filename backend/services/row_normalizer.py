from dataclasses import dataclass
from typing import Iterable, Mapping

RawRow = Mapping[str, str]

# Accepted header spellings, highest priority first.
FIRST_NAME_HEADERS = ("firstname", "first_name", "firstName", "FirstName", "FIRSTNAME")
PHONE_HEADERS = ("phone", "Phone", "PHONE", "mobile", "Mobile", "phoneNumber")
NOTES_HEADERS = ("notes", "Notes", "NOTES", "note", "Note", "comments")


@dataclass(frozen=True)
class NormalizedRecord:
    first_name: str | None
    phone: str | None
    notes: str = ""

    def as_dict(self) -> dict:
        return {"firstName": self.first_name, "phone": self.phone, "notes": self.notes}


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _pick(row: RawRow, headers: tuple[str, ...]) -> str | None:
    first_present = None
    for header in headers:
        if header not in row:
            continue
        value = row[header]
        if not _is_blank(value):
            return value
        if first_present is None:
            first_present = value
    return first_present


def normalize_row(row: RawRow) -> NormalizedRecord:
    """
    Map one spreadsheet row onto the canonical record shape.
    The first header in priority order with a non-blank value wins. Blank
    cells fall through to the next spelling; if every match is blank the
    first blank value is kept, so the validator reports the field as
    missing. Absent fields stay None (notes falls back to "").
    """
    notes = _pick(row, NOTES_HEADERS)
    return NormalizedRecord(
        first_name=_pick(row, FIRST_NAME_HEADERS),
        phone=_pick(row, PHONE_HEADERS),
        notes=notes if notes is not None else "",
    )


def normalize_rows(rows: Iterable[RawRow]) -> list[NormalizedRecord]:
    return [normalize_row(row) for row in rows]
