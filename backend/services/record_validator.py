import re
from typing import Sequence

from services.errors import (
    EmptyBatch,
    FieldTooLong,
    InvalidPhoneFormat,
    MissingRequiredField,
)
from services.row_normalizer import NormalizedRecord

FIRST_NAME_MAX_LENGTH = 100
PHONE_RE = re.compile(r"[0-9\s\-+()]+")

ValidatedBatch = tuple[NormalizedRecord, ...]


def is_missing(value: str | None) -> bool:
    return value is None or value.strip() == ""


def validate_record(record: NormalizedRecord, row: int) -> None:
    if is_missing(record.first_name):
        raise MissingRequiredField("firstName", row)
    if is_missing(record.phone):
        raise MissingRequiredField("phone", row)
    if not PHONE_RE.fullmatch(record.phone):
        raise InvalidPhoneFormat(row)
    if len(record.first_name) > FIRST_NAME_MAX_LENGTH:
        raise FieldTooLong("firstName", row, max_length=FIRST_NAME_MAX_LENGTH)


def validate_records(records: Sequence[NormalizedRecord]) -> ValidatedBatch:
    """
    Validate the whole upload; the first bad row rejects the batch.
    Rows are reported 1-based.
    """
    if not records:
        raise EmptyBatch()

    for index, record in enumerate(records, start=1):
        validate_record(record, index)

    return tuple(records)
