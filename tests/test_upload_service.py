from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models.list_item import ListItem
from services.errors import (
    EmptyBatch,
    EmptyFile,
    FileTooLarge,
    InputError,
    InvalidPhoneFormat,
    MissingRequiredField,
    NoAgentsAvailable,
    SpreadsheetParseError,
    UnsupportedFileType,
)
from services.upload_service import UploadService, check_upload, new_upload_batch_id

CSV = b"firstName,phone,notes\n" + b"".join(
    f"Person{i},555-01{i:02d},note {i}\n".encode() for i in range(10)
)


def _service(db_session, upload_dir: Path) -> UploadService:
    return UploadService(db_session, upload_dir=upload_dir)


def test_upload_distributes_and_persists(db_session, make_agent, upload_dir):
    a, b, c = make_agent("Ana"), make_agent("Ben"), make_agent("Cy")

    result = _service(db_session, upload_dir).process_upload("contacts.csv", "text/csv", CSV)

    assert result.total_items == 10
    assert [s["itemsAssigned"] for s in result.distribution_summary] == [4, 3, 3]
    assert [s["agentId"] for s in result.distribution_summary] == [a.id, b.id, c.id]

    items = db_session.query(ListItem).order_by(ListItem.position).all()
    assert len(items) == 10
    assert {i.upload_batch for i in items} == {result.upload_batch}
    assert [i.assigned_to for i in items] == [a.id] * 4 + [b.id] * 3 + [c.id] * 3
    assert [i.first_name for i in items] == [f"Person{n}" for n in range(10)]
    assert all(i.status == "pending" for i in items)
    assert list(upload_dir.iterdir()) == []


def test_inactive_agents_are_skipped(db_session, make_agent, upload_dir):
    make_agent("Ana")
    make_agent("Idle", active=False)

    result = _service(db_session, upload_dir).process_upload("contacts.csv", "text/csv", CSV)

    assert [s["agentName"] for s in result.distribution_summary] == ["Ana"]
    assert result.distribution_summary[0]["itemsAssigned"] == 10


def test_as_dict_shape(db_session, make_agent, upload_dir):
    make_agent("Ana")

    payload = _service(db_session, upload_dir).process_upload("c.csv", None, CSV).as_dict()

    assert set(payload) == {"uploadBatch", "totalItems", "distributionSummary"}
    assert payload["uploadBatch"].startswith("batch_")


def test_validation_failure_persists_nothing(db_session, make_agent, upload_dir):
    make_agent("Ana")
    bad = b"firstName,phone\nX,555\n,555\n"

    with pytest.raises(MissingRequiredField) as info:
        _service(db_session, upload_dir).process_upload("c.csv", "text/csv", bad)

    assert info.value.row == 2
    assert db_session.query(ListItem).count() == 0
    assert list(upload_dir.iterdir()) == []


def test_bad_phone_rejected(db_session, make_agent, upload_dir):
    make_agent("Ana")

    with pytest.raises(InvalidPhoneFormat):
        _service(db_session, upload_dir).process_upload("c.csv", None, b"firstName,phone\nX,call me\n")


def test_no_active_agents(db_session, make_agent, upload_dir):
    make_agent("Idle", active=False)

    with pytest.raises(NoAgentsAvailable):
        _service(db_session, upload_dir).process_upload("c.csv", "text/csv", CSV)

    assert list(upload_dir.iterdir()) == []


def test_unsupported_file_never_reaches_parser(db_session, upload_dir):
    with patch("services.upload_service.parse_spreadsheet") as parser:
        with pytest.raises(UnsupportedFileType):
            _service(db_session, upload_dir).process_upload("contacts.pdf", "application/pdf", b"%PDF")

    parser.assert_not_called()
    assert list(upload_dir.iterdir()) == []


def test_parse_failure_cleans_up(db_session, make_agent, upload_dir):
    make_agent("Ana")

    with pytest.raises(SpreadsheetParseError):
        _service(db_session, upload_dir).process_upload("c.xlsx", None, b"garbage")

    assert list(upload_dir.iterdir()) == []


def test_storage_failure_rolls_back_and_cleans_up(db_session, make_agent, upload_dir):
    make_agent("Ana")

    with patch.object(db_session, "commit", side_effect=SQLAlchemyError("db down")):
        with pytest.raises(SQLAlchemyError):
            _service(db_session, upload_dir).process_upload("c.csv", None, CSV)

    assert db_session.query(ListItem).count() == 0
    assert list(upload_dir.iterdir()) == []


def test_header_only_file_is_empty_batch(db_session, make_agent, upload_dir):
    from services.errors import EmptyBatch

    make_agent("Ana")

    with pytest.raises(EmptyBatch):
        _service(db_session, upload_dir).process_upload("c.csv", None, b"firstName,phone\n")


def test_check_upload():
    assert check_upload("a.CSV", b"x") == ".csv"
    assert check_upload("a.xls", b"x") == ".xls"
    with pytest.raises(UnsupportedFileType):
        check_upload("a.txt", b"x")
    with pytest.raises(UnsupportedFileType):
        check_upload(None, b"x")
    with pytest.raises(EmptyFile):
        check_upload("a.csv", b"")
    with pytest.raises(FileTooLarge):
        check_upload("a.csv", b"x" * 11, max_bytes=10)


def test_batch_ids_are_unique():
    ids = {new_upload_batch_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(i.startswith("batch_") for i in ids)


def test_latin1_csv_is_accepted(db_session, make_agent, upload_dir):
    make_agent("Ana")
    content = "firstName,phone\nJosé,555\n".encode("latin-1")

    result = _service(db_session, upload_dir).process_upload("c.csv", "text/csv", content)

    assert result.total_items == 1
    assert db_session.query(ListItem).one().first_name == "José"


def test_blank_lines_only_file_is_empty_batch(db_session, make_agent, upload_dir):
    make_agent("Ana")

    with pytest.raises(EmptyBatch) as info:
        _service(db_session, upload_dir).process_upload("c.csv", "text/csv", b"\n\n")

    assert isinstance(info.value, InputError)
    assert list(upload_dir.iterdir()) == []
