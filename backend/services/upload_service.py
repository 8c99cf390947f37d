import logging
import os
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.orm import Session

from models.list_item import ListItem
from services.agent_service import get_active_agents
from services.distribution import distribute, distribution_summary
from services.errors import (
    EmptyFile,
    FileTooLarge,
    NoAgentsAvailable,
    UnsupportedFileType,
)
from services.record_validator import validate_records
from services.row_normalizer import normalize_rows
from services.spreadsheet_parser import (
    SUPPORTED_EXTENSIONS,
    file_extension,
    parse_spreadsheet,
)

logger = logging.getLogger(__name__)

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES = int(float(os.getenv("MAX_UPLOAD_MB", "10")) * 1024 * 1024)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def new_upload_batch_id() -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"batch_{int(time.time() * 1000)}_{suffix}"


def check_upload(filename: str | None, contents: bytes, max_bytes: int = MAX_UPLOAD_BYTES) -> str:
    """Reject files the parser must never see. Returns the file extension."""
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileType()
    if not contents:
        raise EmptyFile()
    if len(contents) > max_bytes:
        raise FileTooLarge(max_bytes)
    return ext


@dataclass
class UploadResult:
    upload_batch: str
    total_items: int
    distribution_summary: list[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "uploadBatch": self.upload_batch,
            "totalItems": self.total_items,
            "distributionSummary": self.distribution_summary,
        }


class UploadService:
    def __init__(
        self,
        db: Session,
        upload_dir: str | Path = UPLOAD_DIR,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self.db = db
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    def _write_temp_file(self, contents: bytes, ext: str) -> Path:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        unique = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        path = self.upload_dir / f"upload-{unique}{ext}"
        path.write_bytes(contents)
        return path

    def _remove_temp_file(self, path: Path | None) -> None:
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to delete uploaded file %s", path)

    def process_upload(
        self,
        filename: str | None,
        content_type: str | None,
        contents: bytes,
    ) -> UploadResult:
        """
        Parse, validate, distribute and persist one uploaded file.
        Nothing is persisted unless every step succeeds; the temporary file
        is removed on every exit path.
        """
        ext = check_upload(filename, contents, self.max_bytes)

        temp_path: Path | None = None
        try:
            temp_path = self._write_temp_file(contents, ext)
            rows = parse_spreadsheet(temp_path)
            batch = validate_records(normalize_rows(rows))

            agents = get_active_agents(self.db)
            if not agents:
                raise NoAgentsAvailable()

            upload_batch = new_upload_batch_id()
            distributed = [
                item.with_batch(upload_batch) for item in distribute(batch, agents)
            ]

            uploaded_at = datetime.now(timezone.utc)
            self.db.add_all(
                [
                    ListItem(
                        first_name=item.record.first_name.strip(),
                        phone=item.record.phone.strip(),
                        notes=(item.record.notes or "").strip(),
                        assigned_to=item.agent_id,
                        upload_batch=item.upload_batch,
                        status="pending",
                        position=position,
                        created_at=uploaded_at,
                        updated_at=uploaded_at,
                    )
                    for position, item in enumerate(distributed)
                ]
            )
            self.db.commit()

            summary = distribution_summary(distributed, agents)
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._remove_temp_file(temp_path)

        logger.info(
            "UPLOAD: file=%s content_type=%s batch=%s rows=%s agents=%s",
            filename,
            content_type,
            upload_batch,
            len(distributed),
            len(agents),
        )
        return UploadResult(
            upload_batch=upload_batch,
            total_items=len(distributed),
            distribution_summary=summary,
        )
