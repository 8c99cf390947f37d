# models/list_item.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from db.base import Base

LIST_ITEM_STATUSES = ("pending", "in-progress", "completed")


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ListItem(Base):
    __tablename__ = "list_items"

    id = Column(String(32), primary_key=True, default=_new_id)
    first_name = Column(String(100), nullable=False)
    phone = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")
    # no FK: deleting an agent leaves its items in place
    assigned_to = Column(String(32), nullable=False, index=True)
    upload_batch = Column(String, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    position = Column(Integer, nullable=False, default=0)  # row order within the upload
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_list_items_assigned_batch", "assigned_to", "upload_batch"),
    )
