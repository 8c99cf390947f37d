import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from authentication.deps import require_admin
from db.deps import get_db
from routers.http_errors import to_http_exception
from services.batch_summary import load_batch_summaries
from services.errors import InternalError, ListDistributionError
from services.list_repository import (
    delete_batch,
    list_items_for_agent,
    query_list_items,
    serialize_list_items,
)
from services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/lists",
    tags=["lists"],
    dependencies=[Depends(require_admin)],
)

STATUS_PATTERN = "^(pending|in-progress|completed)$"


def get_upload_service(db: Session = Depends(get_db)) -> UploadService:
    return UploadService(db)


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_and_distribute(
    file: UploadFile = File(...),
    service: UploadService = Depends(get_upload_service),
):
    contents = await file.read()
    try:
        result = service.process_upload(file.filename, file.content_type, contents)
    except InternalError as exc:
        logger.error("Upload failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while processing file",
        )
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    except Exception:
        logger.exception("Upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while processing file",
        )
    finally:
        await file.close()

    return result.as_dict()


@router.get("")
def get_lists(
    agentId: str | None = Query(None),
    uploadBatch: str | None = Query(None),
    item_status: str | None = Query(None, alias="status", pattern=STATUS_PATTERN),
    db: Session = Depends(get_db),
):
    items = query_list_items(db, agent_id=agentId, upload_batch=uploadBatch, status=item_status)
    return serialize_list_items(db, items)


@router.get("/summary")
def get_distribution_summaries(db: Session = Depends(get_db)):
    return load_batch_summaries(db)


@router.get("/agent/{agent_id}")
def get_lists_by_agent(agent_id: str, db: Session = Depends(get_db)):
    try:
        items = list_items_for_agent(db, agent_id)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return serialize_list_items(db, items)


@router.delete("/batch/{upload_batch}")
def delete_lists_batch(upload_batch: str, db: Session = Depends(get_db)):
    try:
        deleted = delete_batch(db, upload_batch)
    except ListDistributionError as exc:
        raise to_http_exception(exc)
    return {"deleted": deleted, "uploadBatch": upload_batch}
