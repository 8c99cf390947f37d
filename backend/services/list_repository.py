import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from models.agent import Agent
from models.list_item import ListItem
from services.agent_service import get_agent
from services.errors import BatchNotFound

logger = logging.getLogger(__name__)


def _agents_by_id(db: Session, agent_ids: set[str]) -> dict[str, Agent]:
    if not agent_ids:
        return {}
    agents = db.query(Agent).filter(Agent.id.in_(agent_ids)).all()
    return {agent.id: agent for agent in agents}


def serialize_list_item(item: ListItem, agents_by_id: Mapping[str, Any]) -> dict:
    agent = agents_by_id.get(item.assigned_to)
    assigned = None
    if agent is not None:
        assigned = {
            "id": agent.id,
            "name": agent.name,
            "email": agent.email,
            "mobile": {
                "countryCode": agent.country_code,
                "number": agent.mobile_number,
            },
        }
    return {
        "id": item.id,
        "firstName": item.first_name,
        "phone": item.phone,
        "notes": item.notes,
        "assignedTo": assigned,
        "uploadBatch": item.upload_batch,
        "status": item.status,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
        "updatedAt": item.updated_at.isoformat() if item.updated_at else None,
    }


def serialize_list_items(db: Session, items: list[ListItem]) -> list[dict]:
    agents = _agents_by_id(db, {item.assigned_to for item in items})
    return [serialize_list_item(item, agents) for item in items]


def query_list_items(
    db: Session,
    agent_id: str | None = None,
    upload_batch: str | None = None,
    status: str | None = None,
) -> list[ListItem]:
    query = db.query(ListItem)
    if agent_id:
        query = query.filter(ListItem.assigned_to == agent_id)
    if upload_batch:
        query = query.filter(ListItem.upload_batch == upload_batch)
    if status:
        query = query.filter(ListItem.status == status)
    return query.order_by(ListItem.created_at.desc(), ListItem.position.asc()).all()


def list_items_for_agent(db: Session, agent_id: str) -> list[ListItem]:
    get_agent(db, agent_id)
    return query_list_items(db, agent_id=agent_id)


def delete_batch(db: Session, upload_batch: str) -> int:
    deleted = (
        db.query(ListItem)
        .filter(ListItem.upload_batch == upload_batch)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise BatchNotFound(upload_batch)
    db.commit()
    logger.info("BATCH DELETED: upload_batch=%s rows=%s", upload_batch, deleted)
    return int(deleted)
