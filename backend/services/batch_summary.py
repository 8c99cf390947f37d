from datetime import datetime
from typing import Any, Iterable, Mapping

from sqlalchemy.orm import Session

from models.agent import Agent
from models.list_item import ListItem


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def batch_summaries(
    records: Iterable[Any],
    agents_by_id: Mapping[str, Any],
) -> list[dict]:
    """
    Per-upload history built from persisted list items.

    Items whose agent no longer exists are left out of the counts, and a
    batch with no remaining items is dropped. `uploadDate` comes from the
    first kept item of each batch; newest batch first.
    """
    batches: dict[str, dict] = {}

    for item in records:
        agent = agents_by_id.get(item.assigned_to)
        if agent is None:
            continue

        batch = batches.get(item.upload_batch)
        if batch is None:
            batch = {
                "uploadBatch": item.upload_batch,
                "totalItems": 0,
                "uploadDate": item.created_at,
                "_agents": {},
            }
            batches[item.upload_batch] = batch

        group = batch["_agents"].get(agent.id)
        if group is None:
            group = {
                "agentId": agent.id,
                "agentName": agent.name,
                "agentEmail": agent.email,
                "itemsCount": 0,
            }
            batch["_agents"][agent.id] = group

        group["itemsCount"] += 1
        batch["totalItems"] += 1

    ordered = sorted(
        batches.values(),
        key=lambda b: b["uploadDate"],
        reverse=True,
    )
    return [
        {
            "uploadBatch": b["uploadBatch"],
            "totalItems": b["totalItems"],
            "uploadDate": _iso(b["uploadDate"]),
            "distribution": list(b["_agents"].values()),
        }
        for b in ordered
    ]


def load_batch_summaries(db: Session) -> list[dict]:
    items = (
        db.query(ListItem)
        .order_by(ListItem.created_at.asc(), ListItem.position.asc(), ListItem.id.asc())
        .all()
    )
    agents = {agent.id: agent for agent in db.query(Agent).all()}
    return batch_summaries(items, agents)
