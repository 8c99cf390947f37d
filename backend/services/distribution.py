import logging
from dataclasses import dataclass, replace
from typing import Any, Sequence

from services.errors import NoAgentsAvailable, NoItemsToDistribute
from services.row_normalizer import NormalizedRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributedRecord:
    record: NormalizedRecord
    agent_id: str
    upload_batch: str | None = None

    def with_batch(self, upload_batch: str) -> "DistributedRecord":
        return replace(self, upload_batch=upload_batch)


def allocation_sizes(total: int, agent_count: int) -> list[int]:
    """
    Items per agent, in agent order. The first `total % agent_count`
    agents take one extra item.
    """
    base, remainder = divmod(total, agent_count)
    return [base + 1 if i < remainder else base for i in range(agent_count)]


def distribute(
    records: Sequence[NormalizedRecord],
    agents: Sequence[Any],
) -> list[DistributedRecord]:
    """
    Split records into contiguous, near-equal blocks across agents.

    Agents only need an `id` attribute (ORM rows or plain namespaces).
    Agent 0 gets the first block, agent 1 the next, and so on; input order
    is kept within and across blocks.
    """
    if not records:
        raise NoItemsToDistribute()
    if not agents:
        raise NoAgentsAvailable()

    total = len(records)
    sizes = allocation_sizes(total, len(agents))
    logger.info(
        "Distributing %s items among %s agents (base=%s remainder=%s)",
        total,
        len(agents),
        total // len(agents),
        total % len(agents),
    )

    distributed: list[DistributedRecord] = []
    start = 0
    for agent, size in zip(agents, sizes):
        logger.debug("Agent %s (%s): %s items", agent.id, getattr(agent, "name", None), size)
        for record in records[start : start + size]:
            distributed.append(DistributedRecord(record=record, agent_id=agent.id))
        start += size

    return distributed


def distribution_summary(
    distributed: Sequence[DistributedRecord],
    agents: Sequence[Any],
) -> list[dict]:
    counts: dict[str, int] = {}
    for item in distributed:
        counts[item.agent_id] = counts.get(item.agent_id, 0) + 1

    return [
        {
            "agentId": agent.id,
            "agentName": agent.name,
            "agentEmail": agent.email,
            "itemsAssigned": counts.get(agent.id, 0),
        }
        for agent in agents
    ]
