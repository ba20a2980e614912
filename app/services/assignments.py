from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import ids
from app.models.agent import Agent
from app.models.base import utcnow
from app.models.list_item import ListItem
from app.services.agent_directory import AgentDirectory
from app.services.assignment_store import AssignmentStore
from app.services.distribution import Bucket
from app.services.errors import PersistenceError
from app.services.schema_validator import ValidatedRecord

log = logging.getLogger(__name__)


@dataclass(slots=True)
class DistributionEntry:
    agent: Agent
    items: list[ListItem] = field(default_factory=list)


@dataclass(slots=True)
class DistributionResult:
    entries: list[DistributionEntry]

    @property
    def total_items(self) -> int:
        return sum(len(e.items) for e in self.entries)


def group_by_agent(agents: Sequence[Agent], items: Iterable[ListItem]) -> DistributionResult:
    """
    One entry per agent in the given order, agents without items included.
    Items keep the order they are passed in; items of agents not listed are left out.
    """
    entries = {agent.id: DistributionEntry(agent=agent) for agent in agents}
    for item in items:
        entry = entries.get(item.assigned_to)
        if entry is not None:
            entry.items.append(item)
    return DistributionResult(entries=list(entries.values()))


async def materialize(
    db: AsyncSession,
    buckets: Sequence[Bucket[Agent, ValidatedRecord]],
) -> DistributionResult:
    """
    Save every bucketed record as a list item in one transaction.

    A failed write is rolled back and reported as PersistenceError; nothing
    is retried.
    """
    upload_id = ids.gen_id(ids.UPLOAD)
    batch_at = utcnow()

    rows = [
        ListItem(
            first_name=record.first_name,
            phone=record.phone,
            notes=record.notes,
            assigned_to=bucket.agent.id,
            upload_id=upload_id,
            row_number=record.row_number,
            created_at=batch_at,
            updated_at=batch_at,
        )
        for bucket in buckets
        for record in bucket.records
    ]

    store = AssignmentStore(db)
    try:
        saved = await store.insert_batch(rows)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("Failed to save upload %s (%d items)", upload_id, len(rows))
        raise PersistenceError() from exc

    log.info("Saved upload %s: %d items for %d agents", upload_id, len(saved), len(buckets))
    return group_by_agent([bucket.agent for bucket in buckets], saved)


async def read_distribution(db: AsyncSession) -> DistributionResult:
    agents = await AgentDirectory(db).list_agents()
    items = await AssignmentStore(db).find_all()
    return group_by_agent(agents, items)
