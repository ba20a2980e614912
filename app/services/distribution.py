from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from app.services.errors import InvalidRosterError

log = logging.getLogger(__name__)

AgentT = TypeVar("AgentT")
RecordT = TypeVar("RecordT")


@dataclass
class Bucket(Generic[AgentT, RecordT]):
    agent: AgentT
    records: list[RecordT] = field(default_factory=list)


def bucket_sizes(total: int, agents: int) -> list[int]:
    """
    Sizes for splitting ``total`` records over ``agents`` buckets: the first
    ``total % agents`` buckets get one extra record.
    """
    if agents <= 0:
        raise InvalidRosterError()
    base, extra = divmod(total, agents)
    return [base + (1 if i < extra else 0) for i in range(agents)]


def distribute(records: Sequence[RecordT], roster: Sequence[AgentT]) -> list[Bucket[AgentT, RecordT]]:
    """
    Split ``records`` into one bucket per roster agent, in roster order.

    Each bucket is a contiguous slice of ``records``, so source order is kept
    inside a bucket and the result depends only on the two input orders.
    """
    sizes = bucket_sizes(len(records), len(roster))

    buckets: list[Bucket[AgentT, RecordT]] = []
    start = 0
    for agent, size in zip(roster, sizes):
        buckets.append(Bucket(agent=agent, records=list(records[start:start + size])))
        start += size

    log.info("Distributed %d records over %d agents: %s", len(records), len(roster), sizes)
    return buckets
