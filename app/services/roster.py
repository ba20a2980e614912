from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from app.services.errors import InsufficientAgentsError

log = logging.getLogger(__name__)

# Every distribution run uses exactly this many agents, however many exist.
ROSTER_SIZE = 5

AgentT = TypeVar("AgentT")


def select_roster(agents: Sequence[AgentT], size: int = ROSTER_SIZE) -> list[AgentT]:
    """Take the first ``size`` agents of the directory ordering."""
    if len(agents) < size:
        raise InsufficientAgentsError(count=len(agents), required=size)

    roster = list(agents[:size])
    log.info("Selected roster of %d from %d registered agents", len(roster), len(agents))
    return roster
