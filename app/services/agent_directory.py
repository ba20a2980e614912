from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password
from app.models.agent import Agent
from app.services.assignment_store import AssignmentStore
from app.services.errors import DuplicateAgentError, NotFoundError

log = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class AgentDirectory:
    """Registered agents, bound to one session. Mutations commit."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_agents(self) -> list[Agent]:
        # Creation order, id as tie-break, so roster selection is repeatable
        stmt = select(Agent).order_by(Agent.created_at, Agent.id)
        return list((await self.db.execute(stmt)).scalars().all())

    async def get_agent(self, agent_id: str) -> Agent:
        agent = (await self.db.execute(select(Agent).where(Agent.id == agent_id))).scalar_one_or_none()
        if agent is None:
            raise NotFoundError("Agent not found")
        return agent

    async def _assert_email_free(self, email: str, *, exclude_id: str | None = None) -> None:
        stmt = select(Agent.id).where(Agent.email == email)
        if exclude_id is not None:
            stmt = stmt.where(Agent.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise DuplicateAgentError()

    async def create_agent(self, *, name: str, email: str, mobile: str, password: str) -> Agent:
        email = _normalize_email(email)
        await self._assert_email_free(email)

        agent = Agent(
            name=name.strip(),
            email=email,
            mobile=mobile.strip(),
            password_hash=hash_password(password),
        )
        self.db.add(agent)
        await self._commit_unique()
        log.info("Created agent %s", agent.id)
        return agent

    async def update_agent(
        self,
        agent_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
        mobile: str | None = None,
        password: str | None = None,
    ) -> Agent:
        agent = await self.get_agent(agent_id)

        if name:
            agent.name = name.strip()
        if email:
            email = _normalize_email(email)
            if email != agent.email:
                await self._assert_email_free(email, exclude_id=agent.id)
                agent.email = email
        if mobile:
            agent.mobile = mobile.strip()
        if password:
            agent.password_hash = hash_password(password)

        await self._commit_unique()
        await self.db.refresh(agent)
        return agent

    async def delete_agent(self, agent_id: str) -> int:
        """Remove the agent and every list item assigned to it. Returns the item count."""
        agent = await self.get_agent(agent_id)

        removed = await AssignmentStore(self.db).delete_by_agent(agent.id)
        await self.db.delete(agent)
        await self.db.commit()

        log.info("Deleted agent %s and %d assigned items", agent_id, removed)
        return removed

    async def _commit_unique(self) -> None:
        # The unique index still guards against a concurrent insert of the same email
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise DuplicateAgentError() from exc
