from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.list_item import ListItem
from app.services.errors import NotFoundError


class AssignmentStore:
    """Persistence for assigned list items, bound to one session. Callers commit."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_batch(self, items: Sequence[ListItem]) -> list[ListItem]:
        self.db.add_all(items)
        await self.db.flush()
        return list(items)

    async def find_all(self) -> list[ListItem]:
        # Insertion order: batch time, then source row within the batch
        stmt = select(ListItem).order_by(
            ListItem.created_at, ListItem.upload_id, ListItem.row_number, ListItem.id
        )
        return list((await self.db.execute(stmt)).scalars().all())

    async def delete_by_id(self, item_id: str) -> None:
        item = (await self.db.execute(select(ListItem).where(ListItem.id == item_id))).scalar_one_or_none()
        if item is None:
            raise NotFoundError("List item not found")
        await self.db.delete(item)
        await self.db.flush()

    async def delete_by_agent(self, agent_id: str) -> int:
        result = await self.db.execute(delete(ListItem).where(ListItem.assigned_to == agent_id))
        return result.rowcount or 0
