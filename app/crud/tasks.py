from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskUpdate


class CRUDTask(CRUDBase[Task, TaskCreate, TaskUpdate]):
    async def get_owned(self, db: AsyncSession, owner_id: str, task_id: str) -> Optional[Task]:
        result = await db.execute(
            select(Task).where(Task.id == task_id, Task.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def get_by_child(
        self, db: AsyncSession, owner_id: str, child_id: str, archived: bool = False
    ) -> Sequence[Task]:
        result = await db.execute(
            select(Task)
            .where(
                Task.child_id == child_id,
                Task.user_id == owner_id,
                Task.is_archived == archived,
            )
            .order_by(Task.sort_order, Task.created_at)
        )
        return result.scalars().all()

    async def get_active_for_child(
        self, db: AsyncSession, owner_id: str, child_id: str
    ) -> Sequence[Task]:
        """All non-archived tasks of the child; due filtering happens in Python."""
        return await self.get_by_child(db, owner_id, child_id, archived=False)

    async def get_owned_for_child(
        self, db: AsyncSession, owner_id: str, child_id: str, task_ids: list[str]
    ) -> Sequence[Task]:
        if not task_ids:
            return []
        result = await db.execute(
            select(Task).where(
                Task.user_id == owner_id,
                Task.child_id == child_id,
                Task.id.in_(task_ids),
            )
        )
        return result.scalars().all()

    async def count_owned(
        self, db: AsyncSession, owner_id: str, child_id: str, task_ids: list[str]
    ) -> int:
        """How many of task_ids resolve to tasks of this child and owner."""
        if not task_ids:
            return 0
        result = await db.execute(
            select(func.count(Task.id)).where(
                Task.user_id == owner_id,
                Task.child_id == child_id,
                Task.id.in_(task_ids),
            )
        )
        return result.scalar_one()

    async def next_sort_order(self, db: AsyncSession, owner_id: str, child_id: str) -> int:
        result = await db.execute(
            select(func.max(Task.sort_order)).where(
                Task.user_id == owner_id, Task.child_id == child_id
            )
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1


crud_task = CRUDTask(Task)
