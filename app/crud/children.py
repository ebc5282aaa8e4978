from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.child import Child
from app.schemas.child import ChildCreate, ChildUpdate


class CRUDChild(CRUDBase[Child, ChildCreate, ChildUpdate]):
    async def get_owned(
        self, db: AsyncSession, owner_id: str, child_id: str
    ) -> Optional[Child]:
        """Return the child only if it belongs to owner_id (active or archived)."""
        result = await db.execute(
            select(Child).where(Child.id == child_id, Child.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, db: AsyncSession, owner_id: str, child_id: str) -> bool:
        result = await db.execute(
            select(Child.id).where(Child.id == child_id, Child.user_id == owner_id)
        )
        return result.first() is not None

    async def lock_owned(
        self, db: AsyncSession, owner_id: str, child_id: str
    ) -> Optional[Child]:
        """SELECT ... FOR UPDATE on the child row; serializes writers of its daily logs."""
        result = await db.execute(
            select(Child)
            .where(Child.id == child_id, Child.user_id == owner_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_active_by_owner(self, db: AsyncSession, owner_id: str) -> Sequence[Child]:
        result = await db.execute(
            select(Child)
            .where(Child.user_id == owner_id, Child.is_active == True)
            .order_by(Child.created_at, Child.name)
        )
        return result.scalars().all()


crud_child = CRUDChild(Child)
