"""Child profiles: create, edit, archive. Every call is scoped to the owning user."""

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_child
from app.errors import InvalidRequest, NotFound
from app.models.child import Child
from app.schemas.child import ChildCreate, ChildReplace, ChildUpdate


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise InvalidRequest("name must not be empty")
    return name


def _clean_grade(grade: Optional[str]) -> Optional[str]:
    if grade is None:
        return None
    return grade.strip() or None


async def get_owned_child(db: AsyncSession, owner_id: str, child_id: str) -> Child:
    child = await crud_child.get_owned(db, owner_id, child_id)
    if child is None:
        raise NotFound("Child not found")
    return child


async def list_children(db: AsyncSession, owner_id: str) -> Sequence[Child]:
    return await crud_child.get_active_by_owner(db, owner_id)


async def create_child(db: AsyncSession, owner_id: str, body: ChildCreate) -> Child:
    data = ChildCreate(name=_clean_name(body.name), grade=_clean_grade(body.grade))
    return await crud_child.create(db, obj_in=data, user_id=owner_id)


async def update_child(
    db: AsyncSession, owner_id: str, child_id: str, body: ChildUpdate
) -> Child:
    patch = body.model_dump(exclude_unset=True)
    if not patch:
        raise InvalidRequest("No fields to update")
    if "name" in patch:
        patch["name"] = _clean_name(patch["name"])
    if "grade" in patch:
        patch["grade"] = _clean_grade(patch["grade"])
    child = await get_owned_child(db, owner_id, child_id)
    return await crud_child.update(db, db_obj=child, obj_in=patch)


async def replace_child(
    db: AsyncSession, owner_id: str, child_id: str, body: ChildReplace
) -> Child:
    child = await get_owned_child(db, owner_id, child_id)
    return await crud_child.update(
        db,
        db_obj=child,
        obj_in={"name": _clean_name(body.name), "grade": _clean_grade(body.grade)},
    )


async def archive_child(db: AsyncSession, owner_id: str, child_id: str) -> None:
    """Soft delete; the child's tasks and logs stay reachable by id."""
    child = await get_owned_child(db, owner_id, child_id)
    await crud_child.update(db, db_obj=child, obj_in={"is_active": False})
