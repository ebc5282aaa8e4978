"""Recurring study tasks: create, patch, replace, archive and reorder."""

import logging
from typing import Any, Sequence, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_child, crud_task
from app.errors import InvalidRequest, NotFound
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskReplace, TaskUpdate
from app.services.recurrence import validate_days_mask, validate_task_window

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "subject")


def _clean_text_fields(data: dict[str, Any]) -> dict[str, Any]:
    for field in _TEXT_FIELDS:
        if field in data:
            value = data[field].strip()
            if not value:
                raise InvalidRequest(f"{field} must not be empty")
            data[field] = value
    return data


async def _require_child(db: AsyncSession, owner_id: str, child_id: str) -> None:
    if not await crud_child.exists(db, owner_id, child_id):
        raise NotFound("Child not found")


async def get_owned_task(db: AsyncSession, owner_id: str, task_id: str) -> Task:
    task = await crud_task.get_owned(db, owner_id, task_id)
    if task is None:
        raise NotFound("Task not found")
    return task


async def list_tasks(
    db: AsyncSession, owner_id: str, child_id: str, archived: bool = False
) -> Sequence[Task]:
    await _require_child(db, owner_id, child_id)
    return await crud_task.get_by_child(db, owner_id, child_id, archived=archived)


async def create_task(
    db: AsyncSession, owner_id: str, child_id: str, body: TaskCreate
) -> Task:
    data = _clean_text_fields(body.model_dump())
    validate_days_mask(data["days_mask"])
    validate_task_window(data["start_date"], data["end_date"])
    await _require_child(db, owner_id, child_id)

    sort_order = await crud_task.next_sort_order(db, owner_id, child_id)
    task = await crud_task.create(
        db,
        obj_in=TaskCreate(**data),
        user_id=owner_id,
        child_id=child_id,
        sort_order=sort_order,
    )
    logger.info("Created task %s for child %s (mask=%d)", task.id, child_id, task.days_mask)
    return task


async def update_task(
    db: AsyncSession, owner_id: str, task_id: str, body: TaskUpdate
) -> Task:
    """Apply only the provided fields. The date-range rule is checked on the merged task."""
    patch = _clean_text_fields(body.model_dump(exclude_unset=True))
    if not patch:
        raise InvalidRequest("No fields to update")
    if "days_mask" in patch:
        validate_days_mask(patch["days_mask"])

    task = await get_owned_task(db, owner_id, task_id)
    validate_task_window(
        patch.get("start_date", task.start_date),
        patch.get("end_date", task.end_date),
    )
    return await crud_task.update(db, db_obj=task, obj_in=patch)


async def replace_task(
    db: AsyncSession, owner_id: str, task_id: str, body: TaskReplace
) -> Task:
    data = _clean_text_fields(body.model_dump())
    validate_days_mask(data["days_mask"])
    validate_task_window(data["start_date"], data["end_date"])
    task = await get_owned_task(db, owner_id, task_id)
    return await crud_task.update(db, db_obj=task, obj_in=data)


async def reorder_tasks(
    db: AsyncSession, owner_id: str, child_id: str, task_ids: Sequence[Union[UUID, str]]
) -> Sequence[Task]:
    """Set sort_order to each task's position in task_ids.

    Foreign or unknown ids are reported as NotFound, like every other ownership miss.
    """
    ids = [str(task_id) for task_id in task_ids]
    if not ids:
        raise InvalidRequest("task_ids must not be empty")
    if len(set(ids)) != len(ids):
        raise InvalidRequest("Duplicate task_id is not allowed")
    await _require_child(db, owner_id, child_id)

    tasks = {t.id: t for t in await crud_task.get_owned_for_child(db, owner_id, child_id, ids)}
    if len(tasks) != len(ids):
        raise NotFound("Task not found")

    for position, task_id in enumerate(ids):
        tasks[task_id].sort_order = position
    await db.flush()
    return [tasks[task_id] for task_id in ids]
