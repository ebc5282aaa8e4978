"""Daily log writes: replace a child's whole day of study logs in one transaction."""

import logging
from datetime import date
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_child, crud_study_log, crud_task
from app.errors import Conflict, Internal, InvalidRequest, NotFound
from app.models.base import MAX_MINUTES
from app.schemas.study_log import DailyLogReplaceResult, DailyLogsResponse, LoggedItem

logger = logging.getLogger(__name__)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def normalize_items(items: Any) -> list[tuple[str, int]]:
    """Validate a replace payload before anything touches the store.

    Accepts pydantic items or plain dicts. Returns ``(task_id, minutes)`` pairs with
    canonical lowercase UUID strings.
    """
    if not isinstance(items, (list, tuple)):
        raise InvalidRequest("items must be a list")

    seen: set[str] = set()
    normalized = []
    for item in items:
        raw_id = _field(item, "task_id")
        minutes = _field(item, "minutes")
        try:
            task_id = str(raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id)))
        except ValueError:
            raise InvalidRequest("task_id must be a UUID") from None
        if task_id in seen:
            raise InvalidRequest("Duplicate task_id is not allowed")
        seen.add(task_id)
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise InvalidRequest("minutes must be an integer")
        if minutes < 1:
            raise InvalidRequest("minutes must be at least 1")
        if minutes > MAX_MINUTES:
            raise InvalidRequest(f"minutes must be at most {MAX_MINUTES}")
        normalized.append((task_id, minutes))
    return normalized


async def replace_daily_logs(
    db: AsyncSession,
    owner_id: str,
    child_id: str,
    day: date,
    items: Sequence[Any],
) -> DailyLogReplaceResult:
    """Replace every log row of (child, day) with ``items``; all or nothing.

    Ownership of the child and of every referenced task is checked before the old
    rows are deleted, so a bad task id leaves the stored day untouched. Store
    failures roll the session back and surface as Conflict or Internal.
    """
    rows = normalize_items(items)

    child = await crud_child.lock_owned(db, owner_id, child_id)
    if child is None:
        raise NotFound("Child not found")

    if rows:
        task_ids = [task_id for task_id, _ in rows]
        matched = await crud_task.count_owned(db, owner_id, child_id, task_ids)
        if matched != len(task_ids):
            logger.info(
                "Rejected daily logs for child %s on %s: %d of %d tasks not found",
                child_id,
                day,
                len(task_ids) - matched,
                len(task_ids),
            )
            raise NotFound("Task not found")

    try:
        saved = await crud_study_log.replace_for_date(db, owner_id, child_id, day, rows)
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Daily log replace for child %s on %s conflicted: %s", child_id, day, exc)
        raise Conflict("Daily logs conflict with existing data") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Daily log replace for child %s on %s failed", child_id, day)
        raise Internal("Failed to save daily logs") from exc

    logger.info("Saved %d study logs for child %s on %s", saved, child_id, day)
    return DailyLogReplaceResult(date=day, saved_count=saved)


async def get_daily_logs(
    db: AsyncSession, owner_id: str, child_id: str, day: date
) -> DailyLogsResponse:
    if not await crud_child.exists(db, owner_id, child_id):
        raise NotFound("Child not found")
    logs = await crud_study_log.get_for_date(db, owner_id, child_id, day)
    return DailyLogsResponse(
        date=day, items=[LoggedItem(task_id=log.task_id, minutes=log.minutes) for log in logs]
    )
