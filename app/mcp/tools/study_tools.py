"""Study MCP tools: children, tasks, daily view, calendar, summaries and daily log writes."""

from typing import Optional
from uuid import UUID

from app.database import AsyncSessionLocal
from app.errors import InvalidRequest
from app.mcp.auth import resolve_user
from app.mcp.server import mcp
from app.models.task import Task
from app.schemas.task import TaskCreate
from app.services import (
    calendar_service,
    child_service,
    daily_log_service,
    daily_view_service,
    summary_service,
    task_service,
)
from app.services.recurrence import (
    mask_from_weekdays,
    parse_iso_date,
    validate_days_mask,
    weekdays_from_mask,
)


def _require_child_id(child_id: str) -> str:
    try:
        return str(UUID(child_id))
    except (TypeError, ValueError):
        raise InvalidRequest("child_id must be a UUID") from None


def _task_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "subject": t.subject,
        "default_minutes": t.default_minutes,
        "days_mask": t.days_mask,
        "weekdays": weekdays_from_mask(t.days_mask),
        "start_date": t.start_date.isoformat() if t.start_date else None,
        "end_date": t.end_date.isoformat() if t.end_date else None,
        "is_archived": t.is_archived,
        "sort_order": t.sort_order,
    }


@mcp.tool()
async def list_children(x_user_id: Optional[str] = None) -> list[dict]:
    """List the caller's active children."""
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        children = await child_service.list_children(db, user.id)
        return [
            {"id": c.id, "name": c.name, "grade": c.grade, "is_active": c.is_active}
            for c in children
        ]


@mcp.tool()
async def list_tasks(
    child_id: str,
    archived: bool = False,
    x_user_id: Optional[str] = None,
) -> list[dict]:
    """List a child's study tasks with their weekdays (Sunday-start mask)."""
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        tasks = await task_service.list_tasks(
            db, user.id, _require_child_id(child_id), archived=archived
        )
        return [_task_dict(t) for t in tasks]


@mcp.tool()
async def add_task(
    child_id: str,
    name: str,
    subject: str,
    weekdays: list[str],
    default_minutes: int = 15,
    description: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    x_user_id: Optional[str] = None,
) -> dict:
    """Create a recurring study task. weekdays like ["Mon", "Wed", "Fri"]."""
    body = TaskCreate(
        name=name,
        subject=subject,
        description=description,
        default_minutes=default_minutes,
        days_mask=validate_days_mask(mask_from_weekdays(weekdays)),
        start_date=parse_iso_date(start_date, "start_date") if start_date else None,
        end_date=parse_iso_date(end_date, "end_date") if end_date else None,
    )
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        task = await task_service.create_task(db, user.id, _require_child_id(child_id), body)
        await db.commit()
        return _task_dict(task)


@mcp.tool()
async def get_daily_view(
    child_id: str,
    date: str,
    x_user_id: Optional[str] = None,
) -> dict:
    """Tasks due for a child on date (YYYY-MM-DD) with done/minutes per task."""
    day = parse_iso_date(date)
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        view = await daily_view_service.build_daily_view(
            db, user.id, _require_child_id(child_id), day
        )
        return view.model_dump(mode="json")


@mcp.tool()
async def get_calendar_summary(
    child_id: str,
    from_date: str,
    to_date: str,
    x_user_id: Optional[str] = None,
) -> dict:
    """Per-day status (white/green/yellow/red) for up to 62 days."""
    start = parse_iso_date(from_date, "from_date")
    end = parse_iso_date(to_date, "to_date")
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        summary = await calendar_service.build_calendar_summary(
            db, user.id, _require_child_id(child_id), start, end
        )
        return summary.model_dump(mode="json", by_alias=True)


@mcp.tool()
async def get_study_summary(
    child_id: str,
    from_date: str,
    to_date: str,
    x_user_id: Optional[str] = None,
) -> dict:
    """Study minutes over up to 366 days: total, by day, by subject and by task."""
    start = parse_iso_date(from_date, "from_date")
    end = parse_iso_date(to_date, "to_date")
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        summary = await summary_service.build_summary(
            db, user.id, _require_child_id(child_id), start, end
        )
        return summary.model_dump(mode="json", by_alias=True)


@mcp.tool()
async def save_daily_logs(
    child_id: str,
    date: str,
    items: list[dict],
    x_user_id: Optional[str] = None,
) -> dict:
    """
    Replace everything logged for a child on date with items.
    Each item: {"task_id": "<uuid>", "minutes": <int ≥ 1>}. An empty list clears the day.
    """
    day = parse_iso_date(date)
    async with AsyncSessionLocal() as db:
        user = await resolve_user(db, x_user_id)
        result = await daily_log_service.replace_daily_logs(
            db, user.id, _require_child_id(child_id), day, items
        )
        await db.commit()
        return result.model_dump(mode="json")
