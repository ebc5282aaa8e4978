"""Calendar summary: per-day completion status over a bounded date range."""

import logging
from collections import defaultdict
from datetime import UTC, date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.crud import crud_child, crud_study_log, crud_task
from app.errors import NotFound
from app.models.task import Task
from app.schemas.views import CalendarDay, CalendarSummary, DayStatus
from app.services.recurrence import is_due, iter_days, validate_range

logger = logging.getLogger(__name__)


def today_in_reference_tz() -> date:
    """Current date in CALENDAR_TIMEZONE; decides which days count as the future."""
    tz_name = get_settings().CALENDAR_TIMEZONE
    tz = UTC if tz_name.upper() == "UTC" else ZoneInfo(tz_name)
    return datetime.now(tz).date()


def day_status(day: date, today: date, total: int, done: int) -> DayStatus:
    if day > today:
        return "white"
    if total == 0:
        return "white"
    if done == total:
        return "green"
    if done > 0:
        return "yellow"
    return "red"


def summarize_days(
    tasks: list[Task],
    logged_by_date: dict[date, set[str]],
    start: date,
    end: date,
    today: date,
) -> list[CalendarDay]:
    days = []
    for day in iter_days(start, end):
        due_ids = [t.id for t in tasks if is_due(t, day)]
        logged = logged_by_date.get(day, set())
        done = sum(1 for task_id in due_ids if task_id in logged)
        total = len(due_ids)
        days.append(
            CalendarDay(
                date=day,
                status=day_status(day, today, total, done),
                total=total,
                done=done,
            )
        )
    return days


async def build_calendar_summary(
    db: AsyncSession,
    owner_id: str,
    child_id: str,
    start: date,
    end: date,
    today: Optional[date] = None,
) -> CalendarSummary:
    validate_range(start, end, get_settings().CALENDAR_MAX_DAYS)
    if not await crud_child.exists(db, owner_id, child_id):
        raise NotFound("Child not found")

    tasks = list(await crud_task.get_active_for_child(db, owner_id, child_id))
    logs = await crud_study_log.get_in_range(db, owner_id, child_id, start, end)

    logged_by_date: dict[date, set[str]] = defaultdict(set)
    for log in logs:
        logged_by_date[log.date].add(log.task_id)

    today = today or today_in_reference_tz()
    logger.debug(
        "Calendar for child %s %s..%s: %d tasks, %d logs", child_id, start, end, len(tasks), len(logs)
    )
    days = summarize_days(tasks, logged_by_date, start, end, today)
    return CalendarSummary(from_=start, to=end, days=days)
