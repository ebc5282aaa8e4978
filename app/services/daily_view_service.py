"""Daily view: the tasks due on one date merged with what was logged that day."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_child, crud_study_log, crud_task
from app.errors import NotFound
from app.schemas.views import DailyView, DailyViewTask
from app.services.recurrence import is_due, weekday_label


async def build_daily_view(
    db: AsyncSession, owner_id: str, child_id: str, day: date
) -> DailyView:
    if not await crud_child.exists(db, owner_id, child_id):
        raise NotFound("Child not found")

    tasks = await crud_task.get_active_for_child(db, owner_id, child_id)
    due = sorted(
        (t for t in tasks if is_due(t, day)),
        key=lambda t: (t.sort_order, t.subject, t.name),
    )

    logs = await crud_study_log.get_for_date(db, owner_id, child_id, day)
    minutes_by_task = {log.task_id: log.minutes for log in logs}

    entries = []
    for task in due:
        logged = minutes_by_task.get(task.id)
        entries.append(
            DailyViewTask(
                task_id=task.id,
                name=task.name,
                subject=task.subject,
                description=task.description,
                default_minutes=task.default_minutes,
                days_mask=task.days_mask,
                sort_order=task.sort_order,
                is_done=logged is not None,
                minutes=logged if logged is not None else task.default_minutes,
            )
        )

    return DailyView(date=day, weekday=weekday_label(day), tasks=entries)
