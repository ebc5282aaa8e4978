"""Period summary: minute totals over a date range, sliced by day, subject and task."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.crud import crud_child, crud_study_log
from app.errors import NotFound
from app.schemas.views import DayMinutes, PeriodSummary, SubjectMinutes, TaskMinutes
from app.services.recurrence import validate_range


async def build_summary(
    db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
) -> PeriodSummary:
    validate_range(start, end, get_settings().SUMMARY_MAX_DAYS)
    if not await crud_child.exists(db, owner_id, child_id):
        raise NotFound("Child not found")

    total = await crud_study_log.total_minutes(db, owner_id, child_id, start, end)
    by_day = await crud_study_log.minutes_by_day(db, owner_id, child_id, start, end)
    by_subject = await crud_study_log.minutes_by_subject(db, owner_id, child_id, start, end)
    by_task = await crud_study_log.minutes_by_task(db, owner_id, child_id, start, end)

    return PeriodSummary(
        from_=start,
        to=end,
        total_minutes=total,
        by_day=[DayMinutes(date=d, minutes=m) for d, m in by_day],
        by_subject=[SubjectMinutes(subject=s, minutes=m) for s, m in by_subject],
        by_task=[
            TaskMinutes(task_id=task_id, name=name, subject=subject, minutes=m)
            for task_id, name, subject, m in by_task
        ],
    )
