from datetime import date
from typing import Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.study_log import StudyLog
from app.models.task import Task


class CRUDStudyLog:
    """Study-log rows are written a whole day at a time, so there is no per-row update."""

    def __init__(self, model: type[StudyLog]):
        self.model = model

    async def get_for_date(
        self, db: AsyncSession, owner_id: str, child_id: str, day: date
    ) -> Sequence[StudyLog]:
        result = await db.execute(
            select(StudyLog)
            .where(
                StudyLog.child_id == child_id,
                StudyLog.user_id == owner_id,
                StudyLog.date == day,
            )
            # rows of one replace share created_at
            .order_by(StudyLog.task_id)
        )
        return result.scalars().all()

    async def get_in_range(
        self, db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
    ) -> Sequence[StudyLog]:
        result = await db.execute(
            select(StudyLog).where(
                StudyLog.child_id == child_id,
                StudyLog.user_id == owner_id,
                StudyLog.date >= start,
                StudyLog.date <= end,
            )
        )
        return result.scalars().all()

    async def replace_for_date(
        self,
        db: AsyncSession,
        owner_id: str,
        child_id: str,
        day: date,
        items: list[tuple[str, int]],
    ) -> int:
        """Delete the day's rows, then bulk-insert one row per (task_id, minutes).

        Runs inside the caller's transaction; committing is the caller's job.
        """
        await db.execute(
            delete(StudyLog).where(
                StudyLog.child_id == child_id,
                StudyLog.user_id == owner_id,
                StudyLog.date == day,
            )
        )
        if items:
            await db.execute(
                insert(StudyLog),
                [
                    {
                        "user_id": owner_id,
                        "child_id": child_id,
                        "task_id": task_id,
                        "date": day,
                        "minutes": minutes,
                    }
                    for task_id, minutes in items
                ],
            )
        await db.flush()
        return len(items)

    # ------------------------------------------------------------------
    # Aggregates for the period summary
    # ------------------------------------------------------------------

    def _in_range(self, owner_id: str, child_id: str, start: date, end: date) -> tuple:
        return (
            StudyLog.child_id == child_id,
            StudyLog.user_id == owner_id,
            StudyLog.date >= start,
            StudyLog.date <= end,
        )

    async def total_minutes(
        self, db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
    ) -> int:
        result = await db.execute(
            select(func.coalesce(func.sum(StudyLog.minutes), 0)).where(
                *self._in_range(owner_id, child_id, start, end)
            )
        )
        return int(result.scalar_one())

    async def minutes_by_day(
        self, db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
    ) -> list[tuple[date, int]]:
        result = await db.execute(
            select(StudyLog.date, func.sum(StudyLog.minutes))
            .where(*self._in_range(owner_id, child_id, start, end))
            .group_by(StudyLog.date)
            .order_by(StudyLog.date)
        )
        return [(row[0], int(row[1])) for row in result.all()]

    async def minutes_by_subject(
        self, db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
    ) -> list[tuple[str, int]]:
        minutes = func.sum(StudyLog.minutes).label("minutes")
        result = await db.execute(
            select(Task.subject, minutes)
            .join(Task, StudyLog.task_id == Task.id)
            .where(*self._in_range(owner_id, child_id, start, end))
            .group_by(Task.subject)
            .order_by(minutes.desc(), Task.subject)
        )
        return [(row[0], int(row[1])) for row in result.all()]

    async def minutes_by_task(
        self, db: AsyncSession, owner_id: str, child_id: str, start: date, end: date
    ) -> list[tuple[str, str, str, int]]:
        minutes = func.sum(StudyLog.minutes).label("minutes")
        result = await db.execute(
            select(StudyLog.task_id, Task.name, Task.subject, minutes)
            .join(Task, StudyLog.task_id == Task.id)
            .where(*self._in_range(owner_id, child_id, start, end))
            .group_by(StudyLog.task_id, Task.name, Task.subject)
            .order_by(minutes.desc(), Task.name, StudyLog.task_id)
        )
        return [(row[0], row[1], row[2], int(row[3])) for row in result.all()]


crud_study_log = CRUDStudyLog(StudyLog)
