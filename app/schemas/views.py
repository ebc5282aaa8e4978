"""Read views derived by the aggregation engine."""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DayStatus = Literal["white", "green", "yellow", "red"]


class DailyViewTask(BaseModel):
    task_id: str
    name: str
    subject: str
    description: Optional[str]
    default_minutes: int
    days_mask: int
    sort_order: int
    is_done: bool
    minutes: int


class DailyView(BaseModel):
    date: dt.date
    weekday: str
    tasks: list[DailyViewTask]


class CalendarDay(BaseModel):
    date: dt.date
    status: DayStatus
    total: int
    done: int


class _RangeView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: dt.date = Field(..., alias="from")
    to: dt.date


class CalendarSummary(_RangeView):
    days: list[CalendarDay]


class DayMinutes(BaseModel):
    date: dt.date
    minutes: int


class SubjectMinutes(BaseModel):
    subject: str
    minutes: int


class TaskMinutes(BaseModel):
    task_id: str
    name: str
    subject: str
    minutes: int


class PeriodSummary(_RangeView):
    total_minutes: int
    by_day: list[DayMinutes]
    by_subject: list[SubjectMinutes]
    by_task: list[TaskMinutes]
