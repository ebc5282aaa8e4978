import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt

from app.models.base import MAX_MINUTES


class DailyLogItem(BaseModel):
    task_id: UUID
    minutes: StrictInt = Field(..., ge=1, le=MAX_MINUTES)


class DailyLogReplaceRequest(BaseModel):
    items: list[DailyLogItem]


class DailyLogReplaceResult(BaseModel):
    date: dt.date
    saved_count: int


class LoggedItem(BaseModel):
    model_config = {"from_attributes": True}
    task_id: str
    minutes: int


class DailyLogsResponse(BaseModel):
    date: dt.date
    items: list[LoggedItem]
