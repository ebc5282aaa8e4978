from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, StrictBool, StrictInt, model_validator

from app.models.base import MAX_MINUTES

# Non-nullable columns a partial update may touch but never clear
_REQUIRED_ON_UPDATE = ("name", "subject", "default_minutes", "days_mask", "is_archived")


class TaskBase(BaseModel):
    name: str = Field(..., max_length=200)
    subject: str = Field(..., max_length=100)
    description: Optional[str] = None
    default_minutes: StrictInt = Field(15, ge=1, le=MAX_MINUTES)
    days_mask: StrictInt = Field(..., ge=1, le=127, description="Sun=1, Mon=2 .. Sat=64")
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TaskCreate(TaskBase):
    pass


class TaskReplace(TaskBase):
    is_archived: StrictBool = False


class TaskUpdate(BaseModel):
    """Partial update: each field is either left out (unchanged) or set to a value."""

    name: Optional[str] = Field(None, max_length=200)
    subject: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    default_minutes: Optional[StrictInt] = Field(None, ge=1, le=MAX_MINUTES)
    days_mask: Optional[StrictInt] = Field(None, ge=1, le=127)
    is_archived: Optional[StrictBool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for field in _REQUIRED_ON_UPDATE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TaskResponse(BaseModel):
    model_config = {"from_attributes": True}
    id: str
    child_id: str
    name: str
    subject: str
    description: Optional[str]
    default_minutes: int
    days_mask: int
    is_archived: bool
    start_date: Optional[date]
    end_date: Optional[date]
    sort_order: int


class TaskOrderRequest(BaseModel):
    task_ids: list[UUID]
