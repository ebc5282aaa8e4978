"""Range views: calendar status grid and minute totals."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user, query_date
from app.database import get_db
from app.models.user import User
from app.schemas.views import CalendarSummary, PeriodSummary
from app.services import calendar_service, summary_service

router = APIRouter(prefix="/children/{child_id}", tags=["summaries"])


@router.get("/calendar-summary", response_model=CalendarSummary)
async def get_calendar_summary(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    from_: Annotated[Optional[str], Query(alias="from")] = None,
    to: Optional[str] = None,
):
    start = query_date(from_, "from")
    end = query_date(to, "to")
    return await calendar_service.build_calendar_summary(db, user.id, str(child_id), start, end)


@router.get("/summary", response_model=PeriodSummary)
async def get_summary(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    from_: Annotated[Optional[str], Query(alias="from")] = None,
    to: Optional[str] = None,
):
    start = query_date(from_, "from")
    end = query_date(to, "to")
    return await summary_service.build_summary(db, user.id, str(child_id), start, end)
