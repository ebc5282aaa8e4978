"""Per-day endpoints: the merged daily view and the raw daily log set."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user, query_date
from app.database import get_db
from app.models.user import User
from app.schemas.study_log import DailyLogReplaceRequest, DailyLogReplaceResult, DailyLogsResponse
from app.schemas.views import DailyView
from app.services import daily_log_service, daily_view_service

router = APIRouter(prefix="/children/{child_id}", tags=["daily"])


@router.get("/daily-view", response_model=DailyView)
async def get_daily_view(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    date: Optional[str] = None,
):
    day = query_date(date)
    return await daily_view_service.build_daily_view(db, user.id, str(child_id), day)


@router.get("/daily", response_model=DailyLogsResponse)
async def get_daily_logs(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    date: Optional[str] = None,
):
    day = query_date(date)
    return await daily_log_service.get_daily_logs(db, user.id, str(child_id), day)


@router.put("/daily", response_model=DailyLogReplaceResult)
async def replace_daily_logs(
    child_id: UUID,
    body: DailyLogReplaceRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    date: Optional[str] = None,
):
    day = query_date(date)
    return await daily_log_service.replace_daily_logs(
        db, user.id, str(child_id), day, body.items
    )
