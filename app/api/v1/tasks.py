"""Study task endpoints: per-child listing/creation, reorder, and edits by task id."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.task import (
    TaskCreate,
    TaskOrderRequest,
    TaskReplace,
    TaskResponse,
    TaskUpdate,
)
from app.services import task_service

router = APIRouter(tags=["tasks"])


@router.get("/children/{child_id}/tasks", response_model=list[TaskResponse])
async def list_tasks(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    archived: bool = False,
):
    return await task_service.list_tasks(db, user.id, str(child_id), archived=archived)


@router.post("/children/{child_id}/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    child_id: UUID,
    body: TaskCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await task_service.create_task(db, user.id, str(child_id), body)


@router.put("/children/{child_id}/tasks/order", response_model=list[TaskResponse])
async def reorder_tasks(
    child_id: UUID,
    body: TaskOrderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await task_service.reorder_tasks(db, user.id, str(child_id), body.task_ids)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await task_service.update_task(db, user.id, str(task_id), body)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def replace_task(
    task_id: UUID,
    body: TaskReplace,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await task_service.replace_task(db, user.id, str(task_id), body)
