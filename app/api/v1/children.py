"""Child profile endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.child import ChildCreate, ChildReplace, ChildResponse, ChildUpdate
from app.services import child_service

router = APIRouter(prefix="/children", tags=["children"])


@router.get("", response_model=list[ChildResponse])
async def list_children(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await child_service.list_children(db, user.id)


@router.post("", response_model=ChildResponse, status_code=201)
async def create_child(
    body: ChildCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await child_service.create_child(db, user.id, body)


@router.patch("/{child_id}", response_model=ChildResponse)
async def update_child(
    child_id: UUID,
    body: ChildUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await child_service.update_child(db, user.id, str(child_id), body)


@router.put("/{child_id}", response_model=ChildResponse)
async def replace_child(
    child_id: UUID,
    body: ChildReplace,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    return await child_service.replace_child(db, user.id, str(child_id), body)


@router.delete("/{child_id}", status_code=204)
async def archive_child(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    await child_service.archive_child(db, user.id, str(child_id))
    return Response(status_code=204)
