"""FastAPI dependencies."""

from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_user
from app.database import get_db
from app.errors import Unauthorized
from app.models.user import User
from app.services.recurrence import parse_iso_date


async def get_user_id(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    return x_user_id


async def get_current_user(
    user_id: Annotated[Optional[str], Depends(get_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the caller from X-User-Id. The owner id is passed explicitly from here on."""
    if user_id is None:
        raise Unauthorized("X-User-Id header required")
    try:
        canonical = str(UUID(user_id))
    except ValueError:
        raise Unauthorized("X-User-Id must be a UUID") from None
    user = await crud_user.get(db, canonical)
    if user is None:
        raise Unauthorized("Unknown user")
    return user


def query_date(value: Optional[str], field: str = "date") -> date:
    """Query strings stay raw str so malformed dates become invalid_request, not 422."""
    return parse_iso_date(value, field)
