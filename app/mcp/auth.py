"""MCP caller resolution: x_user_id must name an existing parent account."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_user
from app.errors import Unauthorized
from app.models.user import User

logger = logging.getLogger(__name__)


def require_user_id(user_id: Optional[str]) -> str:
    if not user_id:
        raise Unauthorized("x_user_id is required")
    try:
        return str(UUID(user_id))
    except ValueError:
        raise Unauthorized("x_user_id must be a UUID") from None


async def resolve_user(db: AsyncSession, user_id: Optional[str]) -> User:
    """Return the calling user or raise Unauthorized."""
    canonical = require_user_id(user_id)
    user = await crud_user.get(db, canonical)
    if user is None:
        logger.info("MCP call with unknown user id %s", canonical)
        raise Unauthorized("Unknown user")
    return user
