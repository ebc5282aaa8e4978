"""Account records. Credentials live with the upstream identity provider."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_user
from app.errors import Conflict, InvalidRequest, NotFound
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


async def register_user(db: AsyncSession, body: UserCreate) -> User:
    if await crud_user.get_by_email(db, body.email):
        raise Conflict("email already exists")
    try:
        user = await crud_user.create(db, obj_in=body)
    except IntegrityError as exc:
        # Lost a race with a concurrent signup for the same address
        await db.rollback()
        raise Conflict("email already exists") from exc
    logger.info("Registered user %s", user.id)
    return user


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await crud_user.get(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def update_profile(db: AsyncSession, user: User, body: UserUpdate) -> User:
    patch = body.model_dump(exclude_unset=True)
    if not patch:
        raise InvalidRequest("No fields to update")
    return await crud_user.update(db, db_obj=user, obj_in=patch)
