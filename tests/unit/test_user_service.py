"""Account registration and profile updates."""
from uuid import uuid4

import pytest

from app.errors import Conflict, InvalidRequest, NotFound
from app.schemas.user import UserCreate, UserUpdate
from app.services import user_service


@pytest.mark.asyncio
async def test_register_and_fetch(db):
    user = await user_service.register_user(db, UserCreate(email="Dad@Example.com", display_name="Dad"))
    fetched = await user_service.get_user(db, user.id)
    assert fetched.email == "dad@example.com"
    assert fetched.display_name == "Dad"


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(db):
    await user_service.register_user(db, UserCreate(email="dad@example.com"))
    with pytest.raises(Conflict):
        await user_service.register_user(db, UserCreate(email=" DAD@example.com"))


@pytest.mark.asyncio
async def test_unknown_user_not_found(db):
    with pytest.raises(NotFound):
        await user_service.get_user(db, str(uuid4()))


@pytest.mark.asyncio
async def test_profile_patch_keeps_unset_fields(db):
    user = await user_service.register_user(db, UserCreate(email="dad@example.com", display_name="Dad"))
    updated = await user_service.update_profile(db, user, UserUpdate(avatar_url="https://img/x.png"))
    assert (updated.display_name, updated.avatar_url) == ("Dad", "https://img/x.png")

    with pytest.raises(InvalidRequest):
        await user_service.update_profile(db, user, UserUpdate())
