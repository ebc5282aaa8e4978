"""MCP caller resolution via x_user_id."""
from uuid import uuid4

import pytest

from app.errors import InvalidRequest, Unauthorized
from app.mcp.auth import require_user_id, resolve_user
from app.mcp.tools.study_tools import _require_child_id


def test_require_user_id_canonicalizes():
    user_id = uuid4()
    assert require_user_id(str(user_id).upper()) == str(user_id)


@pytest.mark.parametrize("value", [None, "", "42"])
def test_require_user_id_rejects(value):
    with pytest.raises(Unauthorized):
        require_user_id(value)


@pytest.mark.asyncio
async def test_resolve_known_user(db, two_families):
    parent_a, _, _, _ = two_families
    user = await resolve_user(db, parent_a.id)
    assert user.id == parent_a.id


@pytest.mark.asyncio
async def test_resolve_unknown_user(db, two_families):
    with pytest.raises(Unauthorized):
        await resolve_user(db, str(uuid4()))


def test_tool_child_id_must_be_uuid():
    with pytest.raises(InvalidRequest):
        _require_child_id("child-1")
