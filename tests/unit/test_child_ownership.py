"""Child profiles are scoped to their owner; archived children stay addressable."""
import pytest

from app.errors import InvalidRequest, NotFound
from app.schemas.child import ChildCreate, ChildReplace, ChildUpdate
from app.services import child_service, task_service


@pytest.mark.asyncio
async def test_list_returns_only_own_children(db, two_families):
    parent_a, parent_b, child_a, child_b = two_families
    ids_a = {c.id for c in await child_service.list_children(db, parent_a.id)}
    ids_b = {c.id for c in await child_service.list_children(db, parent_b.id)}
    assert ids_a == {child_a.id}
    assert ids_b == {child_b.id}


@pytest.mark.asyncio
async def test_other_family_child_not_found(db, two_families):
    parent_a, _, _, child_b = two_families
    with pytest.raises(NotFound):
        await child_service.get_owned_child(db, parent_a.id, child_b.id)
    with pytest.raises(NotFound):
        await child_service.update_child(db, parent_a.id, child_b.id, ChildUpdate(name="X"))
    with pytest.raises(NotFound):
        await child_service.archive_child(db, parent_a.id, child_b.id)


@pytest.mark.asyncio
async def test_create_trims_name_and_blank_grade(db, two_families):
    parent_a, _, _, _ = two_families
    child = await child_service.create_child(
        db, parent_a.id, ChildCreate(name="  Dana ", grade="  ")
    )
    assert child.name == "Dana"
    assert child.grade is None
    assert child.is_active is True
    assert child.user_id == parent_a.id


@pytest.mark.asyncio
async def test_create_rejects_blank_name(db, two_families):
    parent_a, _, _, _ = two_families
    with pytest.raises(InvalidRequest):
        await child_service.create_child(db, parent_a.id, ChildCreate(name="   "))


@pytest.mark.asyncio
async def test_patch_keeps_unset_fields(db, two_families):
    parent_a, _, child_a, _ = two_families
    updated = await child_service.update_child(db, parent_a.id, child_a.id, ChildUpdate(name="Alicia"))
    assert (updated.name, updated.grade) == ("Alicia", "5")


@pytest.mark.asyncio
async def test_replace_clears_grade(db, two_families):
    parent_a, _, child_a, _ = two_families
    replaced = await child_service.replace_child(db, parent_a.id, child_a.id, ChildReplace(name="Alice"))
    assert replaced.grade is None


@pytest.mark.asyncio
async def test_archived_child_hidden_from_list_but_addressable(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    await make_task(child_a, "Reading")

    await child_service.archive_child(db, parent_a.id, child_a.id)

    assert await child_service.list_children(db, parent_a.id) == []
    child = await child_service.get_owned_child(db, parent_a.id, child_a.id)
    assert child.is_active is False
    tasks = await task_service.list_tasks(db, parent_a.id, child_a.id)
    assert [t.name for t in tasks] == ["Reading"]


@pytest.mark.asyncio
async def test_archived_child_can_be_reactivated(db, two_families):
    parent_a, _, child_a, _ = two_families
    await child_service.archive_child(db, parent_a.id, child_a.id)
    await child_service.update_child(db, parent_a.id, child_a.id, ChildUpdate(is_active=True))
    assert [c.id for c in await child_service.list_children(db, parent_a.id)] == [child_a.id]
