"""MCP study tools called end to end against the test database.

AsyncSessionLocal is patched to hand out the test session, so each tool runs its
real service code and commits into the in-memory database.
"""

from contextlib import contextmanager
from datetime import date
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.errors import InvalidRequest, NotFound, Unauthorized
from app.mcp.tools import study_tools
from app.services.daily_log_service import get_daily_logs


def _fn(tool):
    """Plain coroutine function behind a registered tool."""
    return getattr(tool, "fn", tool)


@contextmanager
def _tool_session(db):
    """Route the tools' AsyncSessionLocal to ``db`` and track its commits."""
    with (
        patch("app.mcp.tools.study_tools.AsyncSessionLocal") as mock_session_cls,
        patch.object(db, "commit", wraps=db.commit) as commit,
    ):
        mock_session_cls.return_value.__aenter__ = AsyncMock(return_value=db)
        mock_session_cls.return_value.__aexit__ = AsyncMock(return_value=False)
        yield commit


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_children(db, two_families):
    parent_a, _, child_a, _ = two_families
    with _tool_session(db):
        result = await _fn(study_tools.list_children)(x_user_id=parent_a.id)
    assert result == [{"id": child_a.id, "name": "Alice", "grade": "5", "is_active": True}]


@pytest.mark.asyncio
async def test_list_tasks_reports_weekday_labels(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    await make_task(child_a, "Reading", subject="English", days_mask=2 | 32)
    with _tool_session(db):
        result = await _fn(study_tools.list_tasks)(child_a.id, x_user_id=parent_a.id)
    assert [(t["name"], t["days_mask"], t["weekdays"]) for t in result] == [
        ("Reading", 34, ["Mon", "Fri"])
    ]


@pytest.mark.asyncio
async def test_unknown_caller_is_unauthorized(db, two_families):
    _, _, child_a, _ = two_families
    with _tool_session(db):
        with pytest.raises(Unauthorized):
            await _fn(study_tools.list_tasks)(child_a.id, x_user_id=str(uuid4()))


@pytest.mark.asyncio
async def test_other_family_child_is_not_found(db, two_families):
    _, parent_b, child_a, _ = two_families
    with _tool_session(db):
        with pytest.raises(NotFound):
            await _fn(study_tools.get_daily_view)(child_a.id, "2026-01-05", x_user_id=parent_b.id)


# ---------------------------------------------------------------------------
# add_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_task_builds_mask_from_weekdays_and_commits(db, two_families):
    parent_a, _, child_a, _ = two_families
    with _tool_session(db) as commit:
        result = await _fn(study_tools.add_task)(
            child_a.id,
            "Times tables",
            "Math",
            ["Mon", "wednesday"],
            default_minutes=25,
            start_date="2026-01-05",
            x_user_id=parent_a.id,
        )
    commit.assert_awaited_once()
    assert result["days_mask"] == 2 | 8
    assert result["weekdays"] == ["Mon", "Wed"]
    assert result["default_minutes"] == 25
    assert result["start_date"] == "2026-01-05"
    assert result["end_date"] is None
    assert result["sort_order"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("weekdays", [["Sunflower"], ["monkey"], []])
async def test_add_task_rejects_bad_weekdays(db, two_families, weekdays):
    parent_a, _, child_a, _ = two_families
    with _tool_session(db) as commit:
        with pytest.raises(InvalidRequest):
            await _fn(study_tools.add_task)(
                child_a.id, "Reading", "English", weekdays, x_user_id=parent_a.id
            )
    commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# save_daily_logs and the derived views
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_save_daily_logs_commits_and_feeds_daily_view(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    reading = await make_task(child_a, "Reading", subject="English", default_minutes=20)

    with _tool_session(db) as commit:
        saved = await _fn(study_tools.save_daily_logs)(
            child_a.id, "2026-01-05", [{"task_id": reading.id, "minutes": 35}], x_user_id=parent_a.id
        )
        commit.assert_awaited_once()
        view = await _fn(study_tools.get_daily_view)(child_a.id, "2026-01-05", x_user_id=parent_a.id)

    assert saved == {"date": "2026-01-05", "saved_count": 1}
    logs = await get_daily_logs(db, parent_a.id, child_a.id, date(2026, 1, 5))
    assert [(item.task_id, item.minutes) for item in logs.items] == [(reading.id, 35)]

    assert view["date"] == "2026-01-05"
    assert view["weekday"] == "Mon"
    assert [(t["task_id"], t["is_done"], t["minutes"]) for t in view["tasks"]] == [
        (reading.id, True, 35)
    ]


@pytest.mark.asyncio
async def test_save_daily_logs_rejects_bad_minutes_without_commit(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    reading = await make_task(child_a, "Reading")
    with _tool_session(db) as commit:
        with pytest.raises(InvalidRequest):
            await _fn(study_tools.save_daily_logs)(
                child_a.id, "2026-01-05", [{"task_id": reading.id, "minutes": 0}], x_user_id=parent_a.id
            )
    commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_calendar_summary_uses_from_key(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    reading = await make_task(child_a, "Reading")

    with _tool_session(db):
        await _fn(study_tools.save_daily_logs)(
            child_a.id, "2020-01-06", [{"task_id": reading.id, "minutes": 10}], x_user_id=parent_a.id
        )
        result = await _fn(study_tools.get_calendar_summary)(
            child_a.id, "2020-01-06", "2020-01-07", x_user_id=parent_a.id
        )

    assert result["from"] == "2020-01-06"
    assert result["to"] == "2020-01-07"
    assert "from_" not in result
    assert [(d["date"], d["status"]) for d in result["days"]] == [
        ("2020-01-06", "green"),
        ("2020-01-07", "red"),
    ]


@pytest.mark.asyncio
async def test_study_summary_totals(db, two_families, make_task):
    parent_a, _, child_a, _ = two_families
    reading = await make_task(child_a, "Reading", subject="English")

    with _tool_session(db):
        for day, minutes in (("2026-01-05", 20), ("2026-01-06", 30)):
            await _fn(study_tools.save_daily_logs)(
                child_a.id, day, [{"task_id": reading.id, "minutes": minutes}], x_user_id=parent_a.id
            )
        result = await _fn(study_tools.get_study_summary)(
            child_a.id, "2026-01-01", "2026-01-31", x_user_id=parent_a.id
        )

    assert result["from"] == "2026-01-01"
    assert result["total_minutes"] == 50
    assert result["by_subject"] == [{"subject": "English", "minutes": 50}]
    assert [t["minutes"] for t in result["by_task"]] == [50]


@pytest.mark.asyncio
async def test_bad_date_is_invalid_request(db, two_families):
    parent_a, _, child_a, _ = two_families
    with _tool_session(db):
        with pytest.raises(InvalidRequest):
            await _fn(study_tools.get_daily_view)(child_a.id, "2026-02-30", x_user_id=parent_a.id)
