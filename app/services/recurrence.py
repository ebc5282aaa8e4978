"""Recurrence evaluation: weekday masks, date ranges and strict date parsing.

``days_mask`` is a 7-bit field using a Sunday-start layout::

    Sun=1  Mon=2  Tue=4  Wed=8  Thu=16  Fri=32  Sat=64

The same helpers are used to validate masks on write, to decide which tasks are
due on a date, and to build the calendar, so the layout lives only here.
Dates are plain calendar dates; no timezone conversion is ever applied.
"""

import re
from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from app.errors import InvalidRequest
from app.models.task import Task

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
ALL_DAYS_MASK = 0b1111111

_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_WEEKDAY_INDEX = {
    **{label.lower(): i for i, label in enumerate(WEEKDAY_LABELS)},
    **{name.lower(): i for i, name in enumerate(WEEKDAY_NAMES)},
}


def sunday_index(day: date) -> int:
    """0=Sunday .. 6=Saturday (``date.weekday()`` is 0=Monday)."""
    return (day.weekday() + 1) % 7


def weekday_bit(day: date) -> int:
    return 1 << sunday_index(day)


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[sunday_index(day)]


def mask_from_weekdays(labels: Iterable[str]) -> int:
    """Build a mask from labels such as ``["Mon", "Wed"]`` or full names like ``"monday"``."""
    mask = 0
    for label in labels:
        index = _WEEKDAY_INDEX.get(str(label).strip().lower())
        if index is None:
            raise InvalidRequest(f"Unknown weekday: {label!r}")
        mask |= 1 << index
    return mask


def weekdays_from_mask(mask: int) -> list[str]:
    return [label for i, label in enumerate(WEEKDAY_LABELS) if mask & (1 << i)]


def validate_days_mask(mask: object) -> int:
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise InvalidRequest("days_mask must be an integer")
    if not 1 <= mask <= ALL_DAYS_MASK:
        raise InvalidRequest("days_mask must be between 1 and 127")
    return mask


def is_due(task: Task, day: date) -> bool:
    """True if the task is active, scheduled on this weekday and inside its date range."""
    if task.is_archived:
        return False
    if not task.days_mask & weekday_bit(day):
        return False
    if task.start_date is not None and task.start_date > day:
        return False
    if task.end_date is not None and task.end_date < day:
        return False
    return True


def parse_iso_date(value: object, field: str = "date") -> date:
    """Parse a strict ``YYYY-MM-DD`` string; rejects impossible dates like 2024-02-30."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidRequest(f"{field} must be a YYYY-MM-DD date")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRequest(f"{field} is not a valid calendar date") from None


def day_count(start: date, end: date) -> int:
    """Number of days in the inclusive range."""
    return (end - start).days + 1


def validate_range(start: date, end: date, max_days: int) -> int:
    if start > end:
        raise InvalidRequest("from must not be after to")
    count = day_count(start, end)
    if count > max_days:
        raise InvalidRequest(f"date range must not exceed {max_days} days")
    return count


def validate_task_window(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and start > end:
        raise InvalidRequest("start_date must not be after end_date")


def iter_days(start: date, end: date) -> Iterator[date]:
    # Offsets stop at end; end may be date.max
    for offset in range(day_count(start, end)):
        yield start + timedelta(days=offset)
