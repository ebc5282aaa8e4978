from app.models.base import Base, TimestampMixin
from app.models.user import User
from app.models.child import Child
from app.models.task import Task
from app.models.study_log import StudyLog

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Child",
    "Task",
    "StudyLog",
]
