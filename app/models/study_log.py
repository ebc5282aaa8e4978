import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from app.models.child import Child
    from app.models.task import Task


class StudyLog(Base, TimestampMixin):
    """Minutes actually spent on a task on a date. Its existence means "done"."""

    __tablename__ = "study_logs"
    __table_args__ = (
        UniqueConstraint("child_id", "date", "task_id", name="uq_study_log_child_date_task"),
        CheckConstraint("minutes >= 1", name="ck_study_log_minutes"),
        Index("ix_study_logs_child_date", "child_id", "date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("children.id"), nullable=False)
    task_id: Mapped[str] = mapped_column(String(36), ForeignKey("tasks.id"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    child: Mapped["Child"] = relationship("Child", back_populates="study_logs")
    task: Mapped["Task"] = relationship("Task", back_populates="study_logs")
