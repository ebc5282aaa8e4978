from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from app.models.child import Child
    from app.models.study_log import StudyLog


class Task(Base, TimestampMixin):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("default_minutes >= 1", name="ck_task_default_minutes"),
        CheckConstraint("days_mask BETWEEN 1 AND 127", name="ck_task_days_mask"),
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="ck_task_date_range",
        ),
        Index("ix_tasks_child_archived", "child_id", "is_archived"),
        Index("ix_tasks_child_sort_order", "child_id", "sort_order"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("children.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    default_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    # Sunday-start bits: Sun=1, Mon=2, Tue=4, Wed=8, Thu=16, Fri=32, Sat=64
    days_mask: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    child: Mapped["Child"] = relationship("Child", back_populates="tasks")
    study_logs: Mapped[list["StudyLog"]] = relationship("StudyLog", back_populates="task")
