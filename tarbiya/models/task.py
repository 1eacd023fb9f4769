from __future__ import annotations
from datetime import date, time
from enum import StrEnum
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, Date, Time, ForeignKey, Text, Boolean, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4

from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .child import Child

class TaskFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"

class ChildTask(Base):
    """A custom routine item on a child's dashboard (brush teeth, homework, ...)."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    created_by_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("account.id", ondelete="SET NULL"))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    frequency: Mapped[TaskFrequency] = mapped_column(String(16), default=TaskFrequency.DAILY, nullable=False)
    start_time: Mapped[time | None] = mapped_column(Time)
    end_time: Mapped[time | None] = mapped_column(Time)
    # weekdays for weekly tasks, Monday = 0
    days: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    child: Mapped["Child"] = relationship(back_populates="tasks")
    completions: Mapped[list["TaskCompletion"]] = relationship(back_populates="task", cascade="all,delete-orphan")

    def is_due_on(self, day: date) -> bool:
        if self.frequency == TaskFrequency.WEEKLY:
            return day.weekday() in (self.days or [])
        return True

class TaskCompletion(Base):
    __table_args__ = (UniqueConstraint("task_id", "day", name="uq_completion_task_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    task_id: Mapped[str] = mapped_column(String(36), ForeignKey("childtask.id", ondelete="CASCADE"), index=True)
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    task: Mapped["ChildTask"] = relationship(back_populates="completions")
