"""Custom routine tasks on a child's dashboard and their daily completions."""
from datetime import date, time
import logging
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import InvalidInput, NotFound
from ..models.task import ChildTask, TaskCompletion, TaskFrequency

logger = logging.getLogger(__name__)

TASK_FIELDS = ("name", "frequency", "start_time", "end_time", "days")

def _check_schedule(frequency: TaskFrequency, start_time: time | None, end_time: time | None, days: Iterable[int]) -> list[int]:
    days = sorted(set(days or []))
    if any(d < 0 or d > 6 for d in days):
        raise InvalidInput("Task days must be weekdays between 0 (Monday) and 6 (Sunday)")
    if frequency == TaskFrequency.WEEKLY and not days:
        raise InvalidInput("Weekly tasks need at least one day")
    if start_time and end_time and end_time <= start_time:
        raise InvalidInput("Task end time must be after its start time")
    return days

def list_tasks(db: Session, *, child_id: str, day: date | None = None) -> list[ChildTask]:
    q = select(ChildTask).where(ChildTask.child_id == child_id).order_by(ChildTask.start_time, ChildTask.created_at)
    tasks = list(db.execute(q).scalars())
    if day is not None:
        tasks = [t for t in tasks if t.is_due_on(day)]
    return tasks

def get_task(db: Session, task_id: str) -> ChildTask:
    task = db.get(ChildTask, task_id)
    if not task:
        raise NotFound(f"Task {task_id} not found")
    return task

def create_task(
    db: Session, *,
    child_id: str,
    created_by_id: str,
    name: str,
    frequency: TaskFrequency = TaskFrequency.DAILY,
    start_time: time | None = None,
    end_time: time | None = None,
    days: Iterable[int] = (),
) -> ChildTask:
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Task name is required")
    days = _check_schedule(frequency, start_time, end_time, days)
    task = ChildTask(
        child_id=child_id,
        created_by_id=created_by_id,
        name=name,
        frequency=frequency,
        start_time=start_time,
        end_time=end_time,
        days=days,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info(f"Task created: id={task.id}, child={child_id}, frequency={frequency}")
    return task

def update_task(db: Session, task_id: str, patch: dict[str, Any]) -> ChildTask:
    task = get_task(db, task_id)
    values = {f: getattr(task, f) for f in TASK_FIELDS}
    for field, value in patch.items():
        if field not in TASK_FIELDS:
            continue
        # name and frequency cannot be cleared, times can
        if value is None and field in ("name", "frequency", "days"):
            continue
        values[field] = value
    name = (values["name"] or "").strip()
    if not name:
        raise InvalidInput("Task name is required")
    values["name"] = name
    values["days"] = _check_schedule(values["frequency"], values["start_time"], values["end_time"], values["days"])
    for field, value in values.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task

def delete_task(db: Session, task_id: str) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info(f"Task {task_id} deleted")

def list_completions(db: Session, *, child_id: str, day: date) -> list[TaskCompletion]:
    q = select(TaskCompletion).where(TaskCompletion.child_id == child_id, TaskCompletion.day == day)
    return list(db.execute(q).scalars())

def upsert_completion(
    db: Session, *, child_id: str, task_id: str, day: date, completed: bool, note: str | None = None
) -> TaskCompletion:
    task = db.get(ChildTask, task_id)
    # tasks of other children are reported as missing
    if not task or task.child_id != child_id:
        raise NotFound(f"Task {task_id} not found")
    row = db.execute(
        select(TaskCompletion).where(TaskCompletion.task_id == task_id, TaskCompletion.day == day)
    ).scalar_one_or_none()
    if not row:
        row = TaskCompletion(task_id=task_id, child_id=child_id, day=day)
        db.add(row)
    row.completed = completed
    row.note = note
    db.commit()
    db.refresh(row)
    return row
