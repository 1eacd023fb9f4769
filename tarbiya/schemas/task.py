from datetime import date, datetime, time
from typing import List
from pydantic import BaseModel, Field
from .common import ORMModel
from ..models.task import TaskFrequency

class TaskCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    frequency: TaskFrequency = TaskFrequency.DAILY
    start_time: time | None = None
    end_time: time | None = None
    days: List[int] = []
class TaskUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    frequency: TaskFrequency | None = None
    start_time: time | None = None
    end_time: time | None = None
    days: List[int] | None = None
class TaskOut(ORMModel):
    id: str
    child_id: str
    created_by_id: str | None = None
    name: str
    frequency: TaskFrequency
    start_time: time | None = None
    end_time: time | None = None
    days: List[int] = []
    created_at: datetime
class CompletionIn(BaseModel):
    task_id: str
    completed: bool = True
    note: str | None = None
class CompletionOut(ORMModel):
    task_id: str
    child_id: str
    day: date
    completed: bool
    note: str | None = None
