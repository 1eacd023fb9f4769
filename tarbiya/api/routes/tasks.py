from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.common import MessageOut
from ...schemas.task import TaskCreate, TaskUpdate, TaskOut, CompletionIn, CompletionOut
from ...services.child_service import get_visible_child
from ...services.task_service import (
    list_tasks,
    get_task,
    create_task,
    update_task,
    delete_task,
    list_completions,
    upsert_completion,
)
from ...models.account import Account
from ..deps import get_db, get_current_account, visible_child_id

router = APIRouter()


@router.get("/children/{child_id}/tasks", response_model=list[TaskOut])
def read_tasks(day: date | None = None, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_tasks(db, child_id=child_id, day=day)


@router.post("/children/{child_id}/tasks", response_model=TaskOut, status_code=201)
def add_task(
    payload: TaskCreate,
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    task = create_task(db, child_id=child_id, created_by_id=current.id, **payload.model_dump())
    return TaskOut.model_validate(task)


def visible_task_id(
    task_id: str,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
) -> str:
    task = get_task(db, task_id)
    get_visible_child(db, child_id=task.child_id, account_id=current.id)
    return task.id


@router.put("/tasks/{task_id}", response_model=TaskOut)
def edit_task(payload: TaskUpdate, task_id: str = Depends(visible_task_id), db: Session = Depends(get_db)):
    return TaskOut.model_validate(update_task(db, task_id, payload.model_dump(exclude_unset=True)))


@router.delete("/tasks/{task_id}", response_model=MessageOut)
def remove_task(task_id: str = Depends(visible_task_id), db: Session = Depends(get_db)):
    delete_task(db, task_id)
    return MessageOut(detail="Task removed")


@router.get("/children/{child_id}/completions/{day}", response_model=list[CompletionOut])
def read_completions(day: date, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_completions(db, child_id=child_id, day=day)


@router.put("/children/{child_id}/completions/{day}", response_model=CompletionOut)
def write_completion(
    day: date,
    payload: CompletionIn,
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
):
    row = upsert_completion(
        db, child_id=child_id, task_id=payload.task_id, day=day, completed=payload.completed, note=payload.note
    )
    return CompletionOut.model_validate(row)
