from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.common import MessageOut
from ...schemas.note import NoteCreate, NoteUpdate, NoteArchive, NoteOut, CommentCreate, CommentOut
from ...services.note_service import (
    list_visible_notes,
    get_visible_note,
    create_note,
    update_note,
    archive_note,
    delete_note,
    list_comments,
    add_comment,
    delete_comment,
)
from ...models.account import Account
from ..deps import get_db, get_current_account

router = APIRouter()


@router.get("/notes", response_model=list[NoteOut])
def my_notes(archived: bool = False, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return list_visible_notes(db, account_id=current.id, archived=archived)


@router.post("/notes", response_model=NoteOut, status_code=201)
def add_note(payload: NoteCreate, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return create_note(
        db,
        owner_id=current.id,
        text=payload.text,
        color=payload.color,
        rotation=payload.rotation,
        author=payload.author or current.name,
        tags=payload.tags,
    )


@router.put("/notes/{note_id}", response_model=NoteOut)
def edit_note(note_id: str, payload: NoteUpdate, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    get_visible_note(db, note_id=note_id, account_id=current.id)
    return update_note(db, note_id, text=payload.text, color=payload.color, tags=payload.tags)


@router.post("/notes/{note_id}/archive", response_model=NoteOut)
def archive(note_id: str, payload: NoteArchive | None = None, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    get_visible_note(db, note_id=note_id, account_id=current.id)
    archived = payload.archived if payload is not None else True
    return archive_note(db, note_id, archived=archived)


@router.delete("/notes/{note_id}", response_model=MessageOut)
def remove_note(note_id: str, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    get_visible_note(db, note_id=note_id, account_id=current.id)
    delete_note(db, note_id)
    return MessageOut(detail="Note removed")


@router.get("/notes/{note_id}/comments", response_model=list[CommentOut])
def note_comments(note_id: str, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    get_visible_note(db, note_id=note_id, account_id=current.id)
    return list_comments(db, note_id=note_id)


@router.post("/notes/{note_id}/comments", response_model=CommentOut, status_code=201)
def comment_on_note(note_id: str, payload: CommentCreate, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    get_visible_note(db, note_id=note_id, account_id=current.id)
    return add_comment(db, note_id=note_id, account_id=current.id, text=payload.text)


@router.delete("/comments/{comment_id}", response_model=MessageOut)
def remove_comment(comment_id: str, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    delete_comment(db, comment_id=comment_id, account_id=current.id)
    return MessageOut(detail="Comment removed")
