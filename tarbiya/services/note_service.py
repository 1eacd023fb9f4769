from sqlalchemy.orm import Session
from sqlalchemy import select
import logging
from ..core.errors import InvalidInput, NotFound, NotPermitted
from ..models.account import Account
from ..models.note import Note, Comment
from .account_service import DEFAULT_AUTHOR, display_name
from .pairing_service import circle_ids

logger = logging.getLogger(__name__)

def list_visible_notes(db: Session, *, account_id: str, archived: bool = False) -> list[Note]:
    # notes are shared with every paired account, no per-note membership
    owners = circle_ids(db, account_id)
    q = (
        select(Note)
        .where(Note.owner_id.in_(owners), Note.archived == archived)
        .order_by(Note.created_at.desc())
    )
    return list(db.execute(q).scalars())

def get_visible_note(db: Session, *, note_id: str, account_id: str) -> Note:
    note = db.get(Note, note_id)
    if not note or note.owner_id not in circle_ids(db, account_id):
        raise NotFound(f"Note {note_id} not found")
    return note

def create_note(
    db: Session, *,
    owner_id: str,
    text: str,
    color: str | None = None,
    rotation: str | None = None,
    author: str | None = None,
    tags: list[str] | None = None,
) -> Note:
    if not text or not text.strip():
        raise InvalidInput("Note text is required")
    n = Note(
        owner_id=owner_id,
        text=text,
        color=color or "#FFD3B6",
        rotation=rotation or "0",
        author=author or DEFAULT_AUTHOR,
        tags=list(tags or []),
    )
    db.add(n)
    db.commit()
    db.refresh(n)
    return n

def update_note(db: Session, note_id: str, *, text: str | None = None, color: str | None = None, tags: list[str] | None = None) -> Note:
    n = db.get(Note, note_id)
    if not n:
        raise NotFound(f"Note {note_id} not found")
    if text is not None:
        n.text = text
    if color is not None:
        n.color = color
    if tags is not None:
        n.tags = list(tags)
    db.commit()
    db.refresh(n)
    return n

def archive_note(db: Session, note_id: str, *, archived: bool = True) -> Note:
    n = db.get(Note, note_id)
    if not n:
        raise NotFound(f"Note {note_id} not found")
    n.archived = archived
    db.commit()
    db.refresh(n)
    logger.info(f"Note {note_id} archived={archived}")
    return n

def delete_note(db: Session, note_id: str) -> None:
    n = db.get(Note, note_id)
    if not n:
        raise NotFound(f"Note {note_id} not found")
    db.delete(n)
    db.commit()

def list_comments(db: Session, *, note_id: str) -> list[Comment]:
    q = select(Comment).where(Comment.note_id == note_id).order_by(Comment.created_at)
    return list(db.execute(q).scalars())

def add_comment(db: Session, *, note_id: str, account_id: str, text: str) -> Comment:
    text = (text or "").strip()
    if not text:
        raise InvalidInput("Comment text is required")
    account = db.get(Account, account_id)
    author_name = display_name(account)
    c = Comment(note_id=note_id, account_id=account_id, author_name=author_name, text=text)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c

def delete_comment(db: Session, *, comment_id: str, account_id: str) -> None:
    c = db.get(Comment, comment_id)
    if not c or c.note.owner_id not in circle_ids(db, account_id):
        raise NotFound(f"Comment {comment_id} not found")
    if c.account_id != account_id:
        raise NotPermitted("Only the author can delete a comment")
    db.delete(c)
    db.commit()
