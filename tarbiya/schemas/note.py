from datetime import datetime
from typing import List
from pydantic import BaseModel, Field
from .common import ORMModel

class NoteCreate(BaseModel):
    text: str = Field(min_length=1)
    color: str | None = None
    rotation: str | None = None
    author: str | None = None
    tags: List[str] = []
class NoteUpdate(BaseModel):
    text: str | None = Field(default=None, min_length=1)
    color: str | None = None
    tags: List[str] | None = None
class NoteArchive(BaseModel):
    archived: bool = True
class NoteOut(ORMModel):
    id: str
    owner_id: str
    text: str
    color: str
    rotation: str
    author: str
    tags: List[str] = []
    archived: bool
    created_at: datetime
class CommentCreate(BaseModel):
    text: str
class CommentOut(ORMModel):
    id: str
    note_id: str
    account_id: str
    author_name: str
    text: str
    created_at: datetime
