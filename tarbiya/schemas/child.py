from datetime import date, datetime
from typing import List
from pydantic import BaseModel, Field
from .common import ORMModel

class ChildCreate(BaseModel):
    name: str = Field(min_length=1)
    birth_date: date
    gender: str | None = None
    photo_uri: str | None = None
    card_color: str | None = None
    invited_member_ids: List[str] = []
class ChildUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    birth_date: date | None = None
    gender: str | None = None
    photo_uri: str | None = None
    card_color: str | None = None
class ChildReorder(BaseModel):
    ordered_ids: List[str]
class ChildOut(ORMModel):
    id: str
    owner_id: str
    name: str
    birth_date: date
    gender: str | None = None
    photo_uri: str | None = None
    card_color: str | None = None
    display_order: int | None = None
    member_ids: List[str] = []
    created_at: datetime
    salah_enabled: bool = True
    fasting_enabled: bool = True
    track_quran_today: bool = False
    arabic_learned_letters: List[str] = []
    has_harakat: bool = False
    can_read_arabic: bool = False
    can_write_arabic: bool = False
    akhlaq_adab_checked: List[str] = []
class ChildSettingsUpdate(BaseModel):
    salah_enabled: bool | None = None
    fasting_enabled: bool | None = None
    track_quran_today: bool | None = None
    arabic_learned_letters: List[str] | None = None
    has_harakat: bool | None = None
    can_read_arabic: bool | None = None
    can_write_arabic: bool | None = None
    akhlaq_adab_checked: List[str] | None = None
