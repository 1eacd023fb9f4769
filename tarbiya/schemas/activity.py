from datetime import date, datetime
from pydantic import BaseModel, Field
from .common import ORMModel
from ..models.activity import ActivityCategory, FastingStatus, QuranStatus

class PrayerLogIn(BaseModel):
    fajr: bool = False
    dhuhr: bool = False
    asr: bool = False
    maghrib: bool = False
    isha: bool = False
class PrayerLogOut(ORMModel):
    child_id: str
    day: date
    fajr: bool
    dhuhr: bool
    asr: bool
    maghrib: bool
    isha: bool
class FastingLogIn(BaseModel):
    status: FastingStatus = FastingStatus.NO
    note: str | None = None
class FastingLogOut(ORMModel):
    child_id: str
    day: date
    status: FastingStatus
    note: str | None = None
class QuranProgressIn(BaseModel):
    status: QuranStatus = QuranStatus.NOT_STARTED
class QuranProgressOut(ORMModel):
    child_id: str
    surah_number: int
    status: QuranStatus
class QuranDailyIn(BaseModel):
    completed: bool = False
    note: str | None = None
class QuranDailyOut(ORMModel):
    child_id: str
    day: date
    completed: bool
    note: str | None = None
class AqidahIn(BaseModel):
    checked: bool = False
    note: str | None = None
class AqidahOut(ORMModel):
    child_id: str
    item_key: str
    checked: bool
    note: str | None = None
class AkhlaqNoteIn(BaseModel):
    note: str
class AkhlaqNoteOut(ORMModel):
    child_id: str
    item_key: str
    note: str
    updated_at: datetime
class ActivityLogIn(BaseModel):
    text: str = Field(min_length=1)
    category: ActivityCategory = ActivityCategory.GENERAL
    day: date | None = None
class ActivityLogOut(ORMModel):
    id: str
    child_id: str
    account_id: str | None = None
    author_name: str
    text: str
    category: ActivityCategory
    day: date
    created_at: datetime
