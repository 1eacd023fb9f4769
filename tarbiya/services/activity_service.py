from datetime import date, datetime, timezone
import logging
from sqlalchemy.orm import Session
from sqlalchemy import select
from ..core.errors import InvalidInput
from ..models.account import Account
from ..models.activity import (
    PRAYERS, PrayerLog, FastingLog, FastingStatus, QuranProgress, QuranStatus,
    QuranDailyLog, AqidahProgress, AkhlaqNote, ActivityLog, ActivityCategory, EDUCATION_CATEGORIES,
)
from .account_service import display_name

logger = logging.getLogger(__name__)

SURAH_COUNT = 114

def get_prayer_log(db: Session, *, child_id: str, day: date) -> PrayerLog:
    log = db.execute(select(PrayerLog).where(PrayerLog.child_id == child_id, PrayerLog.day == day)).scalar_one_or_none()
    if log:
        return log
    # unsaved, all prayers unchecked
    return PrayerLog(child_id=child_id, day=day, **{p: False for p in PRAYERS})

def upsert_prayer_log(db: Session, *, child_id: str, day: date, prayers: dict[str, bool]) -> PrayerLog:
    log = db.execute(select(PrayerLog).where(PrayerLog.child_id == child_id, PrayerLog.day == day)).scalar_one_or_none()
    if not log:
        log = PrayerLog(child_id=child_id, day=day)
        db.add(log)
    for p in PRAYERS:
        setattr(log, p, bool(prayers.get(p, False)))
    db.commit()
    db.refresh(log)
    return log

def get_fasting_log(db: Session, *, child_id: str, day: date) -> FastingLog:
    log = db.execute(select(FastingLog).where(FastingLog.child_id == child_id, FastingLog.day == day)).scalar_one_or_none()
    return log or FastingLog(child_id=child_id, day=day, status=FastingStatus.NO, note=None)

def upsert_fasting_log(db: Session, *, child_id: str, day: date, status: FastingStatus, note: str | None) -> FastingLog:
    log = db.execute(select(FastingLog).where(FastingLog.child_id == child_id, FastingLog.day == day)).scalar_one_or_none()
    if not log:
        log = FastingLog(child_id=child_id, day=day)
        db.add(log)
    log.status = status
    log.note = note
    db.commit()
    db.refresh(log)
    return log

def list_quran_progress(db: Session, *, child_id: str) -> list[QuranProgress]:
    q = select(QuranProgress).where(QuranProgress.child_id == child_id).order_by(QuranProgress.surah_number)
    return list(db.execute(q).scalars())

def upsert_quran_progress(db: Session, *, child_id: str, surah_number: int, status: QuranStatus) -> QuranProgress:
    if not 1 <= surah_number <= SURAH_COUNT:
        raise InvalidInput(f"Surah number must be between 1 and {SURAH_COUNT}")
    row = db.execute(
        select(QuranProgress).where(QuranProgress.child_id == child_id, QuranProgress.surah_number == surah_number)
    ).scalar_one_or_none()
    if not row:
        row = QuranProgress(child_id=child_id, surah_number=surah_number)
        db.add(row)
    row.status = status
    db.commit()
    db.refresh(row)
    return row

def get_quran_daily(db: Session, *, child_id: str, day: date) -> QuranDailyLog:
    log = db.execute(
        select(QuranDailyLog).where(QuranDailyLog.child_id == child_id, QuranDailyLog.day == day)
    ).scalar_one_or_none()
    return log or QuranDailyLog(child_id=child_id, day=day, completed=False, note=None)

def upsert_quran_daily(db: Session, *, child_id: str, day: date, completed: bool, note: str | None) -> QuranDailyLog:
    log = db.execute(
        select(QuranDailyLog).where(QuranDailyLog.child_id == child_id, QuranDailyLog.day == day)
    ).scalar_one_or_none()
    if not log:
        log = QuranDailyLog(child_id=child_id, day=day)
        db.add(log)
    log.completed = completed
    log.note = note
    db.commit()
    db.refresh(log)
    return log

def _item_key(item_key: str) -> str:
    key = (item_key or "").strip()
    if not key:
        raise InvalidInput("Item key is required")
    return key

def list_aqidah(db: Session, *, child_id: str) -> list[AqidahProgress]:
    q = select(AqidahProgress).where(AqidahProgress.child_id == child_id).order_by(AqidahProgress.item_key)
    return list(db.execute(q).scalars())

def upsert_aqidah(
    db: Session, *, child_id: str, account_id: str, item_key: str, checked: bool, note: str | None
) -> AqidahProgress:
    """Save one aqidah item. Checking it for the first time writes a journal entry."""
    key = _item_key(item_key)
    row = db.execute(
        select(AqidahProgress).where(AqidahProgress.child_id == child_id, AqidahProgress.item_key == key)
    ).scalar_one_or_none()
    if not row:
        row = AqidahProgress(child_id=child_id, item_key=key, checked=False)
        db.add(row)
    newly_checked = checked and not row.checked
    row.checked = checked
    row.note = note
    if newly_checked:
        add_activity_log(
            db, child_id=child_id, account_id=account_id, text=key, category=ActivityCategory.AQIDAH, commit=False
        )
    db.commit()
    db.refresh(row)
    return row

def list_akhlaq_notes(db: Session, *, child_id: str) -> list[AkhlaqNote]:
    q = select(AkhlaqNote).where(AkhlaqNote.child_id == child_id).order_by(AkhlaqNote.item_key)
    return list(db.execute(q).scalars())

def set_akhlaq_note(db: Session, *, child_id: str, item_key: str, note: str | None) -> AkhlaqNote | None:
    """Upsert the note for one akhlaq item. A blank note deletes it and returns None."""
    key = _item_key(item_key)
    text = (note or "").strip()
    if not text:
        delete_akhlaq_note(db, child_id=child_id, item_key=key)
        return None
    row = db.execute(
        select(AkhlaqNote).where(AkhlaqNote.child_id == child_id, AkhlaqNote.item_key == key)
    ).scalar_one_or_none()
    if not row:
        row = AkhlaqNote(child_id=child_id, item_key=key)
        db.add(row)
    row.note = text
    db.commit()
    db.refresh(row)
    return row

def delete_akhlaq_note(db: Session, *, child_id: str, item_key: str) -> bool:
    row = db.execute(
        select(AkhlaqNote).where(AkhlaqNote.child_id == child_id, AkhlaqNote.item_key == item_key)
    ).scalar_one_or_none()
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True

def add_activity_log(
    db: Session, *,
    child_id: str,
    account_id: str | None,
    text: str,
    category: ActivityCategory = ActivityCategory.GENERAL,
    day: date | None = None,
    commit: bool = True,
) -> ActivityLog:
    text = (text or "").strip()
    if not text:
        raise InvalidInput("Activity text is required")
    account = db.get(Account, account_id) if account_id else None
    entry = ActivityLog(
        child_id=child_id,
        account_id=account_id,
        author_name=display_name(account),
        text=text,
        category=category,
        day=day or datetime.now(timezone.utc).date(),
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    logger.info(f"Activity logged for child {child_id}: category={category}")
    return entry

def list_activity_logs(db: Session, *, child_id: str) -> list[ActivityLog]:
    q = (
        select(ActivityLog)
        .where(ActivityLog.child_id == child_id)
        .order_by(ActivityLog.day.desc(), ActivityLog.created_at.desc())
    )
    return list(db.execute(q).scalars())

def education_feed(db: Session, *, child_id: str) -> list[ActivityLog]:
    q = (
        select(ActivityLog)
        .where(ActivityLog.child_id == child_id, ActivityLog.category.in_(EDUCATION_CATEGORIES))
        .order_by(ActivityLog.created_at.desc())
    )
    return list(db.execute(q).scalars())
