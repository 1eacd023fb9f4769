from datetime import date

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from ...schemas.activity import (
    PrayerLogIn,
    PrayerLogOut,
    FastingLogIn,
    FastingLogOut,
    QuranProgressIn,
    QuranProgressOut,
    QuranDailyIn,
    QuranDailyOut,
    AqidahIn,
    AqidahOut,
    AkhlaqNoteIn,
    AkhlaqNoteOut,
    ActivityLogIn,
    ActivityLogOut,
)
from ...schemas.common import MessageOut
from ...services.activity_service import (
    SURAH_COUNT,
    get_prayer_log,
    upsert_prayer_log,
    get_fasting_log,
    upsert_fasting_log,
    list_quran_progress,
    upsert_quran_progress,
    get_quran_daily,
    upsert_quran_daily,
    list_aqidah,
    upsert_aqidah,
    list_akhlaq_notes,
    set_akhlaq_note,
    delete_akhlaq_note,
    add_activity_log,
    list_activity_logs,
    education_feed,
)
from ...models.account import Account
from ..deps import get_db, get_current_account, visible_child_id

router = APIRouter()


@router.get("/{child_id}/prayers/{day}", response_model=PrayerLogOut)
def read_prayers(day: date, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return PrayerLogOut.model_validate(get_prayer_log(db, child_id=child_id, day=day))


@router.put("/{child_id}/prayers/{day}", response_model=PrayerLogOut)
def write_prayers(day: date, payload: PrayerLogIn, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    log = upsert_prayer_log(db, child_id=child_id, day=day, prayers=payload.model_dump())
    return PrayerLogOut.model_validate(log)


@router.get("/{child_id}/fasting/{day}", response_model=FastingLogOut)
def read_fasting(day: date, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return FastingLogOut.model_validate(get_fasting_log(db, child_id=child_id, day=day))


@router.put("/{child_id}/fasting/{day}", response_model=FastingLogOut)
def write_fasting(day: date, payload: FastingLogIn, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    log = upsert_fasting_log(db, child_id=child_id, day=day, status=payload.status, note=payload.note)
    return FastingLogOut.model_validate(log)


@router.get("/{child_id}/quran", response_model=list[QuranProgressOut])
def read_quran(child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_quran_progress(db, child_id=child_id)


@router.put("/{child_id}/quran/{surah_number}", response_model=QuranProgressOut)
def write_quran(
    payload: QuranProgressIn,
    surah_number: int = Path(ge=1, le=SURAH_COUNT),
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
):
    return upsert_quran_progress(db, child_id=child_id, surah_number=surah_number, status=payload.status)


@router.get("/{child_id}/quran-daily/{day}", response_model=QuranDailyOut)
def read_quran_daily(day: date, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return QuranDailyOut.model_validate(get_quran_daily(db, child_id=child_id, day=day))


@router.put("/{child_id}/quran-daily/{day}", response_model=QuranDailyOut)
def write_quran_daily(day: date, payload: QuranDailyIn, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    log = upsert_quran_daily(db, child_id=child_id, day=day, completed=payload.completed, note=payload.note)
    return QuranDailyOut.model_validate(log)


@router.get("/{child_id}/aqidah", response_model=list[AqidahOut])
def read_aqidah(child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_aqidah(db, child_id=child_id)


@router.put("/{child_id}/aqidah/{item_key}", response_model=AqidahOut)
def write_aqidah(
    item_key: str,
    payload: AqidahIn,
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    return upsert_aqidah(
        db, child_id=child_id, account_id=current.id, item_key=item_key, checked=payload.checked, note=payload.note
    )


@router.get("/{child_id}/akhlaq-notes", response_model=list[AkhlaqNoteOut])
def read_akhlaq_notes(child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_akhlaq_notes(db, child_id=child_id)


# A blank note clears the item
@router.put("/{child_id}/akhlaq-notes/{item_key}", response_model=AkhlaqNoteOut | MessageOut)
def write_akhlaq_note(
    item_key: str,
    payload: AkhlaqNoteIn,
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
):
    row = set_akhlaq_note(db, child_id=child_id, item_key=item_key, note=payload.note)
    if row is None:
        return MessageOut(detail="Note removed")
    return AkhlaqNoteOut.model_validate(row)


@router.delete("/{child_id}/akhlaq-notes/{item_key}", response_model=MessageOut)
def remove_akhlaq_note(item_key: str, child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    delete_akhlaq_note(db, child_id=child_id, item_key=item_key)
    return MessageOut(detail="Note removed")


@router.get("/{child_id}/activity", response_model=list[ActivityLogOut])
def read_activity(child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return list_activity_logs(db, child_id=child_id)


@router.post("/{child_id}/activity", response_model=ActivityLogOut, status_code=201)
def write_activity(
    payload: ActivityLogIn,
    child_id: str = Depends(visible_child_id),
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    entry = add_activity_log(
        db, child_id=child_id, account_id=current.id, text=payload.text, category=payload.category, day=payload.day
    )
    return ActivityLogOut.model_validate(entry)


@router.get("/{child_id}/education-feed", response_model=list[ActivityLogOut])
def read_education_feed(child_id: str = Depends(visible_child_id), db: Session = Depends(get_db)):
    return education_feed(db, child_id=child_id)
