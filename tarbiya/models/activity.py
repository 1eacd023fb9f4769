from datetime import date
from enum import StrEnum
from sqlalchemy import String, DateTime, Date, ForeignKey, Integer, Text, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4

from .child import Child
from ..db.base_class import Base
from . import utcnow

PRAYERS = ("fajr", "dhuhr", "asr", "maghrib", "isha")

class FastingStatus(StrEnum):
    NO = "no"
    PARTIAL = "partial"
    FULL = "full"

class QuranStatus(StrEnum):
    NOT_STARTED = "not_started"
    LEARNING = "learning"
    MEMORIZED = "memorized"

class PrayerLog(Base):
    __table_args__ = (UniqueConstraint("child_id", "day", name="uq_prayer_child_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    fajr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    dhuhr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    asr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    maghrib: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    isha: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="prayer_logs")

class FastingLog(Base):
    __table_args__ = (UniqueConstraint("child_id", "day", name="uq_fasting_child_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[FastingStatus] = mapped_column(String(16), default=FastingStatus.NO, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="fasting_logs")

class QuranProgress(Base):
    __table_args__ = (UniqueConstraint("child_id", "surah_number", name="uq_quran_child_surah"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    surah_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[QuranStatus] = mapped_column(String(16), default=QuranStatus.NOT_STARTED, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="quran_progress")

class QuranDailyLog(Base):
    """Whether the child read Qur'an on a given day."""

    __table_args__ = (UniqueConstraint("child_id", "day", name="uq_quran_daily_child_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="quran_daily_logs")

class AqidahProgress(Base):
    __table_args__ = (UniqueConstraint("child_id", "item_key", name="uq_aqidah_child_item"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    item_key: Mapped[str] = mapped_column(String(64), nullable=False)
    checked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="aqidah_progress")

class AkhlaqNote(Base):
    __table_args__ = (UniqueConstraint("child_id", "item_key", name="uq_akhlaq_child_item"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    item_key: Mapped[str] = mapped_column(String(64), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="akhlaq_notes")

class ActivityCategory(StrEnum):
    GENERAL = "general"
    AKHLAQ = "akhlaq"
    ARABIC = "arabic"
    AQIDAH = "aqidah"
    QURAN = "quran"

# Categories that make up the education feed
EDUCATION_CATEGORIES = (ActivityCategory.AKHLAQ, ActivityCategory.ARABIC, ActivityCategory.AQIDAH, ActivityCategory.QURAN)

class ActivityLog(Base):
    """A dated journal line about a child, written by a parent or by a milestone."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    account_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("account.id", ondelete="SET NULL"))
    author_name: Mapped[str] = mapped_column(String(128), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[ActivityCategory] = mapped_column(String(16), default=ActivityCategory.GENERAL, index=True, nullable=False)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    child: Mapped["Child"] = relationship(back_populates="activity_logs")
