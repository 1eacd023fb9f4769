from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, Date, ForeignKey, Integer, Boolean, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .account import Account
    from .activity import PrayerLog, FastingLog, QuranProgress, QuranDailyLog, AqidahProgress, AkhlaqNote, ActivityLog
    from .task import ChildTask

class Child(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    owner_id: Mapped[str] = mapped_column(String(36), ForeignKey("account.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str | None] = mapped_column(String(16))
    photo_uri: Mapped[str | None] = mapped_column(String(512))
    card_color: Mapped[str | None] = mapped_column(String(16))
    display_order: Mapped[int | None] = mapped_column(Integer)

    # dashboard tracking settings
    salah_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    fasting_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    track_quran_today: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    arabic_learned_letters: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    has_harakat: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    can_read_arabic: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    can_write_arabic: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    akhlaq_adab_checked: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner: Mapped["Account"] = relationship(back_populates="owned_children")
    members: Mapped[list["ChildMember"]] = relationship(
        back_populates="child",
        cascade="all,delete-orphan",
        order_by="ChildMember.position",
    )
    prayer_logs: Mapped[list["PrayerLog"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    fasting_logs: Mapped[list["FastingLog"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    quran_progress: Mapped[list["QuranProgress"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    quran_daily_logs: Mapped[list["QuranDailyLog"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    aqidah_progress: Mapped[list["AqidahProgress"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    akhlaq_notes: Mapped[list["AkhlaqNote"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    activity_logs: Mapped[list["ActivityLog"]] = relationship(back_populates="child", cascade="all,delete-orphan")
    tasks: Mapped[list["ChildTask"]] = relationship(back_populates="child", cascade="all,delete-orphan")

    @property
    def member_ids(self) -> list[str]:
        return [m.account_id for m in self.members]

class ChildMember(Base):
    __table_args__ = (UniqueConstraint("child_id", "account_id", name="uq_member_child_account"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    child_id: Mapped[str] = mapped_column(String(36), ForeignKey("child.id", ondelete="CASCADE"), index=True)
    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("account.id", ondelete="CASCADE"), index=True)
    # 0 is always the owner
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    child: Mapped["Child"] = relationship(back_populates="members")
    account: Mapped["Account"] = relationship(back_populates="child_memberships")
