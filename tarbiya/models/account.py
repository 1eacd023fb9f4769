from datetime import date
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Boolean, DateTime, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .pairing import AccountPairing
    from .child import Child, ChildMember
    from .note import Note
    from .auth import RefreshToken

class Account(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[Optional[str]] = mapped_column(String(128))
    birth_date: Mapped[Optional[date]] = mapped_column(Date)
    gender: Mapped[Optional[str]] = mapped_column(String(16))
    photo_url: Mapped[Optional[str]] = mapped_column(String(512))

    # 6 symbols, 7 when the generator had to fall back to an extra digit
    invite_code: Mapped[str] = mapped_column(String(8), unique=True, index=True, nullable=False)

    is_profile_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    pairings: Mapped[list["AccountPairing"]] = relationship(
        back_populates="account",
        cascade="all,delete-orphan",
        foreign_keys="AccountPairing.account_id",
        order_by="AccountPairing.created_at",
    )
    owned_children: Mapped[list["Child"]] = relationship(back_populates="owner", cascade="all,delete-orphan")
    child_memberships: Mapped[list["ChildMember"]] = relationship(back_populates="account", cascade="all,delete-orphan")
    notes: Mapped[list["Note"]] = relationship(back_populates="owner", cascade="all,delete-orphan")
    refresh_tokens: Mapped[list["RefreshToken"]] = relationship(back_populates="account", cascade="all,delete-orphan")

    @property
    def paired_account_ids(self) -> list[str]:
        return [p.partner_id for p in self.pairings]

    @property
    def primary_paired_id(self) -> str | None:
        ids = self.paired_account_ids
        return ids[0] if ids else None
