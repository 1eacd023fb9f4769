from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .account import Account

class AccountPairing(Base):
    """One direction of a co-parent link. A link is always stored as two rows, (A, B) and (B, A)."""

    __table_args__ = (UniqueConstraint("account_id", "partner_id", name="uq_pairing_account_partner"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("account.id", ondelete="CASCADE"), index=True)
    partner_id: Mapped[str] = mapped_column(String(36), ForeignKey("account.id", ondelete="CASCADE"), index=True)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    account: Mapped["Account"] = relationship(back_populates="pairings", foreign_keys=[account_id])
    partner: Mapped["Account"] = relationship(foreign_keys=[partner_id])
