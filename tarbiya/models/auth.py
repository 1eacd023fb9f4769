from __future__ import annotations
from sqlalchemy import String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .account import Account

class RefreshToken(Base):
    """
    Opaque refresh token. Each one can be exchanged once: rotation revokes it
    and points ``replaced_by_id`` at its successor.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("account.id", ondelete="CASCADE"), index=True)
    token: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    is_revoked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    revoked_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True))
    replaced_by_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("refreshtoken.id", ondelete="SET NULL"))
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True))

    account: Mapped["Account"] = relationship(back_populates="refresh_tokens")
