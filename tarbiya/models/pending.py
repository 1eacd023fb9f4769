from enum import StrEnum
from typing import Any
from sqlalchemy import String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import uuid4

from .account import Account
from .child import Child
from ..db.base_class import Base
from . import utcnow


class ProposalKind(StrEnum):
    ADD_CHILD = "add_child"
    UPDATE_CHILD = "update_child"


class PendingStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PendingChange(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))

    proposer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("account.id", ondelete="CASCADE"),
        index=True,
    )
    target_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("account.id", ondelete="CASCADE"),
        index=True,
    )
    # set to NULL when the child is deleted; approval then has nothing to apply
    child_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("child.id", ondelete="SET NULL"),
        index=True,
    )

    action: Mapped[ProposalKind] = mapped_column(String(32), nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    status: Mapped[PendingStatus] = mapped_column(
        String(16),
        default=PendingStatus.PENDING,
        index=True,
        nullable=False,
    )

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
    resolved_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True))

    proposer: Mapped["Account"] = relationship(foreign_keys=[proposer_id])
    target: Mapped["Account"] = relationship(foreign_keys=[target_id])
    child: Mapped["Child | None"] = relationship()

    @property
    def is_resolved(self) -> bool:
        return self.status != PendingStatus.PENDING
