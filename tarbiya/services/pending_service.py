"""
Pending change queue.

A co-parent who does not own a child can propose a structural change to it.
The proposal is stored as a ``PendingChange`` addressed to another account
and nothing else happens until that account approves it. Rows move from
``pending`` to ``approved`` or ``rejected`` and never move again.

Each ``ProposalKind`` has a typed payload and one approval handler. Adding a
kind means adding an enum member, a payload model and a handler; the check
at the bottom of this module fails at import time if a handler is missing.
"""
import logging
from typing import Any, Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import InvalidInput, InvalidOperation, NotFound
from ..models import utcnow
from ..models.account import Account
from ..models.child import Child
from ..models.pending import PendingChange, PendingStatus, ProposalKind
from ..schemas.pending import AddChildDetails, UpdateChildDetails
from .child_service import add_member, is_member, update_child
from .pairing_service import are_paired

logger = logging.getLogger(__name__)


class ProposalSpec:
    def __init__(
        self,
        payload: type[BaseModel],
        handler: Callable[[Session, PendingChange, Any], None],
        requires_child: bool,
        proposer_is_member: bool = False,
    ):
        self.payload = payload
        self.handler = handler
        self.requires_child = requires_child
        # the proposer must already see the child (edits), not just the target
        self.proposer_is_member = proposer_is_member


def _approve_add_child(db: Session, change: PendingChange, details: AddChildDetails) -> None:
    # both sides of an approved proposal end up sharing the child
    add_member(db, child_id=change.child_id, account_id=change.target_id, commit=False)
    add_member(db, child_id=change.child_id, account_id=change.proposer_id, commit=False)


def _approve_update_child(db: Session, change: PendingChange, details: UpdateChildDetails) -> None:
    update_child(db, change.child_id, details.model_dump(exclude_unset=True), commit=False)


PROPOSALS: dict[ProposalKind, ProposalSpec] = {
    ProposalKind.ADD_CHILD: ProposalSpec(AddChildDetails, _approve_add_child, requires_child=True),
    ProposalKind.UPDATE_CHILD: ProposalSpec(
        UpdateChildDetails, _approve_update_child, requires_child=True, proposer_is_member=True
    ),
}


def parse_action(action: str) -> ProposalKind:
    try:
        return ProposalKind(action)
    except ValueError:
        known = ", ".join(k.value for k in ProposalKind)
        raise InvalidInput(f"Unknown action '{action}' (expected one of: {known})", error_code="UNKNOWN_ACTION")


def parse_details(kind: ProposalKind, details: dict[str, Any] | None) -> BaseModel:
    try:
        return PROPOSALS[kind].payload.model_validate(details or {})
    except ValidationError as e:
        raise InvalidInput(f"Invalid details for '{kind.value}': {e.errors()[0]['msg']}", error_code="INVALID_DETAILS")


def propose(
    db: Session, *,
    proposer_id: str,
    target_id: str,
    child_id: str | None,
    action: str,
    details: dict[str, Any] | None = None,
) -> PendingChange:
    kind = parse_action(action)
    payload = parse_details(kind, details)
    spec = PROPOSALS[kind]

    if proposer_id == target_id:
        raise InvalidInput("A proposal cannot be addressed to its proposer")
    if spec.requires_child and not child_id:
        raise InvalidInput(f"'{kind.value}' requires a child_id")
    if not db.get(Account, target_id):
        raise NotFound(f"Account {target_id} not found")
    if child_id and not db.get(Child, child_id):
        raise NotFound(f"Child {child_id} not found")
    if not are_paired(db, proposer_id, target_id):
        raise InvalidOperation("Proposals can only be sent to a paired co-parent", error_code="NOT_PAIRED")
    if child_id:
        # hidden children are reported as missing
        if not is_member(db, child_id=child_id, account_id=target_id):
            raise NotFound(f"Child {child_id} not found")
        if spec.proposer_is_member and not is_member(db, child_id=child_id, account_id=proposer_id):
            raise NotFound(f"Child {child_id} not found")

    change = PendingChange(
        proposer_id=proposer_id,
        target_id=target_id,
        child_id=child_id,
        action=kind,
        details=payload.model_dump(mode="json", exclude_unset=True),
        status=PendingStatus.PENDING,
    )
    db.add(change)
    db.commit()
    db.refresh(change)
    logger.info(f"Pending change {change.id} proposed: {kind.value} by {proposer_id} for {target_id}, child={child_id}")
    return change


def get_pending(db: Session, pending_id: str) -> PendingChange:
    change = db.get(PendingChange, pending_id)
    if not change:
        raise NotFound(f"Pending change {pending_id} not found")
    return change


def list_pending_for(db: Session, *, target_id: str) -> list[PendingChange]:
    q = (
        select(PendingChange)
        .where(PendingChange.target_id == target_id, PendingChange.status == PendingStatus.PENDING)
        .order_by(PendingChange.created_at.desc())
    )
    return list(db.execute(q).scalars())


def list_proposed_by(db: Session, *, proposer_id: str) -> list[PendingChange]:
    q = (
        select(PendingChange)
        .where(PendingChange.proposer_id == proposer_id)
        .order_by(PendingChange.created_at.desc())
    )
    return list(db.execute(q).scalars())


def _resolve(change: PendingChange, status: PendingStatus) -> None:
    change.status = status
    change.resolved_at = utcnow()


def approve(db: Session, pending_id: str) -> PendingChange:
    """
    Approve a pending change and run its side effect.

    Approving a row that is already approved or rejected returns it unchanged.
    If the child was deleted in the meantime the row is still approved, with
    nothing applied.
    """
    change = get_pending(db, pending_id)
    if change.is_resolved:
        logger.info(f"Pending change {pending_id} already {change.status}, nothing to do")
        return change

    kind = ProposalKind(change.action)
    spec = PROPOSALS[kind]
    try:
        if spec.requires_child and not (change.child_id and db.get(Child, change.child_id)):
            applied = False
        else:
            spec.handler(db, change, spec.payload.model_validate(change.details or {}))
            applied = True
        _resolve(change, PendingStatus.APPROVED)
        db.commit()
    except Exception as e:
        logger.error(f"Approving pending change {pending_id} failed: {str(e)}", exc_info=True)
        db.rollback()
        raise
    db.refresh(change)
    logger.info(f"Pending change {pending_id} approved ({kind.value}, applied={applied})")
    return change


def reject(db: Session, pending_id: str) -> PendingChange:
    change = get_pending(db, pending_id)
    if change.is_resolved:
        logger.info(f"Pending change {pending_id} already {change.status}, nothing to do")
        return change
    _resolve(change, PendingStatus.REJECTED)
    db.commit()
    db.refresh(change)
    logger.info(f"Pending change {pending_id} rejected")
    return change


_missing = set(ProposalKind) - set(PROPOSALS)
if _missing:
    raise RuntimeError(f"No approval handler for proposal kinds: {sorted(_missing)}")
