from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.errors import NotPermitted
from ...schemas.pending import ProposalIn, PendingOut
from ...services.pending_service import (
    propose,
    get_pending,
    list_pending_for,
    list_proposed_by,
    approve,
    reject,
)
from ...models.account import Account
from ..deps import get_db, get_current_account

router = APIRouter()


def _ensure_target(db: Session, pending_id: str, current: Account) -> None:
    change = get_pending(db, pending_id)
    if change.target_id != current.id:
        raise NotPermitted("Only the account a change is addressed to can approve or reject it")


@router.post("", response_model=PendingOut, status_code=201)
def propose_change(payload: ProposalIn, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return propose(
        db,
        proposer_id=current.id,
        target_id=payload.target_account_id,
        child_id=payload.child_id,
        action=payload.action,
        details=payload.details,
    )


@router.get("", response_model=list[PendingOut])
def my_approvals(db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return list_pending_for(db, target_id=current.id)


@router.get("/outgoing", response_model=list[PendingOut])
def my_proposals(db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return list_proposed_by(db, proposer_id=current.id)


@router.post("/{pending_id}/approve", response_model=PendingOut)
def approve_change(pending_id: str, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    _ensure_target(db, pending_id, current)
    return approve(db, pending_id)


@router.post("/{pending_id}/reject", response_model=PendingOut)
def reject_change(pending_id: str, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    _ensure_target(db, pending_id, current)
    return reject(db, pending_id)
