"""
Co-parent pairing ledger.

A link between two accounts is stored as two ``AccountPairing`` rows, one per
direction, always written and deleted in the same transaction. An account may
be linked to any number of co-parents.
"""
import logging

from sqlalchemy import select, delete, and_, or_
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import InvalidInput, InvalidOperation, NotFound
from ..models.account import Account
from ..models.pairing import AccountPairing
from .invite_codes import normalize_code
from .account_service import get_by_invite_code

logger = logging.getLogger(__name__)

def _link_exists(db: Session, account_id: str, partner_id: str) -> bool:
    q = select(AccountPairing.id).where(
        AccountPairing.account_id == account_id,
        AccountPairing.partner_id == partner_id,
    )
    return db.execute(q).first() is not None

def paired_ids(db: Session, account_id: str) -> list[str]:
    q = (
        select(AccountPairing.partner_id)
        .where(AccountPairing.account_id == account_id)
        .order_by(AccountPairing.created_at, AccountPairing.id)
    )
    return list(db.execute(q).scalars())

def primary_paired_id(db: Session, account_id: str) -> str | None:
    ids = paired_ids(db, account_id)
    return ids[0] if ids else None

def are_paired(db: Session, account_id: str, other_id: str) -> bool:
    return _link_exists(db, account_id, other_id)

def list_paired(db: Session, account_id: str) -> list[Account]:
    q = (
        select(Account)
        .join(AccountPairing, AccountPairing.partner_id == Account.id)
        .where(AccountPairing.account_id == account_id)
        .order_by(AccountPairing.created_at, AccountPairing.id)
    )
    return list(db.execute(q).scalars())

def pair(db: Session, *, account_id: str, invite_code: str) -> Account:
    """Link ``account_id`` with the owner of ``invite_code`` and return that account."""
    code = normalize_code(invite_code or "")
    # fallback codes carry one extra digit
    if len(code) not in (settings.INVITE_CODE_LENGTH, settings.INVITE_CODE_LENGTH + 1):
        raise InvalidInput(f"Invite code must be {settings.INVITE_CODE_LENGTH} characters")

    target = get_by_invite_code(db, code)
    if not target:
        raise NotFound("Invite code not found", error_code="INVITE_CODE_NOT_FOUND")
    if target.id == account_id:
        raise InvalidOperation("Cannot pair an account with itself", error_code="SELF_PAIRING")
    if not db.get(Account, account_id):
        raise NotFound(f"Account {account_id} not found")

    try:
        added = 0
        for a, b in ((account_id, target.id), (target.id, account_id)):
            if not _link_exists(db, a, b):
                db.add(AccountPairing(account_id=a, partner_id=b))
                added += 1
        db.commit()
    except Exception as e:
        logger.error(f"Pairing {account_id} <-> {target.id} failed: {str(e)}", exc_info=True)
        db.rollback()
        raise

    if added:
        logger.info(f"Paired accounts {account_id} <-> {target.id}")
    else:
        logger.info(f"Accounts {account_id} <-> {target.id} already paired")
    db.refresh(target)
    return target

def unpair(db: Session, *, account_id: str, partner_id: str) -> None:
    stmt = delete(AccountPairing).where(
        or_(
            and_(AccountPairing.account_id == account_id, AccountPairing.partner_id == partner_id),
            and_(AccountPairing.account_id == partner_id, AccountPairing.partner_id == account_id),
        )
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except Exception as e:
        logger.error(f"Unpairing {account_id} <-> {partner_id} failed: {str(e)}", exc_info=True)
        db.rollback()
        raise
    if result.rowcount:
        logger.info(f"Unpaired accounts {account_id} <-> {partner_id}")

def circle_ids(db: Session, account_id: str) -> list[str]:
    """The account itself followed by every account paired with it."""
    return [account_id] + [i for i in paired_ids(db, account_id) if i != account_id]
