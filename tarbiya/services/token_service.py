"""
Refresh token lifecycle.

Refresh tokens are single use. Exchanging one revokes it and issues a
successor. Presenting a token that was already exchanged means it leaked,
so every live token of that account is revoked.
"""
from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.auth import RefreshToken
from .security import create_access_token, new_refresh_token

logger = logging.getLogger(__name__)

def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)

def issue_refresh_token(db: Session, *, account_id: str, commit: bool = True) -> RefreshToken:
    rt = RefreshToken(
        account_id=account_id,
        token=new_refresh_token(),
        expires_at=datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_DAYS),
    )
    db.add(rt)
    if commit:
        db.commit()
        db.refresh(rt)
    return rt

def issue_tokens(db: Session, *, account_id: str) -> tuple[str, str]:
    """Return a fresh ``(access_token, refresh_token)`` pair."""
    rt = issue_refresh_token(db, account_id=account_id)
    return create_access_token(account_id), rt.token

def revoke_all(db: Session, *, account_id: str) -> int:
    result = db.execute(
        update(RefreshToken)
        .where(RefreshToken.account_id == account_id, RefreshToken.is_revoked.is_(False))
        .values(is_revoked=True, revoked_at=datetime.now(timezone.utc))
    )
    db.commit()
    return result.rowcount

def rotate_refresh_token(db: Session, *, token: str) -> tuple[str, str] | None:
    """
    Exchange a refresh token for a new pair. Returns None when the token is
    unknown, expired or already used.
    """
    rt = db.execute(select(RefreshToken).where(RefreshToken.token == token)).scalar_one_or_none()
    if not rt:
        return None
    if rt.is_revoked:
        revoked = revoke_all(db, account_id=rt.account_id)
        logger.warning(f"Reuse of refresh token {rt.id} for account {rt.account_id}, revoked {revoked} live tokens")
        return None
    now = datetime.now(timezone.utc)
    if rt.expires_at and _as_utc(rt.expires_at) < now:
        return None

    try:
        successor = issue_refresh_token(db, account_id=rt.account_id, commit=False)
        db.flush()
        rt.is_revoked = True
        rt.revoked_at = now
        rt.replaced_by_id = successor.id
        db.commit()
    except Exception as e:
        logger.error(f"Rotating refresh token {rt.id} failed: {str(e)}", exc_info=True)
        db.rollback()
        raise
    return create_access_token(rt.account_id), successor.token

def revoke_refresh_token(db: Session, *, token: str) -> bool:
    rt = db.execute(select(RefreshToken).where(RefreshToken.token == token)).scalar_one_or_none()
    if not rt or rt.is_revoked:
        return False
    rt.is_revoked = True
    rt.revoked_at = datetime.now(timezone.utc)
    db.commit()
    logger.info(f"Refresh token {rt.id} revoked for account {rt.account_id}")
    return True
