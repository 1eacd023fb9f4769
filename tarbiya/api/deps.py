from typing import Generator
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import jwt
from ..db.session import SessionLocal
from ..models.account import Account
from ..services.child_service import get_visible_child
from ..services.security import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_account(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Account:
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.PyJWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid token")

    account = db.get(Account, payload["sub"])
    if not account or not account.is_active:
        raise _unauthorized("Inactive or missing account")
    return account

def visible_child_id(
    child_id: str,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
) -> str:
    """Path dependency for per-child routes; non-members get a 404."""
    return get_visible_child(db, child_id=child_id, account_id=current.id).id
