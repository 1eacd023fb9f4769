from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging
from ...schemas.auth import SignupIn, TokenOut
from ...schemas.account import AccountOut
from ...schemas.common import MessageOut
from ...services.account_service import create_account, authenticate
from ...services.token_service import issue_tokens, rotate_refresh_token, revoke_refresh_token
from ..deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()
@router.post("/signup", response_model=AccountOut, status_code=201)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    logger.info(f"Signup attempt for email: {payload.email}")
    # EMAIL_TAKEN surfaces as a 400 through the domain error handler
    account = create_account(db, email=payload.email, password=payload.password)
    return AccountOut.model_validate(account)

@router.post("/token", response_model=TokenOut)
def token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    account = authenticate(db, email=form.username, password=form.password)
    if not account:
        logger.warning(f"Failed login for {form.username}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect credentials")
    access, refresh_token = issue_tokens(db, account_id=account.id)
    return TokenOut(access_token=access, refresh_token=refresh_token)

# Refresh tokens are single use: the response carries the replacement
@router.post("/refresh", response_model=TokenOut)
def refresh(refresh_token: str, db: Session = Depends(get_db)):
    pair = rotate_refresh_token(db, token=refresh_token)
    if not pair:
        raise HTTPException(401, "Invalid or expired refresh")
    access, successor = pair
    return TokenOut(access_token=access, refresh_token=successor)

@router.post("/logout", response_model=MessageOut)
def logout(refresh_token: str, db: Session = Depends(get_db)):
    revoke_refresh_token(db, token=refresh_token)
    return MessageOut(detail="Logged out")
