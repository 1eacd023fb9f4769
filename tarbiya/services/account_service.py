from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import select
import logging
from ..core.errors import InvalidInput, NotFound
from ..models.account import Account
from .invite_codes import generate_unique_invite_code, normalize_code
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)

def create_account(db: Session, *, email: str, password: str) -> Account:
    email = email.strip().lower()
    if get_by_email(db, email):
        raise InvalidInput("Email already registered", error_code="EMAIL_TAKEN")
    try:
        account = Account(
            email=email,
            hashed_password=hash_password(password),
            invite_code=generate_unique_invite_code(db),
        )
        db.add(account)
        db.commit()
        db.refresh(account)
        logger.info(f"Account created: id={account.id}, invite_code={account.invite_code}")
        return account
    except Exception as e:
        logger.error(f"Error creating account with email {email}: {str(e)}", exc_info=True)
        db.rollback()
        raise

def get_by_email(db: Session, email: str) -> Account | None:
    return db.execute(select(Account).where(Account.email == email.strip().lower())).scalar_one_or_none()

def get_by_invite_code(db: Session, code: str) -> Account | None:
    return db.execute(select(Account).where(Account.invite_code == normalize_code(code))).scalar_one_or_none()

def get_account(db: Session, account_id: str) -> Account:
    account = db.get(Account, account_id)
    if not account:
        raise NotFound(f"Account {account_id} not found")
    return account

def authenticate(db: Session, email: str, password: str) -> Account | None:
    account = get_by_email(db, email)
    if not account or not account.is_active:
        return None
    if not verify_password(password, account.hashed_password):
        return None
    return account

def update_profile(db: Session, *, account_id: str, name: str, birth_date: date, gender: str, photo_url: str | None) -> Account:
    account = get_account(db, account_id)
    account.name = name
    account.birth_date = birth_date
    account.gender = gender
    if photo_url is not None:
        account.photo_url = photo_url
    account.is_profile_complete = True
    db.commit()
    db.refresh(account)
    return account

def set_premium(db: Session, *, account_id: str, is_premium: bool) -> Account:
    account = get_account(db, account_id)
    account.is_premium = is_premium
    db.commit()
    db.refresh(account)
    logger.info(f"Account {account_id} premium={is_premium}")
    return account

DEFAULT_AUTHOR = "Genitore"

def display_name(account: Account | None) -> str:
    """Name shown next to comments and journal entries."""
    return account.name if account and account.name else DEFAULT_AUTHOR
