"""
Personal invite codes used as the co-parent pairing handshake.

Codes are short enough to read out loud or type on a phone, and drawn from
an alphabet without look-alike symbols (no 0/O, no 1/I).
"""
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import InvalidOperation
from ..models.account import Account

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_code(n: int | None = None) -> str:
    n = n if n is not None else settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(ALPHABET) for _ in range(n))


def code_exists(db: Session, code: str) -> bool:
    return db.execute(select(Account.id).where(Account.invite_code == code)).first() is not None


def generate_unique_invite_code(db: Session, *, attempts: int | None = None) -> str:
    """
    Return a code no account currently holds.

    After ``attempts`` collisions a random digit is appended to a fresh code.
    Fallback codes are one character longer and get the same number of
    attempts; if those collide too, ``InvalidOperation`` is raised.
    """
    attempts = attempts if attempts is not None else settings.INVITE_CODE_ATTEMPTS
    for _ in range(attempts):
        code = generate_code()
        if not code_exists(db, code):
            return code
    logger.warning(f"Invite code space exhausted after {attempts} attempts, using fallback code")
    for _ in range(attempts):
        code = generate_code() + str(secrets.randbelow(10))
        if not code_exists(db, code):
            return code
    logger.error(f"No free invite code after {2 * attempts} attempts")
    raise InvalidOperation("Could not allocate an invite code, try again", error_code="INVITE_CODE_EXHAUSTED")


def normalize_code(code: str) -> str:
    return code.strip().upper()
