from datetime import datetime, timedelta, timezone
import secrets
from passlib.context import CryptContext
import jwt
from ..core.config import settings

ALGORITHM = "HS256"
# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

def _truncate(p: str) -> str:
    return p.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")

def hash_password(p: str) -> str:
    return pwd_context.hash(_truncate(p))

def verify_password(p: str, hashed: str) -> bool:
    return pwd_context.verify(_truncate(p), hashed)

def create_access_token(account_id: str, minutes: int | None = None) -> str:
    exp_min = minutes if minutes is not None else settings.ACCESS_TOKEN_MIN
    now = datetime.now(timezone.utc)
    payload = {"sub": account_id, "iat": now, "exp": now + timedelta(minutes=exp_min), "type": "access"}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: str) -> dict:
    """Raises ``jwt.PyJWTError`` for bad signatures, expired tokens and non-access tokens."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM], options={"require": ["sub", "exp"]})
    if payload.get("type", "access") != "access":
        raise jwt.InvalidTokenError("Not an access token")
    return payload

def new_refresh_token() -> str:
    return secrets.token_urlsafe(48)
