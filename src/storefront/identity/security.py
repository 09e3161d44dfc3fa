"""Password hashing and session tokens."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.config import get_settings
from storefront.shared.errors import Unauthenticated


@lru_cache
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return _password_context(get_settings().password_hash_rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash. Accounts without a hash never match."""
    if not hashed_password:
        return False
    return _password_context(get_settings().password_hash_rounds).verify(plain_password, hashed_password)


def create_session_token(account_id: str, expires_delta: timedelta | None = None) -> str:
    """Sign a session token whose subject is the account id."""
    settings = get_settings()
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.session_token_ttl_days))
    claims = {"sub": str(account_id), "iat": now, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> str:
    """Return the account id a session token was issued for."""
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise Unauthenticated("Not authorized, token failed") from None

    subject = claims.get("sub")
    if not subject:
        raise Unauthenticated("Not authorized, token failed")
    return subject
