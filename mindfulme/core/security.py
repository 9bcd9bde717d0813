"""Password hashing, JWT access tokens, refresh-token generation and signed cookie values."""

import secrets
from datetime import datetime
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from mindfulme.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_BYTES = 48
COOKIE_SIGNING_ALGORITHM = "HS256"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: str,
    role: str,
    issued_at: datetime,
    settings: "Settings",
) -> str:
    """Create a JWT access token with sub (user id), role, type, iat and exp."""
    expire = issued_at + settings.ACCESS_TOKEN_TTL
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> dict[str, Any]:
    """
    Verify the signature and required claims; return payload (sub, role, type, iat, exp).

    Expiry is NOT checked here: the caller compares `exp` against its own clock.
    Raises jwt.PyJWTError on a bad signature or missing claims.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp", "type"]},
    )


def new_refresh_token() -> str:
    """Opaque, URL-safe refresh token string."""
    return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)


def sign_cookie_value(value: str, settings: "Settings") -> str:
    """Wrap a cookie value in an HS256 JWS keyed by COOKIE_SECRET."""
    return jwt.encode(
        {"v": value},
        settings.COOKIE_SECRET.get_secret_value(),
        algorithm=COOKIE_SIGNING_ALGORITHM,
    )


def unsign_cookie_value(signed: str | None, settings: "Settings") -> str | None:
    """Return the original cookie value, or None if missing or tampered with."""
    if not signed:
        return None
    try:
        payload = jwt.decode(
            signed,
            settings.COOKIE_SECRET.get_secret_value(),
            algorithms=[COOKIE_SIGNING_ALGORITHM],
        )
    except jwt.PyJWTError:
        return None
    value = payload.get("v")
    return value if isinstance(value, str) else None
