"""Authentication service: registration, login, refresh-token rotation, logout and access-token checks."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jwt

from mindfulme.core.constants import (
    DISPLAY_NAME_MAX_LEN,
    DISPLAY_NAME_MIN_LEN,
    EMAIL_MAX_LEN,
    EMAIL_RE,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from mindfulme.core.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from mindfulme.core.policy import ROLE_VALUES, Role
from mindfulme.core.security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from mindfulme.models import User

if TYPE_CHECKING:
    from mindfulme.core.config import Settings
    from mindfulme.storage import Storage

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

# Roles that may only self-register with a valid organization code.
ORG_GATED_ROLES = frozenset({Role.MANAGER.value, Role.ADMIN.value})


@dataclass(frozen=True)
class TokenPair:
    """Credentials issued at login, registration and refresh."""

    access_token: str
    refresh_token: str
    user: User


def _utcnow() -> datetime:
    return datetime.now(UTC)


def validate_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not normalized or len(normalized) > EMAIL_MAX_LEN or not EMAIL_RE.match(normalized):
        raise ValidationError("Invalid email address")
    return normalized


def validate_password(password: str) -> None:
    if not password or len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LEN} characters long"
        )
    if len(password) > PASSWORD_MAX_LEN:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_LEN} characters long")


def validate_display_name(display_name: str) -> str:
    name = (display_name or "").strip()
    if not DISPLAY_NAME_MIN_LEN <= len(name) <= DISPLAY_NAME_MAX_LEN:
        raise ValidationError(
            f"Display name must be between {DISPLAY_NAME_MIN_LEN} and {DISPLAY_NAME_MAX_LEN} characters"
        )
    return name


class AuthService:
    """
    Issues and validates credentials against the configured storage.

    `clock` returns the current aware UTC time; every expiry decision goes
    through it, so tests can move time forward.
    """

    def __init__(
        self,
        storage: "Storage",
        settings: "Settings",
        clock: Callable[[], datetime] | None = None,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self.storage = storage
        self.settings = settings
        self.clock = clock or _utcnow
        self._bcrypt_rounds = bcrypt_rounds

    def _hash(self, password: str) -> str:
        rounds = self._bcrypt_rounds or self.settings.BCRYPT_ROUNDS
        return hash_password(password, rounds=rounds)

    def issue_tokens(self, user: User) -> TokenPair:
        """Mint an access token and a fresh refresh token for `user`."""
        now = self.clock()
        access = create_access_token(user.id, user.role, now, self.settings)
        refresh = self.storage.create_refresh_token(
            user.id, now + self.settings.REFRESH_TOKEN_TTL
        )
        return TokenPair(access_token=access, refresh_token=refresh, user=user)

    def register(
        self,
        email: str,
        password: str,
        display_name: str,
        role: str = Role.INDIVIDUAL.value,
        org_code: str | None = None,
    ) -> User:
        """Create an account. Manager/admin roles require a valid organization code."""
        email = validate_email(email)
        validate_password(password)
        display_name = validate_display_name(display_name)
        if role not in ROLE_VALUES:
            raise ValidationError(f"Role must be one of {sorted(ROLE_VALUES)}")

        org_code = (org_code or "").strip() or None
        if role in ORG_GATED_ROLES and org_code is None:
            raise ValidationError(f"Organization code required for role '{role}'")
        org = None
        if org_code is not None:
            org = self.storage.get_organization_by_code(org_code)
            if org is None:
                raise ForbiddenError("Invalid organization code")

        user = self.storage.create_user(
            email=email,
            password_hash=self._hash(password),
            display_name=display_name,
            role=role,
            organization_id=org.id if org else None,
        )
        if org is not None and role == Role.INDIVIDUAL.value:
            self.storage.add_employee(user.id, org.id)
        logger.info("User registered", extra={"user_id": user.id, "role": role})
        return user

    def login(self, email: str, password: str) -> TokenPair:
        user = self.storage.get_user_by_email((email or "").strip().lower())
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Failed login", extra={"email": (email or "")[:320]})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.info("Login for deactivated account", extra={"user_id": user.id})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        logger.info("User logged in", extra={"user_id": user.id})
        return self.issue_tokens(user)

    def refresh(self, refresh_token: str | None) -> TokenPair:
        """Exchange a refresh token for a new pair; the presented token is consumed."""
        if not refresh_token:
            raise UnauthorizedError("Refresh token required")
        try:
            user_id = self.storage.consume_refresh_token(refresh_token, self.clock())
        except UnauthorizedError:
            logger.warning("Rejected refresh token (unknown, expired or replayed)")
            raise
        try:
            user = self.storage.get_user(user_id)
        except NotFoundError:
            raise UnauthorizedError("User not found")
        if not user.is_active:
            raise UnauthorizedError("Account is disabled")
        return self.issue_tokens(user)

    def logout(self, refresh_token: str | None) -> None:
        """Revoke the refresh token. Unknown or missing tokens are not an error."""
        if refresh_token:
            self.storage.delete_refresh_token(refresh_token)

    def authenticate(self, access_token: str | None) -> User:
        """Return the active user behind a valid, unexpired access token."""
        if not access_token:
            raise UnauthorizedError("Access token required")
        try:
            payload = decode_access_token(access_token, self.settings)
        except jwt.PyJWTError:
            raise UnauthorizedError("Invalid token")
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise UnauthorizedError("Invalid token")
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or self.clock().timestamp() >= exp:
            raise UnauthorizedError("Token expired")
        sub = payload.get("sub")
        if not sub or not isinstance(sub, str):
            raise UnauthorizedError("Invalid token payload")
        try:
            user = self.storage.get_user(sub)
        except NotFoundError:
            raise UnauthorizedError("User not found")
        if not user.is_active:
            raise UnauthorizedError("User not found")
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password or "", user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        validate_password(new_password)
        self.storage.update_user(user.id, password_hash=self._hash(new_password))
        self.storage.delete_user_refresh_tokens(user.id)
        logger.info("Password changed", extra={"user_id": user.id})

    def deactivate(self, user: User, password: str) -> None:
        """Soft-disable the account and revoke every session."""
        if not verify_password(password or "", user.password_hash):
            raise UnauthorizedError("Incorrect password")
        self.storage.update_user(user.id, is_active=False)
        revoked = self.storage.delete_user_refresh_tokens(user.id)
        logger.info("Account deactivated", extra={"user_id": user.id, "sessions_revoked": revoked})
