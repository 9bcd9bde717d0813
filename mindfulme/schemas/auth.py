"""Request/response schemas for auth and profile endpoints."""

from datetime import datetime
from typing import Any

from pydantic import Field

from mindfulme.core.constants import EMAIL_MAX_LEN, PASSWORD_MAX_LEN
from mindfulme.schemas.base import ApiModel


class RegisterRequest(ApiModel):
    """New account. Manager/admin roles need an organization code."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN)
    password: str = Field(..., max_length=PASSWORD_MAX_LEN)
    display_name: str
    role: str = "individual"
    organization_code: str | None = None


class LoginRequest(ApiModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class RefreshRequest(ApiModel):
    """Body fallback when the refresh token is not sent as a cookie."""

    refresh_token: str | None = None


class UserPublic(ApiModel):
    """User as returned to clients (no password hash)."""

    id: str
    email: str
    display_name: str
    role: str
    organization_id: str | None = None
    avatar_url: str | None = None
    timezone: str = "UTC"
    preferences: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class AuthResponse(ApiModel):
    """Issued credentials. The refresh token is also set as an httpOnly cookie."""

    user: UserPublic
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class ProfileUpdateRequest(ApiModel):
    display_name: str | None = None
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    avatar_url: str | None = None
    timezone: str | None = Field(default=None, max_length=64)
    preferences: dict[str, Any] | None = None


class PasswordChangeRequest(ApiModel):
    current_password: str
    new_password: str = Field(..., max_length=PASSWORD_MAX_LEN)


class AccountDeleteRequest(ApiModel):
    password: str


class UsersListResponse(ApiModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserPublic]
