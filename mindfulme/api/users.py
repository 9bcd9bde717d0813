"""Profile and account management for the signed-in user, plus the admin user list."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from mindfulme.api.auth import CurrentUser, clear_session_cookies, requires
from mindfulme.api.deps import AuthDep, SettingsDep, StorageDep
from mindfulme.core.policy import Role
from mindfulme.models import User
from mindfulme.schemas.auth import (
    AccountDeleteRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserPublic,
    UsersListResponse,
)
from mindfulme.schemas.base import MessageResponse
from mindfulme.services.auth import validate_display_name, validate_email

router = APIRouter()
admin_router = APIRouter()

# Columns that cannot be cleared; an explicit null leaves them unchanged.
REQUIRED_PROFILE_FIELDS = ("display_name", "email", "timezone", "preferences")


@router.get("/profile", response_model=UserPublic)
def get_profile(user: CurrentUser) -> UserPublic:
    return UserPublic.model_validate(user)


@router.put("/profile", response_model=UserPublic)
def update_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser,
    storage: StorageDep,
) -> UserPublic:
    """Update any of display name, email, avatar, timezone and preferences. Omitted fields are kept."""
    changes: dict[str, Any] = body.model_dump(exclude_unset=True)
    for key in REQUIRED_PROFILE_FIELDS:
        if key in changes and changes[key] is None:
            del changes[key]
    if "display_name" in changes:
        changes["display_name"] = validate_display_name(changes["display_name"])
    if "email" in changes:
        changes["email"] = validate_email(changes["email"])
    updated = storage.update_user(user.id, **changes) if changes else user
    return UserPublic.model_validate(updated)


@router.patch("/password", response_model=MessageResponse)
def change_password(
    body: PasswordChangeRequest,
    user: CurrentUser,
    auth: AuthDep,
) -> MessageResponse:
    """Change the password. Every existing refresh token is revoked."""
    auth.change_password(user, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    body: AccountDeleteRequest,
    response: Response,
    user: CurrentUser,
    auth: AuthDep,
    settings: SettingsDep,
) -> MessageResponse:
    """Soft-disable the account (password required) and end all sessions."""
    auth.deactivate(user, body.password)
    clear_session_cookies(response, settings)
    return MessageResponse(message="Account deactivated")


@admin_router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(requires(Role.ADMIN))],
    storage: StorageDep,
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserPublic.model_validate(u) for u in storage.list_users()]
    )
