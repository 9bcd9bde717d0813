"""Session endpoints and auth dependencies (get_current_user, requires)."""

import logging
import secrets
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mindfulme.api.deps import AuthDep, SettingsDep
from mindfulme.core.config import Settings
from mindfulme.core.errors import ForbiddenError
from mindfulme.core.policy import Role, is_allowed
from mindfulme.core.security import hash_password, sign_cookie_value, unsign_cookie_value
from mindfulme.models import User
from mindfulme.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UserPublic,
)
from mindfulme.schemas.base import MessageResponse
from mindfulme.services.auth import AuthService, TokenPair

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"
DEV_USER_EMAIL = "dev@mindfulme.local"


def _set_session_cookies(response: Response, pair: TokenPair, settings: Settings) -> None:
    secure = settings.is_production
    samesite = "none" if secure else "lax"
    response.set_cookie(
        ACCESS_COOKIE,
        sign_cookie_value(pair.access_token, settings),
        max_age=int(settings.ACCESS_TOKEN_TTL.total_seconds()),
        httponly=True,
        secure=secure,
        samesite=samesite,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        sign_cookie_value(pair.refresh_token, settings),
        max_age=int(settings.REFRESH_TOKEN_TTL.total_seconds()),
        httponly=True,
        secure=secure,
        samesite=samesite,
    )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    secure = settings.is_production
    samesite = "none" if secure else "lax"
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, httponly=True, secure=secure, samesite=samesite)


def _auth_response(pair: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=UserPublic.model_validate(pair.user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


def _refresh_token_from(
    request: Request, body: RefreshRequest | None, settings: Settings
) -> str | None:
    """Body token wins; otherwise the signed refresh cookie."""
    if body is not None and body.refresh_token:
        return body.refresh_token
    return unsign_cookie_value(request.cookies.get(REFRESH_COOKIE), settings)


def _dev_user(auth: AuthService) -> User:
    """Stand-in admin used when AUTH_ENABLED is off (local development only)."""
    user = auth.storage.get_user_by_email(DEV_USER_EMAIL)
    if user is not None:
        return user
    logger.warning("AUTH_ENABLED is off; creating development admin %s", DEV_USER_EMAIL)
    return auth.storage.create_user(
        email=DEV_USER_EMAIL,
        password_hash=hash_password(secrets.token_urlsafe(24), rounds=auth.settings.BCRYPT_ROUNDS),
        display_name="Developer",
        role=Role.ADMIN.value,
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: AuthDep,
) -> User:
    """Dependency: require a valid access token (Bearer header, then signed cookie). Raises 401."""
    if not auth.settings.AUTH_ENABLED:
        return _dev_user(auth)
    if credentials is not None:
        token = credentials.credentials
    else:
        token = unsign_cookie_value(request.cookies.get(ACCESS_COOKIE), auth.settings)
    return auth.authenticate(token)


CurrentUser = Annotated[User, Depends(get_current_user)]


def requires(required: Role) -> Callable[[User], User]:
    """Dependency factory: authenticated user whose role ranks at least `required`. Raises 403."""

    def dependency(user: CurrentUser) -> User:
        if not is_allowed(user.role, required):
            raise ForbiddenError(f"{required.value.capitalize()} access required")
        return user

    return dependency


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    auth: AuthDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Create an account and start a session (cookies plus tokens in the body)."""
    user = auth.register(
        email=body.email,
        password=body.password,
        display_name=body.display_name,
        role=body.role,
        org_code=body.organization_code,
    )
    pair = auth.issue_tokens(user)
    _set_session_cookies(response, pair, settings)
    return _auth_response(pair)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    auth: AuthDep,
    settings: SettingsDep,
) -> AuthResponse:
    """
    Authenticate with email and password.
    Send the access token as: Authorization: Bearer <accessToken>
    """
    pair = auth.login(body.email, body.password)
    _set_session_cookies(response, pair, settings)
    return _auth_response(pair)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    request: Request,
    response: Response,
    auth: AuthDep,
    settings: SettingsDep,
    body: RefreshRequest | None = None,
) -> AuthResponse:
    """Rotate the refresh token. The presented token can not be used again."""
    pair = auth.refresh(_refresh_token_from(request, body, settings))
    _set_session_cookies(response, pair, settings)
    return _auth_response(pair)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    auth: AuthDep,
    settings: SettingsDep,
    body: RefreshRequest | None = None,
) -> MessageResponse:
    auth.logout(_refresh_token_from(request, body, settings))
    clear_session_cookies(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserPublic)
def me(user: CurrentUser) -> UserPublic:
    return UserPublic.model_validate(user)
