"""Request-scoped accessors for the objects create_app stores on app.state."""

from typing import Annotated

from fastapi import Depends, Request

from mindfulme.core.config import Settings
from mindfulme.services.auth import AuthService
from mindfulme.storage import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


SettingsDep = Annotated[Settings, Depends(get_settings)]
StorageDep = Annotated[Storage, Depends(get_storage)]
AuthDep = Annotated[AuthService, Depends(get_auth_service)]
