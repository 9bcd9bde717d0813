"""Core app configuration, errors, policy and security primitives."""

from mindfulme.core.config import Settings, load_settings
from mindfulme.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    MindfulMeError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from mindfulme.core.policy import Role, is_allowed

__all__ = [
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "MindfulMeError",
    "NotFoundError",
    "Role",
    "Settings",
    "UnauthorizedError",
    "ValidationError",
    "is_allowed",
    "load_settings",
]
