"""Pydantic request/response schemas."""

from mindfulme.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from mindfulme.schemas.base import ApiModel, MessageResponse
from mindfulme.schemas.health import HealthResponse, ReadyResponse
from mindfulme.schemas.journal import JournalCreate, JournalResponse, MoodEntryCreate
from mindfulme.schemas.rant import RantCreate, RantResponse

__all__ = [
    "ApiModel",
    "AuthResponse",
    "HealthResponse",
    "JournalCreate",
    "JournalResponse",
    "LoginRequest",
    "MessageResponse",
    "MoodEntryCreate",
    "RantCreate",
    "RantResponse",
    "ReadyResponse",
    "RegisterRequest",
    "UserPublic",
]
