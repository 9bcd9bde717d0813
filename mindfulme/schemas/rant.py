"""Schemas for anonymous rants. Responses carry no author or token field."""

from datetime import datetime

from pydantic import Field, field_validator

from mindfulme.core.constants import RANT_MAX_LENGTH
from mindfulme.schemas.base import ApiModel


class RantCreate(ApiModel):
    # Unknown fields (e.g. a client-sent userId) are ignored, never stored.
    content: str = Field(..., min_length=1, max_length=RANT_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v.strip()


class RantResponse(ApiModel):
    id: str
    content: str
    sentiment_score: float
    mood_label: str
    support_count: int
    created_at: datetime
