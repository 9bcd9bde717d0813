"""Schemas for journals and mood entries."""

from datetime import datetime

from pydantic import Field, field_validator

from mindfulme.core.constants import (
    JOURNAL_MAX_LENGTH,
    MAX_TAGS,
    MOOD_SCORE_MAX,
    MOOD_SCORE_MIN,
    TAG_MAX_LENGTH,
)
from mindfulme.schemas.base import ApiModel


class JournalCreate(ApiModel):
    content: str = Field(..., min_length=1, max_length=JOURNAL_MAX_LENGTH)
    mood_score: int | None = Field(default=None, ge=MOOD_SCORE_MIN, le=MOOD_SCORE_MAX)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    is_private: bool = True

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Tags are a set: strip, drop blanks, de-duplicate keeping first-seen order."""
        seen: dict[str, None] = {}
        for tag in v:
            tag = tag.strip()
            if not tag:
                continue
            if len(tag) > TAG_MAX_LENGTH:
                raise ValueError(f"tags must be at most {TAG_MAX_LENGTH} characters")
            seen.setdefault(tag, None)
        return list(seen)


class JournalResponse(ApiModel):
    id: str
    user_id: str
    content: str
    mood_score: int | None = None
    tags: list[str] = Field(default_factory=list)
    is_private: bool = True
    created_at: datetime


class MoodEntryCreate(ApiModel):
    mood_score: int = Field(..., ge=MOOD_SCORE_MIN, le=MOOD_SCORE_MAX)
    notes: str | None = Field(default=None, max_length=JOURNAL_MAX_LENGTH)


class MoodEntryResponse(ApiModel):
    id: str
    user_id: str
    mood_score: int
    notes: str | None = None
    created_at: datetime


class MoodStatsResponse(ApiModel):
    average: float | None
    trend: str
    best_mood: int | None = None
    worst_mood: int | None = None
    total_entries: int
    days_tracked: int
