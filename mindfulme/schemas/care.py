"""Schemas for therapists, appointments and courses."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator, model_validator

from mindfulme.core.constants import AppointmentStatus
from mindfulme.models.base import to_utc
from mindfulme.schemas.base import ApiModel


class TherapistCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    specialization: str | None = Field(default=None, max_length=255)
    license_number: str | None = Field(default=None, max_length=64)
    profile_url: str | None = None
    rating: float = Field(default=0.0, ge=0, le=5)
    availability: dict[str, Any] = Field(default_factory=dict)


class TherapistResponse(TherapistCreate):
    id: str


class AppointmentCreate(ApiModel):
    therapist_id: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, v: datetime | None) -> datetime | None:
        return to_utc(v) if v is not None else None

    @model_validator(mode="after")
    def check_window(self) -> "AppointmentCreate":
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class AppointmentUpdate(ApiModel):
    status: AppointmentStatus | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, v: datetime | None) -> datetime | None:
        return to_utc(v) if v is not None else None


class AppointmentResponse(ApiModel):
    id: str
    therapist_id: str
    user_id: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: str
    notes: str | None = None


class CourseCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, ge=0)
    difficulty: str | None = Field(default=None, max_length=32)
    thumbnail_url: str | None = None
    modules: dict[str, Any] = Field(default_factory=dict)


class CourseResponse(CourseCreate):
    id: str
