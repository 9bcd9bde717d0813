"""Schemas for organizations and manager dashboards."""

from datetime import datetime
from typing import Any

from pydantic import Field

from mindfulme.schemas.base import ApiModel


class OrganizationCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=6, max_length=64)


class OrganizationResponse(ApiModel):
    id: str
    name: str
    code: str
    admin_user_id: str | None = None
    wellness_score: float = 0.0
    created_at: datetime


class EmployeeResponse(ApiModel):
    """Employee as visible to managers: no user id, name or email."""

    anonymized_id: str
    job_title: str | None = None
    department: str | None = None
    wellness_streak: int = 0


class DepartmentMetrics(ApiModel):
    name: str
    average: float | None
    status: str


class WellnessMetricsResponse(ApiModel):
    org_id: str
    team_wellness: float | None
    participation_rate: float
    at_risk_count: int
    sessions_this_week: int
    employee_count: int
    window_days: int
    departments: list[DepartmentMetrics]


class SurveyCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    questions: list[dict[str, Any]] = Field(default_factory=list, max_length=100)


class SurveyResponse(ApiModel):
    id: str
    org_id: str
    title: str
    questions: list[dict[str, Any]]
    is_active: bool
    created_at: datetime
