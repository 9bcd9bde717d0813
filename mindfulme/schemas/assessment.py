"""Schemas for wellness assessments and their responses."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from mindfulme.core.constants import AssessmentType, QuestionType
from mindfulme.schemas.base import ApiModel


class AssessmentQuestion(ApiModel):
    id: str = Field(..., min_length=1, max_length=64)
    question: str = Field(..., min_length=1)
    type: QuestionType
    options: list[str] | None = None
    category: str = Field(..., min_length=1, max_length=100)


class AssessmentCreate(ApiModel):
    assessment_type: AssessmentType
    title: str = Field(..., min_length=1, max_length=255)
    questions: list[AssessmentQuestion] = Field(..., min_length=1, max_length=100)
    is_active: bool = True

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, v: list[AssessmentQuestion]) -> list[AssessmentQuestion]:
        ids = [q.id for q in v]
        if len(ids) != len(set(ids)):
            raise ValueError("question ids must be unique")
        return v


class AssessmentResponseModel(ApiModel):
    id: str
    org_id: str | None = None
    assessment_type: str
    title: str
    questions: list[dict[str, Any]]
    is_active: bool
    created_at: datetime


class AssessmentSubmit(ApiModel):
    """Answers keyed by question id."""

    responses: dict[str, Any]


class AssessmentResultResponse(ApiModel):
    id: str
    assessment_id: str
    user_id: str
    responses: dict[str, Any]
    total_score: float
    category_scores: dict[str, float]
    recommendations: list[str]
    completed_at: datetime
