"""Wellness assessments: listing, creation by managers, scored responses."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from mindfulme.api.auth import CurrentUser, requires
from mindfulme.api.deps import StorageDep
from mindfulme.core.errors import NotFoundError, ValidationError
from mindfulme.core.policy import Role
from mindfulme.models import AssessmentResponse, User, WellnessAssessment
from mindfulme.schemas.assessment import (
    AssessmentCreate,
    AssessmentResponseModel,
    AssessmentResultResponse,
    AssessmentSubmit,
)
from mindfulme.services.assessment_scoring import score_assessment
from mindfulme.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _visible_assessment(storage: Storage, assessment_id: str, user: User) -> WellnessAssessment:
    """Global assessments are visible to everyone; org-scoped ones only inside that org."""
    assessment = storage.get_assessment(assessment_id)
    if assessment.org_id is not None and assessment.org_id != user.organization_id:
        raise NotFoundError("Assessment not found")
    return assessment


@router.get("", response_model=list[AssessmentResponseModel])
def list_assessments(user: CurrentUser, storage: StorageDep) -> list[WellnessAssessment]:
    """Active assessments: global ones plus those of the caller's organization."""
    return storage.list_assessments(org_id=user.organization_id)


@router.post("", response_model=AssessmentResponseModel, status_code=status.HTTP_201_CREATED)
def create_assessment(
    body: AssessmentCreate,
    manager: Annotated[User, Depends(requires(Role.MANAGER))],
    storage: StorageDep,
) -> WellnessAssessment:
    return storage.create_assessment(
        created_by=manager.id,
        org_id=manager.organization_id,
        assessment_type=body.assessment_type,
        title=body.title,
        questions=[q.model_dump(exclude_none=True) for q in body.questions],
        is_active=body.is_active,
    )


@router.post(
    "/{assessment_id}/respond",
    response_model=AssessmentResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def respond(
    assessment_id: str,
    body: AssessmentSubmit,
    user: CurrentUser,
    storage: StorageDep,
) -> AssessmentResponse:
    """Score the answers and store the result for the caller."""
    assessment = _visible_assessment(storage, assessment_id, user)
    if not assessment.is_active:
        raise ValidationError("Assessment is no longer active")
    known_ids = {q.get("id") for q in assessment.questions}
    unknown = sorted(set(body.responses) - known_ids)
    if unknown:
        raise ValidationError(f"Unknown question id: {unknown[0]}")

    result = score_assessment(assessment.questions, body.responses)
    saved = storage.create_assessment_response(
        assessment_id=assessment.id,
        user_id=user.id,
        responses=body.responses,
        total_score=result.total_score,
        category_scores=result.category_scores,
        recommendations=result.recommendations,
    )
    logger.info(
        "Assessment completed",
        extra={"assessment_id": assessment.id, "total_score": result.total_score},
    )
    return saved


@router.get("/{assessment_id}/responses", response_model=list[AssessmentResultResponse])
def list_my_responses(
    assessment_id: str,
    user: CurrentUser,
    storage: StorageDep,
) -> list[AssessmentResponse]:
    """The caller's own responses to one assessment."""
    _visible_assessment(storage, assessment_id, user)
    return storage.list_assessment_responses(user.id, assessment_id=assessment_id)
