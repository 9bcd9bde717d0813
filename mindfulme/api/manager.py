"""Manager dashboard: aggregated organization wellness, anonymized roster, surveys."""

from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from mindfulme.api.auth import requires
from mindfulme.api.deps import StorageDep
from mindfulme.core.errors import ValidationError
from mindfulme.core.policy import Role
from mindfulme.models import Employee, User, WellbeingSurvey
from mindfulme.schemas.manager import (
    EmployeeResponse,
    SurveyCreate,
    SurveyResponse,
    WellnessMetricsResponse,
)
from mindfulme.services.wellness_metrics import METRICS_WINDOW_DAYS, compute_org_metrics
from mindfulme.storage import Storage

router = APIRouter()

ManagerUser = Annotated[User, Depends(requires(Role.MANAGER))]
OrgIdQuery = Annotated[str | None, Query(alias="orgId")]


def _resolve_org_id(storage: Storage, user: User, org_id: str | None) -> str:
    """Admins may pick any organization with orgId; managers always get their own."""
    if org_id and user.role == Role.ADMIN.value:
        return storage.get_organization(org_id).id
    if not user.organization_id:
        raise ValidationError("No organization associated with this account")
    return user.organization_id


@router.get("/metrics", response_model=WellnessMetricsResponse)
def wellness_metrics(
    user: ManagerUser,
    storage: StorageDep,
    org_id: OrgIdQuery = None,
) -> WellnessMetricsResponse:
    resolved = _resolve_org_id(storage, user, org_id)
    now = datetime.now(UTC)
    employees = storage.list_employees(resolved)
    entries = storage.list_mood_entries_for_users(
        [e.user_id for e in employees],
        since=now - timedelta(days=METRICS_WINDOW_DAYS),
    )
    metrics = compute_org_metrics(employees, entries, now)
    return WellnessMetricsResponse(org_id=resolved, **metrics)


@router.get("/employees", response_model=list[EmployeeResponse])
def list_employees(
    user: ManagerUser,
    storage: StorageDep,
    org_id: OrgIdQuery = None,
) -> list[Employee]:
    return storage.list_employees(_resolve_org_id(storage, user, org_id))


@router.get("/surveys", response_model=list[SurveyResponse])
def list_surveys(
    user: ManagerUser,
    storage: StorageDep,
    org_id: OrgIdQuery = None,
) -> list[WellbeingSurvey]:
    return storage.list_surveys(_resolve_org_id(storage, user, org_id))


@router.post("/surveys", response_model=SurveyResponse, status_code=status.HTTP_201_CREATED)
def create_survey(
    body: SurveyCreate,
    user: ManagerUser,
    storage: StorageDep,
    org_id: OrgIdQuery = None,
) -> WellbeingSurvey:
    return storage.create_survey(
        _resolve_org_id(storage, user, org_id), body.title, body.questions
    )
