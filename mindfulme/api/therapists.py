"""Therapist directory."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mindfulme.api.auth import CurrentUser, requires
from mindfulme.api.deps import StorageDep
from mindfulme.core.policy import Role
from mindfulme.models import Therapist, User
from mindfulme.schemas.care import TherapistCreate, TherapistResponse

router = APIRouter()


@router.get("", response_model=list[TherapistResponse])
def list_therapists(_user: CurrentUser, storage: StorageDep) -> list[Therapist]:
    return storage.list_therapists()


@router.get("/{therapist_id}", response_model=TherapistResponse)
def get_therapist(therapist_id: str, _user: CurrentUser, storage: StorageDep) -> Therapist:
    return storage.get_therapist(therapist_id)


@router.post("", response_model=TherapistResponse, status_code=status.HTTP_201_CREATED)
def create_therapist(
    body: TherapistCreate,
    _admin: Annotated[User, Depends(requires(Role.ADMIN))],
    storage: StorageDep,
) -> Therapist:
    return storage.create_therapist(**body.model_dump())
