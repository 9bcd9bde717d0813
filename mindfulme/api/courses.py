"""Course catalogue."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from mindfulme.api.auth import CurrentUser, requires
from mindfulme.api.deps import StorageDep
from mindfulme.core.policy import Role
from mindfulme.models import Course, User
from mindfulme.schemas.care import CourseCreate, CourseResponse

router = APIRouter()


@router.get("", response_model=list[CourseResponse])
def list_courses(_user: CurrentUser, storage: StorageDep) -> list[Course]:
    return storage.list_courses()


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: str, _user: CurrentUser, storage: StorageDep) -> Course:
    return storage.get_course(course_id)


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    body: CourseCreate,
    _admin: Annotated[User, Depends(requires(Role.ADMIN))],
    storage: StorageDep,
) -> Course:
    return storage.create_course(**body.model_dump())
