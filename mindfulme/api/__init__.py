"""API routes."""

from fastapi import APIRouter

from mindfulme.api import (
    appointments,
    assessments,
    auth,
    courses,
    journals,
    manager,
    mood,
    organizations,
    rants,
    therapists,
    users,
)

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(users.admin_router, prefix="/admin", tags=["admin"])
router.include_router(journals.router, prefix="/journals", tags=["journals"])
router.include_router(mood.router, prefix="/mood-entries", tags=["mood"])
router.include_router(rants.router, prefix="/anonymous-rants", tags=["anonymous-rants"])
router.include_router(therapists.router, prefix="/therapists", tags=["therapists"])
router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
router.include_router(courses.router, prefix="/courses", tags=["courses"])
router.include_router(assessments.router, prefix="/assessments", tags=["assessments"])
router.include_router(manager.router, prefix="/manager", tags=["manager"])
router.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
