"""Organization management (admin only)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from mindfulme.api.auth import requires
from mindfulme.api.deps import StorageDep
from mindfulme.core.policy import Role
from mindfulme.models import Organization, User
from mindfulme.schemas.manager import OrganizationCreate, OrganizationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
def create_organization(
    body: OrganizationCreate,
    admin: Annotated[User, Depends(requires(Role.ADMIN))],
    storage: StorageDep,
) -> Organization:
    """Create an organization. Its code gates manager/admin self-registration."""
    org = storage.create_organization(body.name.strip(), body.code.strip(), admin_user_id=admin.id)
    logger.info("Organization created", extra={"org_id": org.id})
    return org
