"""Role model and the single policy check used by every role-restricted route."""

from enum import Enum


class Role(str, Enum):
    INDIVIDUAL = "individual"
    MANAGER = "manager"
    ADMIN = "admin"


ROLE_VALUES: frozenset[str] = frozenset(r.value for r in Role)

# Higher rank includes every capability of the lower ranks.
_ROLE_RANK = {Role.INDIVIDUAL: 0, Role.MANAGER: 1, Role.ADMIN: 2}


def is_allowed(user_role: str, required: Role) -> bool:
    """True if a user holding `user_role` satisfies a route requiring `required`."""
    try:
        role = Role(user_role)
    except ValueError:
        return False
    return _ROLE_RANK[role] >= _ROLE_RANK[required]
