"""Role gate over the two-tier hierarchy admin < super_admin."""

from src.rc_common.enums import Role
from src.rc_common.errors import InsufficientPermissionsError

_RANK: dict[Role, int] = {
    Role.ADMIN: 1,
    Role.SUPER_ADMIN: 2,
}


def satisfies(principal_role: Role, required_role: Role) -> bool:
    """True iff ``principal_role`` is at or above ``required_role``."""
    return _RANK[Role(principal_role)] >= _RANK[Role(required_role)]


def require_role(principal_role: Role, required_role: Role) -> None:
    if not satisfies(principal_role, required_role):
        if required_role is Role.SUPER_ADMIN:
            raise InsufficientPermissionsError("Super admin access required")
        raise InsufficientPermissionsError("Admin access required")
