"""Role catalog, hierarchy and default permission sets.

Defines the 6 roles with their rank and default permissions:
1. SUPER_ADMIN - Platform operator, every permission
2. ORGANIZATION_ADMIN - Tenant administrator, everything but system config
3. admin - Every permission
4. ops - Prompts, agents, CRM records and jobs
5. sales - CRM records, outreach and meetings
6. viewer - Read-only

Ranks drive the coarse role gate; permission sets drive the fine-grained
permission gate. The two are authored independently.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Union

from .permissions import Permission


class Role(str, Enum):
    """Closed set of roles."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ORGANIZATION_ADMIN = "ORGANIZATION_ADMIN"
    ADMIN = "admin"
    OPS = "ops"
    SALES = "sales"
    VIEWER = "viewer"


RoleLike = Union[str, Role]


def role_value(role: RoleLike) -> str:
    """Return the raw token for a Role member or a plain string."""
    if isinstance(role, Enum):
        return role.value
    return role


def _build_permissions(*perms: Permission) -> FrozenSet[str]:
    """Build a frozen set of permission strings."""
    return frozenset(p.value for p in perms)


def _all_except(*excluded: Permission) -> FrozenSet[str]:
    return frozenset(p.value for p in Permission if p not in excluded)


# Higher rank means broader authority. Equal ranks are equal authority.
ROLE_HIERARCHY: Mapping[str, int] = MappingProxyType({
    Role.SUPER_ADMIN.value: 1000,
    Role.ORGANIZATION_ADMIN.value: 100,
    Role.ADMIN.value: 100,
    Role.OPS.value: 50,
    Role.SALES.value: 30,
    Role.VIEWER.value: 10,
})


ALL_PERMISSIONS = _all_except()

# Organization admins run a tenant, not the platform
ORGANIZATION_ADMIN_PERMISSIONS = _all_except(Permission.SYSTEM_CONFIG)

# Ops: manage prompts and agents, CRM records, jobs and logs
OPS_PERMISSIONS = _build_permissions(
    Permission.PROMPTS_READ,
    Permission.PROMPTS_CREATE,
    Permission.PROMPTS_UPDATE,
    Permission.PROMPTS_DELETE,
    Permission.PROMPTS_PUBLISH,
    Permission.PROMPTS_EVALUATE,
    Permission.AGENTS_READ,
    Permission.AGENTS_EXECUTE,
    Permission.AGENTS_CREATE,
    Permission.AGENTS_UPDATE,
    Permission.AGENTS_DELETE,

    Permission.EVENTS_READ,
    Permission.EVENTS_CREATE,
    Permission.EVENTS_UPDATE,
    Permission.EVENTS_DELETE,
    Permission.EVENTS_DISCOVER,
    Permission.COMPANIES_READ,
    Permission.COMPANIES_CREATE,
    Permission.COMPANIES_UPDATE,
    Permission.COMPANIES_DELETE,
    Permission.COMPANIES_ENRICH,
    Permission.PERSONAS_READ,
    Permission.PERSONAS_CREATE,
    Permission.PERSONAS_UPDATE,
    Permission.PERSONAS_DELETE,
    Permission.PERSONAS_ENRICH,

    Permission.JOBS_READ,
    Permission.JOBS_CREATE,
    Permission.JOBS_CANCEL,
    Permission.SYSTEM_LOGS,
    Permission.SYSTEM_METRICS,
)

# Sales: read and execute, work records and outreach, no system changes
SALES_PERMISSIONS = _build_permissions(
    Permission.PROMPTS_READ,
    Permission.PROMPTS_EVALUATE,
    Permission.AGENTS_READ,
    Permission.AGENTS_EXECUTE,

    Permission.EVENTS_READ,
    Permission.EVENTS_CREATE,
    Permission.EVENTS_UPDATE,
    Permission.COMPANIES_READ,
    Permission.COMPANIES_CREATE,
    Permission.COMPANIES_UPDATE,
    Permission.COMPANIES_ENRICH,
    Permission.PERSONAS_READ,
    Permission.PERSONAS_CREATE,
    Permission.PERSONAS_UPDATE,
    Permission.PERSONAS_ENRICH,

    Permission.OUTREACH_READ,
    Permission.OUTREACH_CREATE,
    Permission.OUTREACH_UPDATE,
    Permission.OUTREACH_EXECUTE,
    Permission.MEETINGS_READ,
    Permission.MEETINGS_CREATE,
    Permission.MEETINGS_UPDATE,

    Permission.JOBS_READ,
)

# Viewer: read only
VIEWER_PERMISSIONS = _build_permissions(
    Permission.PROMPTS_READ,
    Permission.AGENTS_READ,
    Permission.EVENTS_READ,
    Permission.COMPANIES_READ,
    Permission.PERSONAS_READ,
    Permission.OUTREACH_READ,
    Permission.MEETINGS_READ,
    Permission.JOBS_READ,
)


ROLE_PERMISSIONS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    Role.SUPER_ADMIN.value: ALL_PERMISSIONS,
    Role.ORGANIZATION_ADMIN.value: ORGANIZATION_ADMIN_PERMISSIONS,
    Role.ADMIN.value: ALL_PERMISSIONS,
    Role.OPS.value: OPS_PERMISSIONS,
    Role.SALES.value: SALES_PERMISSIONS,
    Role.VIEWER.value: VIEWER_PERMISSIONS,
})


# Default roles configuration
DEFAULT_ROLES: Dict[str, dict] = {
    Role.SUPER_ADMIN.value: {
        "name": "Super Admin",
        "description": "Platform operator with every permission",
        "is_system": True,
    },
    Role.ORGANIZATION_ADMIN.value: {
        "name": "Organization Admin",
        "description": "Administers one organization; cannot change system configuration",
        "is_system": True,
    },
    Role.ADMIN.value: {
        "name": "Admin",
        "description": "Full access to every resource",
        "is_system": True,
    },
    Role.OPS.value: {
        "name": "Ops",
        "description": "Manages prompts, agents, CRM records and background jobs",
        "is_system": True,
    },
    Role.SALES.value: {
        "name": "Sales",
        "description": "Works CRM records, runs outreach and books meetings",
        "is_system": True,
    },
    Role.VIEWER.value: {
        "name": "Viewer",
        "description": "Read-only access to CRM records",
        "is_system": True,
    },
}


def is_valid_role(role: Optional[RoleLike]) -> bool:
    """Check if a role string is a member of the catalog."""
    if not isinstance(role, str):
        return False
    return role_value(role) in ROLE_HIERARCHY


def get_role_rank(role: Optional[RoleLike]) -> int:
    """Rank of a role; 0 for anything outside the catalog."""
    if not isinstance(role, str):
        return 0
    return ROLE_HIERARCHY.get(role_value(role), 0)


def get_role_permissions(role: Optional[RoleLike]) -> FrozenSet[str]:
    """Default permissions for a role; empty for anything outside the catalog."""
    if not isinstance(role, str):
        return frozenset()
    return ROLE_PERMISSIONS.get(role_value(role), frozenset())


def roles_by_rank(roles: Iterable[RoleLike] = Role) -> list:
    """Role values sorted from most to least authority."""
    return sorted((role_value(r) for r in roles), key=get_role_rank, reverse=True)


def get_all_default_roles() -> Dict[str, dict]:
    """Get all default role definitions with rank and permissions filled in."""
    return {
        key: {
            **info,
            "rank": ROLE_HIERARCHY[key],
            "permissions": sorted(ROLE_PERMISSIONS[key]),
        }
        for key, info in DEFAULT_ROLES.items()
    }
