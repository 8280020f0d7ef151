"""Permission catalog for the outreach CRM.

Defines every fine-grained permission a route can require.

Permission string format: "resource:action"
Examples:
  - events:discover
  - prompts:publish
  - outreach:execute
  - system:metrics
"""

from enum import Enum
from typing import FrozenSet, List, Tuple, Union


class Resource(str, Enum):
    """Resources that can be protected by permissions."""

    # LLM tooling
    PROMPTS = "prompts"           # Prompt templates and versions
    AGENTS = "agents"             # Research agents

    # CRM records
    EVENTS = "events"             # Conferences and trade shows
    COMPANIES = "companies"       # Sponsors, exhibitors, prospects
    PERSONAS = "personas"         # People attached to companies

    # Engagement
    OUTREACH = "outreach"         # Outreach sequences and conversations
    MEETINGS = "meetings"         # Booked meetings

    # Administration
    USERS = "users"               # Internal user accounts
    JOBS = "jobs"                 # Background jobs
    SYSTEM = "system"             # System-wide settings


class Permission(str, Enum):
    """Closed set of permissions, one member per resource:action pair."""

    # Prompts
    PROMPTS_READ = "prompts:read"
    PROMPTS_CREATE = "prompts:create"
    PROMPTS_UPDATE = "prompts:update"
    PROMPTS_DELETE = "prompts:delete"
    PROMPTS_PUBLISH = "prompts:publish"
    PROMPTS_EVALUATE = "prompts:evaluate"

    # Agents
    AGENTS_READ = "agents:read"
    AGENTS_EXECUTE = "agents:execute"
    AGENTS_CREATE = "agents:create"
    AGENTS_UPDATE = "agents:update"
    AGENTS_DELETE = "agents:delete"

    # Events
    EVENTS_READ = "events:read"
    EVENTS_CREATE = "events:create"
    EVENTS_UPDATE = "events:update"
    EVENTS_DELETE = "events:delete"
    EVENTS_DISCOVER = "events:discover"

    # Companies
    COMPANIES_READ = "companies:read"
    COMPANIES_CREATE = "companies:create"
    COMPANIES_UPDATE = "companies:update"
    COMPANIES_DELETE = "companies:delete"
    COMPANIES_ENRICH = "companies:enrich"

    # Personas
    PERSONAS_READ = "personas:read"
    PERSONAS_CREATE = "personas:create"
    PERSONAS_UPDATE = "personas:update"
    PERSONAS_DELETE = "personas:delete"
    PERSONAS_ENRICH = "personas:enrich"

    # Outreach
    OUTREACH_READ = "outreach:read"
    OUTREACH_CREATE = "outreach:create"
    OUTREACH_UPDATE = "outreach:update"
    OUTREACH_DELETE = "outreach:delete"
    OUTREACH_EXECUTE = "outreach:execute"

    # Meetings
    MEETINGS_READ = "meetings:read"
    MEETINGS_CREATE = "meetings:create"
    MEETINGS_UPDATE = "meetings:update"
    MEETINGS_DELETE = "meetings:delete"

    # Users
    USERS_READ = "users:read"
    USERS_CREATE = "users:create"
    USERS_UPDATE = "users:update"
    USERS_DELETE = "users:delete"

    # Jobs
    JOBS_READ = "jobs:read"
    JOBS_CREATE = "jobs:create"
    JOBS_CANCEL = "jobs:cancel"

    # System
    SYSTEM_CONFIG = "system:config"
    SYSTEM_LOGS = "system:logs"
    SYSTEM_METRICS = "system:metrics"

    @property
    def resource(self) -> str:
        return self.value.split(":")[0]

    @property
    def action(self) -> str:
        return self.value.split(":")[1]


PermissionLike = Union[str, Permission]


def permission_value(permission: PermissionLike) -> str:
    """Return the raw token for a Permission member or a plain string.

    Sets and dicts in this package hold plain strings, never members.
    """
    if isinstance(permission, Enum):
        return permission.value
    return permission


# All valid permission tokens, for O(1) membership tests
PERMISSION_VALUES: FrozenSet[str] = frozenset(p.value for p in Permission)


def is_valid_permission(permission: PermissionLike) -> bool:
    """Check if a permission string is a member of the catalog."""
    if not isinstance(permission, str):
        return False
    return permission_value(permission) in PERMISSION_VALUES


def split_permission(permission: PermissionLike) -> Tuple[str, str]:
    """Parse a permission string like 'events:discover' into (resource, action)."""
    value = permission_value(permission)
    parts = value.split(":")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid permission format: {value}")
    return parts[0], parts[1]


def get_permissions_for_resource(resource: Union[str, Resource]) -> List[str]:
    """Get all catalog permission strings for a resource."""
    prefix = resource.value if isinstance(resource, Resource) else resource
    return [p.value for p in Permission if p.resource == prefix]


def get_all_permissions() -> List[str]:
    """Get all valid permission strings, in catalog order."""
    return [p.value for p in Permission]
