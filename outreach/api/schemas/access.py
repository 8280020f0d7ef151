"""Schemas for the access introspection API."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from outreach.core.rbac.permissions import is_valid_permission
from outreach.core.rbac.roles import is_valid_role


class PermissionInfo(BaseModel):
    permission: str
    resource: str
    action: str


class RoleInfo(BaseModel):
    role: str
    name: str
    description: str
    rank: int
    is_system: bool
    permissions: List[str]


class PrincipalAccess(BaseModel):
    sub: Optional[str]
    email: Optional[str]
    role: Optional[str]
    rank: int
    permissions: List[str]
    ignored_permissions: List[str] = Field(default_factory=list)


class AccessCheckRequest(BaseModel):
    roles: Optional[List[str]] = None
    permissions: Optional[List[str]] = None
    require_all: bool = False


class AccessCheckResponse(BaseModel):
    allowed: bool
    role_gate: bool
    permission_gate: bool


class UserPermissionsUpdate(BaseModel):
    """Payload for changing a user's role and custom permissions.

    Writes are validated strictly, unlike resolution which drops unknown
    permissions silently.
    """
    role: Optional[str] = None
    custom_permissions: Optional[List[str]] = None

    @field_validator("role")
    @classmethod
    def role_in_catalog(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_role(v):
            raise ValueError(f"Unknown role: {v}")
        return v

    @field_validator("custom_permissions")
    @classmethod
    def permissions_in_catalog(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        unknown = [p for p in v if not is_valid_permission(p)]
        if unknown:
            raise ValueError(f"Unknown permissions: {', '.join(unknown)}")
        # Preserve order, drop duplicates
        return list(dict.fromkeys(v))
