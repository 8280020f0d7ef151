"""Permission resolution for the outreach CRM.

A user's effective permissions are the defaults of their role plus any custom
grants that name a real catalog permission.
"""

from typing import Any, FrozenSet, Iterable, List, Optional

from .permissions import (
    PERMISSION_VALUES, PermissionLike, Resource, permission_value,
)
from .principal import principal_permissions, principal_role
from .roles import RoleLike, get_role_permissions


def resolve_effective_permissions(
    role: Optional[RoleLike],
    custom_permissions: Optional[Iterable[Any]] = None,
) -> FrozenSet[str]:
    """
    Compute the effective permission set for a role and custom grants.

    Args:
        role: The user's role; unknown roles contribute nothing
        custom_permissions: Raw permission strings granted to the user directly

    Returns:
        Role defaults unioned with the custom grants that are catalog members.
        Unrecognized custom strings are dropped.
    """
    effective = set(get_role_permissions(role))
    for raw in custom_permissions or ():
        if not isinstance(raw, str):
            continue
        value = permission_value(raw)
        if value in PERMISSION_VALUES:
            effective.add(value)
    return frozenset(effective)


class PermissionChecker:
    """Answers permission questions against one effective permission set."""

    def __init__(self, permissions: Iterable[PermissionLike]):
        """
        Initialize with an effective permissions list.

        Args:
            permissions: Permission strings or members, already resolved
        """
        self.permissions = frozenset(permission_value(p) for p in permissions)

    @classmethod
    def for_role(
        cls,
        role: Optional[RoleLike],
        custom_permissions: Optional[Iterable[Any]] = None,
    ) -> "PermissionChecker":
        """Build a checker from a role and its custom grants (see resolve_effective_permissions)."""
        return cls(resolve_effective_permissions(role, custom_permissions))

    @classmethod
    def for_principal(cls, principal: Any) -> "PermissionChecker":
        """Build a checker from a Principal, a user-like object or a mapping."""
        return cls.for_role(principal_role(principal), principal_permissions(principal))

    def has_permission(self, permission: PermissionLike) -> bool:
        """Check if the set grants a specific permission."""
        return permission_value(permission) in self.permissions

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        """Check if the set grants any of the given permissions."""
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        """Check if the set grants all of the given permissions."""
        return all(self.has_permission(p) for p in permissions)

    def get_granted_resources(self, action: str) -> List[Resource]:
        """Get list of resources on which the action is granted."""
        return [
            resource for resource in Resource
            if f"{resource.value}:{action}" in self.permissions
        ]
