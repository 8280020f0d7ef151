"""Route authorization metadata.

A route declares what it needs in one of three shapes:

    [Permission.EVENTS_READ, Permission.EVENTS_UPDATE]   # any of
    {"any": [Permission.PROMPTS_PUBLISH, ...]}           # any of
    {"all": [Permission.EVENTS_CREATE, ...]}             # all of

or a list of roles for the rank-based role gate. Metadata is normalized once,
when the route is declared, into one of the frozen variants below.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

from .permissions import PermissionLike, permission_value
from .roles import RoleLike, role_value


@dataclass(frozen=True)
class AnyOf:
    """Satisfied when at least one permission is granted."""
    permissions: Tuple[str, ...]

    def __init__(self, permissions: Iterable[PermissionLike]):
        object.__setattr__(
            self, "permissions", tuple(permission_value(p) for p in permissions)
        )

    def is_satisfied_by(self, granted: frozenset) -> bool:
        return any(p in granted for p in self.permissions)


@dataclass(frozen=True)
class AllOf:
    """Satisfied when every permission is granted."""
    permissions: Tuple[str, ...]

    def __init__(self, permissions: Iterable[PermissionLike]):
        object.__setattr__(
            self, "permissions", tuple(permission_value(p) for p in permissions)
        )

    def is_satisfied_by(self, granted: frozenset) -> bool:
        return all(p in granted for p in self.permissions)


PermissionRule = Union[AnyOf, AllOf]


@dataclass(frozen=True)
class RoleRequirement:
    """Roles a route accepts; see guards.check_roles for the rank semantics."""
    roles: Tuple[str, ...]

    def __init__(self, roles: Iterable[RoleLike]):
        if isinstance(roles, RoleRequirement):
            roles = roles.roles
        elif isinstance(roles, str):
            roles = (roles,)
        if not _is_token_sequence(roles):
            raise TypeError(f"Roles must be a role or a list of roles, got {roles!r}")
        object.__setattr__(self, "roles", tuple(role_value(r) for r in roles))


def any_of(*permissions: PermissionLike) -> AnyOf:
    return AnyOf(permissions)


def all_of(*permissions: PermissionLike) -> AllOf:
    return AllOf(permissions)


def _is_token_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def parse_permission_rule(metadata: Any) -> Optional[PermissionRule]:
    """
    Normalize permission metadata into a rule.

    Args:
        metadata: A list/tuple of permissions, {"any": [...]}, {"all": [...]},
            or an AnyOf/AllOf instance.

    Returns:
        The matching rule, or None when the shape is not recognized.
    """
    if isinstance(metadata, (AnyOf, AllOf)):
        return metadata

    if _is_token_sequence(metadata):
        return AnyOf(metadata)

    if isinstance(metadata, dict) and len(metadata) == 1:
        (key, value), = metadata.items()
        if not _is_token_sequence(value):
            return None
        if key == "any":
            return AnyOf(value)
        if key == "all":
            return AllOf(value)

    return None


def is_empty_metadata(metadata: Any) -> bool:
    """True when a route declares no requirement at all."""
    return metadata is None or (isinstance(metadata, (list, tuple)) and not metadata)


def parse_role_requirement(metadata: Any) -> Optional[RoleRequirement]:
    """
    Normalize role metadata into a requirement.

    Args:
        metadata: A role, a list/tuple of roles, or a RoleRequirement.

    Returns:
        The requirement, or None when the shape is not recognized.
    """
    if isinstance(metadata, RoleRequirement):
        return metadata
    if isinstance(metadata, str) or _is_token_sequence(metadata):
        return RoleRequirement(metadata)
    return None
