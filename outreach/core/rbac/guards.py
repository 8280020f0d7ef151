"""Authorization gates.

Two independent predicates decide whether a principal may reach a route:

- the role gate compares role ranks against the roles a route accepts
- the permission gate compares the effective permission set against the
  route's permission rule

Both fail closed: a missing principal, a missing role or metadata of an
unrecognized shape denies. Declaring no metadata is the only way to open a
route. Gates never raise.
"""

import logging
from typing import Any

from .checker import resolve_effective_permissions
from .principal import principal_permissions, principal_role
from .roles import get_role_rank
from .rules import is_empty_metadata, parse_permission_rule, parse_role_requirement

logger = logging.getLogger(__name__)


def check_roles(required_roles: Any, principal: Any) -> bool:
    """
    Role gate.

    Allows when the principal's rank meets or exceeds the rank of at least
    one required role. Roles outside the catalog rank 0.

    Args:
        required_roles: A role, a list of roles, a RoleRequirement, or None
        principal: The authenticated caller, or None

    Returns:
        True to allow, False to deny
    """
    if is_empty_metadata(required_roles):
        return True
    requirement = parse_role_requirement(required_roles)
    if requirement is not None and not requirement.roles:
        return True

    role = principal_role(principal)
    if role is None:
        logger.debug("Role gate denied: no principal role")
        return False

    if requirement is None:
        logger.debug("Role gate denied: unrecognized metadata %r", required_roles)
        return False

    rank = get_role_rank(role)
    allowed = any(get_role_rank(required) <= rank for required in requirement.roles)
    if not allowed:
        logger.debug(
            "Role gate denied: role=%s rank=%d required=%s",
            role, rank, list(requirement.roles),
        )
    return allowed


def check_permissions(metadata: Any, principal: Any) -> bool:
    """
    Permission gate.

    Args:
        metadata: A permission list (any of), {"any": [...]}, {"all": [...]},
            an AnyOf/AllOf rule, or None
        principal: The authenticated caller, or None

    Returns:
        True to allow, False to deny
    """
    if is_empty_metadata(metadata):
        return True

    role = principal_role(principal)
    if role is None:
        logger.debug("Permission gate denied: no principal role")
        return False

    rule = parse_permission_rule(metadata)
    if rule is None:
        logger.debug("Permission gate denied: unrecognized metadata %r", metadata)
        return False

    granted = resolve_effective_permissions(role, principal_permissions(principal))
    allowed = rule.is_satisfied_by(granted)
    if not allowed:
        logger.debug(
            "Permission gate denied: role=%s rule=%s", role, rule,
        )
    return allowed
