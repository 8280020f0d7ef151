"""FastAPI integration for the authorization gates.

Route metadata is passed to a guard when the route is declared; the guard
runs before the endpoint and turns a denial into a 403.

Usage:
    @router.post(
        "/events/discover",
        dependencies=[Depends(PermissionsGuard({"any": [Permission.EVENTS_DISCOVER]}))],
    )
    async def discover_events(...):
        ...

    @router.delete("/jobs/{id}", dependencies=[Depends(RolesGuard(Role.OPS))])
    async def cancel_job(...):
        ...
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional

from fastapi import Depends

from outreach.core.security import get_optional_principal

from .exceptions import PermissionDenied
from .guards import check_permissions, check_roles
from .permissions import PermissionLike
from .principal import Principal
from .roles import RoleLike
from .rules import AllOf, AnyOf, is_empty_metadata, parse_permission_rule, parse_role_requirement

logger = logging.getLogger(__name__)


def _log_denial(principal: Any, requirement: Any, endpoint: Optional[str] = None) -> None:
    """Log a denial; records carry ``access_denied`` for AccessDenialFilter."""
    who = str(principal) if principal is not None else "anonymous"
    target = f" to {endpoint}" if endpoint else ""
    logger.warning(
        "Access denied%s for %s: requires %s", target, who, requirement,
        extra={"access_denied": True, "principal": who, "requirement": str(requirement)},
    )


def _normalize_roles(roles: tuple) -> Any:
    requirement = parse_role_requirement(roles)
    if requirement is None:
        logger.error("Unrecognized role metadata %r; route will deny", roles)
        return roles
    return requirement


class RolesGuard:
    """Dependency enforcing the role gate for a route.

    Roles must be role members or strings; anything else denies every request.
    """

    def __init__(self, *roles: RoleLike):
        self.requirement = _normalize_roles(roles)

    async def __call__(
        self,
        principal: Optional[Principal] = Depends(get_optional_principal),
    ) -> Optional[Principal]:
        if not check_roles(self.requirement, principal):
            _log_denial(principal, self.requirement)
            raise PermissionDenied()
        return principal


class PermissionsGuard:
    """Dependency enforcing the permission gate for a route.

    Accepts the metadata shapes understood by parse_permission_rule. Metadata
    of any other shape is kept as-is and denies every request.
    """

    def __init__(self, metadata: Any = None):
        self.metadata = metadata
        if not is_empty_metadata(metadata):
            rule = parse_permission_rule(metadata)
            if rule is None:
                logger.error("Unrecognized permission metadata %r; route will deny", metadata)
            else:
                self.metadata = rule

    async def __call__(
        self,
        principal: Optional[Principal] = Depends(get_optional_principal),
    ) -> Optional[Principal]:
        if not check_permissions(self.metadata, principal):
            _log_denial(principal, self.metadata)
            raise PermissionDenied()
        return principal


def permissions_guard(*permissions: PermissionLike, require_all: bool = False) -> PermissionsGuard:
    """Factory for a permission guard from positional permissions."""
    rule = AllOf(permissions) if require_all else AnyOf(permissions)
    return PermissionsGuard(rule)


def roles_guard(*roles: RoleLike) -> RolesGuard:
    """Factory for a role guard."""
    return RolesGuard(*roles)


def require_permissions(*permissions: PermissionLike, require_all: bool = False):
    """
    Decorator factory for endpoints that receive ``current_user``.

    Args:
        permissions: One or more permission strings or members
        require_all: If True, the user must have ALL permissions. Default: any one.

    Usage:
        @router.post("/prompts/{id}/publish")
        @require_permissions(Permission.PROMPTS_PUBLISH)
        async def publish(id: str, current_user: Principal = Depends(get_current_principal)):
            ...
    """
    rule = AllOf(permissions) if require_all else AnyOf(permissions)

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            current_user = kwargs.get("current_user")
            if not check_permissions(rule, current_user):
                _log_denial(current_user, rule, endpoint=func.__name__)
                raise PermissionDenied()
            return await func(*args, **kwargs)

        wrapper.__required_permissions__ = rule
        return wrapper
    return decorator


def require_roles(*roles: RoleLike):
    """
    Decorator factory enforcing the role gate on endpoints that receive
    ``current_user``.

    Usage:
        @router.get("/system/logs")
        @require_roles(Role.OPS)
        async def read_logs(current_user: Principal = Depends(get_current_principal)):
            ...
    """
    requirement = _normalize_roles(roles)

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            current_user = kwargs.get("current_user")
            if not check_roles(requirement, current_user):
                _log_denial(current_user, requirement, endpoint=func.__name__)
                raise PermissionDenied()
            return await func(*args, **kwargs)

        wrapper.__required_roles__ = requirement
        return wrapper
    return decorator
