"""The authenticated caller, as seen by the authorization gates."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """Authenticated request principal.

    Only ``role`` and ``permissions`` take part in authorization; ``sub`` and
    ``email`` are carried for logging.
    """
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    permissions: Optional[List[str]] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        who = self.email or self.sub or "anonymous"
        return f"{who} (role={self.role})"


def _field(principal: Any, name: str) -> Any:
    if principal is None:
        return None
    if isinstance(principal, dict):
        return principal.get(name)
    return getattr(principal, name, None)


def principal_role(principal: Any) -> Optional[str]:
    """Role of a Principal, a user-like object or a mapping; None when absent."""
    role = _field(principal, "role")
    if hasattr(role, "value"):
        role = role.value
    if not isinstance(role, str) or not role:
        return None
    return role


def principal_permissions(principal: Any) -> List[Any]:
    """Custom permissions of a principal; empty when absent or not a list."""
    permissions = _field(principal, "permissions")
    if not isinstance(permissions, (list, tuple, set, frozenset)):
        return []
    return list(permissions)
