"""RBAC (Role-Based Access Control) module for the outreach CRM.

This module defines the permission and role catalogs, permission resolution
and the authorization gates. FastAPI guards live in
``outreach.core.rbac.dependencies``.
"""

from .permissions import Permission, Resource, is_valid_permission
from .roles import Role, ROLE_HIERARCHY, ROLE_PERMISSIONS, get_role_permissions, get_role_rank
from .checker import PermissionChecker, resolve_effective_permissions
from .rules import AllOf, AnyOf, RoleRequirement, all_of, any_of, parse_permission_rule
from .principal import Principal
from .guards import check_permissions, check_roles

__all__ = [
    "Permission",
    "Resource",
    "is_valid_permission",
    "Role",
    "ROLE_HIERARCHY",
    "ROLE_PERMISSIONS",
    "get_role_permissions",
    "get_role_rank",
    "PermissionChecker",
    "resolve_effective_permissions",
    "AllOf",
    "AnyOf",
    "RoleRequirement",
    "all_of",
    "any_of",
    "parse_permission_rule",
    "Principal",
    "check_permissions",
    "check_roles",
]
