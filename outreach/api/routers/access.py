"""Access control introspection endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from outreach.api.deps import get_current_principal
from outreach.api.schemas.access import (
    AccessCheckRequest,
    AccessCheckResponse,
    PermissionInfo,
    PrincipalAccess,
    RoleInfo,
    UserPermissionsUpdate,
)
from outreach.core.rbac import Permission, Principal
from outreach.core.rbac.checker import resolve_effective_permissions
from outreach.core.rbac.dependencies import PermissionsGuard, require_permissions
from outreach.core.rbac.exceptions import RoleNotFound
from outreach.core.rbac.guards import check_permissions, check_roles
from outreach.core.rbac.permissions import get_all_permissions, is_valid_permission, split_permission
from outreach.core.rbac.roles import get_all_default_roles, get_role_rank, roles_by_rank
from outreach.core.rbac.rules import AllOf, AnyOf

router = APIRouter(prefix="/access", tags=["access"])


def _role_info(key: str, info: dict) -> RoleInfo:
    return RoleInfo(
        role=key,
        name=info["name"],
        description=info["description"],
        rank=info["rank"],
        is_system=info["is_system"],
        permissions=info["permissions"],
    )


@router.get("/permissions", response_model=List[PermissionInfo])
async def list_permissions(
    current_user: Principal = Depends(get_current_principal),
):
    """List every permission in the catalog."""
    permissions = []
    for p in get_all_permissions():
        resource, action = split_permission(p)
        permissions.append(PermissionInfo(permission=p, resource=resource, action=action))
    return permissions


@router.get(
    "/roles",
    response_model=List[RoleInfo],
    dependencies=[Depends(PermissionsGuard([Permission.USERS_READ]))],
)
async def list_roles():
    """List all roles, most authority first."""
    roles = get_all_default_roles()
    return [_role_info(key, roles[key]) for key in roles_by_rank(roles)]


@router.get("/roles/{role}", response_model=RoleInfo)
@require_permissions(Permission.USERS_READ)
async def get_role(
    role: str,
    current_user: Principal = Depends(get_current_principal),
):
    """Get one role with its rank and default permissions."""
    roles = get_all_default_roles()
    if role not in roles:
        raise RoleNotFound(role)
    return _role_info(role, roles[role])


@router.get("/me", response_model=PrincipalAccess)
async def get_my_access(
    current_user: Principal = Depends(get_current_principal),
):
    """Effective role, rank and permissions of the caller."""
    custom = current_user.permissions or []
    return PrincipalAccess(
        sub=current_user.sub,
        email=current_user.email,
        role=current_user.role,
        rank=get_role_rank(current_user.role),
        permissions=sorted(resolve_effective_permissions(current_user.role, custom)),
        ignored_permissions=[p for p in custom if not is_valid_permission(p)],
    )


@router.post("/check", response_model=AccessCheckResponse)
async def check_access(
    body: AccessCheckRequest,
    current_user: Principal = Depends(get_current_principal),
):
    """Evaluate both gates for the caller without enforcing them."""
    rule = None
    if body.permissions:
        rule = AllOf(body.permissions) if body.require_all else AnyOf(body.permissions)

    role_gate = check_roles(body.roles, current_user)
    permission_gate = check_permissions(rule, current_user)
    return AccessCheckResponse(
        allowed=role_gate and permission_gate,
        role_gate=role_gate,
        permission_gate=permission_gate,
    )


@router.post(
    "/validate-permissions",
    response_model=PrincipalAccess,
    dependencies=[Depends(PermissionsGuard({"all": [Permission.USERS_UPDATE]}))],
)
async def validate_user_permissions(update: UserPermissionsUpdate):
    """Validate a role/custom permission change and preview the resulting grant."""
    return PrincipalAccess(
        sub=None,
        email=None,
        role=update.role,
        rank=get_role_rank(update.role),
        permissions=sorted(resolve_effective_permissions(update.role, update.custom_permissions)),
    )
