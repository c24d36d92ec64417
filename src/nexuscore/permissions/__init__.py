"""Role registry and access checks for the equipment dashboard.

Defines:
- Role / Permission / CompanyType: closed enumerations
- ROLE_PERMISSIONS: Role → granted permission set
- ROLE_PROFILES / PERMISSION_DETAILS: presentation metadata
- get_role_permissions() / has_permission(): total lookups
- check_access() / RoleAccess: guards used by pages and buttons
"""

from .access import (
    AccessDecision,
    RoleAccess,
    check_access,
    parse_role,
    require_permission,
    resolve_role,
)
from .constants import ALL_PERMISSIONS, ALL_ROLES, SUPER_ROLE, CompanyType, Permission, Role
from .registry import (
    PERMISSION_DETAILS,
    ROLE_DISPLAY_NAMES,
    ROLE_PERMISSIONS,
    ROLE_PROFILES,
    PermissionInfo,
    RoleProfile,
    can_access_company_management,
    can_access_user_management,
    get_display_name,
    get_role_permissions,
    has_permission,
    roles_for_company_type,
    verify_registry,
)

__all__ = [
    "ALL_PERMISSIONS",
    "ALL_ROLES",
    "PERMISSION_DETAILS",
    "ROLE_DISPLAY_NAMES",
    "ROLE_PERMISSIONS",
    "ROLE_PROFILES",
    "SUPER_ROLE",
    "AccessDecision",
    "CompanyType",
    "Permission",
    "PermissionInfo",
    "Role",
    "RoleAccess",
    "RoleProfile",
    "can_access_company_management",
    "can_access_user_management",
    "check_access",
    "get_display_name",
    "get_role_permissions",
    "has_permission",
    "parse_role",
    "require_permission",
    "resolve_role",
    "roles_for_company_type",
    "verify_registry",
]
