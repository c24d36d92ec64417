"""Role → permission registry.

Provides:
- ``ROLE_PERMISSIONS`` — read-only role → permission-set table.
- ``ROLE_DISPLAY_NAMES`` / ``ROLE_PROFILES`` — presentation metadata per role.
- ``PERMISSION_DETAILS`` — presentation metadata per permission.
- ``get_role_permissions()`` / ``has_permission()`` — total lookups.
- ``verify_registry()`` — load-time self-check, run on import.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..exceptions import ConfigurationError
from .constants import ALL_PERMISSIONS, ALL_ROLES, CompanyType, Permission, Role

_EMPTY: frozenset[Permission] = frozenset()


@dataclass(frozen=True)
class RoleProfile:
    """Presentation metadata for a role."""

    display_name: str
    description: str
    company_type: CompanyType | None = None  # None = global role


@dataclass(frozen=True)
class PermissionInfo:
    """Presentation metadata for a permission."""

    display_name: str
    description: str
    module: str


# ── Role → Permissions ──────────────────────────────────

ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.SUPER_ADMIN: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
                Permission.MAINTENANCE,
                Permission.INSPECTIONS,
                Permission.CALIBRATIONS,
                Permission.REPORTS,
                Permission.GLOBAL_REPORTS,
                Permission.MONITORING,
                Permission.TOOLS,
                Permission.DOWNLOAD,
                Permission.COMPANY_MANAGEMENT,
                Permission.USER_MANAGEMENT,
                Permission.SETTINGS,
            }
        ),
        Role.ADMIN_MITRA: frozenset(
            {
                Permission.DASHBOARD,
                Permission.CALIBRATIONS,
                Permission.EQUIPMENT,
                Permission.USER_MANAGEMENT,
                Permission.SETTINGS,
                Permission.TASKS,
            }
        ),
        Role.ADMIN_KALIBRASI: frozenset(
            {
                Permission.DASHBOARD,
                Permission.CALIBRATIONS,
                Permission.EQUIPMENT,
                Permission.USER_MANAGEMENT,
                Permission.SETTINGS,
            }
        ),
        Role.ADMIN_PENYEDIA: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
                Permission.USER_MANAGEMENT,
                Permission.SETTINGS,
            }
        ),
        Role.ADMIN_KLIEN: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
                Permission.MAINTENANCE,
                Permission.INSPECTIONS,
                Permission.CALIBRATIONS,
                Permission.USER_MANAGEMENT,
                Permission.SETTINGS,
            }
        ),
        Role.OPERATOR_KLIEN: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
            }
        ),
        Role.TEKNISI_MITRA: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
                Permission.MAINTENANCE,
                Permission.INSPECTIONS,
                Permission.CALIBRATIONS,
                Permission.TASKS,
            }
        ),
        Role.KALIBRATOR: frozenset(
            {
                Permission.DASHBOARD,
                Permission.CALIBRATIONS,
                Permission.TASKS,
            }
        ),
        Role.TEKNISI: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
                Permission.MAINTENANCE,
                Permission.INSPECTIONS,
                Permission.TASKS,
            }
        ),
        Role.OPERATOR: frozenset(
            {
                Permission.DASHBOARD,
                Permission.EQUIPMENT,
            }
        ),
        Role.SPV: frozenset(
            {
                Permission.DASHBOARD,
                Permission.MONITORING,
                Permission.REPORTS,
            }
        ),
    }
)


# ── Role Metadata ───────────────────────────────────────

ROLE_PROFILES: Mapping[Role, RoleProfile] = MappingProxyType(
    {
        Role.SUPER_ADMIN: RoleProfile("Super Admin", "Full system access"),
        Role.ADMIN_MITRA: RoleProfile("Admin Mitra", "Service provider admin", CompanyType.MITRA),
        Role.ADMIN_KALIBRASI: RoleProfile("Admin Kalibrasi", "Calibration provider admin", CompanyType.MITRA),
        Role.ADMIN_PENYEDIA: RoleProfile("Admin Penyedia", "Goods and services provider admin", CompanyType.MITRA),
        Role.ADMIN_KLIEN: RoleProfile("Admin Klien", "Client admin access", CompanyType.KLIEN),
        Role.OPERATOR_KLIEN: RoleProfile("Operator Klien", "Client operator", CompanyType.KLIEN),
        Role.TEKNISI_MITRA: RoleProfile("Teknisi Mitra", "Service provider technician", CompanyType.MITRA),
        Role.KALIBRATOR: RoleProfile("Kalibrator", "Calibration specialist", CompanyType.MITRA),
        Role.TEKNISI: RoleProfile("Teknisi", "Maintenance and inspection technician", CompanyType.MITRA),
        Role.OPERATOR: RoleProfile("Operator", "Equipment operator", CompanyType.KLIEN),
        Role.SPV: RoleProfile("SPV (Supervisor)", "Supervisor role"),
    }
)

ROLE_DISPLAY_NAMES: Mapping[Role, str] = MappingProxyType(
    {role: profile.display_name for role, profile in ROLE_PROFILES.items()}
)


# ── Permission Metadata ─────────────────────────────────

PERMISSION_DETAILS: Mapping[Permission, PermissionInfo] = MappingProxyType(
    {
        Permission.DASHBOARD: PermissionInfo("Dashboard", "Access to dashboard", "core"),
        Permission.EQUIPMENT: PermissionInfo("Equipment Management", "Manage equipment", "equipment"),
        Permission.MAINTENANCE: PermissionInfo("Maintenance", "Maintenance operations", "maintenance"),
        Permission.INSPECTIONS: PermissionInfo("Inspections", "Equipment inspections", "inspection"),
        Permission.CALIBRATIONS: PermissionInfo("Calibrations", "Calibration management", "calibration"),
        Permission.REPORTS: PermissionInfo("Reports", "Generate reports", "reporting"),
        Permission.GLOBAL_REPORTS: PermissionInfo("Global Reports", "Access all reports", "reporting"),
        Permission.MONITORING: PermissionInfo("Monitoring", "System monitoring", "monitoring"),
        Permission.TOOLS: PermissionInfo("Tools", "System tools", "tools"),
        Permission.DOWNLOAD: PermissionInfo("Download", "Download capabilities", "download"),
        Permission.COMPANY_MANAGEMENT: PermissionInfo("Company Management", "Manage companies", "company"),
        Permission.USER_MANAGEMENT: PermissionInfo("User Management", "Manage users", "user"),
        Permission.SETTINGS: PermissionInfo("Settings", "System settings", "settings"),
        Permission.TASKS: PermissionInfo("Tasks", "Task management", "tasks"),
    }
)


# ── Lookups ─────────────────────────────────────────────


def _as_role(role: Role | str) -> Role | None:
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def _as_permission(permission: Permission | str) -> Permission | None:
    if isinstance(permission, Permission):
        return permission
    try:
        return Permission(permission)
    except ValueError:
        return None


def get_role_permissions(role: Role | str) -> frozenset[Permission]:
    """Return the permission set granted to ``role``.

    Total: a value outside the ``Role`` enumeration (or a role without an
    entry) yields the empty set, so callers can still render a "no access"
    view. The super-role bypass is not applied here.

    Example::

        get_role_permissions(Role.OPERATOR_KLIEN)
        # frozenset({Permission.DASHBOARD, Permission.EQUIPMENT})
        get_role_permissions("no_such_role")  # frozenset()
    """
    resolved = _as_role(role)
    if resolved is None:
        return _EMPTY
    return ROLE_PERMISSIONS.get(resolved, _EMPTY)


def has_permission(role: Role | str, permission: Permission | str) -> bool:
    """True iff ``permission`` is in ``get_role_permissions(role)``."""
    resolved = _as_permission(permission)
    if resolved is None:
        return False
    return resolved in get_role_permissions(role)


def get_display_name(role: Role) -> str:
    """Human-readable label for ``role``.

    Every role carries a label (checked by ``verify_registry()``), so a
    missing entry raises ``KeyError`` rather than falling back.
    """
    return ROLE_DISPLAY_NAMES[Role(role)]


def can_access_company_management(role: Role | str) -> bool:
    return has_permission(role, Permission.COMPANY_MANAGEMENT)


def can_access_user_management(role: Role | str) -> bool:
    return has_permission(role, Permission.USER_MANAGEMENT)


def roles_for_company_type(company_type: CompanyType | str) -> tuple[Role, ...]:
    """Roles assignable to users of a tenant kind, in enumeration order.

    Includes global roles (no company type) except the super role, which is
    never assignable through company user management.
    """
    kind = CompanyType(company_type)
    return tuple(
        role
        for role in Role
        if role is not Role.SUPER_ADMIN and ROLE_PROFILES[role].company_type in (kind, None)
    )


# ── Self-check ──────────────────────────────────────────


def verify_registry(
    role_permissions: Mapping[Role, frozenset[Permission]] = ROLE_PERMISSIONS,
    role_profiles: Mapping[Role, RoleProfile] = ROLE_PROFILES,
    permission_details: Mapping[Permission, PermissionInfo] = PERMISSION_DETAILS,
) -> None:
    """Fail fast on an incomplete or inconsistent registry.

    Checks:
    1. Every ``Role`` has a permission entry (an empty set is allowed).
    2. Every ``Role`` has a profile with a non-empty display name.
    3. Every granted value is a ``Permission`` member.
    4. Every ``Permission`` has presentation details.

    Raises:
        ConfigurationError: On the first class of defect found.
    """
    missing = sorted(role.value for role in ALL_ROLES if role not in role_permissions)
    if missing:
        raise ConfigurationError(f"Roles without a permission entry: {missing}", roles=missing)

    unlabeled = sorted(
        role.value
        for role in ALL_ROLES
        if role not in role_profiles or not role_profiles[role].display_name.strip()
    )
    if unlabeled:
        raise ConfigurationError(f"Roles without a display name: {unlabeled}", roles=unlabeled)

    for role, granted in role_permissions.items():
        unknown = sorted(str(p) for p in granted if not isinstance(p, Permission))
        if unknown:
            raise ConfigurationError(
                f"Role '{role.value}' grants unknown permissions: {unknown}",
                role=role.value,
                permissions=unknown,
            )

    undocumented = sorted(p.value for p in ALL_PERMISSIONS if p not in permission_details)
    if undocumented:
        raise ConfigurationError(
            f"Permissions without details: {undocumented}",
            permissions=undocumented,
        )


verify_registry()


__all__ = [
    "PERMISSION_DETAILS",
    "ROLE_DISPLAY_NAMES",
    "ROLE_PERMISSIONS",
    "ROLE_PROFILES",
    "PermissionInfo",
    "RoleProfile",
    "can_access_company_management",
    "can_access_user_management",
    "get_display_name",
    "get_role_permissions",
    "has_permission",
    "roles_for_company_type",
    "verify_registry",
]
