"""Role, permission and company-type enumerations.

Provides:
- ``Role`` — every system actor (closed set).
- ``Permission`` — every functional area a role may be granted (closed set).
- ``CompanyType`` — tenant kinds that scope company-level roles.
- ``SUPER_ROLE`` — the one role that bypasses permission filtering.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """System actor identity.

    Values match the role strings stored on user profiles.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN_MITRA = "admin_mitra"
    ADMIN_KALIBRASI = "admin_kalibrasi"
    ADMIN_PENYEDIA = "admin_penyedia"
    ADMIN_KLIEN = "admin_klien"
    OPERATOR_KLIEN = "operator_klien"
    TEKNISI_MITRA = "teknisi_mitra"
    KALIBRATOR = "kalibrator"
    TEKNISI = "teknisi"
    OPERATOR = "operator"
    SPV = "spv"


class Permission(str, Enum):
    """Capability tag naming one functional area of the dashboard."""

    DASHBOARD = "dashboard"
    EQUIPMENT = "equipment"
    MAINTENANCE = "maintenance"
    INSPECTIONS = "inspections"
    CALIBRATIONS = "calibrations"
    REPORTS = "reports"
    GLOBAL_REPORTS = "global_reports"
    MONITORING = "monitoring"
    TOOLS = "tools"
    DOWNLOAD = "download"
    COMPANY_MANAGEMENT = "company_management"
    USER_MANAGEMENT = "user_management"
    SETTINGS = "settings"
    TASKS = "tasks"


class CompanyType(str, Enum):
    """Tenant kind a company-level role belongs to.

    Global roles (super admin, supervisor) carry no company type.
    """

    KLIEN = "klien"  # Client hospitals / companies
    MITRA = "mitra"  # Calibration and service providers
    INTERNAL = "internal"  # Internal system management


ALL_ROLES: frozenset[Role] = frozenset(Role)
ALL_PERMISSIONS: frozenset[Permission] = frozenset(Permission)

# Sees every menu item and passes every permission gate.
# Its ROLE_PERMISSIONS entry is an ordinary set; the bypass lives in
# menu.resolver.bypasses_permission_checks().
SUPER_ROLE: Role = Role.SUPER_ADMIN


__all__ = [
    "ALL_PERMISSIONS",
    "ALL_ROLES",
    "SUPER_ROLE",
    "CompanyType",
    "Permission",
    "Role",
]
