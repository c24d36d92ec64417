"""Tests for the role registry and access checks."""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from unittest.mock import patch

import pytest

from nexuscore import (
    ROLE_DISPLAY_NAMES,
    ROLE_PERMISSIONS,
    SUPER_ROLE,
    ConfigurationError,
    Permission,
    PermissionDeniedError,
    Role,
    RoleAccess,
    check_access,
    get_display_name,
    get_role_permissions,
    has_permission,
    parse_role,
    require_permission,
    resolve_role,
)
from nexuscore.permissions import (
    ALL_PERMISSIONS,
    ALL_ROLES,
    PERMISSION_DETAILS,
    ROLE_PROFILES,
    RoleProfile,
    CompanyType,
    can_access_company_management,
    can_access_user_management,
    roles_for_company_type,
    verify_registry,
)


class TestEnumerations:
    """Tests for Role and Permission enumerations."""

    def test_role_values_are_snake_case(self) -> None:
        """Role values match the strings stored on profiles."""
        for role in Role:
            assert role.value == role.name.lower()

    def test_permission_values_are_snake_case(self) -> None:
        """Permission values match their names."""
        for permission in Permission:
            assert permission.value == permission.name.lower()

    def test_all_sets_cover_enums(self) -> None:
        """ALL_ROLES / ALL_PERMISSIONS contain every member."""
        assert ALL_ROLES == frozenset(Role)
        assert ALL_PERMISSIONS == frozenset(Permission)
        assert len(ALL_ROLES) == 11
        assert len(ALL_PERMISSIONS) == 14

    def test_super_role(self) -> None:
        """The designated bypass role is super_admin."""
        assert SUPER_ROLE is Role.SUPER_ADMIN


class TestRolePermissions:
    """Tests for ROLE_PERMISSIONS and get_role_permissions()."""

    def test_every_role_has_an_entry(self) -> None:
        """Total coverage: every role maps to a defined set."""
        for role in Role:
            assert role in ROLE_PERMISSIONS, f"Missing entry for {role.value}"
            result = get_role_permissions(role)
            assert isinstance(result, frozenset)

    def test_table_is_read_only(self) -> None:
        """The table cannot be mutated at runtime."""
        assert isinstance(ROLE_PERMISSIONS, MappingProxyType)
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS[Role.OPERATOR] = frozenset()  # type: ignore[index]

    def test_sets_are_frozen(self) -> None:
        """Permission sets are frozensets (no duplicates, no mutation)."""
        for role, permissions in ROLE_PERMISSIONS.items():
            assert isinstance(permissions, frozenset), role

    def test_operator_klien(self) -> None:
        """operator_klien sees dashboard and equipment only."""
        assert get_role_permissions(Role.OPERATOR_KLIEN) == {Permission.DASHBOARD, Permission.EQUIPMENT}

    def test_teknisi(self) -> None:
        """teknisi covers field work but not calibrations."""
        assert get_role_permissions(Role.TEKNISI) == {
            Permission.DASHBOARD,
            Permission.EQUIPMENT,
            Permission.MAINTENANCE,
            Permission.INSPECTIONS,
            Permission.TASKS,
        }

    def test_admin_klien_manages_users_not_companies(self) -> None:
        """admin_klien has user_management but not company_management."""
        perms = get_role_permissions(Role.ADMIN_KLIEN)
        assert Permission.USER_MANAGEMENT in perms
        assert Permission.COMPANY_MANAGEMENT not in perms

    def test_super_admin_table_is_not_everything(self) -> None:
        """The bypass is not folded into the table."""
        assert get_role_permissions(Role.SUPER_ADMIN) != ALL_PERMISSIONS

    def test_string_role_accepted(self) -> None:
        """Raw role strings resolve like enum members."""
        assert get_role_permissions("spv") == get_role_permissions(Role.SPV)

    def test_unknown_role_degrades_to_empty(self) -> None:
        """Unknown roles yield the empty set instead of raising."""
        assert get_role_permissions("operator_mitra") == frozenset()
        assert get_role_permissions("") == frozenset()

    def test_idempotent(self) -> None:
        """Repeated lookups return equal results."""
        for role in Role:
            assert get_role_permissions(role) == get_role_permissions(role)


class TestHasPermission:
    """Tests for has_permission()."""

    def test_teknisi_cannot_calibrate(self) -> None:
        """teknisi lacks calibrations."""
        assert has_permission("teknisi", "calibrations") is False
        assert has_permission(Role.TEKNISI, Permission.CALIBRATIONS) is False

    def test_matches_set_membership(self) -> None:
        """has_permission agrees with get_role_permissions for every pair."""
        for role in Role:
            for permission in Permission:
                expected = permission in get_role_permissions(role)
                assert has_permission(role, permission) is expected

    def test_unknown_permission(self) -> None:
        """A typo'd permission string never matches."""
        assert has_permission(Role.SUPER_ADMIN, "equipments") is False

    def test_unknown_role(self) -> None:
        """An unknown role has no permissions."""
        assert has_permission("ghost", Permission.DASHBOARD) is False

    def test_management_gates(self) -> None:
        """Convenience gates follow the table."""
        assert can_access_company_management(Role.SUPER_ADMIN) is True
        assert can_access_company_management(Role.ADMIN_KLIEN) is False
        assert can_access_user_management(Role.ADMIN_KLIEN) is True
        assert can_access_user_management(Role.OPERATOR) is False


class TestDisplayNames:
    """Tests for role labels and metadata."""

    def test_every_role_has_label(self) -> None:
        """Every role carries a non-empty label."""
        for role in Role:
            assert get_display_name(role).strip(), role.value
            assert ROLE_DISPLAY_NAMES[role] == ROLE_PROFILES[role].display_name

    def test_known_labels(self) -> None:
        """Labels shown in the dashboard."""
        assert get_display_name(Role.SUPER_ADMIN) == "Super Admin"
        assert get_display_name(Role.SPV) == "SPV (Supervisor)"
        assert get_display_name("admin_klien") == "Admin Klien"

    def test_every_permission_has_details(self) -> None:
        """Every permission has presentation details."""
        for permission in Permission:
            info = PERMISSION_DETAILS[permission]
            assert info.display_name
            assert info.module

    def test_roles_for_company_type(self) -> None:
        """Company-scoped roles plus global roles, never super admin."""
        klien = roles_for_company_type(CompanyType.KLIEN)
        assert Role.ADMIN_KLIEN in klien
        assert Role.OPERATOR_KLIEN in klien
        assert Role.SPV in klien
        assert Role.ADMIN_MITRA not in klien
        assert Role.SUPER_ADMIN not in klien

        mitra = roles_for_company_type("mitra")
        assert Role.ADMIN_MITRA in mitra
        assert Role.TEKNISI_MITRA in mitra
        assert Role.OPERATOR_KLIEN not in mitra

    def test_roles_for_company_type_keeps_order(self) -> None:
        """Roles come back in enumeration order."""
        order = list(Role)
        result = roles_for_company_type(CompanyType.MITRA)
        assert list(result) == sorted(result, key=order.index)


class TestVerifyRegistry:
    """Tests for the load-time registry self-check."""

    def test_shipped_registry_is_valid(self) -> None:
        """The shipped tables pass."""
        verify_registry()

    def test_missing_role_entry(self) -> None:
        """A role without an entry fails loudly."""
        broken = {role: perms for role, perms in ROLE_PERMISSIONS.items() if role is not Role.SPV}
        with pytest.raises(ConfigurationError, match="spv"):
            verify_registry(role_permissions=broken)

    def test_empty_entry_is_allowed(self) -> None:
        """An explicitly empty set is a legitimate entry."""
        table = dict(ROLE_PERMISSIONS)
        table[Role.OPERATOR] = frozenset()
        verify_registry(role_permissions=table)

    def test_missing_label(self) -> None:
        """A role without a label fails loudly."""
        profiles = dict(ROLE_PROFILES)
        profiles[Role.KALIBRATOR] = RoleProfile("  ", "Calibration specialist")
        with pytest.raises(ConfigurationError, match="kalibrator"):
            verify_registry(role_profiles=profiles)

    def test_typo_permission(self) -> None:
        """A raw string in a permission set is rejected."""
        table = dict(ROLE_PERMISSIONS)
        table[Role.OPERATOR] = frozenset({Permission.DASHBOARD, "equipments"})  # type: ignore[arg-type]
        with pytest.raises(ConfigurationError) as exc_info:
            verify_registry(role_permissions=table)
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.details["permissions"] == ["equipments"]


class TestParseRole:
    """Tests for boundary role normalization."""

    def test_enum_passthrough(self) -> None:
        """Role members pass through."""
        assert parse_role(Role.KALIBRATOR) is Role.KALIBRATOR

    def test_string_normalization(self) -> None:
        """Case and surrounding whitespace are ignored."""
        assert parse_role(" Admin_Klien ") is Role.ADMIN_KLIEN

    def test_unknown_values(self) -> None:
        """Unknown, empty and non-string values yield None."""
        assert parse_role("operator_mitra") is None
        assert parse_role("") is None
        assert parse_role(None) is None
        assert parse_role(42) is None

    def test_resolve_role_default(self) -> None:
        """Missing roles fall back to the configured default."""
        assert resolve_role(None) is Role.OPERATOR_KLIEN
        assert resolve_role("spv") is Role.SPV
        assert resolve_role("nope", default=Role.OPERATOR) is Role.OPERATOR

    def test_resolve_role_follows_environment(self) -> None:
        """DEFAULT_ROLE from the environment drives the fallback."""
        with patch.dict(os.environ, {"DEFAULT_ROLE": "operator"}):
            assert resolve_role(None) is Role.OPERATOR
            assert resolve_role("operator_mitra") is Role.OPERATOR

    def test_resolve_role_warns_on_unknown(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unrecognized values are logged before falling back."""
        with caplog.at_level(logging.WARNING, logger="nexuscore.permissions.access"):
            resolve_role("operator_mitra")
        assert any("operator_mitra" in r.getMessage() for r in caplog.records)


class TestCheckAccess:
    """Tests for page / action guards."""

    def test_no_requirement(self) -> None:
        """Nothing required → allowed."""
        assert check_access(Role.OPERATOR).allowed

    def test_permission_granted(self) -> None:
        """Granted permission → allowed."""
        assert check_access(Role.KALIBRATOR, required_permission=Permission.CALIBRATIONS).allowed

    def test_permission_missing(self) -> None:
        """Missing permission → denied with reason."""
        decision = check_access(Role.TEKNISI, required_permission="calibrations")
        assert decision.denied
        assert "calibrations" in decision.reason

    def test_super_role_bypasses_permission(self) -> None:
        """The super role passes permissions outside its table."""
        assert Permission.TASKS not in get_role_permissions(Role.SUPER_ADMIN)
        assert check_access(Role.SUPER_ADMIN, required_permission=Permission.TASKS).allowed

    def test_required_role(self) -> None:
        """Role requirements need an exact match, even for the super role."""
        assert check_access(Role.SUPER_ADMIN, required_role=Role.SUPER_ADMIN).allowed
        decision = check_access(Role.SUPER_ADMIN, required_role=Role.SPV)
        assert decision.denied
        assert "spv" in decision.reason

    def test_role_checked_before_permission(self) -> None:
        """A role mismatch denies even when the permission is granted."""
        decision = check_access(
            Role.ADMIN_KLIEN,
            required_role=Role.SUPER_ADMIN,
            required_permission=Permission.DASHBOARD,
        )
        assert decision.denied
        assert "role" in decision.reason

    def test_require_permission_raises(self) -> None:
        """require_permission raises PermissionDeniedError."""
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_permission(Role.OPERATOR_KLIEN, Permission.SETTINGS)
        assert exc_info.value.code == "PERMISSION_DENIED"
        assert exc_info.value.details == {"role": "operator_klien", "permission": "settings"}

    def test_require_permission_passes(self) -> None:
        """require_permission returns None when allowed."""
        assert require_permission(Role.ADMIN_KLIEN, Permission.SETTINGS) is None


class TestRoleAccess:
    """Tests for the per-user RoleAccess view."""

    def test_from_profile_role(self) -> None:
        """Built from a raw profile value."""
        access = RoleAccess.for_role("admin_klien")
        assert access.role is Role.ADMIN_KLIEN
        assert access.permissions == get_role_permissions(Role.ADMIN_KLIEN)
        assert access.is_role(Role.ADMIN_KLIEN)
        assert access.is_role("admin_klien")
        assert not access.is_super_admin

    def test_missing_role(self) -> None:
        """No role → no permissions, no menu."""
        access = RoleAccess.for_role(None)
        assert access.role is None
        assert access.permissions == frozenset()
        assert access.check(Permission.DASHBOARD) is False
        assert access.can_access(Permission.DASHBOARD) is False
        assert access.menu() == ()
        assert not access.is_role(Role.OPERATOR)

    def test_check_vs_can_access(self) -> None:
        """check() is the raw table, can_access() applies the bypass."""
        access = RoleAccess.for_role(Role.SUPER_ADMIN)
        assert access.is_super_admin
        assert access.check(Permission.TASKS) is False
        assert access.can_access(Permission.TASKS) is True

    def test_menu(self) -> None:
        """menu() returns the resolved sidebar."""
        labels = [item.label for item in RoleAccess.for_role(Role.SPV).menu()]
        assert labels == ["Dashboard", "Reports", "Monitoring"]
