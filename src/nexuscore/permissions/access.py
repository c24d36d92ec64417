"""Access-check helpers for route guards and action buttons.

Provides runtime functions used at the application boundary:
- ``parse_role()`` / ``resolve_role()`` — normalize raw profile roles.
- ``check_access()`` — page guard decision (required role / permission).
- ``require_permission()`` — raising variant for service code.
- ``RoleAccess`` — per-user view bundling the checks above.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import PermissionDeniedError
from .constants import Permission, Role
from .registry import get_role_permissions, has_permission

logger = logging.getLogger(__name__)


def parse_role(value: object) -> Role | None:
    """Normalize an external role value into a ``Role``.

    Accepts ``Role`` members and strings (surrounding whitespace and case
    are ignored). Anything else, including ``None`` and unknown strings,
    yields ``None``.

    Example::

        parse_role(" Admin_Klien ")  # Role.ADMIN_KLIEN
        parse_role("operator_mitra")  # None
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


def resolve_role(value: object, default: Role | None = None) -> Role:
    """Normalize ``value``, falling back to the application default role.

    Args:
        value: Raw role from a user profile (may be missing).
        default: Fallback role. If None, uses the ``DEFAULT_ROLE`` configured
            through ``load_config_from_env()``.

    Returns:
        A concrete ``Role``.
    """
    role = parse_role(value)
    if role is not None:
        return role

    if default is None:
        from ..config import load_config_from_env

        default = load_config_from_env().default_role
    if value is not None:
        logger.warning("Unrecognized role %r, falling back to '%s'", value, default.value)
    return default


@dataclass(frozen=True)
class AccessDecision:
    """Result of a page or action guard."""

    allowed: bool = True
    reason: str = ""

    @property
    def denied(self) -> bool:
        return not self.allowed


def check_access(
    role: Role | str,
    *,
    required_permission: Optional[Permission | str] = None,
    required_role: Optional[Role | str] = None,
) -> AccessDecision:
    """Decide whether ``role`` may open a page.

    Checks in order:
    1. ``required_role`` — exact role match (no bypass).
    2. ``required_permission`` — super role passes, others need the grant.
    3. No requirement — allowed.

    Returns:
        AccessDecision with a human-readable reason when denied.
    """
    from ..menu.resolver import bypasses_permission_checks

    if required_role is not None and role != required_role:
        reason = f"Missing required role: {_value(required_role)}"
        logger.debug("Access denied for role %s: %s", _value(role), reason)
        return AccessDecision(allowed=False, reason=reason)

    if required_permission is not None:
        if bypasses_permission_checks(role) or has_permission(role, required_permission):
            return AccessDecision()
        reason = f"Missing permission: {_value(required_permission)}"
        logger.debug("Access denied for role %s: %s", _value(role), reason)
        return AccessDecision(allowed=False, reason=reason)

    return AccessDecision()


def require_permission(role: Role | str, permission: Permission | str) -> None:
    """Raise ``PermissionDeniedError`` unless ``role`` may use ``permission``."""
    decision = check_access(role, required_permission=permission)
    if decision.denied:
        raise PermissionDeniedError(
            decision.reason,
            role=_value(role),
            permission=_value(permission),
        )


def _value(item: object) -> str:
    return str(getattr(item, "value", item))


class RoleAccess:
    """Access view for one user.

    Built from the raw role on a user profile. A missing or unknown role
    yields a view with no role and no permissions.

    Example::

        access = RoleAccess.for_role(profile.get("role"))
        if access.can_access(Permission.CALIBRATIONS):
            ...
        sidebar = access.menu()
    """

    __slots__ = ("role",)

    def __init__(self, role: Role | None) -> None:
        self.role = role

    @classmethod
    def for_role(cls, value: object) -> RoleAccess:
        return cls(parse_role(value))

    @property
    def permissions(self) -> frozenset[Permission]:
        if self.role is None:
            return frozenset()
        return get_role_permissions(self.role)

    @property
    def is_super_admin(self) -> bool:
        from ..menu.resolver import bypasses_permission_checks

        return bypasses_permission_checks(self.role)

    def is_role(self, role: Role | str) -> bool:
        return self.role is not None and self.role == role

    def check(self, permission: Permission | str) -> bool:
        """Raw registry check, without the super-role bypass."""
        if self.role is None:
            return False
        return has_permission(self.role, permission)

    def can_access(self, permission: Permission | str) -> bool:
        """Registry check with the super-role bypass applied."""
        if self.role is None:
            return False
        return check_access(self.role, required_permission=permission).allowed

    def menu(self):
        """Sidebar view for this user (empty without a role)."""
        from ..menu.resolver import resolve_menu

        if self.role is None:
            return ()
        return resolve_menu(self.role)

    def __repr__(self) -> str:
        return f"RoleAccess(role={_value(self.role) if self.role else None!r})"


__all__ = [
    "AccessDecision",
    "RoleAccess",
    "check_access",
    "parse_role",
    "require_permission",
    "resolve_role",
]
