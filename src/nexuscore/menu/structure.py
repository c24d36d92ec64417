"""Static navigation tree shared by every role.

The tree never changes per user; only its filtered view does
(see :mod:`nexuscore.menu.resolver`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from ..exceptions import ConfigurationError
from ..permissions.constants import Permission, Role
from ..permissions.registry import ROLE_PERMISSIONS

# href carried by parent items; navigation happens through their children.
PLACEHOLDER_HREF = "#"


@dataclass(frozen=True)
class MenuItem:
    """One navigable destination in the sidebar.

    Attributes:
        label: Display label.
        href: Route path for leaves, ``PLACEHOLDER_HREF`` for parents.
        permission: Permission required to see the item.
        icon: Icon name for the rendering layer.
        submenu: Ordered children. An empty tuple makes the item a leaf.

    Raises:
        ConfigurationError: If the item breaks a tree invariant or names a
            permission outside the ``Permission`` enumeration.
    """

    label: str
    href: str
    permission: Permission
    icon: str = ""
    submenu: tuple[MenuItem, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.permission, Permission):
            try:
                object.__setattr__(self, "permission", Permission(self.permission))
            except ValueError:
                raise ConfigurationError(
                    f"Menu item '{self.label}' references unknown permission '{self.permission}'",
                    label=self.label,
                    permission=self.permission,
                ) from None
        if self.submenu is None:
            object.__setattr__(self, "submenu", ())
        elif not isinstance(self.submenu, tuple):
            object.__setattr__(self, "submenu", tuple(self.submenu))

        if not self.label.strip():
            raise ConfigurationError("Menu item without a label", href=self.href)
        if self.submenu:
            if self.href != PLACEHOLDER_HREF:
                raise ConfigurationError(
                    f"Parent menu item '{self.label}' must use placeholder href '{PLACEHOLDER_HREF}'",
                    label=self.label,
                    href=self.href,
                )
        elif not self.href.strip() or self.href == PLACEHOLDER_HREF:
            raise ConfigurationError(
                f"Leaf menu item '{self.label}' has no navigation target",
                label=self.label,
                href=self.href,
            )

    @property
    def has_submenu(self) -> bool:
        return bool(self.submenu)

    def iter_tree(self) -> Iterator[MenuItem]:
        """Yield this item and all descendants, depth-first."""
        yield self
        for child in self.submenu:
            yield from child.iter_tree()


MENU_STRUCTURE: tuple[MenuItem, ...] = (
    MenuItem("Dashboard", "/", Permission.DASHBOARD, icon="gauge"),
    MenuItem("Equipment", "/equipment", Permission.EQUIPMENT, icon="activity"),
    MenuItem("Maintenance", "/maintenance", Permission.MAINTENANCE, icon="calendar"),
    MenuItem("Inspections", "/inspections", Permission.INSPECTIONS, icon="clipboard-check"),
    MenuItem(
        "Calibrations",
        PLACEHOLDER_HREF,
        Permission.CALIBRATIONS,
        icon="wrench",
        submenu=(
            MenuItem("Permintaan Kalibrasi", "/calibrations/requests", Permission.CALIBRATIONS, icon="file-text"),
            MenuItem("Proses Kalibrasi", "/calibrations/process", Permission.CALIBRATIONS, icon="clock"),
            MenuItem("History Kalibrasi", "/calibrations/history", Permission.CALIBRATIONS, icon="trending-up"),
        ),
    ),
    MenuItem("Reports", "/reports", Permission.REPORTS, icon="bar-chart-3"),
    MenuItem("Monitoring", "/monitoring", Permission.MONITORING, icon="monitor"),
    MenuItem("Tools", "/tools", Permission.TOOLS, icon="cog"),
    MenuItem("Download", "/download", Permission.DOWNLOAD, icon="download"),
    MenuItem("Tasks / Jadwal Kalibrasi", "/tasks", Permission.TASKS, icon="check-square"),
    MenuItem(
        "Perusahaan & User",
        PLACEHOLDER_HREF,
        Permission.COMPANY_MANAGEMENT,
        icon="building",
        submenu=(
            MenuItem("Companies", "/companies", Permission.COMPANY_MANAGEMENT, icon="building-2"),
            MenuItem("Users", "/users", Permission.USER_MANAGEMENT, icon="users"),
            MenuItem("User Management", "/user-management", Permission.USER_MANAGEMENT, icon="user-check"),
            MenuItem(
                "Company User Management",
                "/company-user-management",
                Permission.USER_MANAGEMENT,
                icon="shield",
            ),
            MenuItem("Global Reports", "/global-reports", Permission.USER_MANAGEMENT, icon="file-text"),
        ),
    ),
    MenuItem("Settings", "/settings", Permission.SETTINGS, icon="settings"),
)


def iter_menu(menu: Iterable[MenuItem] = MENU_STRUCTURE) -> Iterator[MenuItem]:
    """Yield every item of a menu tree at any depth, depth-first."""
    for item in menu:
        yield from item.iter_tree()


def verify_menu(
    menu: Iterable[MenuItem] = MENU_STRUCTURE,
    role_permissions: Mapping[Role, frozenset[Permission]] = ROLE_PERMISSIONS,
) -> None:
    """Fail fast when the menu and the registry disagree.

    Every permission referenced at any depth must be granted by at least one
    role; otherwise the item is dead for everyone except the super role.

    Raises:
        ConfigurationError: Listing the labels of unreachable items.
    """
    granted: set[Permission] = set()
    for permissions in role_permissions.values():
        granted.update(permissions)

    dead = [item.label for item in iter_menu(menu) if item.permission not in granted]
    if dead:
        raise ConfigurationError(
            f"Menu items require permissions no role grants: {dead}",
            labels=dead,
        )


verify_menu()


__all__ = [
    "MENU_STRUCTURE",
    "PLACEHOLDER_HREF",
    "MenuItem",
    "iter_menu",
    "verify_menu",
]
