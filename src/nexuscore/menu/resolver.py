"""Menu visibility resolution.

Two layers:

1. Permission-set rules — ``is_menu_item_visible()`` and
   ``get_visible_submenu_items()`` operate on a plain permission set.
2. Role entry points — ``*_for_role()`` and ``resolve_menu()`` apply the
   super-role bypass first, then the permission-set rules against the
   role's registry entry.

``bypasses_permission_checks()`` is the only place that decides who skips
filtering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable

from ..permissions.constants import SUPER_ROLE, Permission, Role
from ..permissions.registry import get_role_permissions
from .structure import MENU_STRUCTURE, MenuItem

logger = logging.getLogger(__name__)


def bypasses_permission_checks(role: Role | str | None) -> bool:
    """True for the super role, which sees every item unconditionally."""
    return role is not None and role == SUPER_ROLE


# ── Permission-set rules ────────────────────────────────


def is_menu_item_visible(item: MenuItem, role_permissions: AbstractSet[Permission]) -> bool:
    """Decide whether ``item`` renders for a holder of ``role_permissions``.

    - Leaf (no children, or an empty submenu): visible iff its own permission
      is granted.
    - Parent: visible iff its own permission is granted, or at least one
      child's permission is granted. A parent can thus be reachable purely
      to expose one accessible child.

    Example::

        perms = {Permission.USER_MANAGEMENT}
        company = MENU_STRUCTURE[-2]  # "Perusahaan & User"
        is_menu_item_visible(company, perms)  # True (via "Users")
    """
    if item.permission in role_permissions:
        return True
    return any(child.permission in role_permissions for child in item.submenu)


def get_visible_submenu_items(
    children: Iterable[MenuItem],
    role_permissions: AbstractSet[Permission],
) -> tuple[MenuItem, ...]:
    """Return the children whose own permission is granted, in source order."""
    return tuple(child for child in children if child.permission in role_permissions)


# ── Role entry points ───────────────────────────────────


def is_menu_item_visible_for_role(item: MenuItem, role: Role | str) -> bool:
    if bypasses_permission_checks(role):
        return True
    return is_menu_item_visible(item, get_role_permissions(role))


def get_visible_submenu_items_for_role(
    children: Iterable[MenuItem],
    role: Role | str,
) -> tuple[MenuItem, ...]:
    if bypasses_permission_checks(role):
        return tuple(children)
    return get_visible_submenu_items(children, get_role_permissions(role))


@dataclass(frozen=True)
class VisibleMenuItem:
    """A top-level menu item as one role sees it.

    ``submenu`` holds only the children visible to that role; ``item``
    keeps the full source node.
    """

    item: MenuItem
    submenu: tuple[MenuItem, ...] = ()

    @property
    def label(self) -> str:
        return self.item.label

    @property
    def href(self) -> str:
        return self.item.href

    @property
    def icon(self) -> str:
        return self.item.icon

    @property
    def permission(self) -> Permission:
        return self.item.permission

    @property
    def is_parent(self) -> bool:
        """Render as an expandable section rather than a link."""
        return self.item.has_submenu


def resolve_menu(
    role: Role | str,
    menu: Iterable[MenuItem] = MENU_STRUCTURE,
) -> tuple[VisibleMenuItem, ...]:
    """Filtered view of ``menu`` for ``role``.

    Returns the visible top-level items in source order, each carrying its
    visible children in source order. The super role receives every item
    with its full submenu.

    Args:
        role: Role of the current user.
        menu: Top-level items; defaults to ``MENU_STRUCTURE``.

    Returns:
        Tuple of ``VisibleMenuItem`` ready for the sidebar.
    """
    items = tuple(menu)
    if bypasses_permission_checks(role):
        return tuple(VisibleMenuItem(item, item.submenu) for item in items)

    permissions = get_role_permissions(role)
    visible = tuple(
        VisibleMenuItem(item, get_visible_submenu_items(item.submenu, permissions))
        for item in items
        if is_menu_item_visible(item, permissions)
    )
    logger.debug(
        "Resolved %d/%d menu items for role %s", len(visible), len(items), getattr(role, "value", role)
    )
    return visible


__all__ = [
    "VisibleMenuItem",
    "bypasses_permission_checks",
    "get_visible_submenu_items",
    "get_visible_submenu_items_for_role",
    "is_menu_item_visible",
    "is_menu_item_visible_for_role",
    "resolve_menu",
]
