"""Sidebar menu tree and per-role visibility."""

from .resolver import (
    VisibleMenuItem,
    bypasses_permission_checks,
    get_visible_submenu_items,
    get_visible_submenu_items_for_role,
    is_menu_item_visible,
    is_menu_item_visible_for_role,
    resolve_menu,
)
from .structure import MENU_STRUCTURE, PLACEHOLDER_HREF, MenuItem, iter_menu, verify_menu

__all__ = [
    "MENU_STRUCTURE",
    "PLACEHOLDER_HREF",
    "MenuItem",
    "VisibleMenuItem",
    "bypasses_permission_checks",
    "get_visible_submenu_items",
    "get_visible_submenu_items_for_role",
    "is_menu_item_visible",
    "is_menu_item_visible_for_role",
    "iter_menu",
    "resolve_menu",
    "verify_menu",
]
