from .config import LogLevel, NexusConfig, SystemConfig, load_config_from_env
from .exceptions import ConfigurationError, NexusError, PermissionDeniedError, SecurityError
from .logging import NexusFormatter, RoleLoggerAdapter, get_role_logger, setup_logging
from .menu import (
    MENU_STRUCTURE,
    MenuItem,
    VisibleMenuItem,
    bypasses_permission_checks,
    get_visible_submenu_items,
    get_visible_submenu_items_for_role,
    is_menu_item_visible,
    is_menu_item_visible_for_role,
    resolve_menu,
)
from .permissions import (
    ROLE_DISPLAY_NAMES,
    ROLE_PERMISSIONS,
    SUPER_ROLE,
    AccessDecision,
    CompanyType,
    Permission,
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

__all__ = [
    'LogLevel',
    'NexusConfig',
    'SystemConfig',
    'load_config_from_env',
    'ConfigurationError',
    'NexusError',
    'PermissionDeniedError',
    'SecurityError',
    'NexusFormatter',
    'RoleLoggerAdapter',
    'get_role_logger',
    'setup_logging',
    'MENU_STRUCTURE',
    'MenuItem',
    'VisibleMenuItem',
    'bypasses_permission_checks',
    'get_visible_submenu_items',
    'get_visible_submenu_items_for_role',
    'is_menu_item_visible',
    'is_menu_item_visible_for_role',
    'resolve_menu',
    'ROLE_DISPLAY_NAMES',
    'ROLE_PERMISSIONS',
    'SUPER_ROLE',
    'AccessDecision',
    'CompanyType',
    'Permission',
    'Role',
    'RoleAccess',
    'check_access',
    'get_display_name',
    'get_role_permissions',
    'has_permission',
    'parse_role',
    'require_permission',
    'resolve_role',
]
