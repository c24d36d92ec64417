"""Centralized logging utilities for nexuscore consumers.

This module provides:
- Logging configuration from NexusConfig
- A formatter that carries role and tenant context
- A logger adapter that attaches role and tenant to every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, NexusConfig

# Attributes present on every LogRecord; anything else is an extra.
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "role", "tenant_id",
    }
)


def _plain(value: Any) -> Any:
    # Role/Permission are str enums; log their raw value.
    return getattr(value, "value", value)


class NexusFormatter(logging.Formatter):
    """Formatter emitting JSON or plain text with role/tenant context.

    Extra fields passed through ``extra=`` are included in JSON output.
    """

    def __init__(
        self,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        role = getattr(record, "role", None)
        tenant_id = getattr(record, "tenant_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if role:
            log_data["role"] = _plain(role)
        if tenant_id:
            log_data["tenant_id"] = tenant_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if not self.json_format:
            parts = [
                f"[{log_data['timestamp']}]",
                log_data["level"],
                log_data["logger"],
            ]
            if role:
                parts.append(f"role={log_data['role']}")
            if tenant_id:
                parts.append(f"tenant={tenant_id}")
            parts.append(f": {log_data['message']}")
            text = " ".join(parts)
            if "exception" in log_data:
                text = f"{text}\n{log_data['exception']}"
            return text

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = _plain(value)
        return json.dumps(log_data, default=str, ensure_ascii=False)


class RoleLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds role and tenant_id to log records.

    Usage:
        logger = get_role_logger(__name__, role=Role.ADMIN_KLIEN, tenant_id="rs-01")
        logger.info("Opened equipment list")
        logger.info("Switched tenant", tenant_id="rs-02")
    """

    def __init__(
        self,
        logger: logging.Logger,
        role: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.role = role
        self.tenant_id = tenant_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Move role/tenant_id kwargs (or the adapter defaults) into ``extra``."""
        role = kwargs.pop("role", self.role)
        tenant_id = kwargs.pop("tenant_id", self.tenant_id)

        extra = kwargs.get("extra", {})
        if role:
            extra["role"] = role
        if tenant_id:
            extra["tenant_id"] = tenant_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[NexusConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger.

    Args:
        config: NexusConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    use_json = config.log_json if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(NexusFormatter(json_format=use_json))
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_role_logger(
    name: str,
    role: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> RoleLoggerAdapter:
    """Get a logger adapter bound to a role and tenant.

    Args:
        name: Logger name (typically __name__)
        role: Role included in all records
        tenant_id: Tenant included in all records

    Returns:
        RoleLoggerAdapter instance
    """
    return RoleLoggerAdapter(logging.getLogger(name), role=role, tenant_id=tenant_id)


__all__ = [
    "NexusFormatter",
    "RoleLoggerAdapter",
    "get_role_logger",
    "setup_logging",
]
