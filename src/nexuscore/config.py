"""Configuration contract for nexuscore consumers.

Pydantic-validated models for the settings the access core and the
surrounding dashboard share: logging, tenant identification, the default
role for profiles without a usable role, and system-wide limits.

Direct os.environ/os.getenv usage is confined to ``load_config_from_env()``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .permissions.constants import Role

_TRUTHY = ("true", "1", "yes", "on")
_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SystemConfig(BaseModel):
    """System-wide limits managed by the super admin.

    All counters and sizes must be at least 1. The maintenance window is
    expressed as ``HH:MM`` (24h) boundaries.
    """

    model_config = {"extra": "forbid"}

    max_users_per_company: int = Field(default=100, ge=1, description="User cap per tenant")
    max_equipment_per_company: int = Field(default=1000, ge=1, description="Equipment cap per tenant")
    default_session_timeout: int = Field(default=8, ge=1, description="Session timeout in hours")
    require_2fa_for_admins: bool = Field(default=True, description="Enforce 2FA for admin roles")
    backup_frequency_hours: int = Field(default=24, ge=1, description="Hours between backups")
    maintenance_window_start: str = Field(default="02:00", description="Maintenance window start (HH:MM)")
    maintenance_window_end: str = Field(default="04:00", description="Maintenance window end (HH:MM)")
    allowed_file_types: list[str] = Field(
        default_factory=lambda: [".pdf", ".jpg", ".jpeg", ".png", ".doc", ".docx", ".xls", ".xlsx"],
        description="Upload extensions accepted for certificates and attachments",
    )
    max_file_size_mb: int = Field(default=10, ge=1, description="Upload size limit in MB")

    @field_validator("maintenance_window_start", "maintenance_window_end")
    @classmethod
    def validate_window(cls, v: str) -> str:
        """Require 24h ``HH:MM``."""
        if not _HHMM.match(v):
            raise ValueError(f"Maintenance window must be HH:MM, got {v!r}")
        return v

    @field_validator("allowed_file_types")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lower-case and dot-prefix every extension, dropping blanks and duplicates."""
        normalized: list[str] = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext not in normalized:
                normalized.append(ext)
        return normalized

    def allows_file(self, filename: str, size_bytes: int) -> bool:
        """True if an upload matches an allowed extension and fits the size limit."""
        name = filename.lower()
        if not any(name.endswith(ext) for ext in self.allowed_file_types):
            return False
        return size_bytes <= self.max_file_size_mb * 1024 * 1024


class NexusConfig(BaseModel):
    """Top-level configuration.

    RULE: settings reach the code through this model, never through
    os.getenv at the call site.
    """

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Service name attached to log records",
    )
    tenant_name: str = Field(
        default="IPM Care Nexus",
        description="Display name of the deployment",
    )
    default_role: Role = Field(
        default=Role.OPERATOR_KLIEN,
        description="Role assumed for profiles whose role is missing or unrecognized",
    )
    system: SystemConfig = Field(
        default_factory=SystemConfig,
        description="System-wide limits",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("default_role", mode="before")
    @classmethod
    def validate_default_role(cls, v: str | Role) -> Role:
        """Accept role values case-insensitively; the super role is never a default."""
        role = v if isinstance(v, Role) else Role(str(v).strip().lower())
        if role is Role.SUPER_ADMIN:
            raise ValueError("default_role cannot be the super admin role")
        return role

    model_config = {
        "extra": "forbid",
    }


def load_config_from_env() -> NexusConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Service name for log records
    - TENANT_NAME: Deployment display name
    - DEFAULT_ROLE: Fallback role for profiles without a usable role
    - MAX_USERS_PER_COMPANY, MAX_EQUIPMENT_PER_COMPANY: Tenant caps
    - SESSION_TIMEOUT_HOURS: Session timeout
    - REQUIRE_2FA_FOR_ADMINS: Enforce 2FA for admins (true/false)
    - MAX_FILE_SIZE_MB: Upload size limit

    Returns:
        NexusConfig instance with values from environment or defaults.
    """
    import os

    system = SystemConfig(
        max_users_per_company=int(os.getenv("MAX_USERS_PER_COMPANY", "100")),
        max_equipment_per_company=int(os.getenv("MAX_EQUIPMENT_PER_COMPANY", "1000")),
        default_session_timeout=int(os.getenv("SESSION_TIMEOUT_HOURS", "8")),
        require_2fa_for_admins=os.getenv("REQUIRE_2FA_FOR_ADMINS", "true").lower() in _TRUTHY,
        max_file_size_mb=int(os.getenv("MAX_FILE_SIZE_MB", "10")),
    )

    return NexusConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
        service_name=os.getenv("SERVICE_NAME"),
        tenant_name=os.getenv("TENANT_NAME", "IPM Care Nexus"),
        default_role=os.getenv("DEFAULT_ROLE", Role.OPERATOR_KLIEN.value),
        system=system,
    )


__all__ = [
    "LogLevel",
    "NexusConfig",
    "SystemConfig",
    "load_config_from_env",
]
