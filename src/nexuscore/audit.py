"""Audit events for administrative changes (users, roles, companies, permissions).

Events are built here and emitted on the ``nexuscore.audit`` logger;
storing them is left to the application.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AuditTargetType(str, Enum):
    USER = "user"
    ROLE = "role"
    COMPANY = "company"
    PERMISSION = "permission"


class AuditEvent(BaseModel):
    """One administrative action."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    user_name: str
    action: str
    target_type: AuditTargetType
    target_id: str
    target_name: str
    changes: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def build_audit_event(
    user_id: str,
    user_name: str,
    action: str,
    target_type: AuditTargetType | str,
    target_id: str,
    target_name: str,
    changes: Optional[dict[str, Any]] = None,
    *,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditEvent:
    return AuditEvent(
        user_id=user_id,
        user_name=user_name,
        action=action,
        target_type=target_type,
        target_id=target_id,
        target_name=target_name,
        changes=changes or {},
        ip_address=ip_address,
        user_agent=user_agent,
    )


def log_audit_event(
    user_id: str,
    user_name: str,
    action: str,
    target_type: AuditTargetType | str,
    target_id: str,
    target_name: str,
    changes: Optional[dict[str, Any]] = None,
    **kwargs: Any,
) -> AuditEvent:
    """Build an event and emit it at INFO with the event fields as extras."""
    event = build_audit_event(
        user_id,
        user_name,
        action,
        target_type,
        target_id,
        target_name,
        changes,
        **kwargs,
    )
    logger.info(
        "%s %s %s '%s'",
        event.user_name,
        event.action,
        event.target_type.value,
        event.target_name,
        extra={
            "audit_id": event.id,
            "actor_id": event.user_id,
            "target_id": event.target_id,
            "changes": event.changes,
        },
    )
    return event


__all__ = [
    "AuditEvent",
    "AuditTargetType",
    "build_audit_event",
    "log_audit_event",
]
