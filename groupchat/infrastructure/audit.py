# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for account and group changes.

Events are written to the application log only; nothing is persisted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from groupchat.shared.logging import logger

_REDACTED = "***REDACTED***"
_SENSITIVE_KEYS = ("password", "token", "secret", "hash")


class AuditAction(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"

    GROUP_CREATED = "group_created"
    GROUP_DELETED = "group_deleted"
    MEMBERS_ADDED = "members_added"


@dataclass(frozen=True, slots=True)
class AuditEvent:
    action: AuditAction
    user_id: str | None = None
    ip_address: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)
    success: bool = True

    def render(self) -> str:
        parts = [
            f"AUDIT {self.action.value}",
            f"user_id={self.user_id or '-'}",
            f"ip={self.ip_address or '-'}",
        ]
        if not self.success:
            parts.append("FAILED")
        if self.details:
            parts.append(f"details={redact_details(self.details)}")
        return " ".join(parts)


def redact_details(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: _REDACTED if any(marker in key.lower() for marker in _SENSITIVE_KEYS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    user_id: str | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> AuditEvent:
    event = AuditEvent(
        action=action,
        user_id=user_id,
        ip_address=ip_address,
        details=details or {},
        success=success,
    )
    if success:
        logger.info(event.render())
    else:
        logger.warning(event.render())
    return event


__all__ = ["AuditAction", "AuditEvent", "audit_log", "redact_details"]
