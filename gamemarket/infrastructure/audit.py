# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for logins and listing changes, written through the app logger."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gamemarket.shared.logging import logger, sanitize_message


class AuditAction(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    USER_CREATED = "user_created"

    LISTING_CREATED = "listing_created"
    LISTING_DELETED = "listing_deleted"
    LISTING_DELETE_DENIED = "listing_delete_denied"


REDACTED = "***REDACTED***"
_SECRET_KEY_PARTS = ("password", "token", "hash", "secret", "cookie", "key")


def _redact(details: Mapping[str, Any]) -> dict[str, Any]:
    safe: dict[str, Any] = {}
    for key, value in details.items():
        if any(part in key.lower() for part in _SECRET_KEY_PARTS):
            safe[key] = REDACTED
        elif isinstance(value, str):
            safe[key] = sanitize_message(value)
        else:
            safe[key] = value
    return safe


@dataclass(slots=True, frozen=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None = None
    ip_address: str | None = None
    success: bool = True
    details: Mapping[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        line = (
            f"AUDIT: {self.action.value} | user_id={self.user_id} | "
            f"ip={self.ip_address} | success={self.success}"
        )
        if self.details:
            line += f" | details={_redact(self.details)}"
        return line


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> AuditEvent:
    event = AuditEvent(
        action=action,
        user_id=user_id,
        ip_address=ip_address,
        success=success,
        details=details or {},
    )
    bound = logger.bind(audit=action.value)
    if success:
        bound.info(event.render())
    else:
        bound.warning(event.render())
    return event


__all__ = ["AuditAction", "AuditEvent", "audit_log"]
