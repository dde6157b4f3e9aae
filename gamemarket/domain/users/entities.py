# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Session:

    token: str = field(repr=False)
    user_id: int
    username: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True, frozen=True)
class SessionGrant:
    """Result of a successful login."""

    token: str = field(repr=False)
    user_id: int
    username: str
    expires_at: datetime
    redirect_to: str
