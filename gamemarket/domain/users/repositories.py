# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from .entities import Session, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def add(self, username: str, password_hash: str) -> User: ...


class SessionRepository(Protocol):
    def create(self, user: User, ttl: timedelta) -> Session: ...
    def get(self, token: str) -> Session | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
