# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session, SessionGrant, User
from .exceptions import InvalidCredentialsError, UserAlreadyExistsError
from .repositories import PasswordHasher, SessionRepository, UserRepository

__all__ = [
    "InvalidCredentialsError",
    "PasswordHasher",
    "Session",
    "SessionGrant",
    "SessionRepository",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
