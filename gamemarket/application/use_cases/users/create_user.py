# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from gamemarket.domain.users.entities import User
from gamemarket.domain.users.exceptions import UserAlreadyExistsError
from gamemarket.domain.users.repositories import PasswordHasher, UserRepository


class CreateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User:
        if self._users.find_by_username(username):
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        return self._users.add(username, hashed)

    def ensure(self, username: str, password: str) -> tuple[User, bool]:
        """Create the user unless it already exists; the flag tells which."""

        existing = self._users.find_by_username(username)
        if existing:
            return existing, False
        return self.execute(username, password), True
