# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta
from functools import cached_property

from gamemarket.domain.users.entities import SessionGrant
from gamemarket.domain.users.exceptions import InvalidCredentialsError
from gamemarket.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from gamemarket.shared.logging import logger


class LoginUserUseCase:
    """Exchange a username and password for a new session.

    The user is looked up by username only; the password is checked against
    the stored hash. Unknown users and wrong passwords raise the same
    ``InvalidCredentialsError``, and an unknown user still pays for one hash
    verification so response timing does not reveal which case occurred.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        session_ttl: timedelta,
        redirect_to: str,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._session_ttl = session_ttl
        self._redirect_to = redirect_to

    @cached_property
    def _dummy_hash(self) -> str:
        return self._password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, username: str, password: str) -> SessionGrant:
        user = self._users.find_by_username(username)

        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        purged = self._sessions.purge_expired(datetime.now(UTC))
        if purged:
            logger.debug(f"auth.login: purged {purged} expired sessions")

        session = self._sessions.create(user, self._session_ttl)
        return SessionGrant(
            token=session.token,
            user_id=user.id,
            username=user.username,
            expires_at=session.expires_at,
            redirect_to=self._redirect_to,
        )
