"""Use-case for revoking sessions."""

from __future__ import annotations

from gamemarket.domain.users.repositories import SessionRepository


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> None:
        if token:
            self._sessions.revoke(token)
