"""Look up the live session behind a token."""

from __future__ import annotations

from datetime import UTC, datetime

from gamemarket.domain.users.entities import Session
from gamemarket.domain.users.repositories import SessionRepository


class ResolveSessionUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> Session | None:
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None or session.is_expired(datetime.now(UTC)):
            return None
        return session
