# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError

from gamemarket.domain.users.entities import Session as DomainSession
from gamemarket.domain.users.entities import User as DomainUser
from gamemarket.domain.users.exceptions import UserAlreadyExistsError
from gamemarket.domain.users.repositories import SessionRepository, UserRepository
from gamemarket.infrastructure.db import Database
from gamemarket.infrastructure.db.models import LoginSession, User, as_utc


def _user_to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


def _session_to_domain(row: LoginSession) -> DomainSession:
    return DomainSession(
        token=row.token,
        user_id=row.user_id,
        username=row.username,
        created_at=as_utc(row.created_at),
        expires_at=as_utc(row.expires_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.query(User).filter(User.username == username).first()
            return _user_to_domain(row) if row else None

    def add(self, username: str, password_hash: str) -> DomainUser:
        with self._db.session_scope() as session:
            row = User(
                username=username,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                raise UserAlreadyExistsError() from exc
            return _user_to_domain(row)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, user: DomainUser, ttl: timedelta) -> DomainSession:
        now = datetime.now(UTC)
        with self._db.session_scope() as session:
            row = LoginSession(
                token=secrets.token_urlsafe(48),
                user_id=user.id,
                username=user.username,
                created_at=now,
                expires_at=now + ttl,
            )
            session.add(row)
            session.flush()
            return _session_to_domain(row)

    def get(self, token: str) -> DomainSession | None:
        with self._db.session_scope() as session:
            row = (
                session.query(LoginSession)
                .filter(
                    LoginSession.token == token,
                    LoginSession.expires_at > datetime.now(UTC),
                )
                .first()
            )
            return _session_to_domain(row) if row else None

    def revoke(self, token: str) -> None:
        with self._db.session_scope() as session:
            session.query(LoginSession).filter(LoginSession.token == token).delete()

    def purge_expired(self, now: datetime) -> int:
        with self._db.session_scope() as session:
            return session.query(LoginSession).filter(LoginSession.expires_at <= now).delete()
