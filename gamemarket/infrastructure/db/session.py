# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from gamemarket.infrastructure.resilience import call_with_retries
from gamemarket.shared.config import DatabaseConfig
from gamemarket.shared.errors import StoreError, StoreUnavailableError
from gamemarket.shared.logging import logger

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")
_CONNECTIVITY_ERRORS = (OperationalError, DisconnectionError, InterfaceError)


class Base(DeclarativeBase):
    pass


class StoreConnectionError(RuntimeError):
    """The store could not be reached during startup."""


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def build_engine(config: DatabaseConfig) -> Engine:
    url = config.url
    if url in _MEMORY_URLS:
        engine = create_engine(
            url,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    elif url.startswith("sqlite"):
        engine = create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False, "timeout": int(config.pool_timeout)},
        )
    else:
        engine = create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    if url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


class Database:
    """Long-lived store handle shared by every request.

    ``session_scope`` refuses to hand out sessions until ``connect`` has
    succeeded, so no request ever runs against an unreachable store.
    """

    def __init__(self, config: DatabaseConfig, *, engine: Engine | None = None) -> None:
        self._config = config
        self.engine = engine or build_engine(config)
        self._sessions = scoped_session(
            sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        )
        self._connected = threading.Event()

    @property
    def connected(self) -> bool:
        return self._connected.is_set()

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def connect(self) -> None:
        try:
            call_with_retries(
                self.ping,
                retries=self._config.connect_retries,
                backoff=self._config.connect_backoff,
                retry_on=_CONNECTIVITY_ERRORS,
            )
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreConnectionError(f"store unreachable: {type(exc).__name__}") from exc
        self._connected.set()
        logger.info("Database connected, schema ensured")

    def dispose(self) -> None:
        self._connected.clear()
        self._sessions.remove()
        self.engine.dispose()
        logger.info("Database disposed")

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        if not self.connected:
            raise StoreUnavailableError()

        session = self._sessions()
        try:
            yield session
            session.commit()
        except _CONNECTIVITY_ERRORS as exc:
            self._rollback(session)
            logger.error(f"db.session: store unavailable ({type(exc).__name__})")
            raise StoreUnavailableError() from exc
        except SQLAlchemyError as exc:
            self._rollback(session)
            logger.exception("db.session: store error, rolled back")
            raise StoreError() from exc
        except Exception:
            self._rollback(session)
            raise
        finally:
            session.close()
            self._sessions.remove()

    @staticmethod
    def _rollback(session: Session) -> None:
        try:
            session.rollback()
        except SQLAlchemyError:
            logger.warning("db.session: rollback failed")


__all__ = ["Base", "Database", "StoreConnectionError", "build_engine"]
