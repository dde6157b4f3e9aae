# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session check gating protected routes."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import cast

from flask import g, request

from gamemarket.domain.users.entities import Session
from gamemarket.shared.config import AppConfig
from gamemarket.shared.errors import UnauthorizedError
from gamemarket.shared.logging import logger
from gamemarket.shared.middleware.client_ip import client_ip

from .context import current_container

SESSION_COOKIE = "session_token"


def read_session_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return request.cookies.get(SESSION_COOKIE, "")


def current_session() -> Session:
    return cast(Session, g.session)


def _admit() -> None:
    container = current_container()
    session = container.resolve_session_use_case.execute(read_session_token())
    if session is None:
        logger.warning(
            f"Auth failed (session absent/invalid/expired) on {request.method} {request.path} "
            f"from {client_ip()}"
        )
        raise UnauthorizedError(redirect=container.config.auth.login_path)

    g.session = session
    g.user_id = session.user_id
    logger.debug(f"Auth OK: user={session.user_id} {request.method} {request.path}")


def login_required(f: Callable):
    @wraps(f)
    def inner(*a, **kw):
        _admit()
        return f(*a, **kw)

    return inner


def login_required_when(predicate: Callable[[AppConfig], bool]):
    """Guard the view only when ``predicate(config)`` holds for the running app."""

    def decorator(f: Callable):
        @wraps(f)
        def inner(*a, **kw):
            if predicate(current_container().config):
                _admit()
            return f(*a, **kw)

        return inner

    return decorator


__all__ = [
    "SESSION_COOKIE",
    "current_session",
    "login_required",
    "login_required_when",
    "read_session_token",
]
