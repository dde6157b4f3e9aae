# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from functools import wraps

from flask import Flask, Response, jsonify, request

from gamemarket.shared.config import AppConfig
from gamemarket.shared.config.current import current_config

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def set_csrf_cookie(resp: Response, config: AppConfig) -> None:
    resp.set_cookie(
        CSRF_COOKIE,
        secrets.token_urlsafe(32),
        httponly=False,
        samesite=config.security.cookie_samesite,
        secure=config.secure_cookies(),
        max_age=config.auth.session_ttl,
    )


def configure_csrf(app: Flask, config: AppConfig) -> None:
    if not config.security.enable_csrf:
        return

    @app.after_request
    def _ensure_csrf_cookie(resp):
        if request.method in SAFE_METHODS and not request.cookies.get(CSRF_COOKIE):
            set_csrf_cookie(resp, config)
        return resp


def csrf_protect(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_config().security.enable_csrf or request.method in SAFE_METHODS:
            return f(*args, **kwargs)
        header = (request.headers.get(CSRF_HEADER) or "").strip()
        cookie = (request.cookies.get(CSRF_COOKIE) or "").strip()
        if not header or not cookie or not secrets.compare_digest(header, cookie):
            return jsonify({"error": "csrf"}), 403
        return f(*args, **kwargs)

    return wrapper


__all__ = ["configure_csrf", "csrf_protect", "set_csrf_cookie"]
