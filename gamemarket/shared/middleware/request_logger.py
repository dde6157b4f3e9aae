# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping
from typing import Any

from flask import Flask, Response, g, request

from gamemarket.shared.config import AppConfig
from gamemarket.shared.logging import clear_correlation_id, logger, set_correlation_id

from .client_ip import client_ip

REQUEST_ID_HEADER = "X-Request-ID"

SENSITIVE_HEADERS = frozenset(
    {"authorization", "cookie", "set-cookie", "x-api-key", "x-auth-token", "x-csrf-token"}
)
SENSITIVE_PARAMS = ("password", "token", "key", "secret", "auth")

# Probe endpoints are logged at DEBUG only.
QUIET_PATHS = frozenset({"/health", "/metrics"})


def _fingerprint(value: str) -> str:
    return f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _safe_params(params: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in SENSITIVE_PARAMS) else value
        for key, value in params.items()
    }


def _emit(message: str) -> None:
    if request.path in QUIET_PATHS:
        logger.debug(message)
    else:
        logger.info(message)


def configure_request_logging(app: Flask, config: AppConfig) -> None:
    verbose = config.debug_logging

    @app.before_request
    def _open_request() -> None:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.correlation_id = correlation_id
        g.request_start_time = time.perf_counter()

        line = f"-> {request.method} {request.path} from {client_ip()}"
        if verbose:
            line += (
                f" query={_safe_params(dict(request.args))}"
                f" headers={_safe_headers(dict(request.headers))}"
                f" body_size={request.content_length or 0}"
            )
        _emit(line)

    @app.after_request
    def _close_request(response: Response) -> Response:
        started = getattr(g, "request_start_time", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        line = f"<- {request.method} {request.path} {response.status_code} in {elapsed_ms:.1f} ms"
        if verbose:
            line += f" user={getattr(g, 'user_id', None)}"
        _emit(line)
        response.headers.setdefault(REQUEST_ID_HEADER, getattr(g, "correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request error: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["configure_request_logging"]
