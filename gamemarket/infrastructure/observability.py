# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, Response, g, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from gamemarket.shared.config import AppConfig

REQUEST_LATENCY = Histogram(
    "gamemarket_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "gamemarket_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "method", "status"),
)
LOGIN_COUNTER = Counter(
    "gamemarket_logins_total",
    "Login attempts by outcome",
    labelnames=("outcome",),
)


def _endpoint_label() -> str:
    rule = request.url_rule
    return rule.rule if rule is not None else "<unmatched>"


def configure_metrics(app: Flask, config: AppConfig) -> None:
    if not config.observability.metrics_enabled:
        return

    @app.before_request
    def _start_metrics_timer() -> None:
        g._metrics_t0 = time.perf_counter()

    @app.after_request
    def _record_metrics(resp):
        endpoint = _endpoint_label()
        started = getattr(g, "_metrics_t0", None)
        if started is not None:
            REQUEST_LATENCY.labels(endpoint=endpoint).observe(time.perf_counter() - started)
        REQUEST_COUNTER.labels(
            endpoint=endpoint, method=request.method, status=str(resp.status_code)
        ).inc()
        return resp


def metrics_response() -> Response:
    return Response(generate_latest(), content_type=CONTENT_TYPE_LATEST)


def record_login(success: bool) -> None:
    LOGIN_COUNTER.labels(outcome="success" if success else "failure").inc()


__all__ = [
    "LOGIN_COUNTER",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "configure_metrics",
    "metrics_response",
    "record_login",
]
