# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from flask import current_app, jsonify, request

from gamemarket.shared.config.current import current_config
from gamemarket.shared.logging import logger

from .client_ip import client_ip


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._buckets: dict[str, Bucket] = defaultdict(lambda: Bucket(deque(maxlen=self._limit)))
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            bucket = self._buckets[key]
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Per-client sliding window limit, one limiter per app and view.

    Settings are read on first use so the decorator can be applied at class
    definition time, before any app config is bound.
    """

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            config = current_config()
            if not config.security.enable_rate_limit:
                return f(*args, **kwargs)
            limiters = current_app.extensions.setdefault("rate_limiters", {})
            limiter = limiters.get(f.__qualname__)
            if limiter is None:
                limiter = limiters.setdefault(
                    f.__qualname__,
                    InMemoryRateLimiter(
                        limit or config.security.rate_limit_requests,
                        window_seconds or config.security.rate_limit_window,
                    ),
                )
            key = f"{request.path}:{client_ip()}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                return jsonify({"error": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
