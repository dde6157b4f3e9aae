# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Retry helpers for store access at startup."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gamemarket.shared.logging import logger

T = TypeVar("T")

BACKOFF_CAP = 8.0


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        f"resilience: attempt={state.attempt_number} failed "
        f"({type(exc).__name__ if exc else 'unknown'}), retrying"
    )


def call_with_retries(  # noqa: UP047
    func: Callable[[], T],
    *,
    retries: int,
    backoff: float,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Call ``func`` up to ``retries + 1`` times with exponential backoff.

    The last exception is re-raised unchanged once attempts are exhausted.
    """

    retrying = Retrying(
        stop=stop_after_attempt(retries + 1),
        wait=wait_exponential(multiplier=backoff, max=BACKOFF_CAP),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True,
    )
    return retrying(func)


__all__ = ["call_with_retries"]
