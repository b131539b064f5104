"""
Retry utilities with exponential backoff for idempotent API reads.

Only listing calls (zones, record sets) are wrapped.  Mutating calls are
never retried in-process: a failed create, patch or delete is logged and
picked up again by the next reconciliation pass.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests

from zonesync.base.context import Context

logger = logging.getLogger("zonesync")

# Transport failures considered transient.  HTTP error statuses are not
# retried here; the API answered and the caller decides what that means.
_DEFAULT_RETRYABLE: tuple[type[BaseException], ...] = (
    requests.ConnectionError,
    requests.Timeout,
)


def _find_context(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Context | None:
    ctx = kwargs.get("ctx")
    if isinstance(ctx, Context):
        return ctx
    return next((a for a in args if isinstance(a, Context)), None)


def retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    retryable_exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable:
    """Decorator: retry a function on transient exceptions with exponential backoff.

    When the wrapped call receives a :class:`Context`, backoff sleeps wake
    up on cancellation and the last exception is re-raised immediately.

    Args:
        max_attempts: Maximum number of total attempts (including the first).
        base_delay: Initial delay in seconds before the first retry.
        max_delay: Cap on the delay between retries.
        backoff_factor: Multiplier applied to the delay after each retry.
        retryable_exceptions: Tuple of exception types that trigger a retry.
            Defaults to ``requests.ConnectionError`` and ``requests.Timeout``.

    Returns:
        Decorated function that retries on transient failures.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if retryable_exceptions is None:
        retryable_exceptions = _DEFAULT_RETRYABLE

    def decorator(fn: Callable) -> Callable:
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ctx = _find_context(args, kwargs)
            delay = base_delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retryable_exceptions as exc:
                    if attempt == max_attempts:
                        logger.error(
                            "All %d attempts failed for %s: %s",
                            max_attempts,
                            fn.__qualname__,
                            exc,
                        )
                        raise
                    logger.warning(
                        "Attempt %d/%d for %s failed (%s), retrying in %.1fs",
                        attempt,
                        max_attempts,
                        fn.__qualname__,
                        exc,
                        delay,
                    )
                    if ctx is not None:
                        if ctx.wait(delay):
                            raise
                    else:
                        time.sleep(delay)
                    delay = min(delay * backoff_factor, max_delay)

        return wrapper

    return decorator
