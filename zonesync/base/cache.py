"""
Zone listing cache.

Lets a long-running host reuse a project's zone listing across phases
and passes instead of listing zones once per change kind.  The cache is
opt-in and lives outside the reconciliation core: the core only sees a
zone fetcher that happens to answer from memory.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, TypeVar

T = TypeVar("T")


class ZoneCache:
    """Thread-safe, in-process cache keyed by project id with a fixed TTL."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._cache: dict[str, tuple[float, object]] = {}
        self._lock = threading.Lock()

    def get_or_fetch(self, project_id: str, fetch: Callable[[], T]) -> T:
        """Return the cached listing for *project_id* or refresh it via *fetch*.

        Exceptions from *fetch* propagate and leave the cache untouched, so a
        failed listing is retried on the next call.

        Args:
            project_id: Project the zones belong to.
            fetch: Zero-argument callable producing a fresh listing.

        Returns:
            The cached (or newly fetched) listing.
        """
        if self.ttl <= 0:
            return fetch()
        with self._lock:
            entry = self._cache.get(project_id)
            if entry is not None and self._clock() - entry[0] < self.ttl:
                return entry[1]  # type: ignore[return-value]
            value = fetch()
            self._cache[project_id] = (self._clock(), value)
            return value

    def invalidate(self, project_id: str | None = None) -> None:
        """Drop one project's listing, or every listing when no id is given."""
        with self._lock:
            if project_id is None:
                self._cache.clear()
            else:
                self._cache.pop(project_id, None)
