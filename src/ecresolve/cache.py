# topmark:header:start
#
#   project      : ECResolve
#   file         : cache.py
#   file_relpath : src/ecresolve/cache.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-file memoization of resolved properties.

`ResolutionCache` is an explicit object owned by whoever owns the resolver,
rather than module-level state, so that the component observing filesystem
changes (typically an editor's file watcher) can evict entries.

Notes:
    * All state is guarded by an `RLock`.
    * `get_or_compute()` is single-flight: concurrent requests for the same key
      run the computation once and share its result.
    * Each key carries a generation counter. An invalidation that lands while a
      computation is in flight bumps the generation, and the (possibly stale)
      result is handed to its callers but not stored.
"""

from __future__ import annotations

from pathlib import PurePath
from threading import Event, RLock
from typing import TYPE_CHECKING, Generic, TypeVar

from ecresolve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from ecresolve.config.logging import EcresolveLogger

logger: EcresolveLogger = get_logger(__name__)

V = TypeVar("V")


class ResolutionCache(Generic[V]):
    """Thread-safe, single-flight cache keyed by absolute path strings."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: dict[str, V] = {}
        self._inflight: dict[str, Event] = {}
        self._generations: dict[str, int] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> V | None:
        """Return the cached value for ``key``, or None."""
        with self._lock:
            return self._entries.get(key)

    def get_or_compute(self, key: str, compute: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing it at most once at a time.

        Args:
            key (str): Cache key (absolute file path).
            compute (Callable[[], V]): Produces the value on a miss.

        Returns:
            V: The cached or freshly computed value.
        """
        while True:
            with self._lock:
                if key in self._entries:
                    logger.trace("Cache hit: %s", key)
                    return self._entries[key]
                pending: Event | None = self._inflight.get(key)
                if pending is None:
                    done = Event()
                    self._inflight[key] = done
                    generation: int = self._generations.get(key, 0)
                    break
            # Another thread owns the computation; wait, then re-check.
            pending.wait()

        try:
            value: V = compute()
            with self._lock:
                if self._generations.get(key, 0) == generation:
                    self._entries[key] = value
                else:
                    logger.debug("Discarding result invalidated during resolution: %s", key)
            return value
        finally:
            with self._lock:
                self._inflight.pop(key, None)
                self._generations.pop(key, None)
            done.set()

    def invalidate(self, key: str) -> bool:
        """Drop the entry for ``key``.

        Returns:
            bool: True if an entry was removed.
        """
        with self._lock:
            self._bump(key)
            return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, directory: str | PurePath) -> int:
        """Drop every entry for a path located under ``directory``.

        Args:
            directory (str | PurePath): Directory whose descendants are evicted.

        Returns:
            int: Number of entries removed.
        """
        base = PurePath(directory)
        with self._lock:
            for key in list(self._inflight):
                if _is_under(PurePath(key), base):
                    self._bump(key)
            doomed: list[str] = [key for key in self._entries if _is_under(PurePath(key), base)]
            for key in doomed:
                del self._entries[key]
        logger.debug("Invalidated %d cached entries under %s", len(doomed), base)
        return len(doomed)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            for key in list(self._inflight):
                self._bump(key)
            self._entries.clear()

    def _bump(self, key: str) -> None:
        # Only in-flight computations need to notice an invalidation
        if key in self._inflight:
            self._generations[key] = self._generations.get(key, 0) + 1


def _is_under(path: PurePath, base: PurePath) -> bool:
    return path == base or base in path.parents
