"""Per-tenant configuration cache.

Holds one decoded activation document per tenant key for the lifetime of
the cache object. The host injects the cache into the controller and
invalidates it explicitly when configuration files change.

Populate-on-miss is serialized per key, so concurrent first reads of the
same tenant trigger exactly one load.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class ConfigCache:
    """Thread-safe get-or-populate cache keyed by tenant.

    Example:
        cache = ConfigCache()
        config = cache.get_or_populate("my-theme", lambda: source.load("my-theme"))
        cache.invalidate("my-theme")
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks.setdefault(key, threading.Lock())
            return lock

    def get_or_populate(self, key: str, loader: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        """Return the cached document for ``key``, loading it once on a miss.

        NOTE: returns the cached dict instance (treat as immutable)
        """
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        with self._lock_for(key):
            # Another thread may have populated while we waited.
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            logger.debug(f"Config cache miss for {key!r}")
            loaded = loader()
            self._entries[key] = loaded if isinstance(loaded, dict) else {}
            return self._entries[key]

    def is_cached(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, key: str) -> None:
        """Drop one tenant's document."""
        with self._lock_for(key):
            self._entries.pop(key, None)

    def invalidate_all(self) -> None:
        """Drop every cached document.

        Each key is dropped under its own lock, so a load already in progress
        finishes first and its result is dropped with the rest.
        """
        with self._registry_lock:
            keys = list(self._key_locks)
        for key in keys:
            self.invalidate(key)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ConfigCache"]
