"""Small TTL cache for external catalog lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache keyed by string."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[object, float]] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a cached value unless it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value that expires after ttl_seconds."""
        self._entries[key] = (value, self.clock() + ttl_seconds)
