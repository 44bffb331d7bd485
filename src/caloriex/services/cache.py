"""Simple cache abstractions."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(tz=UTC)


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int | None = None) -> None:
        """Store a cached value with a TTL in seconds."""

    def delete(self, key: str) -> bool:
        """Remove a key and return whether it was present."""

    def clear(self) -> int:
        """Drop every entry and return how many were dropped."""

    def evict_expired(self) -> int:
        """Drop expired entries and return how many were dropped."""

    def __len__(self) -> int:
        """Return the number of stored entries."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


class InMemoryCache(Cache):
    """In-memory TTL cache driven by an injectable clock."""

    def __init__(
        self, default_ttl_seconds: int = 3600, clock: Clock = utc_now
    ) -> None:
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int | None = None) -> None:
        """Store a cached value with a TTL, dropping expired entries first."""
        self.evict_expired()
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        expires_at = self._clock() + timedelta(seconds=ttl)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def delete(self, key: str) -> bool:
        """Remove a key; return whether it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def evict_expired(self) -> int:
        """Drop entries whose TTL has elapsed."""
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
