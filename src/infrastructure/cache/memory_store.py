"""Process-local implementation of the derived-value cache store."""

import threading
from typing import Any
from uuid import UUID

from domain.repositories.cache_store import CacheKey


class InMemoryCacheStore:
    """Thread-safe dict-backed implementation of ICacheStore."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> tuple[bool, Any]:
        """Look up a key."""
        with self._lock:
            if key in self._entries:
                return True, self._entries[key]
        return False, None

    def set_if_absent(self, key: CacheKey, value: Any) -> Any:
        """Store ``value`` unless another writer got there first."""
        with self._lock:
            return self._entries.setdefault(key, value)

    def delete_entity(self, entity_id: UUID) -> int:
        """Drop every label stored for an entity."""
        with self._lock:
            stale = [key for key in self._entries if key[0] == entity_id]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
