"""Derived-value cache store protocol."""

from typing import Any, Protocol
from uuid import UUID

CacheKey = tuple[UUID, str]


class ICacheStore(Protocol):
    """Key-value store addressed by (entity id, label).

    ``get`` returns ``(found, value)`` so that cached ``None`` values are
    distinguishable from misses.
    """

    def get(self, key: CacheKey) -> tuple[bool, Any]:
        """Look up a key."""
        ...

    def set_if_absent(self, key: CacheKey, value: Any) -> Any:
        """Store ``value`` unless the key is already present.

        Returns the value that ends up stored.
        """
        ...

    def delete_entity(self, entity_id: UUID) -> int:
        """Drop every label stored for an entity. Returns the number removed."""
        ...
