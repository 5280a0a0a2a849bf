"""Derived-value cache for expensive per-profile reads."""

from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

import structlog

from domain.entities.profile import Profile
from domain.repositories.cache_store import ICacheStore

logger = structlog.get_logger()

T = TypeVar("T")


class DerivedValueCache:
    """Memoizes derived reads keyed by (profile id, label).

    Only persisted profiles without unsaved changes are cached. New or dirty
    profiles always recompute, and nothing computed for them is stored.
    Keys carry the profile's ``updated_at`` so a save makes earlier entries
    unreachable; ``invalidate`` drops them when a profile is saved or deleted.
    """

    def __init__(self, store: ICacheStore) -> None:
        self._store = store

    def cached(self, profile: Profile, label: str, compute: Callable[[], T]) -> T:
        """Return the cached value for ``label``, computing it on a miss."""
        if not profile.persisted or profile.changed:
            return compute()

        key = (profile.id, self._versioned(profile, label))
        found, value = self._store.get(key)
        if found:
            return value  # type: ignore[no-any-return]

        # Computed outside the store lock; the first stored value wins.
        return self._store.set_if_absent(key, compute())  # type: ignore[no-any-return]

    @staticmethod
    def _versioned(profile: Profile, label: str) -> str:
        # Saves bump updated_at, so entries stored from an older snapshot
        # are never read back for a newer one.
        if profile.updated_at is None:
            return label
        return f"{label}@{profile.updated_at.isoformat()}"

    def invalidate(self, profile_id: UUID) -> None:
        """Drop every cached value for a profile."""
        removed = self._store.delete_entity(profile_id)
        logger.debug(
            "profile_cache_invalidated",
            profile_id=str(profile_id),
            entries=removed,
        )
