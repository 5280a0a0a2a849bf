"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities.

    Profiles are loaded together with their aliases, images and linked RMS
    person.
    """

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_many(self, ids: list[UUID]) -> list[Profile]:
        """Get several profiles, preserving the order of ``ids``."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile with its aliases and images."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update a profile, replacing its aliases and images."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile with its aliases and images."""
        ...
