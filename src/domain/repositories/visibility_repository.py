"""Visibility and review repository protocols."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Review, Visibility


class IVisibilityRepository(Protocol):
    """Repository interface for Visibility entities."""

    async def get_for_profile(self, profile_id: UUID) -> list[Visibility]:
        """Get all visibility events for a profile, oldest first."""
        ...


class IReviewRepository(Protocol):
    """Repository interface for Review entities."""

    async def get_for_profile(self, profile_id: UUID) -> list[Review]:
        """Get all reviews for a profile, oldest first."""
        ...
