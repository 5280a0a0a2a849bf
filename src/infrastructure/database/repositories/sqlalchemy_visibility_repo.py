"""SQLAlchemy implementations of Visibility and Review repositories."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Review, Visibility
from infrastructure.database.models import ReviewModel, VisibilityModel


class SQLAlchemyVisibilityRepository:
    """SQLAlchemy implementation of IVisibilityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_profile(self, profile_id: UUID) -> list[Visibility]:
        """Get all visibility events for a profile, oldest first."""
        stmt = (
            select(VisibilityModel)
            .where(VisibilityModel.profile_id == profile_id)
            .order_by(VisibilityModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: VisibilityModel) -> Visibility:
        """Convert ORM model to domain entity."""
        return Visibility(
            id=model.id,
            profile_id=model.profile_id,
            created_at=model.created_at,
            removed_at=model.removed_at,
            created_by_id=model.created_by_id,
            removed_by_id=model.removed_by_id,
            creation_notes=model.creation_notes,
            removal_notes=model.removal_notes,
        )


class SQLAlchemyReviewRepository:
    """SQLAlchemy implementation of IReviewRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_profile(self, profile_id: UUID) -> list[Review]:
        """Get all reviews for a profile, oldest first."""
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.profile_id == profile_id)
            .order_by(ReviewModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [
            Review(
                id=model.id,
                profile_id=model.profile_id,
                created_at=model.created_at,
                reviewer_id=model.reviewer_id,
            )
            for model in result.scalars()
        ]
