"""SQLAlchemy implementation of ResponsePlan repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.response_plan import PlanState, ResponsePlan, ResponseStrategy
from infrastructure.database.models import ResponsePlanModel


class SQLAlchemyResponsePlanRepository:
    """SQLAlchemy implementation of IResponsePlanRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_profile(self, profile_id: UUID) -> list[ResponsePlan]:
        """Get all plans for a profile, oldest first, with strategies."""
        stmt = (
            select(ResponsePlanModel)
            .options(selectinload(ResponsePlanModel.response_strategies))
            .where(ResponsePlanModel.profile_id == profile_id)
            .order_by(ResponsePlanModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_approved_before(
        self, profile_id: UUID, moment: datetime
    ) -> list[ResponsePlan]:
        """Get approved plans with ``approved_at < moment`` ordered by approved_at."""
        stmt = (
            select(ResponsePlanModel)
            .options(selectinload(ResponsePlanModel.response_strategies))
            .where(
                ResponsePlanModel.profile_id == profile_id,
                ResponsePlanModel.state == PlanState.APPROVED.value,
                ResponsePlanModel.approved_at < moment,
            )
            .order_by(ResponsePlanModel.approved_at, ResponsePlanModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ResponsePlanModel) -> ResponsePlan:
        """Convert ORM model to domain entity."""
        return ResponsePlan(
            id=model.id,
            profile_id=model.profile_id,
            state=PlanState(model.state),
            author_id=model.author_id,
            approver_id=model.approver_id,
            submitted_at=model.submitted_at,
            approved_at=model.approved_at,
            created_at=model.created_at,
            response_strategies=[
                ResponseStrategy(
                    id=strategy.id,
                    title=strategy.title,
                    description=strategy.description,
                    priority=strategy.priority,
                )
                for strategy in model.response_strategies
            ],
        )
