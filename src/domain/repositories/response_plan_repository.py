"""Response plan repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.response_plan import ResponsePlan


class IResponsePlanRepository(Protocol):
    """Repository interface for ResponsePlan entities."""

    async def get_for_profile(self, profile_id: UUID) -> list[ResponsePlan]:
        """Get all plans for a profile, oldest first, with strategies."""
        ...

    async def get_approved_before(
        self, profile_id: UUID, moment: datetime
    ) -> list[ResponsePlan]:
        """Get approved plans with ``approved_at < moment`` ordered by approved_at."""
        ...
