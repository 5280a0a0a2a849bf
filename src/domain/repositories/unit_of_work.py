"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.response_plan_repository import IResponsePlanRepository
from domain.repositories.rms_repository import IRMSRepository
from domain.repositories.visibility_repository import IReviewRepository, IVisibilityRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    response_plans: IResponsePlanRepository
    visibilities: IVisibilityRepository
    reviews: IReviewRepository
    rms: IRMSRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
