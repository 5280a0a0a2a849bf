"""SQLAlchemy implementation of the read-only RMS repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import OverridableField
from domain.entities.rms import CrisisIncident, RMSPerson
from infrastructure.database.models import CrisisIncidentModel, RMSPersonModel


def rms_person_to_entity(model: RMSPersonModel) -> RMSPerson:
    """Convert ORM model to domain entity."""
    return RMSPerson(
        id=model.id,
        profile_id=model.profile_id,
        **{name.value: getattr(model, name.value) for name in OverridableField},
    )


class SQLAlchemyRMSRepository:
    """SQLAlchemy implementation of IRMSRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_person(self, id: UUID) -> RMSPerson | None:
        """Get an RMS person by ID."""
        stmt = select(RMSPersonModel).where(RMSPersonModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return rms_person_to_entity(model) if model else None

    async def get_incidents(self, rms_person_id: UUID) -> list[CrisisIncident]:
        """Get all crisis incidents for an RMS person, oldest first."""
        stmt = (
            select(CrisisIncidentModel)
            .where(CrisisIncidentModel.rms_person_id == rms_person_id)
            .order_by(CrisisIncidentModel.reported_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_incidents_between(
        self, rms_person_id: UUID, start: datetime, end: datetime
    ) -> list[CrisisIncident]:
        """Get incidents with ``start <= reported_at <= end``, newest first."""
        stmt = (
            select(CrisisIncidentModel)
            .where(
                CrisisIncidentModel.rms_person_id == rms_person_id,
                CrisisIncidentModel.reported_at.between(start, end),
            )
            .order_by(CrisisIncidentModel.reported_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: CrisisIncidentModel) -> CrisisIncident:
        """Convert ORM model to domain entity."""
        return CrisisIncident(
            id=model.id,
            rms_person_id=model.rms_person_id,
            reported_at=model.reported_at,
            veteran=model.veteran,
        )
