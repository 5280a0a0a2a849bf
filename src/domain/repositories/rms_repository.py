"""RMS repository protocol (read-only)."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.rms import CrisisIncident, RMSPerson


class IRMSRepository(Protocol):
    """Read access to RMS people and their crisis incidents."""

    async def get_person(self, id: UUID) -> RMSPerson | None:
        """Get an RMS person by ID."""
        ...

    async def get_incidents(self, rms_person_id: UUID) -> list[CrisisIncident]:
        """Get all crisis incidents for an RMS person."""
        ...

    async def get_incidents_between(
        self, rms_person_id: UUID, start: datetime, end: datetime
    ) -> list[CrisisIncident]:
        """Get incidents with ``start <= reported_at <= end``, newest first."""
        ...
