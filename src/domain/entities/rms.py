"""Records-management-system (RMS) entities.

RMS data is owned by an external system and is read-only here. A profile may
be linked to one RMS person, whose fields act as the fallback for every
overridable profile field.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

RACE_CODES: dict[str, str] = {
    "AMERICAN_INDIAN_OR_ALASKA_NATIVE": "I",
    "ASIAN": "A",
    "BLACK_OR_AFRICAN_AMERICAN": "B",
    "NATIVE_HAWAIIAN_OR_OTHER_PACIFIC_ISLANDER": "P",
    "UNKNOWN": "U",
    "WHITE": "W",
}

SEX_CODES: dict[str, str] = {
    "Female": "F",
    "Male": "M",
}

UNKNOWN_CODE = "U"


@dataclass
class RMSPerson:
    """Domain entity for a person record in the RMS."""

    profile_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    first_name: str | None = None
    last_name: str | None = None
    middle_initial: str | None = None
    date_of_birth: date | None = None
    sex: str | None = None
    race: str | None = None
    eye_color: str | None = None
    hair_color: str | None = None
    height_in_inches: int | None = None
    weight_in_pounds: int | None = None
    scars_and_marks: str | None = None
    location_name: str | None = None
    location_address: str | None = None

    def value_for(self, field_name: str) -> Any:
        """Return the RMS value for an overridable field name."""
        return getattr(self, field_name)


@dataclass
class CrisisIncident:
    """Domain entity for a crisis incident reported against an RMS person."""

    rms_person_id: UUID
    reported_at: datetime
    id: UUID = field(default_factory=uuid4)
    veteran: bool = False
