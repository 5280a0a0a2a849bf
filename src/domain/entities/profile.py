"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from core.exceptions import InvariantViolationError
from domain.entities.response_plan import ResponsePlan
from domain.entities.rms import CrisisIncident, RMSPerson


class OverridableField(StrEnum):
    """Profile fields whose value may come from the linked RMS person."""

    DATE_OF_BIRTH = "date_of_birth"
    EYE_COLOR = "eye_color"
    FIRST_NAME = "first_name"
    HAIR_COLOR = "hair_color"
    HEIGHT_IN_INCHES = "height_in_inches"
    LAST_NAME = "last_name"
    LOCATION_ADDRESS = "location_address"
    LOCATION_NAME = "location_name"
    MIDDLE_INITIAL = "middle_initial"
    RACE = "race"
    SCARS_AND_MARKS = "scars_and_marks"
    SEX = "sex"
    WEIGHT_IN_POUNDS = "weight_in_pounds"


class PersistenceState(StrEnum):
    """Where a profile stands relative to the database."""

    NEW = "new"
    CLEAN = "clean"
    DIRTY = "dirty"


@dataclass
class Alias:
    """Alternate name for a profile. Deleted with its profile."""

    name: str
    id: UUID = field(default_factory=uuid4)


@dataclass
class Image:
    """Uploaded profile image. Deleted with its profile."""

    source_url: str
    id: UUID = field(default_factory=uuid4)
    position: int = 0


@dataclass
class Visibility:
    """A window during which a profile is visible to responders."""

    profile_id: UUID
    created_at: datetime
    id: UUID = field(default_factory=uuid4)
    removed_at: datetime | None = None
    created_by_id: UUID | None = None
    removed_by_id: UUID | None = None
    creation_notes: str | None = None
    removal_notes: str | None = None

    def is_active_at(self, moment: datetime) -> bool:
        """Check if the window is open at the given moment."""
        if self.created_at > moment:
            return False
        return self.removed_at is None or self.removed_at > moment

    @property
    def is_manual(self) -> bool:
        """Check if a person (rather than automation) created or removed it."""
        return self.created_by_id is not None or self.removed_by_id is not None


@dataclass
class Review:
    """A recorded review of a profile."""

    profile_id: UUID
    created_at: datetime
    id: UUID = field(default_factory=uuid4)
    reviewer_id: UUID | None = None


@dataclass
class Profile:
    """Domain entity for a locally maintained person-of-interest profile.

    ``overrides`` holds only locally entered values, keyed by
    ``OverridableField`` values. Effective values are resolved against
    ``rms_person`` by ``AttributeResolver``.
    """

    id: UUID = field(default_factory=uuid4)
    overrides: dict[str, Any] = field(default_factory=dict)
    rms_person: RMSPerson | None = None
    aliases: list[Alias] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    analytics_token: str | None = None
    state: PersistenceState = PersistenceState.NEW
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def persisted(self) -> bool:
        """Check if the profile has been saved at least once."""
        return self.state != PersistenceState.NEW

    @property
    def changed(self) -> bool:
        """Check if a persisted profile has unsaved changes."""
        return self.state == PersistenceState.DIRTY

    def local_value(self, name: str) -> Any:
        """Return the locally stored override, or None."""
        return self.overrides.get(name)

    def store_override(self, name: str, value: Any) -> None:
        """Store (or clear, for None) a local override."""
        if self.overrides.get(name) == value:
            return
        if value is None:
            self.overrides.pop(name, None)
        else:
            self.overrides[name] = value
        self.mark_changed()

    def mark_changed(self) -> None:
        """Flag a clean profile as having unsaved changes."""
        if self.state == PersistenceState.CLEAN:
            self.state = PersistenceState.DIRTY

    def mark_persisted(self) -> None:
        """Record that the current state matches the database."""
        self.state = PersistenceState.CLEAN

    def assign_analytics_token(self, token: str) -> None:
        """Set the analytics token. Only allowed once, before first save."""
        if self.analytics_token is not None or self.persisted:
            raise InvariantViolationError(
                "Analytics token is immutable once assigned",
                details={"profile_id": str(self.id)},
            )
        self.analytics_token = token

    @property
    def profile_image(self) -> Image | None:
        """The first image by stored position, if any."""
        if not self.images:
            return None
        return min(self.images, key=lambda image: image.position)


@dataclass
class ProfileSnapshot:
    """A profile and its related collections, read in one unit of work."""

    profile: Profile
    response_plans: list[ResponsePlan] = field(default_factory=list)
    visibilities: list[Visibility] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    crisis_incidents: list[CrisisIncident] = field(default_factory=list)
