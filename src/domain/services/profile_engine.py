"""Per-request facade over a profile snapshot."""

from datetime import datetime
from typing import Any

from core.config import Settings
from domain.entities.profile import OverridableField, Profile, ProfileSnapshot
from domain.entities.response_plan import ResponsePlan
from domain.entities.rms import CrisisIncident
from domain.services import presentation
from domain.services.attribute_resolver import AttributeResolver
from domain.services.derived_cache import DerivedValueCache
from domain.services.timeline import ProfileTimeline


class ProfileEngine:
    """Resolved attributes, derived state and display strings for one profile.

    Intended to live for one logical request. Memoized timeline values
    (active plan, recent incidents) are scoped to this instance, while
    resolved attributes go through the shared ``DerivedValueCache``.
    """

    def __init__(
        self,
        snapshot: ProfileSnapshot,
        settings: Settings,
        cache: DerivedValueCache | None = None,
        now: datetime | None = None,
    ) -> None:
        self.snapshot = snapshot
        self._settings = settings
        self._cache = cache
        self.attributes = AttributeResolver(snapshot.profile, cache)
        self.timeline = ProfileTimeline(snapshot, settings, now=now)

    @property
    def profile(self) -> Profile:
        return self.snapshot.profile

    def get(self, field: OverridableField | str) -> Any:
        return self.attributes.get(field)

    def set(self, field: OverridableField | str, value: Any) -> None:
        self.attributes.set(field, value)

    # --- Derived state ---

    @property
    def active_plan(self) -> ResponsePlan | None:
        return self.timeline.active_plan

    def active_plan_at(self, moment: datetime) -> ResponsePlan | None:
        return self.timeline.active_plan_at(moment)

    @property
    def recent_incidents(self) -> list[CrisisIncident]:
        return self.timeline.recent_incidents

    def has_nominal_response_plan(self) -> bool:
        return self.timeline.has_nominal_response_plan()

    def due_for_review(self) -> bool:
        return self.timeline.due_for_review()

    def veteran(self) -> bool:
        return self.timeline.veteran()

    def visible(self) -> bool:
        return self.timeline.visible()

    def visibility_status(self) -> str:
        return self.timeline.visibility_status()

    # --- Display ---

    @property
    def display_name(self) -> str:
        return presentation.display_name(self.attributes)

    @property
    def name(self) -> str:
        return presentation.full_name(self.attributes)

    @name.setter
    def name(self, value: str) -> None:
        presentation.assign_full_name(self.attributes, value)

    @property
    def address_line_one(self) -> str | None:
        return presentation.address_line_one(self.attributes)

    @property
    def address_line_two(self) -> str:
        return presentation.address_line_two(self.attributes)

    @property
    def shorthand_description(self) -> str:
        return presentation.shorthand_description(self.attributes)

    @property
    def profile_image_url(self) -> str:
        return presentation.profile_image_url(self.attributes, self._settings, self._cache)
