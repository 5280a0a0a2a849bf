"""Profile service layer: lifecycle, updates and snapshot loading."""

import secrets
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import structlog

from core.config import Settings
from core.config import settings as default_settings
from core.exceptions import ConfigurationError, ProfileNotFoundError, ValidationError
from domain.entities.profile import Alias, Image, OverridableField, Profile, ProfileSnapshot
from domain.entities.response_plan import ResponsePlan
from domain.entities.rms import CrisisIncident
from domain.repositories.search_index import IProfileSearchIndex
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.attribute_resolver import AttributeResolver
from domain.services.derived_cache import DerivedValueCache
from domain.services.presentation import assign_full_name
from domain.services.profile_engine import ProfileEngine

logger = structlog.get_logger()

# Attribute keys accepted besides the overridable fields themselves.
HEIGHT_COMPONENTS = ("height_feet", "height_inches")
FULL_NAME = "name"

DESTROY_FLAG = "_destroy"
_TRUTHY = {"1", "true", "t", "yes", "on"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _all_blank(entry: dict[str, Any]) -> bool:
    return all(_is_blank(value) for key, value in entry.items() if key != DESTROY_FLAG)


def _destroy_requested(entry: dict[str, Any]) -> bool:
    flag = entry.get(DESTROY_FLAG)
    if flag is None or isinstance(flag, bool):
        return bool(flag)
    return str(flag).strip().lower() in _TRUTHY


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        cache: DerivedValueCache,
        settings: Settings | None = None,
        search_index: Optional[IProfileSearchIndex] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._cache = cache
        self._settings = settings or default_settings
        self._search_index = search_index

    # --- Lifecycle ---

    async def create(
        self,
        attributes: dict[str, Any] | None = None,
        aliases_attributes: list[dict[str, Any]] | None = None,
        images_attributes: list[dict[str, Any]] | None = None,
        rms_person_id: UUID | None = None,
    ) -> Profile:
        """Create a profile and generate its analytics token.

        When ``rms_person_id`` is given the profile is linked to that RMS
        person before attributes are applied, so values matching the RMS
        record are not stored locally.

        Raises:
            ValidationError: if any attribute is rejected or the RMS person
                does not exist or is already linked; nothing is saved.
        """
        async with self._uow_factory() as uow:
            profile = Profile()
            if rms_person_id is not None:
                profile.rms_person = await uow.rms.get_person(rms_person_id)
                if profile.rms_person is None:
                    raise ValidationError(
                        "rms_person_id", f"RMS person {rms_person_id} not found"
                    )
                if profile.rms_person.profile_id is not None:
                    raise ValidationError(
                        "rms_person_id",
                        f"RMS person {rms_person_id} already belongs to a profile",
                    )

            self.apply_attributes(profile, attributes or {})
            self._apply_aliases(profile, aliases_attributes or [])
            self._apply_images(profile, images_attributes or [])

            profile.assign_analytics_token(secrets.token_hex(16))
            profile.created_at = datetime.utcnow()
            profile.updated_at = profile.created_at

            created = await uow.profiles.create(profile)
            await uow.commit()

        created.mark_persisted()
        logger.info("profile_created", profile_id=str(created.id))
        return created

    async def get(self, profile_id: UUID) -> Profile:
        """Get a profile by ID."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
        if not profile:
            raise ProfileNotFoundError(str(profile_id))
        return profile

    async def update(
        self,
        profile_id: UUID,
        attributes: dict[str, Any] | None = None,
        aliases_attributes: list[dict[str, Any]] | None = None,
        images_attributes: list[dict[str, Any]] | None = None,
    ) -> Profile:
        """Apply attribute and nested alias/image changes, then save.

        Raises:
            ProfileNotFoundError: if the profile does not exist.
            ValidationError: naming the first rejected field; nothing is saved.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            self.apply_attributes(profile, attributes or {})
            self._apply_aliases(profile, aliases_attributes or [])
            self._apply_images(profile, images_attributes or [])

            if not profile.changed:
                return profile

            profile.updated_at = datetime.utcnow()
            updated = await uow.profiles.update(profile)
            await uow.commit()

        self._cache.invalidate(profile_id)
        updated.mark_persisted()
        logger.info("profile_updated", profile_id=str(profile_id))
        return updated

    async def delete(self, profile_id: UUID) -> None:
        """Delete a profile together with its aliases and images."""
        async with self._uow_factory() as uow:
            deleted = await uow.profiles.delete(profile_id)
            if not deleted:
                raise ProfileNotFoundError(str(profile_id))
            await uow.commit()

        self._cache.invalidate(profile_id)
        logger.info("profile_deleted", profile_id=str(profile_id))

    # --- Attribute assignment ---

    @staticmethod
    def apply_attributes(profile: Profile, attributes: dict[str, Any]) -> None:
        """Write attributes through the resolver, in the order given.

        Accepts every overridable field plus ``name``, ``height_feet`` and
        ``height_inches``.
        """
        resolver = AttributeResolver(profile)
        known = {name.value for name in OverridableField}

        for key, value in attributes.items():
            if key == FULL_NAME:
                assign_full_name(resolver, "" if value is None else str(value))
            elif key in HEIGHT_COMPONENTS:
                setattr(resolver, key, value)
            elif key in known:
                resolver.set(key, value)
            else:
                raise ValidationError(key, f"Unknown profile attribute: {key}")

    @staticmethod
    def _apply_aliases(profile: Profile, entries: list[dict[str, Any]]) -> None:
        by_id = {str(alias.id): alias for alias in profile.aliases}
        for entry in entries:
            existing = by_id.get(str(entry.get("id"))) if entry.get("id") else None
            if existing is not None:
                if _destroy_requested(entry):
                    profile.aliases.remove(existing)
                    profile.mark_changed()
                elif "name" in entry and entry["name"] != existing.name:
                    existing.name = entry["name"]
                    profile.mark_changed()
            elif not _all_blank(entry) and not _destroy_requested(entry):
                profile.aliases.append(Alias(name=str(entry.get("name") or "")))
                profile.mark_changed()

    @staticmethod
    def _apply_images(profile: Profile, entries: list[dict[str, Any]]) -> None:
        by_id = {str(image.id): image for image in profile.images}
        for entry in entries:
            existing = by_id.get(str(entry.get("id"))) if entry.get("id") else None
            if existing is not None:
                if _destroy_requested(entry):
                    profile.images.remove(existing)
                    profile.mark_changed()
                elif "source_url" in entry and entry["source_url"] != existing.source_url:
                    existing.source_url = entry["source_url"]
                    profile.mark_changed()
            elif not _all_blank(entry) and not _destroy_requested(entry):
                next_position = max((image.position for image in profile.images), default=-1) + 1
                profile.images.append(
                    Image(
                        source_url=str(entry.get("source_url") or ""),
                        position=int(entry.get("position", next_position)),
                    )
                )
                profile.mark_changed()

    # --- Derived state ---

    async def load_snapshot(self, profile_id: UUID) -> ProfileSnapshot:
        """Read a profile and every related collection in one unit of work."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            plans = await uow.response_plans.get_for_profile(profile_id)
            visibilities = await uow.visibilities.get_for_profile(profile_id)
            reviews = await uow.reviews.get_for_profile(profile_id)
            incidents: list[CrisisIncident] = []
            if profile.rms_person is not None:
                incidents = await uow.rms.get_incidents(profile.rms_person.id)

        return ProfileSnapshot(
            profile=profile,
            response_plans=plans,
            visibilities=visibilities,
            reviews=reviews,
            crisis_incidents=incidents,
        )

    async def engine_for(self, profile_id: UUID, now: datetime | None = None) -> ProfileEngine:
        """Build a request-scoped engine over a fresh snapshot."""
        snapshot = await self.load_snapshot(profile_id)
        return ProfileEngine(snapshot, self._settings, cache=self._cache, now=now)

    async def active_plan_at(self, profile_id: UUID, moment: datetime) -> ResponsePlan | None:
        """Query the plan that was active at ``moment``."""
        async with self._uow_factory() as uow:
            plans = await uow.response_plans.get_approved_before(profile_id, moment)
        return plans[-1] if plans else None

    async def incidents_since(
        self, profile_id: UUID, moment: datetime, now: datetime | None = None
    ) -> list[CrisisIncident]:
        """Query incidents reported between ``moment`` and now, newest first."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            if profile.rms_person is None:
                return []
            return await uow.rms.get_incidents_between(  # type: ignore[no-any-return]
                profile.rms_person.id, moment, now or datetime.utcnow()
            )

    # --- Search ---

    @staticmethod
    def search_document(profile: Profile) -> dict[str, Any]:
        """Fields a name-search index should cover for this profile."""
        rms_person = profile.rms_person
        return {
            "first_name": profile.local_value(OverridableField.FIRST_NAME),
            "last_name": profile.local_value(OverridableField.LAST_NAME),
            "middle_initial": profile.local_value(OverridableField.MIDDLE_INITIAL),
            "aliases": [alias.name for alias in profile.aliases],
            "rms_first_name": rms_person.first_name if rms_person else None,
            "rms_last_name": rms_person.last_name if rms_person else None,
            "rms_middle_initial": rms_person.middle_initial if rms_person else None,
        }

    async def search(self, query: str) -> list[Profile]:
        """Profiles matching a fuzzy name query, best match first."""
        if self._search_index is None:
            raise ConfigurationError("search_index", "No profile search index configured")
        if not query.strip():
            return []

        ids = await self._search_index.search(query)
        if not ids:
            return []
        async with self._uow_factory() as uow:
            return await uow.profiles.get_many(ids)  # type: ignore[no-any-return]
