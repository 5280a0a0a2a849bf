"""SQLAlchemy implementation of Profile repository."""

from dataclasses import replace
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.profile import Alias, Image, OverridableField, PersistenceState, Profile
from domain.entities.rms import RMSPerson
from infrastructure.database.models import AliasModel, ImageModel, ProfileModel, RMSPersonModel
from infrastructure.database.repositories.sqlalchemy_rms_repo import rms_person_to_entity

_PROFILE_LOAD_OPTIONS = (
    selectinload(ProfileModel.aliases),
    selectinload(ProfileModel.images),
    selectinload(ProfileModel.rms_person),
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).options(*_PROFILE_LOAD_OPTIONS).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID with aliases, images and RMS person."""
        model = await self._get_model(id)
        if not model:
            return None
        rms_person = rms_person_to_entity(model.rms_person) if model.rms_person else None
        return self._to_entity(model, rms_person)

    async def get_many(self, ids: list[UUID]) -> list[Profile]:
        """Get several profiles, preserving the order of ``ids``."""
        if not ids:
            return []
        stmt = select(ProfileModel).options(*_PROFILE_LOAD_OPTIONS).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        by_id = {
            model.id: self._to_entity(
                model, rms_person_to_entity(model.rms_person) if model.rms_person else None
            )
            for model in result.scalars()
        }
        return [by_id[id] for id in ids if id in by_id]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile with its aliases and images.

        A profile created with an RMS person claims that record.
        """
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()

        rms_person = profile.rms_person
        if rms_person is not None:
            await self._session.execute(
                update(RMSPersonModel)
                .where(RMSPersonModel.id == rms_person.id)
                .values(profile_id=model.id)
            )
            rms_person = replace(rms_person, profile_id=model.id)
        return self._to_entity(model, rms_person)

    async def update(self, profile: Profile) -> Profile:
        """Update local overrides and replace aliases and images."""
        model = await self._get_model(profile.id)

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        # Update fields
        for name in OverridableField:
            setattr(model, name.value, profile.local_value(name.value))
        model.updated_at = profile.updated_at or model.updated_at

        aliases = {alias.id: alias for alias in model.aliases}
        model.aliases = [self._merge_alias(aliases.get(alias.id), alias) for alias in profile.aliases]
        images = {image.id: image for image in model.images}
        model.images = [self._merge_image(images.get(image.id), image) for image in profile.images]

        await self._session.flush()
        rms_person = rms_person_to_entity(model.rms_person) if model.rms_person else None
        return self._to_entity(model, rms_person)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile; aliases and images go with it."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    @staticmethod
    def _merge_alias(model: AliasModel | None, alias: Alias) -> AliasModel:
        if model is None:
            return AliasModel(id=alias.id, name=alias.name)
        model.name = alias.name
        return model

    @staticmethod
    def _merge_image(model: ImageModel | None, image: Image) -> ImageModel:
        if model is None:
            return ImageModel(id=image.id, source_url=image.source_url, position=image.position)
        model.source_url = image.source_url
        model.position = image.position
        return model

    def _to_entity(self, model: ProfileModel, rms_person: RMSPerson | None) -> Profile:
        """Convert ORM model to domain entity."""
        overrides = {
            name.value: getattr(model, name.value)
            for name in OverridableField
            if getattr(model, name.value) is not None
        }
        return Profile(
            id=model.id,
            overrides=overrides,
            rms_person=rms_person,
            aliases=[Alias(id=alias.id, name=alias.name) for alias in model.aliases],
            images=[
                Image(id=image.id, source_url=image.source_url, position=image.position)
                for image in model.images
            ],
            analytics_token=model.analytics_token,
            state=PersistenceState.CLEAN,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            analytics_token=entity.analytics_token,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            aliases=[AliasModel(id=alias.id, name=alias.name) for alias in entity.aliases],
            images=[
                ImageModel(id=image.id, source_url=image.source_url, position=image.position)
                for image in entity.images
            ],
            **{name.value: entity.local_value(name.value) for name in OverridableField},
        )
