"""Dependency factories wiring the profile engine together."""

from functools import lru_cache

import structlog

from core.config import settings
from core.logging import setup_logging
from domain.services.derived_cache import DerivedValueCache
from domain.services.profile_service import ProfileService
from infrastructure.cache.memory_store import InMemoryCacheStore
from infrastructure.database.session import get_uow_factory

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@lru_cache
def get_cache_store() -> InMemoryCacheStore:
    """Get the process-wide derived-value store."""
    return InMemoryCacheStore()


@lru_cache
def get_derived_cache() -> DerivedValueCache:
    """Get the derived-value cache backed by the shared store."""
    return DerivedValueCache(get_cache_store())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    logger.debug("profile_service_initialized", app_env=settings.app_env)
    return ProfileService(get_uow_factory(), get_derived_cache(), settings=settings)
