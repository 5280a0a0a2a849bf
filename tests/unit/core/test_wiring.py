"""Unit tests for settings, logging setup and dependency wiring."""

import pytest
import structlog

from core.config import Settings, get_settings
from core.exceptions import ConfigurationError, ErrorCode
from core.logging import setup_logging
from domain.services.profile_service import ProfileService
from infrastructure.container import get_derived_cache, get_profile_service


class TestSettings:
    def test_async_url_rewrites_plain_postgres_scheme(self) -> None:
        settings = Settings(database_url="postgresql://db:5432/profiles")

        assert settings.async_database_url == "postgresql+asyncpg://db:5432/profiles"

    def test_review_timeframe_defaults_to_unset(self) -> None:
        assert Settings().profile_review_timeframe_in_months is None

    def test_malformed_review_timeframe_loads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROFILE_REVIEW_TIMEFRAME_IN_MONTHS", "six")

        assert Settings().profile_review_timeframe_in_months == "six"

    def test_settings_are_cached(self) -> None:
        assert get_settings() is get_settings()


class TestConfigurationError:
    def test_default_message_names_setting(self) -> None:
        error = ConfigurationError("profile_review_timeframe_in_months")

        assert error.error_code == ErrorCode.CONFIGURATION_ERROR
        assert error.status_code == 500
        assert "PROFILE_REVIEW_TIMEFRAME_IN_MONTHS" in error.message


class TestContainer:
    def test_profile_service_is_shared(self) -> None:
        service = get_profile_service()

        assert isinstance(service, ProfileService)
        assert get_profile_service() is service

    def test_derived_cache_is_shared(self) -> None:
        assert get_derived_cache() is get_derived_cache()


class TestLogging:
    def test_setup_logging_configures_structlog(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging()

        structlog.get_logger().info("wiring_checked", component="container")

        assert "wiring_checked" in capsys.readouterr().out
