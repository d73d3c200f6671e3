"""
Bookmarks API — Settings Tests
===============================

What:  Validators and derived properties of the pydantic-settings model.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from bookmarks_api.config import Settings


def make_settings(**overrides) -> Settings:
    # _env_file=None keeps a developer's local .env out of the tests
    return Settings(_env_file=None, **overrides)


class TestSettings:

    def test_cors_origins_are_split_and_trimmed(self):
        settings = make_settings(cors_origins="http://a.test, http://b.test ,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_log_level_is_normalized(self):
        assert make_settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_settings(log_level="LOUD")

    def test_invalid_environment_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_settings(environment="staging")

    def test_production_flag(self):
        assert make_settings(environment="Production").is_production
        assert not make_settings(environment="test").is_production

    def test_sqlite_detection(self):
        assert make_settings(database_url="sqlite+aiosqlite:///:memory:").is_sqlite
        assert not make_settings(
            database_url="postgresql+asyncpg://u:p@localhost/db"
        ).is_sqlite

    def test_missing_token_fails_startup_check(self):
        with pytest.raises(ValueError, match="API_TOKEN is not set"):
            make_settings(api_token="").validate_required_for_production()

    def test_configured_token_passes_startup_check(self):
        make_settings(api_token="secret").validate_required_for_production()
