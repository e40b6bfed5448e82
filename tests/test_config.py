"""Tests for configuration management."""

from pathlib import Path

import pytest

from logsift.config import AnalyzerSettings, Settings, StorageSettings, get_settings


def test_default_settings():
    """Test default settings are loaded correctly."""
    settings = Settings()

    assert settings.name == "Logsift API"
    assert settings.version == "0.1.0"
    assert settings.environment == "development"
    assert settings.debug is False


def test_environment_override(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("APP_NAME", "Custom Name")
    monkeypatch.setenv("APP_DEBUG", "true")
    monkeypatch.setenv("APP_ENVIRONMENT", "production")

    settings = Settings()

    assert settings.name == "Custom Name"
    assert settings.debug is True
    assert settings.environment == "production"


def test_database_settings():
    """Test database configuration."""
    settings = Settings()

    assert settings.database.url.startswith("postgresql+asyncpg://")
    assert settings.database.pool_size == 5
    assert settings.database.echo is False


def test_analyzer_settings():
    """Test analyzer configuration from the environment."""
    settings = Settings()

    assert settings.analyzer.url == "http://analyzer.test:5001"
    assert settings.analyzer.min_should_match == 80
    assert settings.analyzer.analyzer_mode == "LAUNCH_NAME"


def test_analyzer_min_should_match_out_of_range():
    """Match threshold must be a percentage."""
    with pytest.raises(ValueError, match="min_should_match"):
        AnalyzerSettings(min_should_match=150)


def test_storage_settings(tmp_path: Path):
    """Test attachment storage configuration."""
    settings = Settings(storage=StorageSettings(path=tmp_path, validate_path=True))
    assert settings.storage.path == tmp_path


def test_storage_missing_directory():
    """Test storage validation fails for a missing directory when validation is enabled."""
    with pytest.raises(ValueError, match="Attachment storage directory not found"):
        StorageSettings(
            path=Path("/nonexistent/attachments"),
            validate_path=True,
        )


def test_scheduler_settings(monkeypatch):
    """Test cleanup schedule overrides."""
    monkeypatch.setenv("SCHEDULER_CLEAN_LOGS_HOUR", "4")
    monkeypatch.setenv("SCHEDULER_CLEAN_LOGS_MINUTE", "30")

    settings = Settings()

    assert settings.scheduler.clean_logs_hour == 4
    assert settings.scheduler.clean_logs_minute == 30


def test_environment_properties():
    """Test environment helper properties."""
    dev_settings = Settings(environment="development")
    assert dev_settings.is_development is True
    assert dev_settings.is_production is False

    prod_settings = Settings(environment="production")
    assert prod_settings.is_production is True
    assert prod_settings.is_development is False


def test_settings_caching():
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    # Should be the same instance due to @lru_cache
    assert settings1 is settings2


def test_nested_settings_override(monkeypatch):
    """Test overriding nested settings via environment variables."""
    monkeypatch.setenv("DB_POOL_SIZE", "20")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "50")
    monkeypatch.setenv("API_PORT", "9000")
    monkeypatch.setenv("ANALYZER_TIMEOUT", "5.5")

    settings = Settings()

    assert settings.database.pool_size == 20
    assert settings.database.max_overflow == 50
    assert settings.api.port == 9000
    assert settings.analyzer.timeout == 5.5
