from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings.

    PostgreSQL with the asyncpg driver holds projects, launches, test items,
    logs and attachments.
    """

    model_config = SettingsConfigDict(env_prefix="DB_", env_file=".env", extra="ignore")

    echo: bool = Field(default=False, description="Enable SQLAlchemy query logging")
    echo_pool: bool = Field(default=False, description="Enable SQLAlchemy pool logging")
    max_overflow: int = Field(default=10, description="Max connections above pool_size")
    pool_size: int = Field(default=5, description="Database connection pool size")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    pool_recycle: int = Field(default=3600, description="Connection recycle time in seconds")
    pool_disabled: bool = Field(default=False, description="Disable connection pooling")
    user: str = Field(default="logsift", description="Database user")
    password: str = Field(default="logsift", description="Database password")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="logsift", description="Database name")
    drop_on_startup: bool = Field(default=False, description="Drop all tables on startup (development only)")

    @property
    def url(self) -> str:
        """Construct the database URL from components."""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8000, description="API server port")
    workers: int = Field(default=1, description="Number of worker processes")
    reload: bool = Field(default=False, description="Enable auto-reload on code changes")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


class AnalyzerSettings(BaseSettings):
    """External analyzer (indexer) service settings.

    Besides the connection options this section carries the default analyzer
    configuration sent along with every index request.
    """

    model_config = SettingsConfigDict(env_prefix="ANALYZER_", env_file=".env", extra="ignore")

    url: str = Field(default="http://localhost:5001", description="Base URL of the analyzer service")
    timeout: float = Field(default=60.0, description="Request timeout in seconds")
    min_should_match: int = Field(default=80, description="Percent of words that must match")
    min_doc_freq: int = Field(default=7, description="Minimum document frequency of a term")
    min_term_freq: int = Field(default=1, description="Minimum term frequency in a log")
    number_of_log_lines: int = Field(
        default=-1,
        description="Number of first log lines used for analysis (-1 means the whole message)",
    )
    auto_analyzer_enabled: bool = Field(default=True, description="Enable auto analysis")
    analyzer_mode: Literal["ALL", "LAUNCH_NAME", "CURRENT_LAUNCH"] = Field(
        default="LAUNCH_NAME",
        description="Which launches the analyzer compares against",
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "AnalyzerSettings":
        """Ensure the match threshold is a percentage."""
        if not 0 <= self.min_should_match <= 100:
            raise ValueError(f"min_should_match must be between 0 and 100, got {self.min_should_match}")
        return self


class StorageSettings(BaseSettings):
    """Attachment binary storage settings."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_", env_file=".env", extra="ignore")

    path: Path = Field(default=Path("data/attachments"), description="Root directory of the attachment store")
    validate_path: bool = Field(
        default=False,
        description="Validate that the storage directory exists (set to True for production)",
    )

    @model_validator(mode="after")
    def validate_storage_exists(self) -> "StorageSettings":
        """Ensure the storage directory exists if validation is enabled."""
        if self.validate_path and not self.path.is_dir():
            raise ValueError(f"Attachment storage directory not found: {self.path}")
        return self


class SchedulerSettings(BaseSettings):
    """APScheduler configuration for periodic background tasks."""

    model_config = SettingsConfigDict(env_prefix="SCHEDULER_", env_file=".env", extra="ignore")

    enabled: bool = Field(
        default=True,
        description="Enable scheduled background tasks",
    )
    clean_logs_hour: int = Field(
        default=2,
        description="Hour (UTC, 0-23) to run the log retention cleanup",
    )
    clean_logs_minute: int = Field(
        default=0,
        description="Minute (0-59) to run the log retention cleanup",
    )


class Settings(BaseSettings):
    """Main application settings.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Example .env file:
        APP_NAME=Logsift
        APP_DEBUG=true
        DB_HOST=db.internal
        ANALYZER_URL=http://analyzer:5001
        STORAGE_PATH=/data/attachments
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    name: str = Field(default="Logsift API", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    description: str = Field(
        default="Test log indexing and retention API",
        description="Application description",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )

    # Sub-configurations
    api: APISettings = Field(default_factory=APISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function is cached to ensure we only parse configuration once.
    Use this function throughout the application to access settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
