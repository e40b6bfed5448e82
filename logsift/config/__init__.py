"""Configuration module for Logsift API."""

from logsift.config.settings import (
    AnalyzerSettings,
    APISettings,
    DatabaseSettings,
    SchedulerSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "APISettings",
    "AnalyzerSettings",
    "DatabaseSettings",
    "SchedulerSettings",
    "StorageSettings",
]
