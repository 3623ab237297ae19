"""Configuration package."""

from finance_engine.config.settings import (
    EngineSettings,
    ExportSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "EngineSettings",
    "ExportSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
