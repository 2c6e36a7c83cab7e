"""
Settings package for sage_ini.

This package provides a type-safe configuration layer using Qt's QSettings
for cross-platform storage.

Usage:
    from sage_ini.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .base import SettingsSection
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .loader import LoaderSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "SettingsSection",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "LoaderSettings",
    "LoggingSettings",
]
