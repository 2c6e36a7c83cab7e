"""
Core settings management for sage_ini.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .loader import LoaderSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "sage-ini"
APPLICATION = "sage_ini"
VERSION_KEY = "app/version"


class AppSettings:
    """
    Persistent configuration for one profile, stored through QSettings.

    Sections are reached as ``settings.paths``, ``settings.loader`` and
    ``settings.logging``; the values the loader needs most are also exposed
    directly. By default the platform store is used. ``from_file`` (or an
    explicit ``store``) keeps everything in a single INI file instead.
    """

    def __init__(self, profile: str = "default", store: Optional[QSettings] = None):
        """Open the settings for a profile.

        Args:
            profile: Settings profile name, used as the top-level group
            store: QSettings to use instead of the platform store
        """
        self.settings = store if store is not None else QSettings(ORGANIZATION, APPLICATION)
        self.profile = profile
        self.settings.beginGroup(profile)

        self._paths = PathSettings(self.settings)
        self._loader = LoaderSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._validator = SettingsValidator(self)

        self._stamp_version()
        logger.debug(f"Settings profile '{profile}' at {self.settings.fileName()}")

    @classmethod
    def from_file(cls, path: Union[str, Path], profile: str = "default") -> "AppSettings":
        """Settings backed by an INI file at ``path``.

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        store = QSettings(str(path), QSettings.Format.IniFormat)
        if store.status() != QSettings.Status.NoError:
            raise ConfigError(
                f"Cannot read settings file {path}: {store.status().name}", Path(path)
            )
        return cls(profile=profile, store=store)

    def _stamp_version(self) -> None:
        stored = str(self.settings.value(VERSION_KEY, "") or "")
        if not stored:
            self.settings.setValue(VERSION_KEY, ConfigVersion.CURRENT.value)
            self.settings.sync()
            logger.info(f"New settings profile '{self.profile}' created")
        elif stored != ConfigVersion.CURRENT.value:
            logger.warning(
                f"Settings written by version {stored}, expected {ConfigVersion.CURRENT.value}"
            )

    @property
    def version(self) -> str:
        value = self.settings.value(VERSION_KEY, ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # Sections

    @property
    def paths(self) -> PathSettings:
        return self._paths

    @property
    def loader(self) -> LoaderSettings:
        return self._loader

    @property
    def logging(self) -> LoggingSettings:
        return self._logging

    # Shortcuts used by the loader and the command line

    @property
    def data_path(self) -> Optional[Path]:
        return self._paths.data_path

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        self._paths.data_path = value

    @property
    def recent_sources(self) -> List[str]:
        return self._paths.recent_sources

    def add_recent_source(self, source: Union[str, Path]) -> None:
        self._paths.add_recent_source(source)

    def clear_recent_sources(self) -> None:
        self._paths.clear_recent_sources()

    @property
    def file_pattern(self) -> str:
        return self._loader.file_pattern

    @file_pattern.setter
    def file_pattern(self, value: str) -> None:
        self._loader.file_pattern = value

    @property
    def encoding(self) -> str:
        return self._loader.encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        self._loader.encoding = value

    # Validation and storage

    def validate(self) -> ValidationResult:
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Where the settings are stored (a file path or a registry key)."""
        return self.settings.fileName()

    def sync(self) -> None:
        self.settings.sync()
