"""
Loader-related settings for sage_ini.
"""

import logging

from ..game_data.loaders import DEFAULT_ENCODING, DEFAULT_PATTERN
from .base import SettingsSection

logger = logging.getLogger(__name__)

FILE_PATTERN = "loader/file_pattern"
ENCODING = "loader/encoding"


class LoaderSettings(SettingsSection):
    """How INI sources are discovered and decoded."""

    @property
    def file_pattern(self) -> str:
        """Glob pattern used when scanning a directory."""
        return self._get_str(FILE_PATTERN, DEFAULT_PATTERN)

    @file_pattern.setter
    def file_pattern(self, value: str) -> None:
        pattern = value.strip()
        if not pattern:
            logger.warning(f"Empty file pattern ignored, keeping {self.file_pattern}")
            return
        self._set(FILE_PATTERN, pattern)

    @property
    def encoding(self) -> str:
        """Text encoding used to read INI files."""
        return self._get_str(ENCODING, DEFAULT_ENCODING)

    @encoding.setter
    def encoding(self, value: str) -> None:
        self._set(ENCODING, value.strip())
