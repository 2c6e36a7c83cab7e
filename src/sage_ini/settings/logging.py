"""
Logging-related settings for sage_ini.
"""

import logging

from .base import SettingsSection

logger = logging.getLogger(__name__)

LOG_FILE_PATH = "logs/sage_ini.csv"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONSOLE_ENABLED = "logging/console_enabled"
CONSOLE_LEVEL = "logging/console_level"
CONSOLE_COLORS = "logging/console_use_colors"
FILE_ENABLED = "logging/file_enabled"
FILE_PATH = "logging/file_path"


class LoggingSettings(SettingsSection):
    """Console and CSV file logging options read by setup_logging()."""

    # Console

    @property
    def console_logging(self) -> bool:
        return self._get_bool(CONSOLE_ENABLED, True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set(CONSOLE_ENABLED, value)

    @property
    def console_log_level(self) -> str:
        """Level name for the console handler, upper case."""
        return self._get_str(CONSOLE_LEVEL, "INFO").upper()

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        level = value.strip().upper()
        if level not in VALID_LEVELS:
            logger.warning(
                f"Ignoring unknown log level {value!r}, keeping {self.console_log_level}"
            )
            return
        self._set(CONSOLE_LEVEL, level)

    @property
    def console_use_colors(self) -> bool:
        return self._get_bool(CONSOLE_COLORS, True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set(CONSOLE_COLORS, value)

    # File

    @property
    def file_logging(self) -> bool:
        return self._get_bool(FILE_ENABLED, False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set(FILE_ENABLED, value)

    @property
    def log_file_path(self) -> str:
        """CSV log destination, relative to the working directory unless absolute."""
        return self._get_str(FILE_PATH, LOG_FILE_PATH)

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._set(FILE_PATH, value)
