"""
Settings validation for sage_ini.
"""

import codecs
import logging
from typing import TYPE_CHECKING

from .types import ValidationResult
from .logging import VALID_LEVELS

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Checks that the stored configuration can drive a load."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        result = ValidationResult()
        self._check_data_path(result)
        self._check_loader(result)
        self._check_logging(result)
        logger.debug(
            f"Settings validation: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)"
        )
        return result

    def _check_data_path(self, result: ValidationResult) -> None:
        data_path = self.settings.data_path
        if data_path is None:
            result.warn("Data path not set")
        elif not data_path.exists():
            result.error(f"Data path does not exist: {data_path}")
        elif not data_path.is_dir():
            result.error(f"Data path is not a directory: {data_path}")

    def _check_loader(self, result: ValidationResult) -> None:
        if not self.settings.file_pattern.strip():
            result.error("File pattern is empty")
        try:
            codecs.lookup(self.settings.encoding)
        except LookupError:
            result.error(f"Unknown text encoding: {self.settings.encoding}")

    def _check_logging(self, result: ValidationResult) -> None:
        level = self.settings.logging.console_log_level
        if level not in VALID_LEVELS:
            result.warn(f"Unknown console log level: {level}")
