"""Unit tests for settings and logging configuration."""

import logging
from pathlib import Path

import pytest

from sage_ini.game_data import GameDataService
from sage_ini.settings import AppSettings
from sage_ini.settings.paths import MAX_RECENT_SOURCES
from sage_ini.utils.logging_config import CSVFormatter, ColoredFormatter, setup_logging


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings.from_file(tmp_path / "settings.ini")


class TestSettingsDefaults:
    """Test a fresh settings store."""

    def test_defaults(self, settings: AppSettings) -> None:
        """Test default values before anything is written."""
        assert settings.data_path is None
        assert settings.recent_sources == []
        assert settings.file_pattern == "*.ini"
        assert settings.encoding == "utf-8-sig"
        assert settings.logging.console_logging is True
        assert settings.logging.console_log_level == "INFO"
        assert settings.logging.file_logging is False
        assert settings.version == "1.0"

    def test_validation_warns_without_data_path(self, settings: AppSettings) -> None:
        """Test an unset data path is a warning, not an error."""
        result = settings.validate()
        assert result.is_valid
        assert result.warnings == ["Data path not set"]


class TestSettingsPersistence:
    """Test values round-trip through the INI store."""

    def test_values_persist(self, tmp_path: Path) -> None:
        """Test a second instance reads what the first one wrote."""
        path = tmp_path / "settings.ini"
        first = AppSettings.from_file(path)
        first.data_path = tmp_path
        first.file_pattern = "*.INI"
        first.logging.console_logging = False
        first.logging.console_log_level = "debug"
        first.sync()

        second = AppSettings.from_file(path)
        assert second.data_path == tmp_path
        assert second.file_pattern == "*.INI"
        assert second.logging.console_logging is False
        assert second.logging.console_log_level == "DEBUG"

    def test_profiles_are_separate(self, tmp_path: Path) -> None:
        """Test each profile keeps its own values."""
        path = tmp_path / "settings.ini"
        AppSettings.from_file(path, profile="mod").file_pattern = "*.txt"
        assert AppSettings.from_file(path, profile="default").file_pattern == "*.ini"

    def test_invalid_values_ignored(self, settings: AppSettings) -> None:
        """Test unknown log levels and empty patterns are rejected."""
        settings.logging.console_log_level = "LOUD"
        settings.file_pattern = "   "
        assert settings.logging.console_log_level == "INFO"
        assert settings.file_pattern == "*.ini"

    def test_recent_sources(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test recent sources are newest first, unique and capped."""
        settings.add_recent_source("a.ini")
        assert settings.recent_sources == ["a.ini"]
        settings.add_recent_source("b.ini")
        settings.add_recent_source("a.ini")
        assert settings.recent_sources == ["a.ini", "b.ini"]

        for index in range(MAX_RECENT_SOURCES + 5):
            settings.add_recent_source(f"file{index}.ini")
        assert len(settings.recent_sources) == MAX_RECENT_SOURCES

        settings.clear_recent_sources()
        assert settings.recent_sources == []


class TestSettingsValidation:
    """Test configuration validation."""

    def test_missing_data_path(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test a data path that does not exist is an error."""
        settings.data_path = tmp_path / "absent"
        result = settings.validate()
        assert not result.is_valid
        assert "does not exist" in result.errors[0]

    def test_data_path_is_file(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test a data path pointing at a file is an error."""
        target = tmp_path / "file.ini"
        target.write_text("", encoding="utf-8")
        settings.data_path = target
        assert "not a directory" in settings.validate().errors[0]

    def test_unknown_encoding(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test an encoding Python cannot decode with is an error."""
        settings.data_path = tmp_path
        settings.encoding = "klingon-8"
        result = settings.validate()
        assert not result.is_valid
        assert "klingon-8" in result.errors[0]


class TestServiceUsesSettings:
    """Test the service picks up loader settings."""

    def test_pattern_and_recent_sources(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test the scan pattern comes from settings and loads are remembered."""
        data = tmp_path / "data"
        data.mkdir()
        (data / "units.txt").write_text("Object FromTxt\nEnd\n", encoding="utf-8")
        (data / "units.ini").write_text("Object FromIni\nEnd\n", encoding="utf-8")
        settings.file_pattern = "*.txt"

        service = GameDataService(settings=settings)
        service.load_directory(data)

        assert service.repository.get_object("FromTxt") is not None
        assert service.repository.get_object("FromIni") is None
        assert settings.recent_sources == [str(data)]


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings: AppSettings, restore_logging: None) -> None:
        """Test logging setup installs a console handler and sets package level."""
        setup_logging(settings=settings)

        assert logging.getLogger("sage_ini").level == logging.DEBUG
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ColoredFormatter)
        assert handlers[0].level == logging.INFO

    def test_console_level_override(self, settings: AppSettings, restore_logging: None) -> None:
        """Test an explicit console level wins over settings."""
        setup_logging(settings=settings, console_level="DEBUG")
        assert logging.getLogger().handlers[0].level == logging.DEBUG

    def test_file_logging(self, settings: AppSettings, tmp_path: Path, restore_logging: None) -> None:
        """Test the CSV file handler writes semicolon-separated lines."""
        log_file = tmp_path / "logs" / "run.csv"
        settings.logging.console_logging = False
        settings.logging.file_logging = True
        settings.logging.log_file_path = str(log_file)

        setup_logging(settings=settings)
        logging.getLogger("sage_ini.test").info('said "hi"')
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert any('"said ""hi"""' in line for line in lines)
        assert all(line.count(";") >= 5 for line in lines)

    def test_formatters(self) -> None:
        """Test both formatters render a plain record."""
        record = logging.LogRecord("sage_ini.x", logging.WARNING, __file__, 12, "careful", None, None)
        coloured = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert "\033[33mWARNING\033[0m careful" == coloured
        csv_line = CSVFormatter().format(record)
        assert csv_line.endswith('"sage_ini.x";"12";"careful"')
