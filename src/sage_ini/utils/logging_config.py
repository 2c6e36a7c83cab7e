"""
Logging configuration for sage_ini.

Console output goes through ColoredFormatter (or a plain formatter when
colours are off). File output is a rotating, semicolon-separated CSV log
that always records DEBUG and above.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings

PACKAGE_LOGGER = "sage_ini"
CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUPS = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name only."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class CSVFormatter(logging.Formatter):
    """One CSV row per record: time;level;elapsed;logger;line;message.

    Text columns are quoted and embedded quotes doubled.
    """

    @staticmethod
    def _quote(text: str) -> str:
        return '"' + text.replace('"', '""') + '"'

    def format(self, record: logging.LogRecord) -> str:
        columns = [
            self._quote(self.formatTime(record, self.datefmt)),
            record.levelname.ljust(8),
            self._quote(f"{int(record.relativeCreated)} ms"),
            self._quote(record.name),
            self._quote(str(record.lineno)),
            self._quote(record.getMessage()),
        ]
        return ";".join(columns)


def _console_handler(level_name: str, use_colors: bool) -> logging.Handler:
    formatter_type = ColoredFormatter if use_colors else logging.Formatter
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    handler.setFormatter(formatter_type(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    return handler


def _file_handler(log_path: Path) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(CSVFormatter(datefmt=FILE_DATEFMT))
    return handler


def setup_logging(
    settings: Optional["AppSettings"] = None, console_level: Optional[str] = None
) -> None:
    """
    Replace the root logger's handlers according to the logging settings.

    Args:
        settings: Source of the logging options; without it the console
            logs coloured output at INFO and no file is written
        console_level: Overrides the configured console level
    """
    options = settings.logging if settings else None
    console_enabled = options.console_logging if options else True
    level_name = console_level or (options.console_log_level if options else "INFO")
    use_colors = options.console_use_colors if options else True
    log_file = options.log_file_path if options and options.file_logging else ""

    # Root passes everything; handlers filter
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if console_enabled:
        root_logger.addHandler(_console_handler(level_name, use_colors))

    log_path: Optional[Path] = None
    if log_file:
        try:
            root_logger.addHandler(_file_handler(Path(log_file)))
            log_path = Path(log_file)
        except OSError as e:
            root_logger.warning(f"File logging disabled, cannot open {log_file}: {e}")

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if console_enabled:
        logger.debug(f"Console logging: {level_name} (colors: {use_colors})")
    if log_path is not None:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
