"""
File loaders for INI game data.

Handles discovering INI files under a directory and reading them into
memory. Parsing happens elsewhere; a file is always read whole before it
is parsed.
"""

import logging
from pathlib import Path
from typing import List

DEFAULT_PATTERN = "*.ini"
DEFAULT_ENCODING = "utf-8-sig"


class GameDataLoadError(Exception):
    """Raised when an input cannot be read; the load call is abandoned."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class IniFileLoader:
    """Discovers and reads INI files."""

    def __init__(self, pattern: str = DEFAULT_PATTERN, encoding: str = DEFAULT_ENCODING):
        self.pattern = pattern
        self.encoding = encoding
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug(f"IniFileLoader initialized (pattern={pattern}, encoding={encoding})")

    def discover(self, directory: Path) -> List[Path]:
        """Return every matching file below ``directory``, sorted by path.

        Raises:
            GameDataLoadError: If the directory does not exist
        """
        if not directory.is_dir():
            raise GameDataLoadError(f"Data directory not found: {directory}", directory)

        files = sorted(p for p in directory.rglob(self.pattern) if p.is_file())
        if not files:
            self.logger.warning(f"No {self.pattern} files found under {directory}")
        else:
            self.logger.info(f"Found {len(files)} {self.pattern} file(s) under {directory}")
        return files

    def read(self, path: Path) -> str:
        """Read a whole file; undecodable bytes are replaced, not fatal.

        Raises:
            GameDataLoadError: If the file cannot be opened or read
        """
        try:
            with path.open("r", encoding=self.encoding, errors="replace") as f:
                return f.read()
        except OSError as e:
            raise GameDataLoadError(f"Cannot read {path}: {e}", path) from e
