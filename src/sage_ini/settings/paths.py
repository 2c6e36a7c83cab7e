"""
Path-related settings for sage_ini.
"""

from pathlib import Path
from typing import List, Optional, Union

from .base import SettingsSection

MAX_RECENT_SOURCES = 10

DATA_PATH = "paths/data"
RECENT_SOURCES = "paths/recent_sources"


class PathSettings(SettingsSection):
    """The game data directory and the recently loaded sources."""

    @property
    def data_path(self) -> Optional[Path]:
        """Directory scanned when the command line names no input."""
        path_str = self._get_str(DATA_PATH, "")
        return Path(path_str) if path_str else None

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        self._set(DATA_PATH, str(value) if value else "")

    @property
    def recent_sources(self) -> List[str]:
        """Recently loaded files and directories, newest first."""
        return self._get_list(RECENT_SOURCES)

    def add_recent_source(self, source: Union[str, Path]) -> None:
        """Move ``source`` to the front of the list, keeping at most 10 entries."""
        source_str = str(source)
        recent = [s for s in self.recent_sources if s != source_str]
        recent.insert(0, source_str)
        self._set(RECENT_SOURCES, recent[:MAX_RECENT_SOURCES])

    def clear_recent_sources(self) -> None:
        self._set(RECENT_SOURCES, [])
