"""
Main service for working with INI game data.

Provides the high-level API for loading INI sources into typed records,
resolving object inheritance and querying the result.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

import orjson

from ..ini.blocks import Block
from ..ini.diagnostics import Diagnostic
from ..ini.parser import BlockParser
from .builders import RecordBuilder
from .inheritance import InheritanceResolver
from .loaders import DEFAULT_ENCODING, DEFAULT_PATTERN, IniFileLoader
from .managers import GameDataRepository, RecordPredicate
from .models import Record, RecordKind

if TYPE_CHECKING:
    from ..settings import AppSettings

ProgressCallback = Callable[[int, int, str], None]
"""Called as ``progress(index, total, source)`` after each input is parsed."""


@dataclass
class LoadReport:
    """Outcome of one load call."""

    sources: List[str] = field(default_factory=lambda: [])
    blocks_parsed: int = 0
    records_built: Dict[str, int] = field(default_factory=lambda: {})
    diagnostics: List[Diagnostic] = field(default_factory=lambda: [])
    elapsed: float = 0.0

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warning"]

    def diagnostics_with_code(self, code: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def summary(self) -> str:
        built = ", ".join(f"{count} {kind}" for kind, count in sorted(self.records_built.items()))
        return (
            f"{len(self.sources)} source(s), {self.blocks_parsed} block(s), "
            f"records: {built or 'none'}, {len(self.diagnostics)} diagnostic(s) "
            f"in {self.elapsed:.2f}s"
        )


class GameDataService:
    """Service for loading and querying INI game data.

    Each load call parses its inputs in order, merging blocks that share a
    kind and name, builds records as blocks close, and then runs one
    inheritance pass over everything loaded so far. A failed call leaves the
    repository exactly as it was.

    Records from separate load calls are not merged: a later call replaces
    stored records that have the same id.
    """

    def __init__(
        self,
        settings: Optional["AppSettings"] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        """Initialize the service.

        Args:
            settings: App settings for file pattern, encoding and recent sources
            progress: Default progress callback for directory loads
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.progress = progress

        pattern = settings.file_pattern if settings else DEFAULT_PATTERN
        encoding = settings.encoding if settings else DEFAULT_ENCODING
        self.loader = IniFileLoader(pattern=pattern, encoding=encoding)
        self.builder = RecordBuilder()

        # Records as built from the sources, before inheritance
        self._declared = GameDataRepository()
        # Published records, inheritance applied
        self._repository = GameDataRepository()

    @property
    def repository(self) -> GameDataRepository:
        """The resolved repository published by the last successful load."""
        return self._repository

    # Loader entry points

    def load_directory(
        self, path: str | Path, progress: Optional[ProgressCallback] = None
    ) -> LoadReport:
        """Load every matching file under ``path`` (recursively, sorted by path).

        Raises:
            GameDataLoadError: If the directory or any file cannot be read
        """
        directory = Path(path)
        self.logger.info(f"Loading game data from directory: {directory}")
        files = self.loader.discover(directory)
        inputs = [(str(f), self._file_reader(f)) for f in files]
        report = self._load(inputs, progress or self.progress)
        self._remember_source(directory)
        return report

    def load_file(self, path: str | Path) -> LoadReport:
        """Load a single INI file.

        Raises:
            GameDataLoadError: If the file cannot be read
        """
        file_path = Path(path)
        self.logger.info(f"Loading game data from file: {file_path}")
        report = self._load([(str(file_path), self._file_reader(file_path))], self.progress)
        self._remember_source(file_path)
        return report

    def load_text(self, content: str, source: str = "<text>") -> LoadReport:
        """Load INI text held in memory; ``source`` labels diagnostics."""
        return self._load([(source, lambda: content)], self.progress)

    # Queries

    def get(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        return self._repository.get(kind, record_id)

    def find(self, kind: RecordKind, predicate: RecordPredicate) -> List[Record]:
        return self._repository.find(kind, predicate)

    def clear(self) -> None:
        """Drop every loaded record; the next load starts from scratch."""
        self._declared = GameDataRepository()
        self._repository = GameDataRepository()
        self.logger.info("Game data cleared")

    def export_json(self, path: Optional[str | Path] = None) -> bytes:
        """Serialize every resolved record, grouped by kind, as JSON.

        Writes the bytes to ``path`` when given and returns them either way.
        """
        data = {kind.value: self._repository.records(kind) for kind in RecordKind}
        payload = orjson.dumps(data, option=orjson.OPT_INDENT_2)
        if path is not None:
            out_path = Path(path)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(payload)
            self.logger.info(f"Exported {self._repository.count()} record(s) to {out_path}")
        return payload

    # Internals

    def _file_reader(self, path: Path) -> Callable[[], str]:
        return lambda: self.loader.read(path)

    def _load(
        self,
        inputs: List[Tuple[str, Callable[[], str]]],
        progress: Optional[ProgressCallback],
    ) -> LoadReport:
        started = time.perf_counter()
        report = LoadReport()
        parser = BlockParser()
        staged = self._declared.copy(deep=False)
        built: set[Tuple[str, str]] = set()

        def on_block(block: Block) -> None:
            record = self.builder.build(block)
            if record is not None:
                kind = staged.add(record)
                built.add((kind.value, record.id))

        total = len(inputs)
        for index, (source, read) in enumerate(inputs, start=1):
            text = read()
            result = parser.parse(text, source, on_block)
            report.sources.append(source)
            report.diagnostics.extend(result.diagnostics)
            self.logger.debug(f"Processed {index}/{total}: {source}")
            if progress is not None:
                progress(index, total, source)

        # Commit only after every input was read
        self._declared = staged
        report.blocks_parsed = len(parser.blocks)
        report.records_built = dict(Counter(kind for kind, _ in built))
        report.diagnostics.extend(self._resolve())
        report.elapsed = time.perf_counter() - started

        self.logger.info(f"Game data loading completed: {report.summary()}")
        return report

    def _resolve(self) -> List[Diagnostic]:
        """Publish a fresh resolved copy of the declared records."""
        resolved = self._declared.copy(deep=True)
        resolver = InheritanceResolver(parent_lookup=self._declared.get_object)
        diagnostics = resolver.resolve_all(resolved.objects())
        self._repository = resolved
        return diagnostics

    def _remember_source(self, path: Path) -> None:
        if self.settings is not None:
            self.settings.add_recent_source(path)
