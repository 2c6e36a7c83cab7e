"""Diagnostics emitted while parsing and resolving INI data."""

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

from .blocks import SourceLocation

Severity = Literal["error", "warning"]

UNEXPECTED_LINE = "INI001"
UNTERMINATED_BLOCK = "INI002"
MALFORMED_PROPERTY = "INI003"
MALFORMED_HEADER = "INI004"
MISSING_PARENT = "INI005"
STRAY_END = "INI006"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable problem found in the input."""

    code: str
    message: str
    location: Optional[SourceLocation] = None
    severity: Severity = "warning"

    def __str__(self) -> str:
        where = f"{self.location}: " if self.location else ""
        return f"{where}{self.code} {self.message}"


class DiagnosticSink:
    """Collects diagnostics and mirrors each one to a logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.diagnostics: List[Diagnostic] = []

    def warn(
        self, code: str, message: str, location: Optional[SourceLocation] = None
    ) -> Diagnostic:
        diagnostic = Diagnostic(code, message, location)
        self.diagnostics.append(diagnostic)
        self.logger.warning(str(diagnostic))
        return diagnostic
