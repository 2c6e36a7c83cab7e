"""
Typed property values for the INI dialect.

A Value is an immutable tagged union produced by the coercer. Accessors
either return the payload of the matching variant or go through the
"as-string then re-parse" path, so numbers never silently change variant.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple


class ValueKind(Enum):
    """Variants a property value can take."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LIST = "list"
    COLOR = "color"
    COORD = "coord"


@dataclass(frozen=True)
class Color:
    """RGBA color with 0-255 integer channels."""

    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 255

    def __str__(self) -> str:
        return f"R:{self.r} G:{self.g} B:{self.b} A:{self.a}"


@dataclass(frozen=True)
class Coord:
    """Three-component coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __str__(self) -> str:
        return f"X:{_format_float(self.x)} Y:{_format_float(self.y)} Z:{_format_float(self.z)}"


def _format_float(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_TRUE_WORDS = frozenset({"yes", "true"})
_FALSE_WORDS = frozenset({"no", "false"})


def parse_int(text: str) -> Optional[int]:
    """Parse a strict integer literal, or return None."""
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Past the interpreter's digit limit for int conversion
        return None


def parse_float(text: str) -> Optional[float]:
    """Parse a decimal floating literal (no inf/nan), or return None."""
    text = text.strip()
    if not _FLOAT_RE.fullmatch(text):
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isinf(number) else number


def parse_bool(text: str) -> Optional[bool]:
    """Parse yes/true/no/false case-insensitively, or return None."""
    lowered = text.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    return None


@dataclass(frozen=True)
class Value:
    """A coerced property value.

    Use the classmethod constructors rather than building instances directly;
    they keep ``kind`` and ``data`` consistent.
    """

    kind: ValueKind
    data: Any

    # === CONSTRUCTORS ===

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, text)

    @classmethod
    def integer(cls, number: int) -> "Value":
        return cls(ValueKind.INT, int(number))

    @classmethod
    def floating(cls, number: float) -> "Value":
        return cls(ValueKind.FLOAT, float(number))

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(flag))

    @classmethod
    def list_of(cls, items: List[str]) -> "Value":
        return cls(ValueKind.LIST, tuple(cls.string(item) for item in items))

    @classmethod
    def color(cls, color: Color) -> "Value":
        return cls(ValueKind.COLOR, color)

    @classmethod
    def coord(cls, coord: Coord) -> "Value":
        return cls(ValueKind.COORD, coord)

    # === ACCESSORS ===

    @property
    def items(self) -> Tuple["Value", ...]:
        """List items (empty for every other variant)."""
        if self.kind is ValueKind.LIST:
            return self.data
        return ()

    def as_str(self) -> str:
        """Render the value back to INI text."""
        match self.kind:
            case ValueKind.STRING:
                return self.data
            case ValueKind.INT:
                return str(self.data)
            case ValueKind.FLOAT:
                return _format_float(self.data)
            case ValueKind.BOOL:
                return "Yes" if self.data else "No"
            case ValueKind.LIST:
                return " ".join(item.as_str() for item in self.data)
            case _:
                return str(self.data)

    def as_int(self, default: int = 0) -> int:
        if self.kind is ValueKind.INT:
            return self.data
        parsed = parse_int(self.as_str())
        return default if parsed is None else parsed

    def as_float(self, default: float = 0.0) -> float:
        if self.kind is ValueKind.FLOAT:
            return self.data
        parsed = parse_float(self.as_str())
        return default if parsed is None else parsed

    def as_bool(self, default: bool = False) -> bool:
        if self.kind is ValueKind.BOOL:
            return self.data
        parsed = parse_bool(self.as_str())
        return default if parsed is None else parsed

    def as_list(self) -> List[str]:
        """List items as strings; other variants are split on whitespace."""
        if self.kind is ValueKind.LIST:
            return [item.as_str() for item in self.data]
        return self.as_str().split()

    def as_color(self, default: Optional[Color] = None) -> Optional[Color]:
        if self.kind is ValueKind.COLOR:
            return self.data
        return default

    def as_coord(self, default: Optional[Coord] = None) -> Optional[Coord]:
        if self.kind is ValueKind.COORD:
            return self.data
        return default

    def to_python(self) -> Any:
        """Plain JSON-friendly representation."""
        match self.kind:
            case ValueKind.LIST:
                return self.as_list()
            case ValueKind.COLOR:
                c = self.data
                return {"r": c.r, "g": c.g, "b": c.b, "a": c.a}
            case ValueKind.COORD:
                c = self.data
                return {"x": c.x, "y": c.y, "z": c.z}
            case _:
                return self.data

    def __str__(self) -> str:
        return self.as_str()
