"""
Parsing layer for SAGE-style INI game data.

Lexing, value coercion and block parsing. Produces generic Blocks that the
game_data package turns into typed records.
"""

from .values import Color, Coord, Value, ValueKind
from .lexer import split_assignment, strip_comment, tokenize
from .coercion import coerce_value
from .blocks import Block, BlockKind, ModuleCategory, ModuleEntry, PropertyMap, SourceLocation
from .diagnostics import Diagnostic
from .parser import BlockParser, ParseResult

__all__ = [
    # Values
    "Color",
    "Coord",
    "Value",
    "ValueKind",
    "coerce_value",
    # Lexing
    "strip_comment",
    "tokenize",
    "split_assignment",
    # Blocks
    "Block",
    "BlockKind",
    "ModuleCategory",
    "ModuleEntry",
    "PropertyMap",
    "SourceLocation",
    # Parsing
    "BlockParser",
    "ParseResult",
    "Diagnostic",
]
