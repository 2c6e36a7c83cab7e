"""
Block parser for the INI dialect.

Turns raw text into generic Blocks. The parser is a two-state line machine
(scanning for a header / inside a block). It never aborts on bad input:
stray lines, unparseable properties and missing terminators are reported as
diagnostics and parsing carries on.

A parser instance is one parse pass. Blocks with the same kind and name are
merged across every ``parse()`` call made on the same instance, so one
instance should be used per load session.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .blocks import Block, BlockKind, ModuleCategory, ModuleEntry, SourceLocation
from .coercion import coerce_value
from .diagnostics import (
    MALFORMED_HEADER,
    MALFORMED_PROPERTY,
    STRAY_END,
    UNEXPECTED_LINE,
    UNTERMINATED_BLOCK,
    Diagnostic,
    DiagnosticSink,
)
from .lexer import split_assignment, strip_comment, tokenize

BlockCallback = Callable[[Block], None]

END_KEYWORD = "end"
MODULE_TAG_KEYWORD = "moduletag"


@dataclass
class ParseResult:
    """Blocks and diagnostics produced by one ``parse()`` call."""

    source: str
    blocks: List[Block] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class BlockParser:
    """Parses INI text into merged Blocks."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._blocks: Dict[Tuple[BlockKind, str], Block] = {}

    @property
    def blocks(self) -> List[Block]:
        """All merged blocks seen by this parser, in first-seen order."""
        return list(self._blocks.values())

    def get_block(self, kind: BlockKind, name: str) -> Optional[Block]:
        return self._blocks.get((kind, name))

    def parse(
        self,
        text: str,
        source: str = "<text>",
        on_block: Optional[BlockCallback] = None,
    ) -> ParseResult:
        """Parse ``text`` and merge its blocks into this parser's store.

        Args:
            text: Whole input, already read into memory
            source: Label used in source locations (usually the file path)
            on_block: Called with the merged block each time a block closes

        Returns:
            ParseResult with the merged blocks touched by this text
        """
        sink = DiagnosticSink(self.logger)
        result = ParseResult(source=source)
        current: Optional[Block] = None

        for number, raw_line in enumerate(text.splitlines(), start=1):
            line = strip_comment(raw_line).strip()
            if not line:
                continue

            location = SourceLocation(source, number)
            tokens = tokenize(line)

            if current is None:
                if self._is_end(tokens):
                    sink.warn(STRAY_END, "'END' outside of any block", location)
                    continue
                current = self._parse_header(tokens, location, sink)
                if current is None:
                    sink.warn(UNEXPECTED_LINE, f"Unexpected line: {line!r}", location)
                continue

            if self._is_end(tokens):
                self._close_block(current, result, on_block)
                current = None
                continue

            self._parse_body_line(current, line, location, sink)

        if current is not None:
            sink.warn(
                UNTERMINATED_BLOCK,
                f"{current.kind.value} '{current.name}' is missing END before end of input",
                current.location,
            )
            self._close_block(current, result, on_block)

        result.diagnostics = sink.diagnostics
        self.logger.debug(
            f"Parsed {source}: {len(result.blocks)} block(s), "
            f"{len(result.diagnostics)} diagnostic(s)"
        )
        return result

    @staticmethod
    def _is_end(tokens: List[str]) -> bool:
        return len(tokens) == 1 and tokens[0].lower() == END_KEYWORD

    def _parse_header(
        self, tokens: List[str], location: SourceLocation, sink: DiagnosticSink
    ) -> Optional[Block]:
        """Start a block if the line is ``<Kind> <Name> [<Parent>]``."""
        kind = BlockKind.lookup(tokens[0])
        if kind is BlockKind.UNKNOWN or len(tokens) < 2:
            return None

        name = tokens[1]
        parent_name: Optional[str] = None

        if kind is BlockKind.OBJECT_RESKIN:
            if len(tokens) == 3:
                parent_name = tokens[2]
            elif len(tokens) == 2:
                sink.warn(
                    MALFORMED_HEADER,
                    f"ObjectReskin '{name}' does not name a parent",
                    location,
                )
            else:
                parent_name = tokens[2]
                sink.warn(
                    MALFORMED_HEADER,
                    f"ObjectReskin '{name}' has extra tokens: {' '.join(tokens[3:])}",
                    location,
                )

        return Block(kind=kind, name=name, parent_name=parent_name, location=location)

    def _parse_body_line(
        self, block: Block, line: str, location: SourceLocation, sink: DiagnosticSink
    ) -> None:
        assignment = split_assignment(line)
        if assignment is None:
            sink.warn(MALFORMED_PROPERTY, f"Cannot parse property line: {line!r}", location)
            return

        key, value_text = assignment
        category = ModuleCategory.lookup(key)
        if category is ModuleCategory.NONE:
            block.set_property(key, coerce_value(value_text))
            return

        module = self._parse_module(category, value_text)
        if module is None:
            sink.warn(MALFORMED_PROPERTY, f"Empty {category.value} module", location)
            return
        block.modules.append(module)

    @staticmethod
    def _parse_module(category: ModuleCategory, value_text: str) -> Optional[ModuleEntry]:
        """Build a module entry, pulling out a ``ModuleTag`` when present."""
        tokens = tokenize(value_text)
        if not tokens:
            return None

        marked = False
        tag: Optional[str] = None
        for index in range(1, len(tokens)):
            lowered = tokens[index].lower()
            if lowered == MODULE_TAG_KEYWORD:
                marked = True
                if index + 1 < len(tokens):
                    tag = tokens[index + 1]
                break
            if lowered.startswith(MODULE_TAG_KEYWORD + "_"):
                marked = True
                tag = tokens[index]
                break

        payload = tokens[0] if marked else value_text
        return ModuleEntry(category=category, payload=payload, tag=tag)

    def _close_block(
        self,
        block: Block,
        result: ParseResult,
        on_block: Optional[BlockCallback],
    ) -> None:
        existing = self._blocks.get(block.key)
        if existing is None:
            self._blocks[block.key] = block
            merged = block
        else:
            self.logger.debug(
                f"Merging duplicate {block.kind.value} '{block.name}' from {block.location}"
            )
            existing.merge(block)
            merged = existing

        if not any(seen is merged for seen in result.blocks):
            result.blocks.append(merged)
        if on_block is not None:
            on_block(merged)
