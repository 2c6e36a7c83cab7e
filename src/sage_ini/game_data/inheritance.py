"""
Inheritance resolution for object templates.

A child object naming a parent takes over a fixed set of fields from that
parent wherever its own value is still at the field's type default. Values
the child set explicitly are never overwritten.

Resolution is single-level: the parent is read as declared, so a grandchild
only sees fields its immediate parent set itself, not fields that parent
would inherit in turn.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..ini.diagnostics import MISSING_PARENT, Diagnostic, DiagnosticSink
from .models import ObjectRecord


def is_type_default(value: Any) -> bool:
    """True for None, empty strings, zero numbers and empty sequences."""
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def copy_value(value: Any) -> Any:
    """Copy containers so parent and child never share a list."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


@dataclass(frozen=True)
class InheritableField:
    """One row of the inheritance table."""

    name: str
    is_unset: Callable[[Any], bool] = is_type_default
    copy: Callable[[Any], Any] = copy_value


INHERITED_OBJECT_FIELDS: Tuple[InheritableField, ...] = (
    InheritableField("display_name"),
    InheritableField("side"),
    InheritableField("build_cost"),
    InheritableField("build_time"),
    InheritableField("armor_set"),
    InheritableField("weapon_set"),
    InheritableField("vision_range"),
    InheritableField("kind_of"),
    # Module lists are replaced whole, never merged entry by entry
    InheritableField("behaviors"),
    InheritableField("draws"),
)


class InheritanceResolver:
    """Fills unset child fields from the named parent record."""

    def __init__(
        self,
        parent_lookup: Callable[[str], Optional[ObjectRecord]],
        fields: Tuple[InheritableField, ...] = INHERITED_OBJECT_FIELDS,
    ):
        """Initialize the resolver.

        Args:
            parent_lookup: Returns the parent record for an id, as declared
                (before its own inheritance was applied), or None
            fields: Inheritance table to apply
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._parent_lookup = parent_lookup
        self._fields = fields

    def resolve_object(
        self, child: ObjectRecord, sink: Optional[DiagnosticSink] = None
    ) -> List[str]:
        """Apply inheritance to one record in place.

        Returns:
            Names of the fields copied from the parent
        """
        if not child.parent_id:
            return []

        parent = self._parent_lookup(child.parent_id)
        if parent is None:
            message = f"Object '{child.id}' names unknown parent '{child.parent_id}'"
            if sink is not None:
                sink.warn(MISSING_PARENT, message, child.source)
            else:
                self.logger.warning(message)
            return []

        copied: List[str] = []
        for row in self._fields:
            if not row.is_unset(getattr(child, row.name)):
                continue
            parent_value = getattr(parent, row.name)
            if row.is_unset(parent_value):
                continue
            setattr(child, row.name, row.copy(parent_value))
            copied.append(row.name)

        if copied:
            self.logger.debug(
                f"Object '{child.id}' inherited {', '.join(copied)} from '{parent.id}'"
            )
        return copied

    def resolve_all(self, records: Iterable[ObjectRecord]) -> List[Diagnostic]:
        """Resolve every record that names a parent; returns the diagnostics raised."""
        sink = DiagnosticSink(self.logger)
        resolved = 0
        for record in records:
            if record.parent_id:
                self.resolve_object(record, sink)
                resolved += 1
        self.logger.debug(
            f"Inheritance pass: {resolved} child record(s), "
            f"{len(sink.diagnostics)} missing parent(s)"
        )
        return sink.diagnostics
