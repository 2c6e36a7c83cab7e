"""
Generic parsed blocks.

A Block is one ``<Type> <Name> ... END`` unit before it is turned into a
typed record. Block and module keywords are closed enumerations resolved
through static case-insensitive lookup tables.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .values import Value


class BlockKind(Enum):
    """Recognised block-opening keywords."""

    OBJECT = "Object"
    OBJECT_RESKIN = "ObjectReskin"
    WEAPON = "Weapon"
    ARMOR = "Armor"
    LOCOMOTOR = "Locomotor"
    UPGRADE = "Upgrade"
    SPECIAL_POWER = "SpecialPower"
    COMMAND_BUTTON = "CommandButton"
    COMMAND_SET = "CommandSet"
    PARTICLE_SYSTEM = "ParticleSystem"
    FX_LIST = "FXList"
    GAME_DATA = "GameData"
    PLAYER_TEMPLATE = "PlayerTemplate"
    SCIENCE = "Science"
    RANK = "Rank"
    UNKNOWN = "Unknown"

    @classmethod
    def lookup(cls, keyword: str) -> "BlockKind":
        return _BLOCK_KINDS.get(keyword.lower(), cls.UNKNOWN)


class ModuleCategory(Enum):
    """Property keys captured as modules instead of properties."""

    BEHAVIOR = "Behavior"
    DRAW = "Draw"
    BODY = "Body"
    CLIENT_UPDATE = "ClientUpdate"
    LOCOMOTOR = "Locomotor"
    NONE = "None"

    @classmethod
    def lookup(cls, key: str) -> "ModuleCategory":
        return _MODULE_CATEGORIES.get(key.lower(), cls.NONE)


_BLOCK_KINDS: Dict[str, BlockKind] = {
    kind.value.lower(): kind for kind in BlockKind if kind is not BlockKind.UNKNOWN
}
_MODULE_CATEGORIES: Dict[str, ModuleCategory] = {
    category.value.lower(): category
    for category in ModuleCategory
    if category is not ModuleCategory.NONE
}


@dataclass(frozen=True)
class SourceLocation:
    """Where a block or line came from."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class ModuleEntry:
    """A behavior/draw/body/... sub-declaration inside a block."""

    category: ModuleCategory
    payload: str
    tag: Optional[str] = None


class PropertyMap(MutableMapping[str, Value]):
    """Mapping with case-preserving keys and case-insensitive lookups."""

    def __init__(self, initial: Optional[Dict[str, Value]] = None):
        self._entries: Dict[str, Tuple[str, Value]] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, key: str) -> Value:
        return self._entries[key.lower()][1]

    def __setitem__(self, key: str, value: Value) -> None:
        self._entries[key.lower()] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._entries

    def first(self, *keys: str) -> Optional[Value]:
        """Value of the first key present, in the order given."""
        for key in keys:
            entry = self._entries.get(key.lower())
            if entry is not None:
                return entry[1]
        return None

    def __repr__(self) -> str:
        return f"PropertyMap({dict(self.items())!r})"


@dataclass
class Block:
    """A parsed block with its properties and modules."""

    kind: BlockKind
    name: str
    parent_name: Optional[str] = None
    properties: PropertyMap = field(default_factory=PropertyMap)
    modules: List[ModuleEntry] = field(default_factory=list)
    assignments: List[Tuple[str, Value]] = field(default_factory=list)
    location: Optional[SourceLocation] = None

    @property
    def key(self) -> Tuple[BlockKind, str]:
        return (self.kind, self.name)

    def set_property(self, key: str, value: Value) -> None:
        self.properties[key] = value
        self.assignments.append((key, value))

    def assigned(self, key: str) -> List[Value]:
        """Every value assigned to ``key`` in order, repeats included."""
        lowered = key.lower()
        return [value for name, value in self.assignments if name.lower() == lowered]

    def merge(self, other: "Block") -> None:
        """Fold a later block with the same kind and name into this one.

        Later property values win; modules and raw assignments are appended.
        """
        for key, value in other.properties.items():
            self.properties[key] = value
        self.modules.extend(other.modules)
        self.assignments.extend(other.assignments)
        if other.parent_name:
            self.parent_name = other.parent_name
