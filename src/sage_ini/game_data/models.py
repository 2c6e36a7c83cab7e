"""
Typed game data records.

Records are flat, fully defaulted attribute tables built from parsed Blocks.
They hold other records only by identifier (parent, weapon set, armor set);
lookups go through the repository.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TypeAlias, Union

from ..ini.blocks import SourceLocation
from ..ini.values import Color


class RecordKind(Enum):
    """Record families kept by the repository."""

    OBJECT = "object"
    WEAPON = "weapon"
    ARMOR = "armor"
    UPGRADE = "upgrade"


class _RecordMixin:
    """Shared helpers for record dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view of the record (nested dataclasses included)."""
        return asdict(self)  # type: ignore[call-overload]


@dataclass
class ObjectRecord(_RecordMixin):
    """Object template: units, structures and props."""

    id: str

    # Identification
    display_name: str = ""
    side: str = ""
    editor_sorting: str = ""

    # Economics
    build_cost: int = 0
    build_time: float = 0.0
    buildable: bool = True
    prerequisites: List[str] = field(default_factory=lambda: [])

    # Combat
    max_health: float = 0.0
    armor_set: str = ""
    weapon_set: str = ""
    experience_required: List[int] = field(default_factory=lambda: [])
    experience_value: List[int] = field(default_factory=lambda: [])

    # Vision
    vision_range: float = 0.0
    shroud_clearing_range: float = 0.0

    # Geometry
    geometry: str = ""
    geometry_major_radius: float = 0.0
    geometry_minor_radius: float = 0.0
    geometry_height: float = 0.0

    # Display
    display_color: Optional[Color] = None
    select_portrait: str = ""
    button_image: str = ""

    kind_of: List[str] = field(default_factory=lambda: [])

    # Module names by category
    behaviors: List[str] = field(default_factory=lambda: [])
    draws: List[str] = field(default_factory=lambda: [])
    bodies: List[str] = field(default_factory=lambda: [])
    client_updates: List[str] = field(default_factory=lambda: [])
    locomotors: List[str] = field(default_factory=lambda: [])

    # Audio
    voice_select: str = ""
    voice_move: str = ""
    voice_attack: str = ""
    sound_die: str = ""

    parent_id: Optional[str] = None
    source: Optional[SourceLocation] = None

    def has_kind_of(self, flag: str) -> bool:
        return flag.upper() in self.kind_of

    @property
    def veterancy_levels(self) -> int:
        """Number of levels with both a threshold and a bonus value."""
        return min(len(self.experience_required), len(self.experience_value))


@dataclass
class WeaponRecord(_RecordMixin):
    """Weapon template."""

    id: str
    primary_damage: float = 0.0
    damage_type: str = ""
    primary_damage_radius: float = 0.0
    attack_range: float = 0.0
    minimum_attack_range: float = 0.0
    delay_between_shots: int = 0
    pre_attack_delay: int = 0
    clip_size: int = 0
    clip_reload_time: int = 0
    projectile_object: str = ""
    fire_sound: str = ""

    # Targeting by broad category
    anti_infantry: bool = True
    anti_vehicle: bool = True
    anti_structure: bool = True
    anti_air: bool = False

    veteran_damage_multiplier: float = 1.0
    veteran_range_multiplier: float = 1.0

    source: Optional[SourceLocation] = None

    @property
    def damage_per_second(self) -> float:
        """Sustained damage ignoring clip reloads; 0 when the weapon has no cadence."""
        if self.delay_between_shots <= 0:
            return 0.0
        return self.primary_damage * 1000.0 / self.delay_between_shots

    def can_target(self, category: str) -> bool:
        """Whether the weapon may target ``infantry``/``vehicle``/``structure``/``air``."""
        flags = {
            "infantry": self.anti_infantry,
            "vehicle": self.anti_vehicle,
            "structure": self.anti_structure,
            "air": self.anti_air,
        }
        return flags.get(category.lower(), False)


@dataclass
class ArmorRecord(_RecordMixin):
    """Armor template: damage multipliers keyed by damage type."""

    id: str
    modifiers: Dict[str, float] = field(default_factory=lambda: {})
    source: Optional[SourceLocation] = None

    def multiplier_for(self, damage_type: str) -> float:
        """Multiplier for a damage type, falling back to DEFAULT, then 1.0."""
        key = damage_type.upper()
        if key in self.modifiers:
            return self.modifiers[key]
        return self.modifiers.get("DEFAULT", 1.0)


@dataclass
class UpgradeRecord(_RecordMixin):
    """Upgrade template."""

    id: str
    display_name: str = ""
    upgrade_type: str = "PLAYER"
    build_cost: int = 0
    build_time: float = 0.0
    button_image: str = ""
    research_sound: str = ""
    source: Optional[SourceLocation] = None


Record: TypeAlias = Union[ObjectRecord, WeaponRecord, ArmorRecord, UpgradeRecord]
"""Any record the repository can hold."""

RECORD_TYPES: Dict[RecordKind, type] = {
    RecordKind.OBJECT: ObjectRecord,
    RecordKind.WEAPON: WeaponRecord,
    RecordKind.ARMOR: ArmorRecord,
    RecordKind.UPGRADE: UpgradeRecord,
}


def record_kind_of(record: Record) -> RecordKind:
    """RecordKind for a record instance."""
    for kind, record_type in RECORD_TYPES.items():
        if isinstance(record, record_type):
            return kind
    raise TypeError(f"Not a game data record: {type(record).__name__}")
