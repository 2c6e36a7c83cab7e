"""
Record builders: turn generic Blocks into typed records.

Each record field reads from one or more alias keys in priority order. The
first key present wins and is converted with that field's accessor; when no
key is present the field keeps its literal default.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..ini.blocks import Block, BlockKind, ModuleCategory, PropertyMap
from ..ini.coercion import coerce_value
from ..ini.values import Color, Value, ValueKind
from .models import ArmorRecord, ObjectRecord, Record, UpgradeRecord, WeaponRecord


class PropertyReader:
    """Typed, alias-aware reads over a block's property map."""

    def __init__(self, properties: PropertyMap):
        self.properties = properties

    def _first(self, keys: tuple[str, ...]) -> Optional[Value]:
        return self.properties.first(*keys)

    def string(self, *keys: str, default: str = "") -> str:
        value = self._first(keys)
        return default if value is None else value.as_str()

    def tag(self, *keys: str, default: str = "") -> str:
        return self.string(*keys, default=default).upper()

    def integer(self, *keys: str, default: int = 0) -> int:
        value = self._first(keys)
        return default if value is None else value.as_int(default)

    def floating(self, *keys: str, default: float = 0.0) -> float:
        value = self._first(keys)
        return default if value is None else value.as_float(default)

    def boolean(self, *keys: str, default: bool = False) -> bool:
        value = self._first(keys)
        return default if value is None else value.as_bool(default)

    def color(self, *keys: str) -> Optional[Color]:
        value = self._first(keys)
        return None if value is None else value.as_color()

    def tags(self, *keys: str) -> List[str]:
        """Upper-cased tags from a list or a single space-separated string."""
        value = self._first(keys)
        if value is None:
            return []
        return [item.upper() for item in value.as_list()]

    def int_sequence(self, *keys: str) -> List[int]:
        """A bare number becomes a one-element list; list items are parsed one by one."""
        value = self._first(keys)
        if value is None:
            return []
        if value.kind is ValueKind.LIST:
            return [coerce_value(item).as_int() for item in value.as_list()]
        return [value.as_int()]


class RecordBuilder:
    """Builds typed records from parsed blocks."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._builders: Dict[BlockKind, Callable[[Block], Record]] = {
            BlockKind.OBJECT: self.build_object,
            BlockKind.OBJECT_RESKIN: self.build_object,
            BlockKind.WEAPON: self.build_weapon,
            BlockKind.ARMOR: self.build_armor,
            BlockKind.UPGRADE: self.build_upgrade,
        }

    def supports(self, kind: BlockKind) -> bool:
        return kind in self._builders

    def build(self, block: Block) -> Optional[Record]:
        """Build the record for a block, or None for kinds without records."""
        builder = self._builders.get(block.kind)
        if builder is None:
            self.logger.debug(f"No record type for {block.kind.value} '{block.name}'")
            return None
        return builder(block)

    def build_object(self, block: Block) -> ObjectRecord:
        props = PropertyReader(block.properties)

        def modules(category: ModuleCategory) -> List[str]:
            return [m.payload for m in block.modules if m.category is category]

        return ObjectRecord(
            id=block.name,
            display_name=props.string("DisplayName", "Name"),
            side=props.string("Side"),
            editor_sorting=props.tag("EditorSorting", "Category"),
            build_cost=props.integer("BuildCost", "Cost"),
            build_time=props.floating("BuildTime"),
            buildable=props.boolean("Buildable", default=True),
            prerequisites=props.tags("Prerequisites", "Prerequisite"),
            max_health=props.floating("MaxHealth", "Health"),
            armor_set=props.string("ArmorSet", "Armor"),
            weapon_set=props.string("WeaponSet", "Weapon"),
            experience_required=props.int_sequence("ExperienceRequired"),
            experience_value=props.int_sequence("ExperienceValue"),
            vision_range=props.floating("VisionRange"),
            shroud_clearing_range=props.floating("ShroudClearingRange"),
            geometry=props.tag("Geometry"),
            geometry_major_radius=props.floating("GeometryMajorRadius"),
            geometry_minor_radius=props.floating("GeometryMinorRadius"),
            geometry_height=props.floating("GeometryHeight"),
            display_color=props.color("DisplayColor", "Color"),
            select_portrait=props.string("SelectPortrait"),
            button_image=props.string("ButtonImage"),
            kind_of=props.tags("KindOf"),
            behaviors=modules(ModuleCategory.BEHAVIOR),
            draws=modules(ModuleCategory.DRAW),
            bodies=modules(ModuleCategory.BODY),
            client_updates=modules(ModuleCategory.CLIENT_UPDATE),
            locomotors=modules(ModuleCategory.LOCOMOTOR),
            voice_select=props.string("VoiceSelect"),
            voice_move=props.string("VoiceMove"),
            voice_attack=props.string("VoiceAttack"),
            sound_die=props.string("SoundDie"),
            parent_id=block.parent_name,
            source=block.location,
        )

    def build_weapon(self, block: Block) -> WeaponRecord:
        props = PropertyReader(block.properties)
        return WeaponRecord(
            id=block.name,
            primary_damage=props.floating("PrimaryDamage", "Damage"),
            damage_type=props.tag("DamageType"),
            primary_damage_radius=props.floating("PrimaryDamageRadius", "Radius"),
            attack_range=props.floating("AttackRange", "Range"),
            minimum_attack_range=props.floating("MinimumAttackRange", "MinRange"),
            delay_between_shots=props.integer("DelayBetweenShots", "FireDelay"),
            pre_attack_delay=props.integer("PreAttackDelay"),
            clip_size=props.integer("ClipSize", "Clip"),
            clip_reload_time=props.integer("ClipReloadTime", "ReloadTime"),
            projectile_object=props.string("ProjectileObject"),
            fire_sound=props.string("FireSound"),
            anti_infantry=props.boolean("AntiInfantry", "CanTargetInfantry", "AntiGround", default=True),
            anti_vehicle=props.boolean("AntiVehicle", "CanTargetVehicle", "AntiGround", default=True),
            anti_structure=props.boolean("AntiStructure", "CanTargetStructure", "AntiGround", default=True),
            anti_air=props.boolean("AntiAir", "CanTargetAir", "AntiAirborneVehicle", default=False),
            veteran_damage_multiplier=props.floating(
                "VeterancyDamageMultiplier", "VeterancyDamageBonus", default=1.0
            ),
            veteran_range_multiplier=props.floating(
                "VeterancyRangeMultiplier", "VeterancyRangeBonus", default=1.0
            ),
            source=block.location,
        )

    def build_armor(self, block: Block) -> ArmorRecord:
        """Collect every ``Armor = <DAMAGE_TYPE> <percent>`` line, later lines winning."""
        modifiers: Dict[str, float] = {}
        for value in block.assigned("Armor"):
            parts = value.as_list()
            if len(parts) < 2:
                self.logger.warning(
                    f"Armor '{block.name}': ignoring modifier without a value: {value.as_str()!r}"
                )
                continue
            modifiers[parts[0].upper()] = coerce_value(parts[1]).as_float(1.0)
        return ArmorRecord(id=block.name, modifiers=modifiers, source=block.location)

    def build_upgrade(self, block: Block) -> UpgradeRecord:
        props = PropertyReader(block.properties)
        return UpgradeRecord(
            id=block.name,
            display_name=props.string("DisplayName", "Name"),
            upgrade_type=props.tag("Type", default="PLAYER"),
            build_cost=props.integer("BuildCost", "Cost"),
            build_time=props.floating("BuildTime"),
            button_image=props.string("ButtonImage"),
            research_sound=props.string("ResearchSound"),
            source=block.location,
        )
