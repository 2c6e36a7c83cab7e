"""
sage_ini: loader for SAGE-style INI game data

Parses block-structured INI sources (objects, reskins, weapons, armor,
upgrades) into typed records and resolves object template inheritance.
"""

__version__ = "0.1.0"
__author__ = "sage_ini Contributors"

# Core service imports
from .game_data import GameDataService, GameDataRepository, GameDataLoadError, LoadReport
from .utils.logging_config import setup_logging

# Main data models
from .game_data.models import (
    RecordKind, ObjectRecord, WeaponRecord, ArmorRecord, UpgradeRecord
)
from .ini import BlockParser, Value, ValueKind, Color, Coord, coerce_value, tokenize

__all__ = [
    # Services
    'GameDataService',
    'GameDataRepository',
    'GameDataLoadError',
    'LoadReport',

    # Logging
    'setup_logging',

    # Records
    'RecordKind',
    'ObjectRecord',
    'WeaponRecord',
    'ArmorRecord',
    'UpgradeRecord',

    # Parsing
    'BlockParser',
    'Value',
    'ValueKind',
    'Color',
    'Coord',
    'coerce_value',
    'tokenize',
]
