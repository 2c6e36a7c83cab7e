"""
Module for working with INI game data.

Provides services for loading INI sources into typed records, indexing them
per record kind and resolving object template inheritance.
"""

from .service import GameDataService, LoadReport, ProgressCallback
from .models import (
    ArmorRecord,
    ObjectRecord,
    Record,
    RecordKind,
    UpgradeRecord,
    WeaponRecord,
)
from .managers import GameDataRepository
from .loaders import GameDataLoadError, IniFileLoader
from .builders import RecordBuilder
from .inheritance import INHERITED_OBJECT_FIELDS, InheritableField, InheritanceResolver

# Public exports
__all__ = [
    # Main service
    "GameDataService",
    "LoadReport",
    "ProgressCallback",
    "GameDataLoadError",
    # Records
    "Record",
    "RecordKind",
    "ObjectRecord",
    "WeaponRecord",
    "ArmorRecord",
    "UpgradeRecord",
    # Component classes (for advanced usage)
    "GameDataRepository",
    "IniFileLoader",
    "RecordBuilder",
    "InheritanceResolver",
    "InheritableField",
    "INHERITED_OBJECT_FIELDS",
]
