"""
Repository for typed game data records.

Provides GameDataRepository, which keeps one id -> record index per record
kind and offers lookup and predicate-filtered enumeration.
"""

import copy
import logging
from typing import Callable, Dict, List, Optional

from .models import ObjectRecord, Record, RecordKind, WeaponRecord, record_kind_of

RecordPredicate = Callable[[Record], bool]


class GameDataRepository:
    """In-memory registry of records, keyed separately per kind.

    Maintains two indices per kind:
    - records: id -> record, in insertion order
    - folded ids: lower-cased id -> id, used when an exact lookup misses

    Adding a record whose id already exists replaces the stored record.
    """

    def __init__(self):
        self._records: Dict[RecordKind, Dict[str, Record]] = {kind: {} for kind in RecordKind}
        self._folded: Dict[RecordKind, Dict[str, str]] = {kind: {} for kind in RecordKind}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def add(self, record: Record) -> RecordKind:
        """Store a record, replacing any record of the same kind and id."""
        kind = record_kind_of(record)
        if record.id in self._records[kind]:
            self.logger.debug(f"Replacing {kind.value} '{record.id}'")
        self._records[kind][record.id] = record
        self._folded[kind][record.id.lower()] = record.id
        return kind

    def get(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        """Return the record by id; falls back to a case-insensitive match."""
        records = self._records[kind]
        record = records.get(record_id)
        if record is None:
            exact_id = self._folded[kind].get(record_id.lower())
            if exact_id is not None:
                record = records.get(exact_id)
        return record

    def get_object(self, record_id: str) -> Optional[ObjectRecord]:
        record = self.get(RecordKind.OBJECT, record_id)
        return record if isinstance(record, ObjectRecord) else None

    def get_weapon(self, record_id: str) -> Optional[WeaponRecord]:
        record = self.get(RecordKind.WEAPON, record_id)
        return record if isinstance(record, WeaponRecord) else None

    def records(self, kind: RecordKind) -> List[Record]:
        """Return all records of a kind in insertion order."""
        return list(self._records[kind].values())

    def objects(self) -> List[ObjectRecord]:
        return [r for r in self._records[RecordKind.OBJECT].values() if isinstance(r, ObjectRecord)]

    def ids(self, kind: RecordKind) -> List[str]:
        return list(self._records[kind].keys())

    def count(self, kind: Optional[RecordKind] = None) -> int:
        """Number of records of one kind, or of all kinds."""
        if kind is not None:
            return len(self._records[kind])
        return sum(len(records) for records in self._records.values())

    def counts(self) -> Dict[str, int]:
        return {kind.value: len(records) for kind, records in self._records.items()}

    def find(self, kind: RecordKind, predicate: RecordPredicate) -> List[Record]:
        """Return records of a kind for which ``predicate`` is true."""
        return [record for record in self._records[kind].values() if predicate(record)]

    # High-level enumeration helpers

    def objects_by_side(self, side: str) -> List[ObjectRecord]:
        wanted = side.lower()
        return [obj for obj in self.objects() if obj.side.lower() == wanted]

    def objects_with_kind_of(self, flag: str) -> List[ObjectRecord]:
        return [obj for obj in self.objects() if obj.has_kind_of(flag)]

    def buildable_objects(self) -> List[ObjectRecord]:
        """Objects flagged buildable that also cost something."""
        return [obj for obj in self.objects() if obj.buildable and obj.build_cost > 0]

    def weapons_for(self, obj: ObjectRecord) -> List[WeaponRecord]:
        """Weapons named by the object's weapon set (one name or several)."""
        weapons: List[WeaponRecord] = []
        for name in obj.weapon_set.split():
            weapon = self.get_weapon(name)
            if weapon is not None:
                weapons.append(weapon)
        return weapons

    # Lifecycle

    def clear(self) -> None:
        for kind in RecordKind:
            self._records[kind].clear()
            self._folded[kind].clear()

    def copy(self, deep: bool = True) -> "GameDataRepository":
        """Copy the repository.

        A deep copy owns its records and can be mutated independently; a
        shallow copy shares record instances but not the indices.
        """
        clone = GameDataRepository()
        for kind in RecordKind:
            if deep:
                clone._records[kind] = copy.deepcopy(self._records[kind])
            else:
                clone._records[kind] = dict(self._records[kind])
            clone._folded[kind] = dict(self._folded[kind])
        return clone

    def __len__(self) -> int:
        return self.count()
