"""Name index: normalized building name or alias -> record.

Keys come from each indexable record's building name plus every alias
token that is not a unit range. When two records produce the same key the
later record wins; each overwrite is kept as a `KeyCollision` so the loss
is visible instead of silent.

Usage example:
    from building_lookup.domain.name_index import NameIndex
    from building_lookup.normalization import normalize_key

    index = NameIndex.build(records)
    record = index.lookup(normalize_key("Tower A"))
    for collision in index.collisions():
        print(collision.key, collision.replaced.building_name, collision.winner.building_name)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..normalization import normalize_key
from .records import BuildingRecord
from .unit_ranges import is_unit_range


@dataclass(frozen=True)
class KeyCollision:
    """A key whose earlier record was overwritten by a later one."""

    key: str
    replaced: BuildingRecord
    winner: BuildingRecord


def name_keys(record: BuildingRecord) -> tuple[str, ...]:
    """Return the distinct keys a record registers, name first."""
    if not record.is_indexable:
        return ()
    keys: list[str] = []
    names = [record.building_name]
    names.extend(token for token in record.alias_tokens() if not is_unit_range(token))
    for name in names:
        key = normalize_key(name)
        if key and key not in keys:
            keys.append(key)
    return tuple(keys)


class NameIndex:
    """Exact-match index over normalized names and aliases."""

    def __init__(
        self,
        entries: dict[str, BuildingRecord],
        collisions: tuple[KeyCollision, ...] = (),
    ) -> None:
        self._entries = entries
        self._collisions = collisions

    @classmethod
    def build(cls, records: Iterable[BuildingRecord]) -> NameIndex:
        entries: dict[str, BuildingRecord] = {}
        collisions: list[KeyCollision] = []
        for record in records:
            for key in name_keys(record):
                previous = entries.get(key)
                if previous is not None and previous is not record:
                    collisions.append(KeyCollision(key=key, replaced=previous, winner=record))
                entries[key] = record
        return cls(entries, tuple(collisions))

    def lookup(self, key: str) -> BuildingRecord | None:
        return self._entries.get(key)

    def entries(self) -> tuple[tuple[str, BuildingRecord], ...]:
        return tuple(self._entries.items())

    def collisions(self) -> tuple[KeyCollision, ...]:
        return self._collisions

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
