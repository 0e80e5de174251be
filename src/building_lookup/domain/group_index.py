"""Group index for the guided drill-down: district -> sub-district -> buildings.

Only records with district, sub-district and building name all present are
grouped. Names are de-duplicated at every level. Ordering is first-seen or
locale collation, fixed when the index is built.

Usage example:
    from building_lookup.domain.group_index import GroupIndex, SortMode

    groups = GroupIndex.build(records, sort_mode=SortMode.LOCALE)
    for district in groups.districts():
        for sub_district in groups.sub_districts(district):
            print(district, sub_district, groups.buildings(district, sub_district))
"""

from __future__ import annotations

import locale
from collections.abc import Iterable
from enum import StrEnum

from .records import BuildingRecord


class SortMode(StrEnum):
    """Ordering applied to every level of the group index."""

    FIRST_SEEN = "first_seen"
    LOCALE = "locale"


def _collation_key(value: str) -> tuple[str, str]:
    return locale.strxfrm(value), value


def _ordered(values: Iterable[str], sort_mode: SortMode) -> tuple[str, ...]:
    # dict keys keep first-seen order
    unique = tuple(dict.fromkeys(values))
    if sort_mode is SortMode.LOCALE:
        return tuple(sorted(unique, key=_collation_key))
    return unique


class GroupIndex:
    """Two-level grouping of building names."""

    def __init__(
        self,
        tree: dict[str, dict[str, tuple[str, ...]]],
        leaves: dict[tuple[str, str, str], BuildingRecord],
        sort_mode: SortMode,
    ) -> None:
        self._tree = tree
        self._leaves = leaves
        self.sort_mode = sort_mode

    @classmethod
    def build(
        cls,
        records: Iterable[BuildingRecord],
        *,
        sort_mode: SortMode = SortMode.FIRST_SEEN,
    ) -> GroupIndex:
        raw: dict[str, dict[str, list[str]]] = {}
        leaves: dict[tuple[str, str, str], BuildingRecord] = {}
        for record in records:
            if not record.is_groupable:
                continue
            names = raw.setdefault(record.district, {}).setdefault(record.sub_district, [])
            names.append(record.building_name)
            leaves.setdefault(
                (record.district, record.sub_district, record.building_name), record
            )

        tree: dict[str, dict[str, tuple[str, ...]]] = {}
        for district in _ordered(raw, sort_mode):
            subs = raw[district]
            tree[district] = {
                sub_district: _ordered(subs[sub_district], sort_mode)
                for sub_district in _ordered(subs, sort_mode)
            }
        return cls(tree, leaves, sort_mode)

    def districts(self) -> tuple[str, ...]:
        return tuple(self._tree)

    def sub_districts(self, district: str) -> tuple[str, ...]:
        return tuple(self._tree.get(district.strip(), {}))

    def buildings(self, district: str, sub_district: str) -> tuple[str, ...]:
        return self._tree.get(district.strip(), {}).get(sub_district.strip(), ())

    def find(self, district: str, sub_district: str, building_name: str) -> BuildingRecord | None:
        """Return the first record filed under the given drill-down path."""
        return self._leaves.get((district.strip(), sub_district.strip(), building_name.strip()))
