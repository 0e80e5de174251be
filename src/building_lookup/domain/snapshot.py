"""One loaded generation: the row store plus every derived index.

A snapshot is built completely before it is published, and never mutated
afterwards, so a reader holding one sees a consistent view.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .group_index import GroupIndex, SortMode
from .name_index import NameIndex
from .records import BuildingRecord
from .unit_ranges import UnitRangeIndex


@dataclass(frozen=True)
class Snapshot:
    """Immutable row store and indexes for a single generation."""

    generation: int
    records: tuple[BuildingRecord, ...]
    names: NameIndex
    groups: GroupIndex
    units: UnitRangeIndex

    @classmethod
    def build(
        cls,
        records: Iterable[BuildingRecord],
        *,
        generation: int,
        sort_mode: SortMode = SortMode.FIRST_SEEN,
    ) -> Snapshot:
        rows = tuple(records)
        return cls(
            generation=generation,
            records=rows,
            names=NameIndex.build(rows),
            groups=GroupIndex.build(rows, sort_mode=sort_mode),
            units=UnitRangeIndex.build(rows),
        )
