"""Domain modules: records, indexes and the resolution engine."""

from .group_index import GroupIndex, SortMode
from .name_index import KeyCollision, NameIndex
from .records import BuildingRecord, build_records
from .resolution import Candidates, Hit, NoMatch, NotReady, Outcome, resolve
from .snapshot import Snapshot
from .unit_ranges import UnitRange, UnitRangeIndex, parse_unit_number, parse_unit_range

__all__ = [
    "BuildingRecord",
    "Candidates",
    "GroupIndex",
    "Hit",
    "KeyCollision",
    "NameIndex",
    "NoMatch",
    "NotReady",
    "Outcome",
    "Snapshot",
    "SortMode",
    "UnitRange",
    "UnitRangeIndex",
    "build_records",
    "parse_unit_number",
    "parse_unit_range",
    "resolve",
]
