"""Building records: the immutable rows of one loaded generation.

Usage example:
    from building_lookup.domain.records import build_records

    records = build_records([
        {
            "district": "Gangnam",
            "sub_district": "Yeoksam",
            "building_name": "Tower A",
            "info": "built 2001",
            "alias_spec": "TA,101-150",
        }
    ])
    assert records[0].alias_tokens() == ("TA", "101-150")
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..io_contracts import BuildingRowIO


@dataclass(frozen=True)
class BuildingRecord:
    """One residential building row."""

    district: str
    sub_district: str
    building_name: str
    info: str
    alias_spec: str

    @property
    def is_indexable(self) -> bool:
        return bool(self.building_name)

    @property
    def is_groupable(self) -> bool:
        return bool(self.district and self.sub_district and self.building_name)

    def alias_tokens(self) -> tuple[str, ...]:
        """Return the non-empty, trimmed comma-separated alias tokens."""
        return tuple(token.strip() for token in self.alias_spec.split(",") if token.strip())


def build_records(rows: Iterable[BuildingRowIO]) -> tuple[BuildingRecord, ...]:
    return tuple(
        BuildingRecord(
            district=row["district"].strip(),
            sub_district=row["sub_district"].strip(),
            building_name=row["building_name"].strip(),
            info=row["info"].strip(),
            alias_spec=row["alias_spec"].strip(),
        )
        for row in rows
    )
