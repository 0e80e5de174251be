"""Boundary-neutral IO contracts for inbound building rows.

Usage example:
    from building_lookup.io_contracts import BuildingRowIO

    row: BuildingRowIO = {
        "district": "Gangnam",
        "sub_district": "Yeoksam",
        "building_name": "Tower A",
        "info": "built 2001",
        "alias_spec": "TA,101-150",
    }
"""

from __future__ import annotations

from typing import TypedDict


class BuildingRowIO(TypedDict):
    """One validated row with every field coerced to text."""

    district: str
    sub_district: str
    building_name: str
    info: str
    alias_spec: str
