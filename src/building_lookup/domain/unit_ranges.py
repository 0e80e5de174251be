"""Unit-number ranges encoded in alias specs ("101-120,301-328").

Ranges are precomputed once per generation as a flat list ordered by
record, then by token within the record. When ranges of different records
overlap, the first one in that order wins.

Usage example:
    from building_lookup.domain.unit_ranges import UnitRangeIndex, parse_unit_range

    assert parse_unit_range(" 101 - 120 ") == (101, 120)
    index = UnitRangeIndex.build(records)
    record = index.resolve_unit(110)
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .records import BuildingRecord

_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_NON_DIGIT_RE = re.compile(r"\D+")


def _to_int(text: str) -> int | None:
    # int() refuses digit strings past sys.get_int_max_str_digits()
    try:
        return int(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class UnitRange:
    """Inclusive unit-number interval owned by a record."""

    start: int
    end: int
    record: BuildingRecord

    def contains(self, unit: int) -> bool:
        return self.start <= unit <= self.end


def parse_unit_range(token: str) -> tuple[int, int] | None:
    """Parse `"<start>-<end>"` into a pair, or None for any other token.

    A range with start > end is returned as-is; it simply never matches.
    Bounds too long to convert make the token unusable, and None is returned.
    """
    match = _RANGE_RE.match(token)
    if match is None:
        return None
    start = _to_int(match.group(1))
    end = _to_int(match.group(2))
    if start is None or end is None:
        return None
    return start, end


def is_unit_range(token: str) -> bool:
    """True for any token shaped like `<digits>-<digits>`, usable or not."""
    return _RANGE_RE.match(token) is not None


def coerce_unit(value: object) -> int | None:
    """Return `value` as an integer unit number, or None if it is not one.

    Accepts ints, integral finite floats and strings holding an integer
    (surrounding whitespace allowed). Booleans are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.match(text):
            return _to_int(text)
    return None


def parse_unit_number(text: str) -> int | None:
    """Caller convenience: strip every non-digit ("120호" -> 120)."""
    digits = _NON_DIGIT_RE.sub("", text)
    if not digits:
        return None
    return _to_int(digits)


@dataclass(frozen=True)
class UnitRangeIndex:
    """Flat, ordered list of every unit range in a generation."""

    ranges: tuple[UnitRange, ...]

    @classmethod
    def build(cls, records: Iterable[BuildingRecord]) -> UnitRangeIndex:
        ranges: list[UnitRange] = []
        for record in records:
            for token in record.alias_tokens():
                bounds = parse_unit_range(token)
                if bounds is None:
                    continue
                start, end = bounds
                ranges.append(UnitRange(start=start, end=end, record=record))
        return cls(ranges=tuple(ranges))

    def resolve_unit(self, value: object) -> BuildingRecord | None:
        unit = coerce_unit(value)
        if unit is None:
            return None
        for unit_range in self.ranges:
            if unit_range.contains(unit):
                return unit_range.record
        return None

    def __len__(self) -> int:
        return len(self.ranges)
