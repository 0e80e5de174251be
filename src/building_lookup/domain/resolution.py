"""Resolution engine: turn free text into a hit, a shortlist or a miss.

Order of attempts:
1. Digit-only input is tried as a unit number first (when routing is on).
2. Exact match on the normalized name/alias key.
3. Partial match: an indexed key containing the query, or contained in it.
   One distinct building name is a fuzzy hit; several are returned as
   candidates for the caller to re-query by exact name.

Usage example:
    from building_lookup.domain.resolution import Candidates, Hit, resolve

    outcome = resolve("tower", names=snapshot.names, units=snapshot.units)
    match outcome:
        case Hit(record=record, fuzzy=fuzzy):
            print(record.building_name, fuzzy)
        case Candidates(names=names):
            print("Did you mean:", ", ".join(names))
"""

from __future__ import annotations

from dataclasses import dataclass

from ..normalization import normalize_key
from .name_index import NameIndex
from .records import BuildingRecord
from .unit_ranges import UnitRangeIndex, coerce_unit

DEFAULT_CANDIDATE_LIMIT = 5


@dataclass(frozen=True)
class Hit:
    """A single resolved record.

    `fuzzy` is True when the record came from the partial-match path;
    `unit` holds the unit number when it came from the unit resolver.
    """

    record: BuildingRecord
    fuzzy: bool = False
    unit: int | None = None


@dataclass(frozen=True)
class Candidates:
    """Several partial matches; never longer than the candidate limit."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class NoMatch:
    """Nothing matched. A normal outcome, not an error."""


@dataclass(frozen=True)
class NotReady:
    """No generation has been loaded yet."""


type Outcome = Hit | Candidates | NoMatch | NotReady


def partial_matches(query_key: str, names: NameIndex) -> tuple[str, ...]:
    """Return distinct building names whose keys contain, or are contained in, the query.

    Names keep the order in which their first matching key was indexed.
    """
    found: dict[str, None] = {}
    for key, record in names.entries():
        if query_key in key or key in query_key:
            found.setdefault(record.building_name)
    return tuple(found)


def resolve(
    query: str,
    *,
    names: NameIndex,
    units: UnitRangeIndex,
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
    route_numeric: bool = True,
) -> Hit | Candidates | NoMatch:
    if route_numeric:
        stripped = query.strip()
        unit = coerce_unit(stripped) if stripped.isascii() and stripped.isdigit() else None
        if unit is not None:
            record = units.resolve_unit(unit)
            if record is not None:
                return Hit(record=record, unit=unit)

    key = normalize_key(query)
    if not key:
        return NoMatch()

    exact = names.lookup(key)
    if exact is not None:
        return Hit(record=exact)

    found = partial_matches(key, names)
    if len(found) == 1:
        record = names.lookup(normalize_key(found[0]))
        if record is not None:
            return Hit(record=record, fuzzy=True)
        return NoMatch()
    if found:
        # callers are not told how many matched beyond the limit
        return Candidates(names=found[:candidate_limit])
    return NoMatch()
