"""Building directory: the handle owning the loaded table and its indexes.

A directory is constructed once per application with a row source and is
passed to every caller. It guarantees:

- at most one load in flight; concurrent `load_once`/`refresh` calls wait
  for the in-flight load and share its result (one fetch, many waiters);
- a new generation is published with a single reference swap after it is
  fully built, so a query sees either the old or the new generation;
- a failed load keeps the previous generation (or no data at all) and
  clears the in-flight marker so the caller can retry;
- queries before the first successful load return `NotReady`.

Usage example:
    from building_lookup.application.directory import BuildingDirectory, LoadFailed
    from building_lookup.infrastructure.sources import JsonFileRowSource

    directory = BuildingDirectory(JsonFileRowSource(path=Path("buildings.json")))
    result = directory.load_once()
    if isinstance(result, LoadFailed):
        print(result.error)
    outcome = directory.resolve("tower a")
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from enum import StrEnum

from ..config import LookupConfig
from ..domain.group_index import SortMode
from ..domain.name_index import KeyCollision
from ..domain.records import BuildingRecord, build_records
from ..domain.resolution import DEFAULT_CANDIDATE_LIMIT, NotReady, Outcome, resolve
from ..domain.snapshot import Snapshot
from ..exceptions import LoadError
from ..infrastructure.io.validation import coerce_building_row
from ..observability import get_logger
from ..protocols import RowSource

logger = get_logger("building_lookup.directory")


class LoadState(StrEnum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadSucceeded:
    """The directory holds a generation (new or already present)."""

    record_count: int
    generation: int


@dataclass(frozen=True)
class LoadFailed:
    """The load failed; the previous generation, if any, is still served."""

    error: LoadError


type LoadResult = LoadSucceeded | LoadFailed


class BuildingDirectory:
    """Thread-safe owner of the current snapshot and its load lifecycle."""

    def __init__(
        self,
        source: RowSource,
        *,
        sort_mode: SortMode = SortMode.FIRST_SEEN,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        route_numeric: bool = True,
    ) -> None:
        self._source = source
        self._sort_mode = sort_mode
        self._candidate_limit = candidate_limit
        self._route_numeric = route_numeric
        self._lock = threading.Lock()
        self._in_flight: Future[LoadResult] | None = None
        self._snapshot: Snapshot | None = None
        self._last_error: LoadError | None = None

    @classmethod
    def from_config(cls, source: RowSource, config: LookupConfig) -> BuildingDirectory:
        return cls(
            source,
            sort_mode=config.sort_mode,
            candidate_limit=config.candidate_limit,
            route_numeric=config.route_numeric,
        )

    # ------------------------------------------------------------------
    # Load lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoadState:
        with self._lock:
            if self._snapshot is not None:
                return LoadState.LOADED
            if self._in_flight is not None:
                return LoadState.LOADING
            if self._last_error is not None:
                return LoadState.FAILED
            return LoadState.NOT_LOADED

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._in_flight is not None

    @property
    def last_error(self) -> LoadError | None:
        return self._last_error

    @property
    def generation(self) -> int:
        snapshot = self._snapshot
        return 0 if snapshot is None else snapshot.generation

    def load_once(self) -> LoadResult:
        """Load the table unless a generation is already present."""
        return self._load(force=False)

    def refresh(self) -> LoadResult:
        """Fetch the table again, replacing the current generation on success."""
        return self._load(force=True)

    def _load(self, *, force: bool) -> LoadResult:
        with self._lock:
            if not force and self._snapshot is not None:
                return _succeeded(self._snapshot)
            future = self._in_flight
            owner = future is None
            if future is None:
                future = Future()
                self._in_flight = future
        if not owner:
            logger.info("Load already in flight; waiting for its result")
            return future.result()

        try:
            result = self._fetch_and_publish()
        except BaseException as exc:
            with self._lock:
                self._in_flight = None
            future.set_exception(exc)
            raise
        with self._lock:
            self._in_flight = None
        future.set_result(result)
        return result

    def _fetch_and_publish(self) -> LoadResult:
        logger.info("Loading building rows from %s", self._source.describe())
        try:
            raw_rows = self._source.fetch_rows()
        except LoadError as exc:
            logger.warning("Load from %s failed: %s", self._source.describe(), exc)
            with self._lock:
                self._last_error = exc
            return LoadFailed(error=exc)

        records = build_records(coerce_building_row(row) for row in raw_rows)
        snapshot = Snapshot.build(
            records,
            generation=self.generation + 1,
            sort_mode=self._sort_mode,
        )
        for collision in snapshot.names.collisions():
            logger.warning(
                "Key %r of %r is overwritten by %r",
                collision.key,
                collision.replaced.building_name,
                collision.winner.building_name,
            )
        if not records:
            logger.warning("Row source %s returned no rows", self._source.describe())

        with self._lock:
            self._snapshot = snapshot
            self._last_error = None
        logger.info(
            "Loaded generation %s: %s rows, %s name keys, %s unit ranges",
            snapshot.generation,
            len(snapshot.records),
            len(snapshot.names),
            len(snapshot.units),
        )
        return _succeeded(snapshot)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def resolve(self, text: str) -> Outcome:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return resolve(
            text,
            names=snapshot.names,
            units=snapshot.units,
            candidate_limit=self._candidate_limit,
            route_numeric=self._route_numeric,
        )

    def resolve_unit(self, value: object) -> BuildingRecord | NotReady | None:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.units.resolve_unit(value)

    def districts(self) -> tuple[str, ...] | NotReady:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.groups.districts()

    def sub_districts(self, district: str) -> tuple[str, ...] | NotReady:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.groups.sub_districts(district)

    def buildings(self, district: str, sub_district: str) -> tuple[str, ...] | NotReady:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.groups.buildings(district, sub_district)

    def open_building(
        self, district: str, sub_district: str, building_name: str
    ) -> BuildingRecord | NotReady | None:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.groups.find(district, sub_district, building_name)

    def collisions(self) -> tuple[KeyCollision, ...] | NotReady:
        snapshot = self._snapshot
        if snapshot is None:
            return NotReady()
        return snapshot.names.collisions()


def _succeeded(snapshot: Snapshot) -> LoadSucceeded:
    return LoadSucceeded(record_count=len(snapshot.records), generation=snapshot.generation)
