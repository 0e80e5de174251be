"""Row source fakes for tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import override

from building_lookup.exceptions import LoadError
from building_lookup.protocols import RowSource


@dataclass
class FakeRowSource(RowSource):
    """Row source returning successive canned results.

    Each call consumes the next entry of `results`; the last entry repeats.
    An entry that is a LoadError is raised instead of returned.
    """

    results: list[list[dict[str, object]] | LoadError]
    calls: int = 0

    @override
    def fetch_rows(self) -> list[dict[str, object]]:
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        result = self.results[index]
        if isinstance(result, LoadError):
            raise result
        return [dict(row) for row in result]

    @override
    def describe(self) -> str:
        return "fake://rows"


@dataclass
class FailingRowSource(RowSource):
    """Row source that always raises the given error."""

    error: Exception
    calls: int = 0

    @override
    def fetch_rows(self) -> list[dict[str, object]]:
        self.calls += 1
        raise self.error

    @override
    def describe(self) -> str:
        return "fake://failing"


@dataclass
class BlockingRowSource(RowSource):
    """Row source that blocks inside fetch_rows until released.

    `entered` is set once a fetch has started; set `release` to let it finish.
    """

    rows: list[dict[str, object]]
    entered: threading.Event = field(default_factory=threading.Event)
    release: threading.Event = field(default_factory=threading.Event)
    error: LoadError | None = None
    calls: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock)

    @override
    def fetch_rows(self) -> list[dict[str, object]]:
        with self._lock:
            self.calls += 1
        self.entered.set()
        if not self.release.wait(timeout=5):
            raise AssertionError("BlockingRowSource was never released")
        if self.error is not None:
            raise self.error
        return [dict(row) for row in self.rows]

    @override
    def describe(self) -> str:
        return "fake://blocking"
