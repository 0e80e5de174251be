"""Row sources: where the building table comes from.

Usage example:
    from pathlib import Path

    from building_lookup.infrastructure.http import RequestsJsonSession
    from building_lookup.infrastructure.sources import HttpRowSource, JsonFileRowSource

    remote = HttpRowSource(url="https://example.org/exec", session=RequestsJsonSession())
    local = JsonFileRowSource(path=Path("data/buildings.json"))
    rows = local.fetch_rows()
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import override

from ..exceptions import LoadShapeFailure, LoadTransportFailure
from ..protocols import HttpSession, RowSource
from .io.validation import unwrap_rows


@dataclass
class HttpRowSource(RowSource):
    """Rows served as JSON over HTTP (e.g. a published spreadsheet endpoint)."""

    url: str
    session: HttpSession

    @override
    def fetch_rows(self) -> list[dict[str, object]]:
        return unwrap_rows(self.session.get_json(self.url))

    @override
    def describe(self) -> str:
        return self.url


@dataclass
class JsonFileRowSource(RowSource):
    """Rows stored in a local JSON file with the same shape as the HTTP payload."""

    path: Path

    @override
    def fetch_rows(self) -> list[dict[str, object]]:
        try:
            text = Path(self.path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LoadTransportFailure.for_missing_file(self.path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadTransportFailure(f"Could not read {self.path}: {exc}") from exc
        try:
            payload: object = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LoadShapeFailure.for_invalid_json() from exc
        return unwrap_rows(payload)

    @override
    def describe(self) -> str:
        return str(self.path)
