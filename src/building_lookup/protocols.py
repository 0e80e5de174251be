"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces the lookup core depends on,
enabling isolated unit testing with fake implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HttpSession(Protocol):
    """Abstract HTTP session for fetching JSON documents."""

    def get_json(self, url: str) -> object:
        """Fetch and decode a JSON document.

        Args:
            url: The URL to fetch.

        Returns:
            The decoded JSON value (any shape).

        Raises:
            LoadTransportFailure: On network or HTTP errors.
            LoadShapeFailure: When the body is not valid JSON.
        """
        ...


@runtime_checkable
class RowSource(Protocol):
    """Abstract source of raw building rows."""

    def fetch_rows(self) -> list[dict[str, object]]:
        """Return the raw rows of the building table.

        Raises:
            LoadTransportFailure: When the source cannot be reached or read.
            LoadShapeFailure: When the payload is not a usable row array.
        """
        ...

    def describe(self) -> str:
        """Return a short human-readable location of the source."""
        ...


@runtime_checkable
class RetryPolicy(Protocol):
    """Abstract retry policy for transient failures."""

    max_retries: int
    retry_statuses: tuple[int, ...]
    retry_exceptions: tuple[type[Exception], ...]

    def compute_backoff(self, attempt: int, retry_after: int | None = None) -> float:
        """Return a delay for the next retry attempt."""
        ...
