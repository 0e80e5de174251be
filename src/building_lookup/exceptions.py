"""Custom exceptions for building lookup.

Load failures are raised by row sources and converted to values by the
directory; they never cross the query boundary.
"""

from __future__ import annotations

from pathlib import Path


class BuildingLookupError(Exception):
    """Base exception for all building lookup errors."""

    pass


class LoadError(BuildingLookupError):
    """Base exception for failures while loading building rows."""

    retryable: bool = False

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class LoadTransportFailure(LoadError):
    """Raised when the row source could not be reached or read.

    Retryable by the caller (e.g. a manual refresh).
    """

    retryable = True

    def __init__(self, reason: str, *, status: int | None = None) -> None:
        self.status = status
        message = reason if status is None else f"{reason} (status={status})"
        super().__init__(message)

    @classmethod
    def for_status(cls, status: int, details: str) -> LoadTransportFailure:
        return cls(f"Row source returned HTTP {status}: {details}", status=status)

    @classmethod
    def for_request_error(cls, error: Exception) -> LoadTransportFailure:
        return cls(f"Row source request failed: {error}")

    @classmethod
    def for_missing_file(cls, path: Path) -> LoadTransportFailure:
        return cls(f"Row source file not found: {path}")


class LoadShapeFailure(LoadError):
    """Raised when the payload parsed but is not a usable record array.

    Not retryable without fixing the source.
    """

    @classmethod
    def for_invalid_json(cls) -> LoadShapeFailure:
        return cls("Row source did not return valid JSON.")

    @classmethod
    def for_unwrappable_payload(cls, kind: str) -> LoadShapeFailure:
        return cls(
            f"Row source returned a JSON {kind}; expected an array of rows "
            "or an object wrapping one under 'rows', 'data', 'items' or 'records'."
        )

    @classmethod
    def for_row(cls, position: int) -> LoadShapeFailure:
        return cls(f"Row {position} is not a JSON object.")


class SourceNotConfiguredError(BuildingLookupError):
    """Raised when neither a source URL nor a source file is configured."""

    def __init__(self) -> None:
        super().__init__(
            "No row source configured. Set LOOKUP_SOURCE_URL or LOOKUP_SOURCE_FILE, "
            "or pass --source-file."
        )


class ConfigFileNotFoundError(BuildingLookupError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(BuildingLookupError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, details: str) -> None:
        super().__init__(f"Config file is not valid TOML: {path} ({details})")


class ConfigFileValidationError(BuildingLookupError):
    """Raised when a config file does not match the expected schema."""

    def __init__(self, path: str, details: str) -> None:
        super().__init__(f"Config file {path} is invalid: {details}")
