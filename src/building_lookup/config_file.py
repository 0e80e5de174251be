"""Typed parsing and validation for lookup config files.

Expected layout:

    schema_version = 1

    [lookup]
    source_url = "https://example.org/exec"
    candidate_limit = 5
    sort_mode = "locale"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .domain.group_index import SortMode
from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class LookupConfigFile:
    """Validated lookup config values loaded from a TOML file."""

    source_url: str | None = None
    source_file: str | None = None
    timeout_seconds: float | None = None
    max_retries: int | None = None
    candidate_limit: int | None = None
    sort_mode: SortMode | None = None
    route_numeric: bool | None = None


class _LookupSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    source_url: str | None = None
    source_file: str | None = None
    timeout_seconds: float | None = None
    max_retries: int | None = None
    candidate_limit: int | None = None
    sort_mode: SortMode | None = None
    route_numeric: bool | None = None

    @field_validator("source_url", "source_file")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("candidate_limit")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("max_retries")
    @classmethod
    def _validate_non_negative_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_positive_float(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0.0:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    lookup: _LookupSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_lookup_config_file(path: Path) -> LookupConfigFile:
    """Load and validate a lookup TOML config file."""
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.lookup
    return LookupConfigFile(
        source_url=section.source_url,
        source_file=section.source_file,
        timeout_seconds=section.timeout_seconds,
        max_retries=section.max_retries,
        candidate_limit=section.candidate_limit,
        sort_mode=section.sort_mode,
        route_numeric=section.route_numeric,
    )
