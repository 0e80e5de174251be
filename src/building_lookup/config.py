"""Centralised, injectable configuration for building lookup."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import LookupConfigFile
from .domain.group_index import SortMode
from .domain.resolution import DEFAULT_CANDIDATE_LIMIT


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class SortModeEnvVarError(ValueError):
    """Raised when an environment variable names an unknown sort mode."""

    def __init__(self, env_name: str) -> None:
        choices = ", ".join(mode.value for mode in SortMode)
        super().__init__(f"{env_name} must be one of: {choices}.")


@dataclass(frozen=True)
class LookupConfig:
    """Immutable configuration for loading and querying the building table.

    Load from environment with `LookupConfig.from_env()` or construct directly for testing.
    """

    # Row source (file wins over URL when both are set)
    source_url: str = ""
    source_file: str = ""

    # HTTP fetch
    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    backoff_max_seconds: float = 30.0
    backoff_jitter_seconds: float = 0.1

    # Resolution
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT
    sort_mode: SortMode = SortMode.FIRST_SEEN
    route_numeric: bool = True

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            LookupConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            source_url=os.getenv("LOOKUP_SOURCE_URL", "").strip(),
            source_file=os.getenv("LOOKUP_SOURCE_FILE", "").strip(),
            timeout_seconds=float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "30")),
            max_retries=int(os.getenv("LOOKUP_MAX_RETRIES", "3")),
            backoff_factor=float(os.getenv("LOOKUP_BACKOFF_FACTOR", "0.5")),
            backoff_max_seconds=float(os.getenv("LOOKUP_BACKOFF_MAX_SECONDS", "30")),
            backoff_jitter_seconds=float(os.getenv("LOOKUP_BACKOFF_JITTER_SECONDS", "0.1")),
            candidate_limit=_parse_optional_positive_int(
                os.getenv("LOOKUP_CANDIDATE_LIMIT", ""),
                env_name="LOOKUP_CANDIDATE_LIMIT",
            )
            or DEFAULT_CANDIDATE_LIMIT,
            sort_mode=_parse_sort_mode(
                os.getenv("LOOKUP_SORT_MODE", ""),
                env_name="LOOKUP_SORT_MODE",
            ),
            route_numeric=_parse_optional_bool(
                os.getenv("LOOKUP_ROUTE_NUMERIC", ""),
                env_name="LOOKUP_ROUTE_NUMERIC",
            )
            is not False,
        )

    def with_overrides(
        self,
        *,
        source_url: str | None = None,
        source_file: str | None = None,
        candidate_limit: int | None = None,
        sort_mode: SortMode | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            source_url=self.source_url if source_url is None else source_url.strip(),
            source_file=self.source_file if source_file is None else source_file.strip(),
            candidate_limit=self.candidate_limit if candidate_limit is None else candidate_limit,
            sort_mode=self.sort_mode if sort_mode is None else sort_mode,
        )

    def with_file_overrides(self, file_config: LookupConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            source_url=self.source_url
            if file_config.source_url is None
            else file_config.source_url,
            source_file=self.source_file
            if file_config.source_file is None
            else file_config.source_file,
            timeout_seconds=self.timeout_seconds
            if file_config.timeout_seconds is None
            else file_config.timeout_seconds,
            max_retries=self.max_retries
            if file_config.max_retries is None
            else file_config.max_retries,
            candidate_limit=self.candidate_limit
            if file_config.candidate_limit is None
            else file_config.candidate_limit,
            sort_mode=self.sort_mode if file_config.sort_mode is None else file_config.sort_mode,
            route_numeric=self.route_numeric
            if file_config.route_numeric is None
            else file_config.route_numeric,
        )


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)


def _parse_sort_mode(value: str, *, env_name: str) -> SortMode:
    text = value.strip().lower()
    if not text:
        return SortMode.FIRST_SEEN
    try:
        return SortMode(text)
    except ValueError as exc:
        raise SortModeEnvVarError(env_name) from exc
