"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from pathlib import Path

import requests

from .application.directory import BuildingDirectory
from .cli import CliDependencies, create_app
from .config import LookupConfig
from .exceptions import SourceNotConfiguredError
from .infrastructure import HttpRowSource, JsonFileRowSource, RequestsJsonSession, RetryPolicy
from .protocols import RowSource


def build_row_source(config: LookupConfig) -> RowSource:
    """Return the configured row source; a local file wins over a URL."""
    if config.source_file:
        return JsonFileRowSource(path=Path(config.source_file))
    if config.source_url:
        session = RequestsJsonSession(
            session=requests.Session(),
            retry_policy=RetryPolicy(
                max_retries=config.max_retries,
                backoff_factor=config.backoff_factor,
                max_backoff_seconds=config.backoff_max_seconds,
                jitter_seconds=config.backoff_jitter_seconds,
            ),
            timeout_seconds=config.timeout_seconds,
        )
        return HttpRowSource(url=config.source_url, session=session)
    raise SourceNotConfiguredError()


def build_cli_dependencies(*, config: LookupConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands."""
    directory = BuildingDirectory.from_config(build_row_source(config), config)
    return CliDependencies(directory=directory)


app = create_app(build_cli_dependencies)
