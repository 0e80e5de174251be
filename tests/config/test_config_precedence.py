"""Tests for configuration precedence resolution."""

from __future__ import annotations

from building_lookup.config import LookupConfig
from building_lookup.config_file import LookupConfigFile
from building_lookup.domain.group_index import SortMode


def test_with_file_overrides_applies_config_file_values() -> None:
    env_config = LookupConfig(
        source_url="https://env.example.org",
        timeout_seconds=30.0,
        max_retries=3,
        candidate_limit=5,
        sort_mode=SortMode.FIRST_SEEN,
        route_numeric=True,
    )
    file_config = LookupConfigFile(
        source_file="data/rows.json",
        timeout_seconds=5.0,
        max_retries=1,
        candidate_limit=2,
        sort_mode=SortMode.LOCALE,
        route_numeric=False,
    )

    resolved = env_config.with_file_overrides(file_config)

    assert resolved.source_url == "https://env.example.org"
    assert resolved.source_file == "data/rows.json"
    assert resolved.timeout_seconds == 5.0
    assert resolved.max_retries == 1
    assert resolved.candidate_limit == 2
    assert resolved.sort_mode is SortMode.LOCALE
    assert resolved.route_numeric is False


def test_with_file_overrides_keeps_env_values_for_missing_keys() -> None:
    env_config = LookupConfig(source_url="https://env.example.org", candidate_limit=9)

    resolved = env_config.with_file_overrides(LookupConfigFile())

    assert resolved == env_config


def test_cli_overrides_win_over_file_values() -> None:
    resolved = (
        LookupConfig()
        .with_file_overrides(LookupConfigFile(source_file="file.json", candidate_limit=2))
        .with_overrides(source_file="cli.json")
    )

    assert resolved.source_file == "cli.json"
    assert resolved.candidate_limit == 2
