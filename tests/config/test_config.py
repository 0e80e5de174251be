"""Tests for LookupConfig behaviour."""

import pytest

import building_lookup.config as config_module
from building_lookup.config import LookupConfig
from building_lookup.domain.group_index import SortMode


def _patch_env(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    def fake_getenv(key: str, default: str = "") -> str:
        return env.get(key, default)

    def fake_load_dotenv(dotenv_path: str | None = None) -> bool:
        _ = dotenv_path
        return True

    monkeypatch.setattr(config_module.os, "getenv", fake_getenv)
    monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {})

    config = LookupConfig.from_env()

    assert config == LookupConfig()
    assert config.candidate_limit == 5
    assert config.sort_mode is SortMode.FIRST_SEEN
    assert config.route_numeric is True


def test_from_env_reads_lookup_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(
        monkeypatch,
        {
            "LOOKUP_SOURCE_URL": " https://example.org/exec ",
            "LOOKUP_TIMEOUT_SECONDS": "12.5",
            "LOOKUP_MAX_RETRIES": "1",
            "LOOKUP_BACKOFF_FACTOR": "0.2",
            "LOOKUP_CANDIDATE_LIMIT": "3",
            "LOOKUP_SORT_MODE": "LOCALE",
            "LOOKUP_ROUTE_NUMERIC": "off",
        },
    )

    config = LookupConfig.from_env()

    assert config.source_url == "https://example.org/exec"
    assert config.source_file == ""
    assert config.timeout_seconds == 12.5
    assert config.max_retries == 1
    assert config.backoff_factor == 0.2
    assert config.candidate_limit == 3
    assert config.sort_mode is SortMode.LOCALE
    assert config.route_numeric is False


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_from_env_rejects_invalid_candidate_limit(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    _patch_env(monkeypatch, {"LOOKUP_CANDIDATE_LIMIT": value})

    with pytest.raises(ValueError, match="LOOKUP_CANDIDATE_LIMIT"):
        LookupConfig.from_env()


def test_from_env_rejects_invalid_route_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"LOOKUP_ROUTE_NUMERIC": "maybe"})

    with pytest.raises(ValueError, match="LOOKUP_ROUTE_NUMERIC"):
        LookupConfig.from_env()


def test_from_env_rejects_unknown_sort_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"LOOKUP_SORT_MODE": "alphabetical"})

    with pytest.raises(ValueError, match="first_seen, locale"):
        LookupConfig.from_env()


def test_with_overrides_preserves_fields() -> None:
    base = LookupConfig(
        source_url="https://example.org/exec",
        timeout_seconds=12.0,
        max_retries=9,
        backoff_factor=0.9,
        candidate_limit=7,
        route_numeric=False,
    )

    updated = base.with_overrides(source_file=" data/rows.json ", sort_mode=SortMode.LOCALE)

    assert updated.source_file == "data/rows.json"
    assert updated.sort_mode is SortMode.LOCALE
    assert updated.source_url == base.source_url
    assert updated.timeout_seconds == base.timeout_seconds
    assert updated.max_retries == base.max_retries
    assert updated.backoff_factor == base.backoff_factor
    assert updated.candidate_limit == base.candidate_limit
    assert updated.route_numeric is False
