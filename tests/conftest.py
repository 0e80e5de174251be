"""Pytest fixtures shared by the building lookup tests.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from building_lookup.domain.records import BuildingRecord
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(repr(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should use FakeHttpSession or MagicMock.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def tower_a_row() -> dict[str, object]:
    """The single-row table used by the end-to-end scenario."""
    return {
        "district": "Gangnam",
        "subDistrict": "Yeoksam",
        "buildingName": "Tower A",
        "info": "built 2001",
        "aliasSpec": "TA,101-150",
    }


@pytest.fixture
def sample_rows() -> list[dict[str, object]]:
    """A small table with two districts, aliases and unit ranges."""
    return [
        {
            "district": "Gangnam",
            "subDistrict": "Yeoksam",
            "buildingName": "Tower A",
            "info": "built 2001",
            "aliasSpec": "TA,101-150",
        },
        {
            "district": "Gangnam",
            "subDistrict": "Yeoksam",
            "buildingName": "Tower B",
            "info": "built 2004",
            "aliasSpec": "TB,201-250",
        },
        {
            "district": "Gangnam",
            "subDistrict": "Daechi",
            "buildingName": "Raemian Daechi Palace",
            "info": "1608 households",
            "aliasSpec": "Raemian Palace, RDP",
        },
        {
            "district": "Seocho",
            "subDistrict": "Banpo",
            "buildingName": "Acro River Park",
            "info": "",
            "text": "riverside, 2016",
            "aliasSpec": "Acro,301-328",
        },
    ]


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""

    def _make(
        building_name: str = "Tower A",
        *,
        district: str = "Gangnam",
        sub_district: str = "Yeoksam",
        info: str = "",
        alias_spec: str = "",
    ) -> BuildingRecord:
        return BuildingRecord(
            district=district,
            sub_district=sub_district,
            building_name=building_name,
            info=info,
            alias_spec=alias_spec,
        )

    return _make
