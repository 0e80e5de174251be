"""Tests for unit-range parsing and resolution."""

import pytest

from building_lookup.domain.unit_ranges import (
    UnitRangeIndex,
    coerce_unit,
    is_unit_range,
    parse_unit_number,
    parse_unit_range,
)

# Longer than the default int() conversion limit of 4300 digits.
OVERSIZED = "1" * 5000


class TestParseUnitRange:
    def test_parses_plain_and_spaced_ranges(self):
        assert parse_unit_range("101-120") == (101, 120)
        assert parse_unit_range("  301 - 328 ") == (301, 328)

    @pytest.mark.parametrize("token", ["TA", "101", "101-", "-120", "1a-20", "101-120-130", ""])
    def test_rejects_other_tokens(self, token):
        assert parse_unit_range(token) is None

    def test_keeps_reversed_bounds(self):
        assert parse_unit_range("120-101") == (120, 101)

    def test_oversized_bounds_are_unusable(self):
        token = f"1-{OVERSIZED}"

        assert parse_unit_range(token) is None
        assert is_unit_range(token)


class TestCoerceUnit:
    def test_accepts_integers_and_integer_text(self):
        assert coerce_unit(120) == 120
        assert coerce_unit(" 120 ") == 120
        assert coerce_unit(120.0) == 120

    @pytest.mark.parametrize(
        "value", [True, "12a", "", "1.5", 1.5, float("inf"), float("nan"), None, [120]]
    )
    def test_rejects_everything_else(self, value):
        assert coerce_unit(value) is None

    def test_oversized_digit_text_is_rejected(self):
        assert coerce_unit(OVERSIZED) is None
        assert coerce_unit(f" -{OVERSIZED} ") is None


def test_parse_unit_number_strips_decorations():
    assert parse_unit_number("120호") == 120
    assert parse_unit_number(" #1 2 0 ") == 120
    assert parse_unit_number("호") is None


def test_parse_unit_number_rejects_oversized_input():
    assert parse_unit_number(f"{OVERSIZED}호") is None


class TestUnitRangeIndex:
    def test_inclusive_bounds(self, make_record):
        tower = make_record("Tower A", alias_spec="TA,101-120")
        index = UnitRangeIndex.build([tower])

        assert index.resolve_unit(101) is tower
        assert index.resolve_unit(110) is tower
        assert index.resolve_unit(120) is tower
        assert index.resolve_unit(100) is None
        assert index.resolve_unit(121) is None

    def test_multiple_ranges_per_record(self, make_record):
        tower = make_record("Tower A", alias_spec="101-120, 301-328")
        index = UnitRangeIndex.build([tower])

        assert index.resolve_unit(315) is tower
        assert index.resolve_unit(200) is None
        assert len(index) == 2

    def test_first_record_wins_on_overlap(self, make_record):
        first = make_record("Tower A", alias_spec="101-150")
        second = make_record("Tower B", alias_spec="140-200")
        index = UnitRangeIndex.build([first, second])

        assert index.resolve_unit(145) is first
        assert index.resolve_unit(160) is second

    def test_free_text_aliases_and_reversed_ranges_never_match(self, make_record):
        tower = make_record("Tower A", alias_spec="TA,120-101,101")
        index = UnitRangeIndex.build([tower])

        assert index.resolve_unit(101) is None
        assert index.resolve_unit(110) is None

    def test_unparseable_input_is_not_found(self, make_record):
        index = UnitRangeIndex.build([make_record(alias_spec="1-999")])

        assert index.resolve_unit("12a") is None
        assert index.resolve_unit(None) is None
        assert index.resolve_unit("120") is not None

    def test_oversized_tokens_are_skipped(self, make_record):
        tower = make_record("Tower A", alias_spec=f"TA,1-{OVERSIZED},101-120")
        index = UnitRangeIndex.build([tower])

        assert len(index) == 1
        assert index.resolve_unit(110) is tower
        assert index.resolve_unit(OVERSIZED) is None
