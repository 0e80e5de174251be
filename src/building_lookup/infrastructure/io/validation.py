"""Pydantic-based validation helpers for inbound row payloads."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import TypeAdapter, ValidationError

from ...exceptions import LoadShapeFailure
from ...io_contracts import BuildingRowIO

# Envelope keys tried, in order, when the payload is an object.
ENVELOPE_KEYS = ("rows", "data", "items", "records")

# Canonical field -> accepted payload keys, in order of preference.
# gu/dong/apt/aliases are the column names of the legacy sheet.
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "district": ("district", "gu"),
    "sub_district": ("subDistrict", "sub_district", "dong"),
    "building_name": ("buildingName", "building_name", "apt"),
    "info": ("info", "text"),
    "alias_spec": ("aliasSpec", "alias_spec", "aliases"),
}


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def unwrap_rows(payload: object) -> list[dict[str, object]]:
    """Return the row objects of a payload, unwrapping a known envelope.

    Raises:
        LoadShapeFailure: If the payload is not an array of objects and no
            envelope key holds one.
    """
    items: object = payload
    if isinstance(payload, Mapping):
        items = next(
            (payload[key] for key in ENVELOPE_KEYS if isinstance(payload.get(key), list)),
            None,
        )
        if items is None:
            raise LoadShapeFailure.for_unwrappable_payload("object")
    if not isinstance(items, list):
        raise LoadShapeFailure.for_unwrappable_payload(type(payload).__name__)

    rows: list[dict[str, object]] = []
    for position, item in enumerate(items):
        try:
            rows.append(validate_as(dict[str, object], item))
        except IncomingDataError as exc:
            raise LoadShapeFailure.for_row(position) from exc
    return rows


def _as_text(value: object) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str | int | float):
        return str(value)
    return ""


def _field(row: Mapping[str, object], field: str) -> str:
    for key in FIELD_SYNONYMS[field]:
        text = _as_text(row.get(key))
        if text.strip():
            return text
    return ""


def coerce_building_row(row: Mapping[str, object]) -> BuildingRowIO:
    """Map one raw row onto the canonical row contract.

    Missing, null and non-scalar values become empty text; numbers become
    their decimal text. `info` falls back to the legacy `text` field.
    """
    return {
        "district": _field(row, "district"),
        "sub_district": _field(row, "sub_district"),
        "building_name": _field(row, "building_name"),
        "info": _field(row, "info"),
        "alias_spec": _field(row, "alias_spec"),
    }
