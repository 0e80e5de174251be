"""Inbound payload helpers."""

from .validation import (
    ENVELOPE_KEYS,
    IncomingDataError,
    coerce_building_row,
    unwrap_rows,
    validate_as,
)

__all__ = [
    "ENVELOPE_KEYS",
    "IncomingDataError",
    "coerce_building_row",
    "unwrap_rows",
    "validate_as",
]
