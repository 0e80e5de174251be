"""Comparison keys for building names, aliases and user queries.

Every index and every query goes through `normalize_key`, so two strings
are "the same building name" exactly when their keys are equal.

Usage example:
    from building_lookup.normalization import normalize_key

    assert normalize_key("  Tower  A ") == "towera"
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key(text: object) -> str:
    """Return the canonical comparison key for `text`.

    Transformations:
    1. Strip leading/trailing whitespace
    2. Lowercase (locale independent)
    3. Remove every internal whitespace run (users often omit the spaces
       in apartment names, so "Tower A" and "towera" must collide)

    Args:
        text: Raw text. Anything that is not a string yields the empty key.

    Returns:
        Normalized key, possibly empty.
    """
    if not isinstance(text, str) or not text:
        return ""
    return _WHITESPACE_RE.sub("", text.strip().lower())
