"""Feature info for the click panel."""

from __future__ import annotations

from typing import Any

from sahara_map.core.constants import FEATURE_INFO_FIELDS


def describe_feature(properties: dict[str, Any] | None) -> list[tuple[str, str]]:
    """Return ``(label, value)`` rows for the known Natural Earth name fields.

    Rows follow ``FEATURE_INFO_FIELDS`` order; missing, ``None`` and empty
    values are skipped.
    """
    if not properties:
        return []
    rows: list[tuple[str, str]] = []
    for key, label in FEATURE_INFO_FIELDS:
        value = properties.get(key)
        if value is None or value == "":
            continue
        rows.append((label, str(value)))
    return rows
