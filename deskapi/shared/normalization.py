from __future__ import annotations
from typing import Any


def normalize_str(value: Any) -> str:
    """Return the value as a string, "" for None.

        Numeric ids are stringified so callers always get text back.
        """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)

def normalize_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0

def normalize_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)

def normalize_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [normalize_str(item) for item in value if item is not None]

def as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
