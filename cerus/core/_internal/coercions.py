"""Pure coercion helpers for config input parsing."""

from __future__ import annotations


def coerce_positive_int(value: object, *, default: int | None, minimum: int = 1) -> int | None:
    """Parse positive integer config inputs with a safe default."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= minimum else default


def coerce_bool(value: object, *, default: bool) -> bool:
    """Parse boolean config inputs, accepting common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
    return default


__all__ = [
    "coerce_bool",
    "coerce_positive_int",
]
