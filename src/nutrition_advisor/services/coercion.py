"""Total coercion helpers for untrusted model and request payloads."""

import math
import re

_NUMERIC_PREFIX = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)


def to_number(value: object, fallback: float = 0.0) -> float:
    """Return a finite number for value, or fallback.

    Strings are read like a lenient float parser: the longest leading numeric
    prefix wins, so "12g" becomes 12.0.
    """
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int | float):
        return value if math.isfinite(value) else fallback
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return fallback
        try:
            parsed = float(match.group(1))
        except (ValueError, OverflowError):
            return fallback
        return parsed if math.isfinite(parsed) else fallback
    return fallback


def to_trimmed_string(value: object, fallback: str = "") -> str:
    """Trim strings, map None to fallback and stringify anything else."""
    if isinstance(value, str):
        return value.strip()
    if value is None:
        return fallback
    return str(value)


def to_string_array(value: object) -> list[str]:
    """Coerce value to a list of non-empty trimmed strings."""
    if isinstance(value, list | tuple):
        items = (to_trimmed_string(item, "") for item in value)
        return [item for item in items if item]
    if isinstance(value, str):
        trimmed = value.strip()
        return [trimmed] if trimmed else []
    return []
