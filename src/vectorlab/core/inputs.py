"""
Panel input helpers: tolerant number parsing and wheel nudging.
"""
from __future__ import annotations

import math

from vectorlab.config import WHEEL_NUDGE_STEP


def parse_number(text: str, fallback: float) -> float:
    """
    Parse user-typed text as a float.

    Accepts a decimal comma. Anything unparsable or non-finite returns
    `fallback` (the last good value) so a half-typed "-" or "1e" never
    reaches the model.
    """
    cleaned = text.strip().replace(",", ".")
    if not cleaned:
        return fallback
    try:
        value = float(cleaned)
    except ValueError:
        return fallback
    return value if math.isfinite(value) else fallback


def nudge(value: float, wheel_delta: float, step: float = WHEEL_NUDGE_STEP) -> float:
    """Scroll up (negative delta) adds `step`, scroll down subtracts; rounded to 1 decimal."""
    if wheel_delta == 0:
        return value
    change = step if wheel_delta < 0 else -step
    return round(value + change, 1)
