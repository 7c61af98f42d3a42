"""Half-extent helpers for laying geometry out symmetrically around the origin."""

from __future__ import annotations


def half_value(value: float) -> float:
    """Return half of *value* (a full extent becomes a half-extent)."""
    return value / 2


def half_value_with_offset(increment: float, value: float) -> float:
    """Return half of *value* pushed outward by *increment*.

    Used with a wall half-width as *increment* so roof planes clear the
    wall's outer face.
    """
    return value / 2 + increment
