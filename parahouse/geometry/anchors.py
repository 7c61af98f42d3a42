"""Anchor points for rectangular loops centred on the origin."""

from __future__ import annotations

from parahouse.errors import InvalidArgumentError
from parahouse.geometry.primitives import Point3


def anchor_points(x_increment: float, y_increment: float) -> list[Point3]:
    """Return the closed 5-point rectangle loop for the given half-extents.

    The loop runs counter-clockwise from the bottom-left corner and repeats
    the first point at the end::

        (-x,-y) -> (x,-y) -> (x,y) -> (-x,y) -> (-x,-y)

    Zero half-extents are allowed and collapse the loop; callers that need
    a real rectangle must reject them.
    """
    if x_increment < 0 or y_increment < 0:
        raise InvalidArgumentError(
            f"Half-extents must be non-negative, got ({x_increment}, {y_increment})"
        )
    first = Point3(-x_increment, -y_increment, 0.0)
    return [
        first,
        Point3(x_increment, -y_increment, 0.0),
        Point3(x_increment, y_increment, 0.0),
        Point3(-x_increment, y_increment, 0.0),
        first,
    ]
