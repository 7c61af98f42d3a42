"""Pure geometry helpers: primitives, half-extents and anchor loops."""

from parahouse.geometry.anchors import anchor_points
from parahouse.geometry.increment import half_value, half_value_with_offset
from parahouse.geometry.primitives import (
    ORIGIN,
    YZ_PLANE,
    Point3,
    ReferencePlane,
    Segment,
)

__all__ = [
    "ORIGIN",
    "YZ_PLANE",
    "Point3",
    "ReferencePlane",
    "Segment",
    "anchor_points",
    "half_value",
    "half_value_with_offset",
]
