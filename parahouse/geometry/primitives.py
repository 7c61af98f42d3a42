"""Geometric primitives: points, segments and reference planes.

All coordinates are in the host's internal length unit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from parahouse.errors import InvalidArgumentError


@dataclass(frozen=True)
class Point3:
    """Point (or offset vector) in 3D space."""

    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Point3) -> Point3:
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3) -> Point3:
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point3:
        return Point3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Point3:
        return Point3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Point3:
        return Point3(-self.x, -self.y, -self.z)

    def dot(self, other: Point3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Point3) -> Point3:
        return Point3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def distance_to(self, other: Point3) -> float:
        return (other - self).length()

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ORIGIN = Point3(0.0, 0.0, 0.0)
X_AXIS = Point3(1.0, 0.0, 0.0)
Y_AXIS = Point3(0.0, 1.0, 0.0)
Z_AXIS = Point3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Segment:
    """Bounded line from *start* to *end*.  Zero-length segments are rejected."""

    start: Point3
    end: Point3

    def __post_init__(self) -> None:
        if self.start == self.end:
            raise InvalidArgumentError(f"Degenerate segment at {self.start.as_tuple()}")

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def direction(self) -> Point3:
        """Unit vector from start to end."""
        return (self.end - self.start) / self.length

    @property
    def midpoint(self) -> Point3:
        return (self.start + self.end) / 2

    def offset(self, start_delta: Point3, end_delta: Point3) -> Segment:
        """Return a new segment with each endpoint moved by its own delta."""
        return Segment(self.start + start_delta, self.end + end_delta)

    def to_dict(self) -> dict[str, Any]:
        return {"start": list(self.start.as_tuple()), "end": list(self.end.as_tuple())}


@dataclass(frozen=True)
class ReferencePlane:
    """Work plane through *origin* with unit *normal*.

    *x_dir* is the in-plane horizontal axis; the in-plane vertical axis is
    ``normal x x_dir``.
    """

    origin: Point3
    normal: Point3
    x_dir: Point3

    @property
    def y_dir(self) -> Point3:
        return self.normal.cross(self.x_dir)

    def to_plane_coords(self, point: Point3) -> tuple[float, float]:
        """Project *point* into the plane's 2D (x_dir, y_dir) coordinates."""
        rel = point - self.origin
        return (rel.dot(self.x_dir), rel.dot(self.y_dir))


# Vertical Y-Z plane through the origin; profiles drawn in it extrude along X.
YZ_PLANE = ReferencePlane(origin=ORIGIN, normal=X_AXIS, x_dir=Y_AXIS)
