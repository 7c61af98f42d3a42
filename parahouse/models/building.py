"""Transient building data computed during one generation run.

Nothing here is persisted: each run computes these values, hands them to the
host document, and returns them in a :class:`GenerationResult` for inspection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from parahouse.errors import InvalidArgumentError
from parahouse.geometry.primitives import Point3, ReferencePlane, Segment


class OpeningKind(str, Enum):
    DOOR = "door"
    WINDOW = "window"


class TypeCategory(str, Enum):
    """Host categories a family type can be looked up in."""

    DOOR = "door"
    WINDOW = "window"
    FOOTPRINT_ROOF = "footprint_roof"
    EXTRUSION_ROOF = "extrusion_roof"


@dataclass(frozen=True)
class Level:
    """A named host level.  *handle* is the host's own object, if any."""

    name: str
    elevation: float
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Footprint:
    """Four wall centrelines forming a closed rectangle."""

    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        if len(self.segments) != 4:
            raise InvalidArgumentError(f"Footprint needs 4 segments, got {len(self.segments)}")
        for i, seg in enumerate(self.segments):
            nxt = self.segments[(i + 1) % 4]
            if seg.end != nxt.start:
                raise InvalidArgumentError(f"Footprint is open between segments {i} and {(i + 1) % 4}")
        for i in (0, 1):
            if not math.isclose(self.segments[i].length, self.segments[i + 2].length):
                raise InvalidArgumentError(f"Opposite segments {i} and {i + 2} differ in length")

    def __iter__(self):
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]


@dataclass(frozen=True)
class OpeningRequest:
    """Where and what to insert into a host wall."""

    host_segment: Segment
    insertion_point: Point3
    kind: OpeningKind
    sill_height: float | None = None


@dataclass(frozen=True)
class RoofEdge:
    """One boundary edge of a footprint roof, as mapped by the host."""

    index: int
    segment: Segment


@dataclass(frozen=True)
class FootprintRoofBoundary:
    """Closed boundary of a hip roof; every edge defines *slope_angle*."""

    segments: tuple[Segment, ...]
    slope_angle: float


@dataclass(frozen=True)
class GableRoofProfile:
    """Triangular gable profile extruded between two offsets along the plane normal."""

    segments: tuple[Segment, ...]
    plane: ReferencePlane
    extrusion_start: float
    extrusion_end: float

    @property
    def ridge(self) -> Point3:
        return self.segments[0].end


@dataclass
class GenerationResult:
    """Everything one run created, in construction order."""

    footprint: Footprint
    walls: list[Any] = field(default_factory=list)
    door: Any = None
    windows: list[Any] = field(default_factory=list)
    openings: list[OpeningRequest] = field(default_factory=list)
    roof: Any = None
    roof_boundary: FootprintRoofBoundary | GableRoofProfile | None = None

    def summary(self) -> dict[str, Any]:
        return {
            "walls": len(self.walls),
            "doors": 0 if self.door is None else 1,
            "windows": len(self.windows),
            "roof": type(self.roof_boundary).__name__ if self.roof_boundary else None,
        }
