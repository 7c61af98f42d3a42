"""Abstract HostDocument interface.

A host owns the building document: it stores elements, resolves levels and
family types by name, and converts human-facing lengths to its internal unit.
The geometry core only ever talks to a host through these methods.
"""

from __future__ import annotations

import abc
from contextlib import AbstractContextManager
from typing import Any

from parahouse.errors import HostError
from parahouse.geometry.primitives import Point3, ReferencePlane, Segment
from parahouse.models.building import Level, OpeningKind, RoofEdge
from parahouse.models.house import TypeSelector


class HostDocument(abc.ABC):
    """Base class for all host documents."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short host identifier used in log messages."""

    # Units and transactions

    @abc.abstractmethod
    def to_internal_units(self, value_mm: float) -> float:
        """Convert a length in millimetres to the host's internal unit."""

    @abc.abstractmethod
    def transaction(self, name: str) -> AbstractContextManager[None]:
        """Return a context manager scoping one all-or-nothing unit of work.

        Changes made inside the block are kept when it exits normally and
        discarded when it raises.
        """

    # Lookups

    @abc.abstractmethod
    def levels(self) -> list[Level]:
        """Return every level in the document."""

    def find_level(self, name: str) -> Level | None:
        """Return the first level called *name*, or None."""
        for level in self.levels():
            if level.name == name:
                return level
        return None

    @abc.abstractmethod
    def find_type(self, selector: TypeSelector) -> Any | None:
        """Return the family type matching *selector*, or None."""

    @abc.abstractmethod
    def is_type_active(self, family_type: Any) -> bool:
        """Return True if instances of *family_type* can be placed."""

    @abc.abstractmethod
    def activate_type(self, family_type: Any) -> None:
        """Make *family_type* placeable."""

    # Walls

    @abc.abstractmethod
    def create_wall(self, segment: Segment, base_level: Level, top_level: Level) -> Any:
        """Create a wall along *segment* from *base_level* up to *top_level*."""

    @abc.abstractmethod
    def wall_curve(self, wall: Any) -> Segment:
        """Return the host curve (centreline) of *wall*."""

    @abc.abstractmethod
    def wall_width(self, wall: Any) -> float:
        """Return the thickness of *wall* in internal units."""

    # Openings

    @abc.abstractmethod
    def create_opening(
        self,
        point: Point3,
        family_type: Any,
        wall: Any,
        level: Level,
        kind: OpeningKind,
    ) -> Any:
        """Insert a door or window instance into *wall* at *point*."""

    @abc.abstractmethod
    def set_parameter(self, instance: Any, name: str, value: float) -> None:
        """Set the numeric parameter *name* on *instance*."""

    # Roofs

    @abc.abstractmethod
    def create_footprint_roof(
        self,
        boundary: list[Segment],
        level: Level,
        roof_type: Any,
    ) -> tuple[Any, list[RoofEdge]]:
        """Create a footprint roof; return it with its boundary edge mapping."""

    @abc.abstractmethod
    def set_edge_slope(self, roof: Any, edge: RoofEdge, angle: float) -> None:
        """Mark *edge* of a footprint roof as slope-defining at *angle* radians."""

    @abc.abstractmethod
    def create_extrusion_roof(
        self,
        profile: list[Segment],
        plane: ReferencePlane,
        level: Level,
        roof_type: Any,
        start: float,
        end: float,
    ) -> Any:
        """Create a roof by extruding *profile* along *plane*'s normal from *start* to *end*."""

    @abc.abstractmethod
    def set_eave_cuts(self, roof: Any, style: str) -> None:
        """Set the eave cut style of an extrusion roof."""

    # Shared checks

    @staticmethod
    def _check_levels(base_level: Level, top_level: Level) -> float:
        """Return the wall height between two levels, rejecting inverted pairs."""
        height = top_level.elevation - base_level.elevation
        if height <= 0:
            raise HostError(
                f"Top level {top_level.name!r} ({top_level.elevation}) must be above "
                f"base level {base_level.name!r} ({base_level.elevation})"
            )
        return height

    @staticmethod
    def _check_closed(boundary: list[Segment]) -> None:
        if len(boundary) < 3:
            raise HostError(f"Roof boundary needs at least 3 edges, got {len(boundary)}")
        for i, seg in enumerate(boundary):
            if seg.end != boundary[(i + 1) % len(boundary)].start:
                raise HostError(f"Roof boundary is open after edge {i}")

    @staticmethod
    def _check_extrusion(profile: list[Segment], start: float, end: float) -> None:
        if len(profile) < 2:
            raise HostError(f"Extrusion profile needs at least 2 edges, got {len(profile)}")
        if start >= end:
            raise HostError(f"Extrusion start ({start}) must be below end ({end})")
