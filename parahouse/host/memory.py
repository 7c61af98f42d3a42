"""In-memory host document.

Records every element it is asked to create without producing any real
geometry.  Used for dry runs and as the reference host in tests.
"""

from __future__ import annotations

import copy
import itertools
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from parahouse.config import DEFAULT_WALL_THICKNESS_MM
from parahouse.errors import HostError
from parahouse.geometry.primitives import Point3, ReferencePlane, Segment
from parahouse.host.base import HostDocument
from parahouse.models.building import Level, OpeningKind, RoofEdge, TypeCategory
from parahouse.models.house import TypeSelector

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class MemoryType:
    """A family type stored in a :class:`MemoryHostDocument`."""

    category: TypeCategory
    name: str
    family: str
    active: bool = False


@dataclass(eq=False)
class MemoryElement:
    """A recorded element: its category, construction data and parameters."""

    id: int
    category: str
    data: dict[str, Any] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)


class MemoryHostDocument(HostDocument):
    """Host document kept entirely in Python objects.

    Parameters
    ----------
    levels:
        Levels available for lookup, as ``Level`` objects.
    types:
        Family types available for lookup.
    mm_per_unit:
        Millimetres per internal unit.  The default of 1.0 keeps the
        internal unit in millimetres.
    wall_thickness_mm:
        Thickness reported for every wall this host creates.
    """

    def __init__(
        self,
        levels: list[Level] | None = None,
        types: list[MemoryType] | None = None,
        mm_per_unit: float = 1.0,
        wall_thickness_mm: float = DEFAULT_WALL_THICKNESS_MM,
    ) -> None:
        self._levels = list(levels or [])
        self.types = list(types or [])
        self.mm_per_unit = mm_per_unit
        self.wall_thickness = self.to_internal_units(wall_thickness_mm)
        self.elements: list[MemoryElement] = []
        self.committed: list[str] = []
        self.rolled_back: list[str] = []
        self.open_transaction: str | None = None
        self._ids = itertools.count(1)

    @property
    def name(self) -> str:
        return "memory"

    def to_internal_units(self, value_mm: float) -> float:
        return value_mm / self.mm_per_unit

    @contextmanager
    def transaction(self, name: str) -> Iterator[None]:
        if self.open_transaction is not None:
            raise HostError(f"Transaction {self.open_transaction!r} is still open")

        elements = list(self.elements)
        parameters = [copy.deepcopy(el.parameters) for el in elements]
        active = [t.active for t in self.types]
        self.open_transaction = name
        try:
            yield
        except BaseException:
            self.elements = elements
            for el, params in zip(elements, parameters):
                el.parameters = params
            for family_type, was_active in zip(self.types, active):
                family_type.active = was_active
            self.rolled_back.append(name)
            logger.debug("Rolled back transaction %r", name)
            raise
        else:
            self.committed.append(name)
        finally:
            self.open_transaction = None

    # Lookups

    def levels(self) -> list[Level]:
        return list(self._levels)

    def add_level(self, name: str, elevation_mm: float) -> Level:
        level = Level(name=name, elevation=self.to_internal_units(elevation_mm))
        self._levels.append(level)
        return level

    def add_type(
        self,
        category: TypeCategory,
        name: str,
        family: str,
        active: bool = False,
    ) -> MemoryType:
        family_type = MemoryType(category=category, name=name, family=family, active=active)
        self.types.append(family_type)
        return family_type

    def find_type(self, selector: TypeSelector) -> MemoryType | None:
        for family_type in self.types:
            if (
                family_type.category == selector.category
                and family_type.name == selector.name
                and family_type.family == selector.family
            ):
                return family_type
        return None

    def is_type_active(self, family_type: MemoryType) -> bool:
        return family_type.active

    def activate_type(self, family_type: MemoryType) -> None:
        family_type.active = True

    # Construction

    def _record(self, category: str, **data: Any) -> MemoryElement:
        self._require_transaction()
        element = MemoryElement(id=next(self._ids), category=category, data=data)
        self.elements.append(element)
        return element

    def _require_transaction(self) -> None:
        if self.open_transaction is None:
            raise HostError("Document modified outside a transaction")

    def create_wall(self, segment: Segment, base_level: Level, top_level: Level) -> MemoryElement:
        height = self._check_levels(base_level, top_level)
        return self._record(
            "wall",
            segment=segment,
            base_level=base_level.name,
            top_level=top_level.name,
            height=height,
            width=self.wall_thickness,
        )

    def wall_curve(self, wall: MemoryElement) -> Segment:
        return wall.data["segment"]

    def wall_width(self, wall: MemoryElement) -> float:
        return wall.data["width"]

    def create_opening(
        self,
        point: Point3,
        family_type: MemoryType,
        wall: MemoryElement,
        level: Level,
        kind: OpeningKind,
    ) -> MemoryElement:
        if wall not in self.elements or wall.category != "wall":
            raise HostError(f"Host element {wall.id} is not a wall in this document")
        if not family_type.active:
            raise HostError(f"Family type {family_type.name!r} is not active")
        return self._record(kind.value, point=point, type=family_type, host=wall, level=level.name)

    def set_parameter(self, instance: MemoryElement, name: str, value: float) -> None:
        self._require_transaction()
        instance.parameters[name] = value

    def create_footprint_roof(
        self,
        boundary: list[Segment],
        level: Level,
        roof_type: MemoryType,
    ) -> tuple[MemoryElement, list[RoofEdge]]:
        self._check_closed(boundary)
        roof = self._record("footprint_roof", boundary=list(boundary), type=roof_type, level=level.name)
        edges = [RoofEdge(index=i, segment=seg) for i, seg in enumerate(boundary)]
        return roof, edges

    def set_edge_slope(self, roof: MemoryElement, edge: RoofEdge, angle: float) -> None:
        self._require_transaction()
        roof.parameters.setdefault("slopes", {})[edge.index] = angle

    def create_extrusion_roof(
        self,
        profile: list[Segment],
        plane: ReferencePlane,
        level: Level,
        roof_type: MemoryType,
        start: float,
        end: float,
    ) -> MemoryElement:
        self._check_extrusion(profile, start, end)
        return self._record(
            "extrusion_roof",
            profile=list(profile),
            plane=plane,
            type=roof_type,
            level=level.name,
            start=start,
            end=end,
        )

    def set_eave_cuts(self, roof: MemoryElement, style: str) -> None:
        self._require_transaction()
        roof.parameters["eave_cuts"] = style

    # Queries

    def by_category(self, category: str) -> list[MemoryElement]:
        return [el for el in self.elements if el.category == category]
