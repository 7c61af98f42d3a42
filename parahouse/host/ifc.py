"""IFC host document — builds the house into an IFC4 model via ifcopenshell.

Levels are ``IfcBuildingStorey`` entities, family types are element types
(``IfcDoorType``, ``IfcWindowType``, ``IfcRoofType``) matched on ``Name``
(type name) and ``ElementType`` (family name).  The internal length unit is
the project's length unit.

Walls carry an ``Axis`` representation holding their centreline in world XY,
so the host curve read back by :meth:`IfcHostDocument.wall_curve` is exactly
the segment the wall was built from.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import ifcopenshell
import ifcopenshell.api
import ifcopenshell.guid
import ifcopenshell.util.element
import ifcopenshell.util.placement
import ifcopenshell.util.representation
import ifcopenshell.util.unit

from parahouse.config import (
    DEFAULT_BASE_LEVEL,
    DEFAULT_DOOR_SIZE_MM,
    DEFAULT_ROOF_THICKNESS_MM,
    DEFAULT_TOP_LEVEL,
    DEFAULT_WALL_THICKNESS_MM,
    DEFAULT_WINDOW_SIZE_MM,
    PARAMETER_PSET,
    ROOF_PSET,
    SILL_HEIGHT_PARAM,
)
from parahouse.errors import HostError
from parahouse.geometry.primitives import ORIGIN, X_AXIS, Z_AXIS, Point3, ReferencePlane, Segment
from parahouse.host.base import HostDocument
from parahouse.models.building import Level, OpeningKind, RoofEdge, TypeCategory
from parahouse.models.house import TypeSelector, default_type_selectors

logger = logging.getLogger(__name__)

# IFC element type class per lookup category
TYPE_CLASSES: dict[TypeCategory, str] = {
    TypeCategory.DOOR: "IfcDoorType",
    TypeCategory.WINDOW: "IfcWindowType",
    TypeCategory.FOOTPRINT_ROOF: "IfcRoofType",
    TypeCategory.EXTRUSION_ROOF: "IfcRoofType",
}

OPENING_CLASSES: dict[OpeningKind, str] = {
    OpeningKind.DOOR: "IfcDoor",
    OpeningKind.WINDOW: "IfcWindow",
}

OPENING_SIZES_MM: dict[OpeningKind, tuple[float, float]] = {
    OpeningKind.DOOR: DEFAULT_DOOR_SIZE_MM,
    OpeningKind.WINDOW: DEFAULT_WINDOW_SIZE_MM,
}

# Default storeys as (name, elevation in mm)
DEFAULT_LEVELS: list[tuple[str, float]] = [
    (DEFAULT_BASE_LEVEL, 0.0),
    (DEFAULT_TOP_LEVEL, 3000.0),
]


class IfcHostDocument(HostDocument):
    """Host document wrapping an :class:`ifcopenshell.file`.

    Parameters
    ----------
    ifc_file:
        The IFC model to build into.  It must contain an ``IfcProject``.
    wall_thickness_mm:
        Thickness given to every wall this host creates.
    roof_thickness_mm:
        Slab thickness of footprint roofs.
    opening_sizes_mm:
        ``(width, height)`` of the void cut for each opening kind.
    """

    def __init__(
        self,
        ifc_file: ifcopenshell.file,
        wall_thickness_mm: float = DEFAULT_WALL_THICKNESS_MM,
        roof_thickness_mm: float = DEFAULT_ROOF_THICKNESS_MM,
        opening_sizes_mm: dict[OpeningKind, tuple[float, float]] | None = None,
    ) -> None:
        self.file = ifc_file
        if not self.file.by_type("IfcProject"):
            raise HostError("IFC model has no IfcProject")
        self.unit_scale = ifcopenshell.util.unit.calculate_unit_scale(self.file)
        self.wall_thickness = self.to_internal_units(wall_thickness_mm)
        self.roof_thickness = self.to_internal_units(roof_thickness_mm)
        self.opening_sizes = {
            kind: (self.to_internal_units(width), self.to_internal_units(height))
            for kind, (width, height) in (opening_sizes_mm or OPENING_SIZES_MM).items()
        }
        self.open_transaction: str | None = None
        self._body_context = self._context("Body", "MODEL_VIEW")
        self._axis_context = self._context("Axis", "GRAPH_VIEW")

    # Construction of documents

    @classmethod
    def create(
        cls,
        levels: list[tuple[str, float]] | None = None,
        types: list[TypeSelector] | None = None,
        project_name: str = "ParaHouse",
        **kwargs: Any,
    ) -> IfcHostDocument:
        """Return a host over a fresh IFC4 model with storeys and family types.

        *levels* are ``(name, elevation_mm)`` pairs; *types* default to the
        selectors :class:`~parahouse.models.house.HouseConfig` looks up.
        """
        f = ifcopenshell.file(schema="IFC4")
        project = ifcopenshell.api.run("root.create_entity", f, ifc_class="IfcProject", name=project_name)
        project.UnitsInContext = f.create_entity(
            "IfcUnitAssignment",
            Units=[
                f.create_entity("IfcSIUnit", UnitType="LENGTHUNIT", Name="METRE"),
                f.create_entity("IfcSIUnit", UnitType="PLANEANGLEUNIT", Name="RADIAN"),
            ],
        )
        ifcopenshell.api.run("context.add_context", f, context_type="Model")

        site = ifcopenshell.api.run("root.create_entity", f, ifc_class="IfcSite", name="Site")
        building = ifcopenshell.api.run("root.create_entity", f, ifc_class="IfcBuilding", name="Building")
        ifcopenshell.api.run("aggregate.assign_object", f, products=[site], relating_object=project)
        ifcopenshell.api.run("aggregate.assign_object", f, products=[building], relating_object=site)

        host = cls(f, **kwargs)
        for name, elevation_mm in levels if levels is not None else DEFAULT_LEVELS:
            host.add_level(name, elevation_mm)
        for selector in types if types is not None else default_type_selectors():
            if host.find_type(selector) is None:
                host.add_type(selector)

        logger.info("Created IFC4 model %r", project_name)
        return host

    @classmethod
    def open(cls, path: str | Path, **kwargs: Any) -> IfcHostDocument:
        """Return a host over an existing IFC file."""
        return cls(ifcopenshell.open(str(path)), **kwargs)

    def write(self, path: str | Path) -> Path:
        """Write the model to *path* and return it."""
        path = Path(path)
        self.file.write(str(path))
        logger.info("Wrote IFC to %s", path)
        return path

    def add_level(self, name: str, elevation_mm: float) -> Level:
        """Add an ``IfcBuildingStorey`` to the (first) building."""
        buildings = self.file.by_type("IfcBuilding")
        if not buildings:
            raise HostError("IFC model has no IfcBuilding to hold storeys")
        storey = ifcopenshell.api.run("root.create_entity", self.file, ifc_class="IfcBuildingStorey", name=name)
        storey.Elevation = self.to_internal_units(elevation_mm)
        ifcopenshell.api.run("aggregate.assign_object", self.file, products=[storey], relating_object=buildings[0])
        return Level(name=name, elevation=storey.Elevation, handle=storey)

    def add_type(self, selector: TypeSelector) -> ifcopenshell.entity_instance:
        """Add an element type matching *selector*."""
        family_type = ifcopenshell.api.run(
            "root.create_entity",
            self.file,
            ifc_class=TYPE_CLASSES[selector.category],
            name=selector.name,
        )
        family_type.ElementType = selector.family
        family_type.PredefinedType = "NOTDEFINED"
        return family_type

    # HostDocument

    @property
    def name(self) -> str:
        return "ifc"

    def to_internal_units(self, value_mm: float) -> float:
        return value_mm * 0.001 / self.unit_scale

    @contextmanager
    def transaction(self, name: str) -> Iterator[None]:
        if self.open_transaction is not None:
            raise HostError(f"Transaction {self.open_transaction!r} is still open")

        self.open_transaction = name
        self.file.begin_transaction()
        try:
            yield
        except BaseException:
            self.file.end_transaction()
            self.file.undo()
            logger.debug("Rolled back transaction %r", name)
            raise
        else:
            self.file.end_transaction()
        finally:
            self.open_transaction = None

    def levels(self) -> list[Level]:
        return [
            Level(name=storey.Name, elevation=float(storey.Elevation or 0.0), handle=storey)
            for storey in self.file.by_type("IfcBuildingStorey")
        ]

    def find_type(self, selector: TypeSelector) -> ifcopenshell.entity_instance | None:
        for family_type in self.file.by_type(TYPE_CLASSES[selector.category]):
            if family_type.Name == selector.name and family_type.ElementType == selector.family:
                return family_type
        return None

    def is_type_active(self, family_type: ifcopenshell.entity_instance) -> bool:
        # IFC types need no activation before use.
        return True

    def activate_type(self, family_type: ifcopenshell.entity_instance) -> None:
        pass

    def create_wall(self, segment: Segment, base_level: Level, top_level: Level) -> ifcopenshell.entity_instance:
        height = self._check_levels(base_level, top_level)
        index = len(self.file.by_type("IfcWall")) + 1
        wall = ifcopenshell.api.run("root.create_entity", self.file, ifc_class="IfcWall", name=f"Wall {index}")
        wall.ObjectPlacement = self._placement(Point3(0.0, 0.0, base_level.elevation))

        # Footprint rectangle around the centreline, extruded to the top level
        half = self.wall_thickness / 2
        direction = segment.direction
        normal = Point3(-direction.y, direction.x, 0.0) * half
        outline = [
            segment.start + normal,
            segment.end + normal,
            segment.end - normal,
            segment.start - normal,
        ]
        axis = self._shape(
            self._axis_context,
            "Axis",
            "Curve2D",
            [self._polyline([(p.x, p.y) for p in (segment.start, segment.end)])],
        )
        body = self._shape(
            self._body_context,
            "Body",
            "SweptSolid",
            [self._extrude([(p.x, p.y) for p in outline], self._axis2placement(ORIGIN), height)],
        )
        wall.Representation = self.file.create_entity("IfcProductDefinitionShape", Representations=[axis, body])

        self._contain(wall, base_level)
        self._write_pset(wall, PARAMETER_PSET, {
            "Width": self.wall_thickness,
            "Height": height,
            "BaseLevel": base_level.name,
            "TopLevel": top_level.name,
        })
        logger.debug("Created %s along %s", wall.Name, segment.to_dict())
        return wall

    def wall_curve(self, wall: ifcopenshell.entity_instance) -> Segment:
        for representation in wall.Representation.Representations if wall.Representation else []:
            if representation.RepresentationIdentifier == "Axis":
                points = representation.Items[0].Points
                z = self._elevation_of(wall)
                start, end = points[0].Coordinates, points[-1].Coordinates
                return Segment(Point3(start[0], start[1], z), Point3(end[0], end[1], z))
        raise HostError(f"Wall {wall.GlobalId} has no Axis representation")

    def wall_width(self, wall: ifcopenshell.entity_instance) -> float:
        width = ifcopenshell.util.element.get_pset(wall, PARAMETER_PSET, "Width")
        if width is None:
            raise HostError(f"Wall {wall.GlobalId} has no recorded width")
        return float(width)

    def create_opening(
        self,
        point: Point3,
        family_type: ifcopenshell.entity_instance,
        wall: ifcopenshell.entity_instance,
        level: Level,
        kind: OpeningKind,
    ) -> ifcopenshell.entity_instance:
        if not wall.is_a("IfcWall"):
            raise HostError(f"{wall.is_a()} cannot host a {kind.value}")
        direction = self.wall_curve(wall).direction
        location = Point3(point.x, point.y, level.elevation)

        instance = ifcopenshell.api.run(
            "root.create_entity",
            self.file,
            ifc_class=OPENING_CLASSES[kind],
            name=family_type.Name,
        )
        width, height = self.opening_sizes[kind]
        instance.ObjectPlacement = self._placement(location, x_dir=direction)
        instance.OverallWidth = width
        instance.OverallHeight = height
        self._assign_type(instance, family_type)

        # Box through the full wall thickness, local X along the wall
        void = ifcopenshell.api.run("root.create_entity", self.file, ifc_class="IfcOpeningElement")
        void.ObjectPlacement = self._placement(location, x_dir=direction)
        half_width, depth = width / 2, self.wall_thickness
        outline = [(-half_width, -depth), (half_width, -depth), (half_width, depth), (-half_width, depth)]
        body = self._shape(
            self._body_context,
            "Body",
            "SweptSolid",
            [self._extrude(outline, self._axis2placement(ORIGIN), height)],
        )
        void.Representation = self.file.create_entity("IfcProductDefinitionShape", Representations=[body])
        self.file.create_entity(
            "IfcRelVoidsElement",
            GlobalId=ifcopenshell.guid.new(),
            RelatingBuildingElement=wall,
            RelatedOpeningElement=void,
        )
        self.file.create_entity(
            "IfcRelFillsElement",
            GlobalId=ifcopenshell.guid.new(),
            RelatingOpeningElement=void,
            RelatedBuildingElement=instance,
        )
        self._contain(instance, level)
        return instance

    def set_parameter(self, instance: ifcopenshell.entity_instance, name: str, value: float) -> None:
        self._write_pset(instance, PARAMETER_PSET, {name: float(value)})
        if name == SILL_HEIGHT_PARAM and instance.FillsVoids:
            self._set_sill(instance, float(value))

    def create_footprint_roof(
        self,
        boundary: list[Segment],
        level: Level,
        roof_type: ifcopenshell.entity_instance,
    ) -> tuple[ifcopenshell.entity_instance, list[RoofEdge]]:
        self._check_closed(boundary)
        roof = self._create_roof(roof_type, level, Point3(0.0, 0.0, level.elevation))
        body = self._shape(
            self._body_context,
            "Body",
            "SweptSolid",
            [self._extrude([(s.start.x, s.start.y) for s in boundary], self._axis2placement(ORIGIN), self.roof_thickness)],
        )
        roof.Representation = self.file.create_entity("IfcProductDefinitionShape", Representations=[body])
        self._write_pset(roof, ROOF_PSET, {"RoofKind": "footprint", "EdgeCount": len(boundary)})
        return roof, [RoofEdge(index=i, segment=seg) for i, seg in enumerate(boundary)]

    def set_edge_slope(self, roof: ifcopenshell.entity_instance, edge: RoofEdge, angle: float) -> None:
        self._write_pset(roof, ROOF_PSET, {
            f"Edge{edge.index}DefinesSlope": True,
            f"Edge{edge.index}SlopeAngle": float(angle),
        })

    def create_extrusion_roof(
        self,
        profile: list[Segment],
        plane: ReferencePlane,
        level: Level,
        roof_type: ifcopenshell.entity_instance,
        start: float,
        end: float,
    ) -> ifcopenshell.entity_instance:
        self._check_extrusion(profile, start, end)
        roof = self._create_roof(roof_type, level, ORIGIN)

        # Profile drawn in the plane, swept along the plane normal
        outline = [plane.to_plane_coords(profile[0].start)]
        outline += [plane.to_plane_coords(seg.end) for seg in profile]
        if outline[-1] == outline[0]:
            outline.pop()
        position = self._axis2placement(plane.origin + plane.normal * start, x_dir=plane.x_dir, z_dir=plane.normal)
        body = self._shape(self._body_context, "Body", "SweptSolid", [self._extrude(outline, position, end - start)])
        roof.Representation = self.file.create_entity("IfcProductDefinitionShape", Representations=[body])
        self._write_pset(roof, ROOF_PSET, {
            "RoofKind": "extrusion",
            "ExtrusionStart": float(start),
            "ExtrusionEnd": float(end),
        })
        return roof

    def set_eave_cuts(self, roof: ifcopenshell.entity_instance, style: str) -> None:
        self._write_pset(roof, ROOF_PSET, {"EaveCuts": style})

    # Helpers

    def _context(self, identifier: str, target_view: str) -> ifcopenshell.entity_instance:
        context = ifcopenshell.util.representation.get_context(self.file, "Model", identifier, target_view)
        if context is not None:
            return context
        parent = ifcopenshell.util.representation.get_context(self.file, "Model")
        if parent is None:
            parent = ifcopenshell.api.run("context.add_context", self.file, context_type="Model")
        return ifcopenshell.api.run(
            "context.add_context",
            self.file,
            context_type="Model",
            context_identifier=identifier,
            target_view=target_view,
            parent=parent,
        )

    def _elevation_of(self, product: ifcopenshell.entity_instance) -> float:
        """Return the absolute Z of *product*'s placement."""
        return float(ifcopenshell.util.placement.get_local_placement(product.ObjectPlacement)[2][3])

    def _set_sill(self, instance: ifcopenshell.entity_instance, sill_height: float) -> None:
        """Move *instance* and the void it fills to *sill_height* above their storey."""
        storey = ifcopenshell.util.element.get_container(instance)
        target = float(storey.Elevation or 0.0) + sill_height
        void = instance.FillsVoids[0].RelatingOpeningElement
        # The void first: the instance may be placed relative to it
        for product in (void, instance):
            placement = product.ObjectPlacement.RelativePlacement
            x, y, z = placement.Location.Coordinates
            placement.Location = self._point(x, y, z + target - self._elevation_of(product))

    def _storey(self, level: Level) -> ifcopenshell.entity_instance:
        if level.handle is not None:
            return level.handle
        for storey in self.file.by_type("IfcBuildingStorey"):
            if storey.Name == level.name:
                return storey
        raise HostError(f"No IfcBuildingStorey named {level.name!r}")

    def _contain(self, product: ifcopenshell.entity_instance, level: Level) -> None:
        ifcopenshell.api.run(
            "spatial.assign_container",
            self.file,
            products=[product],
            relating_structure=self._storey(level),
        )

    def _create_roof(
        self,
        roof_type: ifcopenshell.entity_instance,
        level: Level,
        origin: Point3,
    ) -> ifcopenshell.entity_instance:
        roof = ifcopenshell.api.run("root.create_entity", self.file, ifc_class="IfcRoof", name=roof_type.Name)
        roof.ObjectPlacement = self._placement(origin)
        self._assign_type(roof, roof_type)
        self._contain(roof, level)
        return roof

    def _assign_type(self, product: ifcopenshell.entity_instance, family_type: ifcopenshell.entity_instance) -> None:
        # A type has at most one IfcRelDefinesByType; extend it when present.
        rels = getattr(family_type, "Types", None) or ()
        if rels:
            rels[0].RelatedObjects = list(rels[0].RelatedObjects) + [product]
            return
        self.file.create_entity(
            "IfcRelDefinesByType",
            GlobalId=ifcopenshell.guid.new(),
            RelatedObjects=[product],
            RelatingType=family_type,
        )

    def _write_pset(self, product: ifcopenshell.entity_instance, name: str, properties: dict[str, Any]) -> None:
        existing = ifcopenshell.util.element.get_pset(product, name)
        if existing:
            pset = self.file.by_id(existing["id"])
        else:
            pset = ifcopenshell.api.run("pset.add_pset", self.file, product=product, name=name)
        ifcopenshell.api.run("pset.edit_pset", self.file, pset=pset, properties=properties)

    def _point(self, *coords: float) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcCartesianPoint", Coordinates=tuple(float(c) for c in coords))

    def _direction(self, vector: Point3) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcDirection", DirectionRatios=vector.as_tuple())

    def _axis2placement(
        self,
        origin: Point3,
        x_dir: Point3 = X_AXIS,
        z_dir: Point3 = Z_AXIS,
    ) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcAxis2Placement3D",
            Location=self._point(*origin.as_tuple()),
            Axis=self._direction(z_dir),
            RefDirection=self._direction(x_dir),
        )

    def _placement(self, origin: Point3, x_dir: Point3 = X_AXIS) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcLocalPlacement", RelativePlacement=self._axis2placement(origin, x_dir=x_dir))

    def _polyline(self, points: list[tuple[float, float]]) -> ifcopenshell.entity_instance:
        return self.file.create_entity("IfcPolyline", Points=[self._point(*p) for p in points])

    def _extrude(
        self,
        outline: list[tuple[float, float]],
        position: ifcopenshell.entity_instance,
        depth: float,
    ) -> ifcopenshell.entity_instance:
        """Extrude the closed 2D *outline* along local Z by *depth*."""
        profile = self.file.create_entity(
            "IfcArbitraryClosedProfileDef",
            ProfileType="AREA",
            OuterCurve=self._polyline(outline + [outline[0]]),
        )
        return self.file.create_entity(
            "IfcExtrudedAreaSolid",
            SweptArea=profile,
            Position=position,
            ExtrudedDirection=self._direction(Z_AXIS),
            Depth=float(depth),
        )

    def _shape(
        self,
        context: ifcopenshell.entity_instance,
        identifier: str,
        representation_type: str,
        items: list[ifcopenshell.entity_instance],
    ) -> ifcopenshell.entity_instance:
        return self.file.create_entity(
            "IfcShapeRepresentation",
            ContextOfItems=context,
            RepresentationIdentifier=identifier,
            RepresentationType=representation_type,
            Items=items,
        )
