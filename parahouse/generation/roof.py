"""Roof geometry builder — hip (footprint) and gable (extrusion) strategies.

Both strategies overshoot the wall centrelines by half a wall width so the
roof covers the walls' outer faces.
"""

from __future__ import annotations

import logging
from typing import Any

from parahouse.config import EAVE_CUTS_TWO_CUT_SQUARE, HIP_SLOPE_ANGLE, STEP_ROOF
from parahouse.errors import InvalidArgumentError
from parahouse.generation.transaction import run_step
from parahouse.geometry.anchors import anchor_points
from parahouse.geometry.increment import half_value, half_value_with_offset
from parahouse.geometry.primitives import YZ_PLANE, Point3, Segment
from parahouse.host.base import HostDocument
from parahouse.models.building import FootprintRoofBoundary, GableRoofProfile, Level

logger = logging.getLogger(__name__)

ROOF_EDGE_COUNT = 4


# ---------------------------------------------------------------------------
# Hip roof
# ---------------------------------------------------------------------------


def hip_roof_boundary(
    wall_curves: list[Segment],
    wall_width: float,
    slope_angle: float = HIP_SLOPE_ANGLE,
) -> FootprintRoofBoundary:
    """Offset the first four wall curves outward by half the wall width.

    Each corner moves diagonally by the matching point of a square anchor
    ring, so edge *i* runs from ``curve[i].start + ring[i]`` to
    ``curve[i].end + ring[i + 1]`` and the boundary stays closed.
    """
    if len(wall_curves) < ROOF_EDGE_COUNT:
        raise InvalidArgumentError(f"Hip roof needs {ROOF_EDGE_COUNT} wall curves, got {len(wall_curves)}")

    increment = half_value(wall_width)
    ring = anchor_points(increment, increment)
    segments = tuple(
        wall_curves[i].offset(ring[i], ring[i + 1]) for i in range(ROOF_EDGE_COUNT)
    )
    return FootprintRoofBoundary(segments=segments, slope_angle=slope_angle)


def construct_hip_roof(
    host: HostDocument,
    level: Level,
    walls: list[Any],
    roof_type: Any,
    slope_angle: float = HIP_SLOPE_ANGLE,
) -> tuple[Any, FootprintRoofBoundary]:
    """Create a footprint roof over *walls* with every edge sloped."""
    curves = [host.wall_curve(wall) for wall in walls[:ROOF_EDGE_COUNT]]
    boundary = hip_roof_boundary(curves, host.wall_width(walls[0]), slope_angle)

    def operation() -> Any:
        roof, edges = host.create_footprint_roof(list(boundary.segments), level, roof_type)
        for edge in edges:
            host.set_edge_slope(roof, edge, boundary.slope_angle)
        return roof

    roof = run_step(host, STEP_ROOF, operation)
    logger.info("Generated hip roof on %r with slope %.3f rad", level.name, slope_angle)
    return roof, boundary


# ---------------------------------------------------------------------------
# Gable roof
# ---------------------------------------------------------------------------


def gable_roof_profile(
    level_elevation: float,
    wall_width: float,
    roof_width: float,
    roof_depth: float,
    ridge_height: float,
) -> GableRoofProfile:
    """Return the triangular gable profile and its extrusion bounds.

    The profile lies in the Y-Z plane, rising from the eave at
    ``-depth/2 - wall_width/2`` to the ridge over the origin and back down.
    It is extruded symmetrically along X.  The footprint is assumed to be
    the origin-centred rectangle the footprint builder produces.
    """
    increment = half_value(wall_width)
    depth_half = half_value_with_offset(increment, roof_depth)
    eave_left = Point3(0.0, -depth_half, level_elevation)
    ridge = Point3(0.0, 0.0, level_elevation + ridge_height)
    eave_right = Point3(0.0, depth_half, level_elevation)

    extrusion_end = half_value_with_offset(increment, roof_width)
    return GableRoofProfile(
        segments=(Segment(eave_left, ridge), Segment(ridge, eave_right)),
        plane=YZ_PLANE,
        extrusion_start=-extrusion_end,
        extrusion_end=extrusion_end,
    )


def construct_gable_roof(
    host: HostDocument,
    level: Level,
    walls: list[Any],
    roof_type: Any,
    roof_width: float,
    roof_depth: float,
    ridge_height: float,
) -> tuple[Any, GableRoofProfile]:
    """Create an extrusion roof above *level*.

    Only the first wall's width is read from *walls*.  Dimensions are in
    internal units; *ridge_height* is measured from the level elevation.
    """
    profile = gable_roof_profile(level.elevation, host.wall_width(walls[0]), roof_width, roof_depth, ridge_height)

    def operation() -> Any:
        roof = host.create_extrusion_roof(
            list(profile.segments),
            profile.plane,
            level,
            roof_type,
            profile.extrusion_start,
            profile.extrusion_end,
        )
        host.set_eave_cuts(roof, EAVE_CUTS_TWO_CUT_SQUARE)
        return roof

    roof = run_step(host, STEP_ROOF, operation)
    logger.info("Generated gable roof on %r, ridge at %.3f", level.name, profile.ridge.z)
    return roof, profile
