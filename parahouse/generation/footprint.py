"""Footprint builder — rectangular wall loop around the origin."""

from __future__ import annotations

import logging
from typing import Any

from parahouse.config import STEP_WALLS
from parahouse.errors import InvalidArgumentError
from parahouse.generation.transaction import run_step
from parahouse.geometry.anchors import anchor_points
from parahouse.geometry.increment import half_value
from parahouse.geometry.primitives import Segment
from parahouse.host.base import HostDocument
from parahouse.models.building import Footprint, Level

logger = logging.getLogger(__name__)


def build_footprint(width: float, depth: float) -> Footprint:
    """Return the four wall centrelines of a *width* x *depth* rectangle.

    Lengths are in internal units.  Segment 0 is the front wall along -Y;
    the rest follow counter-clockwise.
    """
    if not width > 0 or not depth > 0:
        raise InvalidArgumentError(f"Footprint width and depth must be positive, got ({width}, {depth})")

    points = anchor_points(half_value(width), half_value(depth))
    segments = tuple(Segment(points[i], points[i + 1]) for i in range(len(points) - 1))
    return Footprint(segments)


def construct_walls(
    host: HostDocument,
    base_level: Level,
    top_level: Level,
    footprint: Footprint,
) -> list[Any]:
    """Create one wall per footprint segment, each in its own step.

    Returns the host walls in segment order.
    """
    walls: list[Any] = []
    for i, segment in enumerate(footprint):
        wall = run_step(
            host,
            STEP_WALLS,
            lambda seg=segment: host.create_wall(seg, base_level, top_level),
            index=i,
        )
        walls.append(wall)

    logger.info(
        "Generated %d walls from %r to %r on %s host",
        len(walls), base_level.name, top_level.name, host.name,
    )
    return walls
