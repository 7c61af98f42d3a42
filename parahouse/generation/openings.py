"""Opening placement — doors and windows at wall midpoints."""

from __future__ import annotations

import logging
from typing import Any

from parahouse.config import SILL_HEIGHT_PARAM, STEP_DOOR, STEP_WINDOW
from parahouse.generation.transaction import run_step
from parahouse.geometry.primitives import Point3, Segment
from parahouse.host.base import HostDocument
from parahouse.models.building import Level, OpeningKind, OpeningRequest

logger = logging.getLogger(__name__)


def insertion_point(segment: Segment) -> Point3:
    """Return the exact midpoint of *segment*."""
    return (segment.start + segment.end) / 2


def opening_request(segment: Segment, kind: OpeningKind, sill_height: float | None = None) -> OpeningRequest:
    return OpeningRequest(
        host_segment=segment,
        insertion_point=insertion_point(segment),
        kind=kind,
        sill_height=sill_height,
    )


def _place(
    host: HostDocument,
    step: str,
    request: OpeningRequest,
    family_type: Any,
    wall: Any,
    level: Level,
    index: int | None = None,
) -> Any:
    def operation() -> Any:
        if not host.is_type_active(family_type):
            host.activate_type(family_type)
        instance = host.create_opening(request.insertion_point, family_type, wall, level, request.kind)
        if request.sill_height is not None:
            host.set_parameter(instance, SILL_HEIGHT_PARAM, request.sill_height)
        return instance

    instance = run_step(host, step, operation, index=index)
    logger.debug("Placed %s at %s", request.kind.value, request.insertion_point.as_tuple())
    return instance


def place_door(
    host: HostDocument,
    level: Level,
    wall: Any,
    door_type: Any,
    index: int | None = None,
) -> tuple[Any, OpeningRequest]:
    """Insert a door at the midpoint of *wall*; return it with its request."""
    request = opening_request(host.wall_curve(wall), OpeningKind.DOOR)
    return _place(host, STEP_DOOR, request, door_type, wall, level, index), request


def place_window(
    host: HostDocument,
    level: Level,
    wall: Any,
    window_type: Any,
    sill_height: float,
    index: int | None = None,
) -> tuple[Any, OpeningRequest]:
    """Insert a window at the midpoint of *wall* with the given sill height.

    *sill_height* is in internal units.  *index* is the wall index reported
    if the step fails.
    """
    request = opening_request(host.wall_curve(wall), OpeningKind.WINDOW, sill_height)
    return _place(host, STEP_WINDOW, request, window_type, wall, level, index), request
