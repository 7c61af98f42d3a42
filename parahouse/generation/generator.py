"""HouseGenerator — main entry point for house generation.

Usage::

    from parahouse.generation import HouseGenerator
    from parahouse.host import IfcHostDocument
    from parahouse.models import GableRoofConfig, HouseConfig

    host = IfcHostDocument.create()
    result = HouseGenerator(host).generate(HouseConfig(roof=GableRoofConfig()))
    host.write("house.ifc")
"""

from __future__ import annotations

import logging
from typing import Any

from parahouse.errors import NotFoundError
from parahouse.generation.footprint import build_footprint, construct_walls
from parahouse.generation.openings import place_door, place_window
from parahouse.generation.roof import construct_gable_roof, construct_hip_roof
from parahouse.host.base import HostDocument
from parahouse.models.building import GenerationResult, Level
from parahouse.models.house import (
    GableRoofConfig,
    HipRoofConfig,
    HouseConfig,
    TypeSelector,
    validate_config,
)

logger = logging.getLogger(__name__)


class HouseGenerator:
    """Builds a rectangular house into a host document.

    Parameters
    ----------
    host:
        The document to build into.  The generator assumes it is the only
        writer for the duration of :meth:`generate`.
    """

    def __init__(self, host: HostDocument) -> None:
        self.host = host

    def generate(self, config: HouseConfig) -> GenerationResult:
        """Build walls, then the door, then windows, then the roof.

        1. Validates *config*; nothing touches the host if this fails.
        2. Resolves every level and family type, failing fast on a miss.
        3. Runs one atomic step per element.  A failing step raises
           :class:`~parahouse.errors.StepError`; earlier steps stay committed.
        """
        validate_config(config)

        base_level = self._level(config.base_level)
        top_level = self._level(config.top_level)
        door_type = self._type(config.door_type)
        window_type = self._type(config.window_type)
        roof_type = self._type(config.roof.roof_type) if config.roof is not None else None

        host = self.host
        footprint = build_footprint(
            host.to_internal_units(config.width_mm),
            host.to_internal_units(config.depth_mm),
        )
        result = GenerationResult(footprint=footprint)
        result.walls = construct_walls(host, base_level, top_level, footprint)

        door_wall = result.walls[config.door_wall_index]
        result.door, request = place_door(host, base_level, door_wall, door_type, index=config.door_wall_index)
        result.openings.append(request)

        sill_height = host.to_internal_units(config.sill_height_mm)
        for i, wall in enumerate(result.walls):
            if wall is door_wall:
                continue
            window, request = place_window(host, base_level, wall, window_type, sill_height, index=i)
            result.windows.append(window)
            result.openings.append(request)
        logger.info("Placed 1 door and %d windows", len(result.windows))

        roof = config.roof
        if isinstance(roof, HipRoofConfig):
            result.roof, result.roof_boundary = construct_hip_roof(
                host, top_level, result.walls, roof_type, roof.slope_angle,
            )
        elif isinstance(roof, GableRoofConfig):
            result.roof, result.roof_boundary = construct_gable_roof(
                host,
                top_level,
                result.walls,
                roof_type,
                host.to_internal_units(roof.width_mm),
                host.to_internal_units(roof.depth_mm),
                host.to_internal_units(roof.ridge_height_mm),
            )

        logger.info("Generated house on %s host: %s", host.name, result.summary())
        return result

    def _level(self, name: str) -> Level:
        level = self.host.find_level(name)
        if level is None:
            raise NotFoundError("Level", name)
        return level

    def _type(self, selector: TypeSelector) -> Any:
        family_type = self.host.find_type(selector)
        if family_type is None:
            raise NotFoundError(f"{selector.category.value} type", selector.describe())
        logger.debug("Resolved %s type %s", selector.category.value, selector.describe())
        return family_type


def generate_house(host: HostDocument, config: HouseConfig) -> GenerationResult:
    """Convenience wrapper around :meth:`HouseGenerator.generate`."""
    return HouseGenerator(host).generate(config)
