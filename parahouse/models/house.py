"""HouseConfig — the parameters that drive one house generation run.

All human-facing lengths are in millimetres; the generator converts them to
the host's internal unit once, at the boundary.
"""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from parahouse.config import (
    DEFAULT_BASE_LEVEL,
    DEFAULT_DEPTH_MM,
    DEFAULT_DOOR_TYPE,
    DEFAULT_RIDGE_HEIGHT_MM,
    DEFAULT_ROOF_DEPTH_MM,
    DEFAULT_ROOF_TYPE,
    DEFAULT_ROOF_WIDTH_MM,
    DEFAULT_SILL_HEIGHT_MM,
    DEFAULT_TOP_LEVEL,
    DEFAULT_WIDTH_MM,
    DEFAULT_WINDOW_TYPE,
    ENV_PREFIX,
    HIP_SLOPE_ANGLE,
)
from parahouse.errors import InvalidArgumentError
from parahouse.models.building import TypeCategory

logger = logging.getLogger(__name__)

WALL_COUNT = 4


class TypeSelector(BaseModel):
    """Identifies a family type by display name and family name."""

    category: TypeCategory
    name: str
    family: str

    def describe(self) -> str:
        return f"{self.family}: {self.name}"


def _door_type() -> TypeSelector:
    name, family = DEFAULT_DOOR_TYPE
    return TypeSelector(category=TypeCategory.DOOR, name=name, family=family)


def _window_type() -> TypeSelector:
    name, family = DEFAULT_WINDOW_TYPE
    return TypeSelector(category=TypeCategory.WINDOW, name=name, family=family)


def _roof_type(category: TypeCategory) -> TypeSelector:
    name, family = DEFAULT_ROOF_TYPE
    return TypeSelector(category=category, name=name, family=family)


class HipRoofConfig(BaseModel):
    """Footprint roof following the walls, every edge sloped."""

    kind: Literal["hip"] = "hip"
    roof_type: TypeSelector = Field(default_factory=lambda: _roof_type(TypeCategory.FOOTPRINT_ROOF))
    slope_angle: float = HIP_SLOPE_ANGLE
    """Slope of every boundary edge, in radians."""


class GableRoofConfig(BaseModel):
    """Triangular profile extruded along X over the footprint."""

    kind: Literal["gable"] = "gable"
    roof_type: TypeSelector = Field(default_factory=lambda: _roof_type(TypeCategory.EXTRUSION_ROOF))
    width_mm: float = DEFAULT_ROOF_WIDTH_MM
    """Extent along X, before the wall half-width overhang on each side."""
    depth_mm: float = DEFAULT_ROOF_DEPTH_MM
    """Profile base along Y, before the wall half-width overhang on each side."""
    ridge_height_mm: float = DEFAULT_RIDGE_HEIGHT_MM
    """Ridge height above the top level."""


RoofConfig = Annotated[Union[HipRoofConfig, GableRoofConfig], Field(discriminator="kind")]


class HouseConfig(BaseModel):
    """Parameters for one rectangular house.

    The walls run counter-clockwise from the bottom-left corner; the wall at
    ``door_wall_index`` receives the door and every other wall one window.
    ``roof`` selects the roof strategy; ``None`` builds no roof.
    """

    base_level: str = DEFAULT_BASE_LEVEL
    top_level: str = DEFAULT_TOP_LEVEL
    width_mm: float = DEFAULT_WIDTH_MM
    depth_mm: float = DEFAULT_DEPTH_MM
    door_type: TypeSelector = Field(default_factory=_door_type)
    window_type: TypeSelector = Field(default_factory=_window_type)
    sill_height_mm: float = DEFAULT_SILL_HEIGHT_MM
    door_wall_index: int = 0
    roof: Optional[RoofConfig] = None

    @classmethod
    def from_json(cls, path: str | Path) -> HouseConfig:
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)


def _positive(issues: list[str], label: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        issues.append(f"{label} must be positive, got {value}")


def validate_config(config: HouseConfig) -> None:
    """Reject invalid parameters before any host call is made.

    Raises :class:`InvalidArgumentError` listing every problem found.
    """
    issues: list[str] = []

    _positive(issues, "width_mm", config.width_mm)
    _positive(issues, "depth_mm", config.depth_mm)

    if not math.isfinite(config.sill_height_mm) or config.sill_height_mm < 0:
        issues.append(f"sill_height_mm must be non-negative, got {config.sill_height_mm}")

    if not 0 <= config.door_wall_index < WALL_COUNT:
        issues.append(f"door_wall_index must be in 0..{WALL_COUNT - 1}, got {config.door_wall_index}")

    if not config.base_level or not config.top_level:
        issues.append("base_level and top_level must be named")
    elif config.base_level == config.top_level:
        issues.append(f"base_level and top_level must differ, both are {config.base_level!r}")

    roof = config.roof
    if isinstance(roof, GableRoofConfig):
        _positive(issues, "roof.width_mm", roof.width_mm)
        _positive(issues, "roof.depth_mm", roof.depth_mm)
        _positive(issues, "roof.ridge_height_mm", roof.ridge_height_mm)
    elif isinstance(roof, HipRoofConfig):
        if not 0 < roof.slope_angle < math.pi / 2:
            issues.append(f"roof.slope_angle must be in (0, pi/2), got {roof.slope_angle}")

    if issues:
        raise InvalidArgumentError("; ".join(issues))


# Environment variables that override top-level HouseConfig fields
_ENV_FIELDS = ("base_level", "top_level", "width_mm", "depth_mm", "sill_height_mm")


def load_house_config(path: str | Path | None = None) -> HouseConfig:
    """Load merged config: defaults -> JSON file -> ``PARAHOUSE_*`` env vars."""
    data: dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        data = json.loads(config_path.read_text(encoding="utf-8"))
        logger.debug("Loaded house config from %s", config_path)

    for key in _ENV_FIELDS:
        env_val = os.environ.get(ENV_PREFIX + key.upper())
        if env_val is not None:
            data[key] = env_val

    return HouseConfig.model_validate(data)


def default_type_selectors() -> list[TypeSelector]:
    """Return the selectors HouseConfig uses when none are given."""
    return [
        _door_type(),
        _window_type(),
        _roof_type(TypeCategory.FOOTPRINT_ROOF),
        _roof_type(TypeCategory.EXTRUSION_ROOF),
    ]
