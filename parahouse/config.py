"""Global configuration: default names, constants, logging setup."""

from __future__ import annotations

import logging
import os

# Level names looked up in the host document
DEFAULT_BASE_LEVEL = "Level 1"
DEFAULT_TOP_LEVEL = "Level 2"

# Default building dimensions (mm)
DEFAULT_WIDTH_MM = 10000.0
DEFAULT_DEPTH_MM = 5000.0
DEFAULT_SILL_HEIGHT_MM = 1000.0

# Default gable roof dimensions (mm)
DEFAULT_ROOF_WIDTH_MM = 10000.0
DEFAULT_ROOF_DEPTH_MM = 5000.0
DEFAULT_RIDGE_HEIGHT_MM = 3000.0

# Family types as (type name, family name)
DEFAULT_DOOR_TYPE = ("0915 x 2134 mm", "Single-Flush")
DEFAULT_WINDOW_TYPE = ("0915 x 1830 mm", "Fixed")
DEFAULT_ROOF_TYPE = ("Generic - 400mm", "Basic Roof")

# Wall and roof thickness used by hosts that create their own geometry (mm)
DEFAULT_WALL_THICKNESS_MM = 200.0
DEFAULT_ROOF_THICKNESS_MM = 400.0

# Opening (width, height) cut into the wall by hosts that create their own geometry (mm)
DEFAULT_DOOR_SIZE_MM = (915.0, 2134.0)
DEFAULT_WINDOW_SIZE_MM = (915.0, 1830.0)

# Hip roof: every boundary edge defines slope at this angle (radians)
HIP_SLOPE_ANGLE = 0.5

# Gable roof eave cut style
EAVE_CUTS_TWO_CUT_SQUARE = "TwoCutSquare"

# Instance parameter receiving the window sill height
SILL_HEIGHT_PARAM = "SillHeight"

# Property sets written by the IFC host
PARAMETER_PSET = "ParaHouse_Parameters"
ROOF_PSET = "ParaHouse_Roof"

# Transaction (step) names
STEP_WALLS = "Build walls"
STEP_DOOR = "Build door"
STEP_WINDOW = "Build window"
STEP_ROOF = "Build roof"

# Environment overrides
ENV_PREFIX = "PARAHOUSE_"
LOG_LEVEL_ENV = "PARAHOUSE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def configure_logging(level: str | None = None) -> None:
    """Configure the ``parahouse`` logger from *level* or ``PARAHOUSE_LOG_LEVEL``."""
    name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("parahouse").setLevel(getattr(logging, name, logging.INFO))
