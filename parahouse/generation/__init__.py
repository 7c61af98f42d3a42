"""House generation — footprint, openings and roof, driven by a HouseConfig.

Pure geometry functions compute the layout; the ``construct_*`` and
``place_*`` functions hand it to a host document one atomic step at a time.
"""

from parahouse.generation.footprint import build_footprint, construct_walls
from parahouse.generation.generator import HouseGenerator, generate_house
from parahouse.generation.openings import insertion_point, opening_request, place_door, place_window
from parahouse.generation.roof import (
    construct_gable_roof,
    construct_hip_roof,
    gable_roof_profile,
    hip_roof_boundary,
)
from parahouse.generation.transaction import run_step

__all__ = [
    "HouseGenerator",
    "build_footprint",
    "construct_gable_roof",
    "construct_hip_roof",
    "construct_walls",
    "gable_roof_profile",
    "generate_house",
    "hip_roof_boundary",
    "insertion_point",
    "opening_request",
    "place_door",
    "place_window",
    "run_step",
]
