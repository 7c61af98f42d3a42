"""Data models: house parameters and the transient building geometry."""

from parahouse.models.building import (
    Footprint,
    FootprintRoofBoundary,
    GableRoofProfile,
    GenerationResult,
    Level,
    OpeningKind,
    OpeningRequest,
    RoofEdge,
    TypeCategory,
)
from parahouse.models.house import (
    GableRoofConfig,
    HipRoofConfig,
    HouseConfig,
    TypeSelector,
    default_type_selectors,
    load_house_config,
    validate_config,
)

__all__ = [
    "Footprint",
    "FootprintRoofBoundary",
    "GableRoofConfig",
    "GableRoofProfile",
    "GenerationResult",
    "HipRoofConfig",
    "HouseConfig",
    "Level",
    "OpeningKind",
    "OpeningRequest",
    "RoofEdge",
    "TypeCategory",
    "TypeSelector",
    "default_type_selectors",
    "load_house_config",
    "validate_config",
]
