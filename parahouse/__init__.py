"""ParaHouse — parametric generation of a simple rectangular house model."""

__version__ = "1.0.0"

from parahouse.errors import (
    HostError,
    InvalidArgumentError,
    NotFoundError,
    ParaHouseError,
    StepError,
)
from parahouse.generation.generator import HouseGenerator, generate_house
from parahouse.host import HostDocument, IfcHostDocument, MemoryHostDocument, get_host
from parahouse.models.building import GenerationResult, Level
from parahouse.models.house import (
    GableRoofConfig,
    HipRoofConfig,
    HouseConfig,
    TypeSelector,
    load_house_config,
)

__all__ = [
    "__version__",
    # Generation
    "GenerationResult",
    "HouseGenerator",
    "generate_house",
    # Configuration
    "GableRoofConfig",
    "HipRoofConfig",
    "HouseConfig",
    "Level",
    "TypeSelector",
    "load_house_config",
    # Hosts
    "HostDocument",
    "IfcHostDocument",
    "MemoryHostDocument",
    "get_host",
    # Errors
    "HostError",
    "InvalidArgumentError",
    "NotFoundError",
    "ParaHouseError",
    "StepError",
]
