"""Seeded tile-world generation and cost-aware road building."""

from .config import Config, PathCostConfig, load_config
from .exceptions import (
    GridNotSetError,
    InvalidWorldFileError,
    OutOfBoundsError,
    WorldError,
)
from .pathfinding import find_road_path, path_cost
from .rng import Rng
from .roads import (
    RoadBuildState,
    build_road_between,
    create_initial_road_build_state,
    endpoint_for,
    set_road_source,
)
from .selection import (
    compute_settlement_diameter_tiles,
    find_resource_at_tile,
    find_settlement_at_tile,
)
from .simulation import regenerate_resources
from .state import IdAllocator, TileGrid, WorldMap
from .terrain import (
    GenerationResult,
    WorldGenConfig,
    generate_terrain,
    generate_world,
    load_world,
    save_world,
    validate_world,
)
from .terrain_types import TileType
from .types import (
    DemandProfile,
    ResourceEndpoint,
    ResourceNode,
    ResourceType,
    RoadConnection,
    RoadEndpoint,
    Settlement,
    SettlementEndpoint,
    SettlementSize,
    SupplyProfile,
    Tile,
    TileCoord,
)

__all__ = [
    # Types
    "TileType",
    "TileCoord",
    "Tile",
    "Settlement",
    "SettlementSize",
    "DemandProfile",
    "SupplyProfile",
    "ResourceNode",
    "ResourceType",
    "RoadConnection",
    "RoadEndpoint",
    "SettlementEndpoint",
    "ResourceEndpoint",
    # State
    "TileGrid",
    "WorldMap",
    "IdAllocator",
    "Rng",
    # Config
    "Config",
    "PathCostConfig",
    "WorldGenConfig",
    "load_config",
    # Generation
    "GenerationResult",
    "generate_terrain",
    "generate_world",
    "load_world",
    "save_world",
    "validate_world",
    # Roads
    "RoadBuildState",
    "build_road_between",
    "create_initial_road_build_state",
    "endpoint_for",
    "set_road_source",
    "find_road_path",
    "path_cost",
    # Simulation and selection
    "regenerate_resources",
    "compute_settlement_diameter_tiles",
    "find_settlement_at_tile",
    "find_resource_at_tile",
    # Exceptions
    "WorldError",
    "OutOfBoundsError",
    "GridNotSetError",
    "InvalidWorldFileError",
]
