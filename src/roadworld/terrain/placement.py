"""Settlement and resource node placement by constrained rejection sampling."""

import logging
import math
from typing import Iterable

import numpy as np

from ..rng import Rng
from ..state import IdAllocator, TileGrid
from ..terrain_types import LAND_CODES, TileType, tile_type_from_code
from ..types import (
    SETTLEMENT_POPULATION_RANGES,
    DemandProfile,
    ResourceNode,
    ResourceType,
    Settlement,
    SettlementSize,
    SupplyProfile,
)
from .config import ResourceConfig, SettlementConfig

logger = logging.getLogger(__name__)

SETTLEMENT_NAME_PREFIXES = ("New", "North", "South", "Port", "Lake", "Fort", "High")
SETTLEMENT_NAME_ROOTS = ("ford", "ham", "bury", "field", "bridge", "ton", "wick")

# Cumulative (upper bound, size) table: city 15%, town 40%, village 45%
SETTLEMENT_SIZE_WEIGHTS: tuple[tuple[float, SettlementSize], ...] = (
    (0.15, SettlementSize.CITY),
    (0.55, SettlementSize.TOWN),
    (1.00, SettlementSize.VILLAGE),
)

# Per biome: cumulative (upper bound, type). A roll past the last bound
# yields no resource for that attempt.
RESOURCE_TYPE_TABLES: dict[TileType, tuple[tuple[float, ResourceType], ...]] = {
    TileType.FOREST: (
        (0.75, ResourceType.WOOD),
        (0.88, ResourceType.GRAIN),
        (0.96, ResourceType.COAL),
    ),
    TileType.PLAINS: (
        (0.70, ResourceType.GRAIN),
        (0.82, ResourceType.WOOD),
        (0.92, ResourceType.IRON),
    ),
    TileType.HILLS: (
        (0.45, ResourceType.COAL),
        (0.85, ResourceType.IRON),
        (0.92, ResourceType.GRAIN),
    ),
    TileType.MOUNTAINS: (
        (0.50, ResourceType.COAL),
        (0.90, ResourceType.IRON),
        (0.96, ResourceType.OIL),
    ),
    TileType.COAST: (
        (0.55, ResourceType.OIL),
        (0.80, ResourceType.GRAIN),
    ),
    TileType.RIVER: (
        (0.55, ResourceType.OIL),
        (0.80, ResourceType.GRAIN),
    ),
    TileType.SHALLOW_WATER: ((0.65, ResourceType.OIL),),
    TileType.DEEP_WATER: ((0.65, ResourceType.OIL),),
}

# (base capacity, base regeneration per tick)
RESOURCE_BASE_STATS: dict[ResourceType, tuple[int, float]] = {
    ResourceType.WOOD: (1_000, 2.0),
    ResourceType.GRAIN: (1_500, 3.0),
    ResourceType.COAL: (3_000, 1.0),
    ResourceType.IRON: (2_500, 1.5),
    ResourceType.OIL: (5_000, 0.8),
}

# Initial stock as a fraction of capacity, (low, high)
RESOURCE_START_FRACTIONS: dict[ResourceType, tuple[float, float]] = {
    ResourceType.WOOD: (0.7, 1.0),
    ResourceType.GRAIN: (0.4, 0.8),
    ResourceType.COAL: (0.2, 1.0),
    ResourceType.IRON: (0.2, 1.0),
    ResourceType.OIL: (0.1, 0.6),
}


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def _too_close(points: Iterable[tuple[int, int]], x: int, y: int, min_distance: int) -> bool:
    """Whether any point lies strictly closer than min_distance to (x, y)."""
    min_dist_sq = min_distance * min_distance
    return any((px - x) ** 2 + (py - y) ** 2 < min_dist_sq for px, py in points)


# --- Settlements ---


def random_settlement_size(rng: Rng) -> SettlementSize:
    """Draw a size class by weight (one draw)."""
    roll = rng.random()
    for bound, size in SETTLEMENT_SIZE_WEIGHTS:
        if roll < bound:
            return size
    return SettlementSize.VILLAGE


def random_population(rng: Rng, size: SettlementSize) -> int:
    """Uniform integer population within the size class range."""
    low, high = SETTLEMENT_POPULATION_RANGES[size]
    return rng.rand_int(low, high)


def make_profiles(rng: Rng, population: int) -> tuple[DemandProfile, SupplyProfile]:
    """Demand and supply scaled linearly with population plus jitter.

    Jitter ranges keep demand strictly above supply for goods and fuel.
    """
    demand = DemandProfile(
        pax=round_half_up(population / 1000 + rng.rand_range(5, 25)),
        goods=round_half_up(population / 1500 + rng.rand_range(9, 20)),
        fuel=round_half_up(population / 2000 + rng.rand_range(5, 12)),
    )
    supply = SupplyProfile(
        goods=round_half_up(population / 2000 + rng.rand_range(1, 8)),
        fuel=round_half_up(population / 3000 + rng.rand_range(0, 4)),
    )
    return demand, supply


def random_settlement_name(rng: Rng) -> str:
    return f"{rng.choice(SETTLEMENT_NAME_PREFIXES)}{rng.choice(SETTLEMENT_NAME_ROOTS)}"


def generate_settlements(
    grid: TileGrid,
    rng: Rng,
    ids: IdAllocator,
    config: SettlementConfig,
) -> list[Settlement]:
    """Scatter settlements over land tiles.

    Samples uniformly among land tiles and rejects samples closer than
    config.min_distance to an accepted settlement. Stops at config.count or
    when the attempt budget runs out, in which case fewer are returned.

    Args:
        grid: Tile grid (rivers already carved).
        rng: Seeded stream.
        ids: Session id allocator.
        config: Settlement placement parameters.

    Returns:
        Placed settlements in placement order.
    """
    settlements: list[Settlement] = []
    land_indices = np.flatnonzero(np.isin(grid.types, LAND_CODES))

    if len(land_indices) == 0:
        logger.warning("No land tiles, skipping settlement placement")
        return settlements

    max_attempts = config.count * config.attempts_per_settlement
    attempts = 0

    while len(settlements) < config.count and attempts < max_attempts:
        attempts += 1

        index = int(rng.choice(land_indices))
        x, y = index % grid.width, index // grid.width

        if _too_close(((s.x, s.y) for s in settlements), x, y, config.min_distance):
            continue

        size = random_settlement_size(rng)
        population = random_population(rng, size)
        name = random_settlement_name(rng)
        demand, supply = make_profiles(rng, population)

        settlements.append(
            Settlement(
                id=ids.settlement_id(),
                name=name,
                x=x,
                y=y,
                size=size,
                population=population,
                demand=demand,
                supply=supply,
            )
        )

    if len(settlements) < config.count:
        logger.info(
            f"Placed {len(settlements)}/{config.count} settlements "
            f"after exhausting {attempts} attempts"
        )

    return settlements


# --- Resources ---


def pick_resource_type(tile_type: TileType, roll: float) -> ResourceType | None:
    """Biome-weighted resource type for a roll in [0, 1), or None."""
    for bound, resource_type in RESOURCE_TYPE_TABLES.get(tile_type, ()):
        if roll < bound:
            return resource_type
    return None


def compute_resource_stats(resource_type: ResourceType, richness: float) -> tuple[int, float]:
    """Capacity and regeneration rate scaled by richness.

    Returns:
        Tuple of (capacity, regen_per_tick); roughly 0.7-1.3x and 0.6-1.4x of base.
    """
    base_capacity, base_regen = RESOURCE_BASE_STATS[resource_type]
    capacity = round_half_up(base_capacity * (0.7 + richness * 0.6))
    regen_per_tick = round(base_regen * (0.6 + richness * 0.8), 2)
    return capacity, regen_per_tick


def generate_resources(
    grid: TileGrid,
    settlements: list[Settlement],
    rng: Rng,
    ids: IdAllocator,
    config: ResourceConfig,
    type_rng: Rng | None = None,
) -> list[ResourceNode]:
    """Scatter resource nodes over any tile, land or water.

    Rejects samples near the map border, samples whose biome roll yields no
    resource, and samples too close to settlements or other nodes.

    Args:
        grid: Tile grid.
        settlements: Already placed settlements.
        rng: Seeded stream.
        ids: Session id allocator.
        config: Resource placement parameters.
        type_rng: Stream for the biome roll (defaults to rng).

    Returns:
        Placed resource nodes in placement order.
    """
    type_rng = type_rng or rng
    width, height = grid.width, grid.height
    margin = config.border_margin

    resources: list[ResourceNode] = []
    settlement_points = [(s.x, s.y) for s in settlements]
    all_indices = range(width * height)

    max_attempts = config.count * config.attempts_per_resource
    attempts = 0

    while len(resources) < config.count and attempts < max_attempts:
        attempts += 1

        index = rng.choice(all_indices)
        x, y = index % width, index // width

        if x < margin or y < margin or x > width - 1 - margin or y > height - 1 - margin:
            continue

        resource_type = pick_resource_type(
            tile_type_from_code(grid.types[y, x]), type_rng.random()
        )
        if resource_type is None:
            continue

        if _too_close(settlement_points, x, y, config.min_settlement_distance):
            continue
        if _too_close(((r.x, r.y) for r in resources), x, y, config.min_resource_distance):
            continue

        richness = rng.rand_range(config.richness_min, config.richness_max)
        capacity, regen_per_tick = compute_resource_stats(resource_type, richness)
        low, high = RESOURCE_START_FRACTIONS[resource_type]
        current = math.floor(capacity * rng.rand_range(low, high))

        resources.append(
            ResourceNode(
                id=ids.resource_id(),
                type=resource_type,
                x=x,
                y=y,
                richness=richness,
                capacity=capacity,
                current=current,
                regen_per_tick=regen_per_tick,
            )
        )

    if len(resources) < config.count:
        logger.info(
            f"Placed {len(resources)}/{config.count} resource nodes "
            f"after exhausting {attempts} attempts"
        )

    return resources
