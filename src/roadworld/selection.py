"""Hit-testing helpers shared by rendering and selection.

Settlement discs and resource squares here are the same footprints a
renderer draws, so clicks land on what is shown.
"""

from typing import Sequence

from .types import ResourceNode, Settlement

MIN_POPULATION = 2_000
MAX_POPULATION = 200_000
MIN_DIAMETER_TILES = 5
MAX_DIAMETER_TILES = 25

# Resource nodes are drawn as a square of this many tiles per side
RESOURCE_FOOTPRINT_TILES = 5


def compute_settlement_diameter_tiles(population: int) -> int:
    """Map population linearly onto an odd diameter in tiles.

    Populations are clamped to [2k, 200k], mapped onto [5, 25] tiles, rounded
    and bumped to the next odd number so the disc has a center tile.
    """
    clamped = min(MAX_POPULATION, max(MIN_POPULATION, population))
    t = (clamped - MIN_POPULATION) / (MAX_POPULATION - MIN_POPULATION)

    diameter = MIN_DIAMETER_TILES + t * (MAX_DIAMETER_TILES - MIN_DIAMETER_TILES)
    rounded = int(diameter + 0.5)
    if rounded % 2 == 0:
        rounded += 1
    return rounded


def find_settlement_at_tile(
    settlements: Sequence[Settlement],
    tile_x: int,
    tile_y: int,
) -> Settlement | None:
    """First settlement whose disc covers the tile, or None."""
    for settlement in settlements:
        radius = compute_settlement_diameter_tiles(settlement.population) // 2
        dx = tile_x - settlement.x
        dy = tile_y - settlement.y
        if dx * dx + dy * dy <= radius * radius:
            return settlement
    return None


def find_resource_at_tile(
    resources: Sequence[ResourceNode],
    tile_x: int,
    tile_y: int,
) -> ResourceNode | None:
    """First resource node whose square footprint covers the tile, or None."""
    radius = RESOURCE_FOOTPRINT_TILES // 2
    for resource in resources:
        if abs(tile_x - resource.x) <= radius and abs(tile_y - resource.y) <= radius:
            return resource
    return None
