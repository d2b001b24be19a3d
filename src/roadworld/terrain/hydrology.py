"""Hydrology: distance-to-water field and greedy downhill river carving."""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..rng import Rng
from ..state import TileGrid
from ..terrain_types import LAND_CODES, WATER_CODES, WATER_SOURCE_CODES, TileType
from .config import RiverConfig

# 8-neighborhood offsets (dx, dy), scanned row by row from the north-west
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)


@dataclass
class River:
    """A carved river, source first."""

    path: list[tuple[int, int]]  # (x, y) coordinates
    mouth: tuple[int, int] | None = None  # Water tile the river drained into

    @property
    def source(self) -> tuple[int, int]:
        return self.path[0]


def compute_distance_to_water(grid: TileGrid) -> NDArray[np.float64]:
    """Manhattan distance from every tile to the nearest water tile.

    Deep water, shallow water and coast are the zero-distance sources; the
    distance propagates 4-directionally. Tiles that no source can reach keep
    a distance of infinity.

    Args:
        grid: Classified tile grid.

    Returns:
        Distance field, shape (height, width).
    """
    water_mask = np.isin(grid.types, WATER_SOURCE_CODES)

    if not water_mask.any():
        return np.full(grid.types.shape, np.inf, dtype=np.float64)

    # Taxicab chamfer transform of the non-water region
    distance = ndimage.distance_transform_cdt(~water_mask, metric="taxicab")
    return distance.astype(np.float64)


def river_count(width: int, height: int, config: RiverConfig) -> int:
    """Number of rivers for a map: area / tiles_per_river, clamped."""
    wanted = math.floor(width * height / config.tiles_per_river + 0.5)
    return min(config.max_rivers, max(config.min_rivers, wanted))


def select_source_candidates(grid: TileGrid, config: RiverConfig) -> list[int]:
    """Flat indices of high, moist land tiles in row-major order."""
    candidate_mask = (
        np.isin(grid.types, LAND_CODES)
        & (grid.elevation > config.source_min_elevation)
        & (grid.moisture > config.source_min_moisture)
    )
    return np.flatnonzero(candidate_mask).tolist()


def trace_river(
    grid: TileGrid,
    distance_to_water: NDArray[np.float64],
    source: tuple[int, int],
    jitter_rng: Rng,
    config: RiverConfig,
) -> River:
    """Walk a river from source toward water, marking tiles as river.

    Each step moves to the unvisited 8-neighbor with the lowest score:
    distance to water (weighted), minus the elevation drop, plus a penalty for
    repeating the previous direction, plus random wobble. Neighbors farther
    than one step beyond the current water distance are never taken.

    The walk ends on reaching deep or shallow water, when no neighbor is
    acceptable, or after width * height steps.

    Args:
        grid: Tile grid, mutated in place.
        distance_to_water: Field from compute_distance_to_water.
        source: (x, y) start tile.
        jitter_rng: Stream for the random wobble.
        config: River scoring parameters.

    Returns:
        The traced River.
    """
    width, height = grid.width, grid.height
    types = grid.types
    elevation = grid.elevation

    river_code = TileType.RIVER.code
    coast_code = TileType.COAST.code

    x, y = source
    prev_dx, prev_dy = 0, 0
    visited: set[int] = set()
    path: list[tuple[int, int]] = []
    mouth: tuple[int, int] | None = None

    for _ in range(width * height):
        code = int(types[y, x])
        if code in WATER_CODES:
            mouth = (x, y)
            break

        # Rivers cut through beaches too
        if code in LAND_CODES or code == coast_code:
            types[y, x] = river_code
        path.append((x, y))

        visited.add(y * width + x)
        current_distance = float(distance_to_water[y, x])
        if not math.isfinite(current_distance):
            break

        current_elevation = float(elevation[y, x])
        best: tuple[float, int, int] | None = None

        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            if ny * width + nx in visited:
                continue

            neighbor_distance = float(distance_to_water[ny, nx])
            if not math.isfinite(neighbor_distance):
                continue
            if neighbor_distance > current_distance + 1:
                continue

            downhill = max(0.0, current_elevation - float(elevation[ny, nx]))
            penalty = config.same_direction_penalty if (dx, dy) == (prev_dx, prev_dy) else 0.0
            wobble = jitter_rng.random() * config.jitter

            score = (
                neighbor_distance * config.distance_weight
                - downhill * config.downhill_weight
                + penalty
                + wobble
            )
            if best is None or score < best[0]:
                best = (score, dx, dy)

        if best is None:
            break

        _, prev_dx, prev_dy = best
        x, y = x + prev_dx, y + prev_dy

    return River(path=path, mouth=mouth)


def carve_rivers(
    grid: TileGrid,
    rng: Rng,
    config: RiverConfig,
    jitter_rng: Rng | None = None,
) -> list[River]:
    """Carve rivers into the grid in place.

    Sources are drawn without replacement from high, moist land tiles.
    Distinct rivers may cross or join each other.

    Args:
        grid: Classified tile grid, mutated in place.
        rng: Stream used to pick sources.
        config: River parameters.
        jitter_rng: Stream for step wobble (defaults to rng).

    Returns:
        List of carved rivers in carving order.
    """
    jitter_rng = jitter_rng or rng

    distance_to_water = compute_distance_to_water(grid)
    candidates = select_source_candidates(grid, config)
    num_rivers = river_count(grid.width, grid.height, config)

    rivers: list[River] = []
    for _ in range(num_rivers):
        if not candidates:
            break

        source_index = candidates.pop(rng.rand_int(0, len(candidates) - 1))
        source = (source_index % grid.width, source_index // grid.width)

        rivers.append(trace_river(grid, distance_to_water, source, jitter_rng, config))

    return rivers
