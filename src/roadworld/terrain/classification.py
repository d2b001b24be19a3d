"""Terrain classification from elevation and moisture bands."""

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import TileType
from .config import TerrainThresholds

_DEFAULT_THRESHOLDS = TerrainThresholds()


def classify_tile(
    elevation: float,
    moisture: float,
    thresholds: TerrainThresholds | None = None,
) -> TileType:
    """Classify a single tile.

    Water bands are decided by elevation alone; land bands by elevation then
    moisture. No neighbor information is used.

    Args:
        elevation: Elevation in [0, 1].
        moisture: Moisture in [0, 1].
        thresholds: Band thresholds (defaults if None).

    Returns:
        The tile's TileType.
    """
    t = thresholds or _DEFAULT_THRESHOLDS

    if elevation < t.deep_water_level:
        return TileType.DEEP_WATER
    if elevation < t.shallow_water_level:
        return TileType.SHALLOW_WATER
    if elevation < t.coast_level:
        return TileType.COAST

    if elevation > t.mountain_elevation and moisture < t.mountain_max_moisture:
        return TileType.MOUNTAINS

    if elevation > t.highland_elevation:
        return TileType.FOREST if moisture > t.highland_forest_moisture else TileType.HILLS

    if elevation > t.midland_elevation:
        return TileType.FOREST if moisture > t.midland_forest_moisture else TileType.PLAINS

    return TileType.FOREST if moisture > t.lowland_forest_moisture else TileType.PLAINS


def classify_terrain(
    elevation: NDArray[np.floating],
    moisture: NDArray[np.floating],
    thresholds: TerrainThresholds | None = None,
) -> NDArray[np.uint8]:
    """Classify every cell at once.

    Produces exactly the bands of classify_tile, cell by cell.

    Args:
        elevation: Elevation field in [0, 1].
        moisture: Moisture field in [0, 1], same shape.
        thresholds: Band thresholds (defaults if None).

    Returns:
        2D array of TileType codes as uint8.
    """
    t = thresholds or _DEFAULT_THRESHOLDS

    highland = elevation > t.highland_elevation
    midland = elevation > t.midland_elevation

    # First matching condition wins, as in classify_tile
    conditions = [
        elevation < t.deep_water_level,
        elevation < t.shallow_water_level,
        elevation < t.coast_level,
        (elevation > t.mountain_elevation) & (moisture < t.mountain_max_moisture),
        highland & (moisture > t.highland_forest_moisture),
        highland,
        midland & (moisture > t.midland_forest_moisture),
        midland,
        moisture > t.lowland_forest_moisture,
    ]
    choices = [
        TileType.DEEP_WATER.code,
        TileType.SHALLOW_WATER.code,
        TileType.COAST.code,
        TileType.MOUNTAINS.code,
        TileType.FOREST.code,
        TileType.HILLS.code,
        TileType.FOREST.code,
        TileType.PLAINS.code,
        TileType.FOREST.code,
    ]

    return np.select(conditions, choices, default=TileType.PLAINS.code).astype(np.uint8)
