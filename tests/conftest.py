"""Shared test fixtures for world tests."""

from typing import Callable

import numpy as np
import pytest

from roadworld.state import TileGrid, WorldMap
from roadworld.terrain.config import (
    NoiseConfig,
    ResourceConfig,
    SettlementConfig,
    WorldGenConfig,
)
from roadworld.terrain_types import TileType
from roadworld.types import (
    DemandProfile,
    ResourceNode,
    ResourceType,
    Settlement,
    SettlementSize,
    SupplyProfile,
)

# One character per tile in ASCII maps
TILE_CHARS: dict[str, TileType] = {
    "~": TileType.DEEP_WATER,
    "-": TileType.SHALLOW_WATER,
    "c": TileType.COAST,
    ".": TileType.PLAINS,
    "f": TileType.FOREST,
    "h": TileType.HILLS,
    "^": TileType.MOUNTAINS,
    "r": TileType.RIVER,
}


def _grid_from_rows(rows: list[str]) -> TileGrid:
    height = len(rows)
    width = len(rows[0])
    types = np.array(
        [[TILE_CHARS[char].code for char in row] for row in rows], dtype=np.uint8
    )
    return TileGrid(
        width=width,
        height=height,
        types=types,
        elevation=np.full((height, width), 0.5, dtype=np.float32),
        moisture=np.full((height, width), 0.5, dtype=np.float32),
    )


@pytest.fixture
def make_grid() -> Callable[[list[str]], TileGrid]:
    """Build a TileGrid from ASCII rows (see TILE_CHARS)."""
    return _grid_from_rows


@pytest.fixture
def make_world() -> Callable[..., WorldMap]:
    """Build a WorldMap with a grid from ASCII rows.

    Example:
        . . ~ .
        . . ~ .
    """

    def factory(rows: list[str], seed: int = 0) -> WorldMap:
        grid = _grid_from_rows(rows)
        world = WorldMap(seed=seed, width=grid.width, height=grid.height)
        world.set_grid(grid)
        return world

    return factory


@pytest.fixture
def make_settlement() -> Callable[..., Settlement]:
    def factory(
        settlement_id: int,
        x: int,
        y: int,
        population: int = 5_000,
        size: SettlementSize = SettlementSize.VILLAGE,
    ) -> Settlement:
        return Settlement(
            id=settlement_id,
            name=f"Town{settlement_id}",
            x=x,
            y=y,
            size=size,
            population=population,
            demand=DemandProfile(pax=10, goods=12, fuel=8),
            supply=SupplyProfile(goods=4, fuel=2),
        )

    return factory


@pytest.fixture
def make_resource() -> Callable[..., ResourceNode]:
    def factory(
        resource_id: int,
        x: int,
        y: int,
        capacity: int = 100,
        current: float = 50.0,
        regen_per_tick: float = 2.0,
        resource_type: ResourceType = ResourceType.WOOD,
    ) -> ResourceNode:
        return ResourceNode(
            id=resource_id,
            type=resource_type,
            x=x,
            y=y,
            richness=0.5,
            capacity=capacity,
            current=current,
            regen_per_tick=regen_per_tick,
        )

    return factory


@pytest.fixture
def small_config() -> WorldGenConfig:
    """96x64 world with noise scaled up so it has coasts, land and highlands."""
    return WorldGenConfig(
        seed=42,
        width=96,
        height=64,
        noise=NoiseConfig(
            elevation_scale=0.06,
            moisture_scale=0.06,
            elevation_bias=0.0,
        ),
        settlements=SettlementConfig(count=6),
        resources=ResourceConfig(count=8),
    )
