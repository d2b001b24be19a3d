"""World state: tile grid, id allocation and the WorldMap aggregate."""

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr

from .exceptions import GridNotSetError, OutOfBoundsError
from .terrain_types import TileType, tile_type_from_code
from .types import ResourceNode, RoadConnection, Settlement, Tile


@dataclass
class TileGrid:
    """Array-backed tile storage, shape (height, width).

    Row-major: the flat index of (x, y) is y * width + x. Owned exclusively by
    the generation pipeline until handed to a WorldMap.
    """

    width: int
    height: int
    types: NDArray[np.uint8]
    elevation: NDArray[np.float32]
    moisture: NDArray[np.float32]

    def __post_init__(self) -> None:
        expected = (self.height, self.width)
        for name in ("types", "elevation", "moisture"):
            shape = getattr(self, name).shape
            if shape != expected:
                raise ValueError(
                    f"{name} array shape {shape} doesn't match grid dimensions {expected}"
                )

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) is within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def check_bounds(self, x: int, y: int) -> None:
        """Raise OutOfBoundsError if (x, y) is outside the grid."""
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def index(self, x: int, y: int) -> int:
        """Flat row-major index of (x, y)."""
        return y * self.width + x

    def tile_type(self, x: int, y: int) -> TileType:
        self.check_bounds(x, y)
        return tile_type_from_code(self.types[y, x])

    def get_tile(self, x: int, y: int) -> Tile:
        """Materialize the tile at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        self.check_bounds(x, y)
        return Tile(
            x=x,
            y=y,
            type=tile_type_from_code(self.types[y, x]),
            elevation=float(self.elevation[y, x]),
            moisture=float(self.moisture[y, x]),
        )


@dataclass
class IdAllocator:
    """Monotonic id counters scoped to one generation session."""

    next_settlement_id: int = 1
    next_resource_id: int = 1

    def settlement_id(self) -> int:
        value = self.next_settlement_id
        self.next_settlement_id += 1
        return value

    def resource_id(self) -> int:
        value = self.next_resource_id
        self.next_resource_id += 1
        return value


class WorldMap(BaseModel):
    """
    Aggregate root handed to renderers, UI and simulation.

    Settlements and resources are created once at generation time; roads are
    appended in creation order by the road builder. Tiles live in an attached
    TileGrid and are materialized on demand.
    """

    seed: int
    width: int
    height: int
    settlements: list[Settlement] = []
    resources: list[ResourceNode] = []
    roads: list[RoadConnection] = []

    _grid: TileGrid | None = PrivateAttr(default=None)

    # --- Tile operations ---

    def set_grid(self, grid: TileGrid) -> None:
        """Attach the tile grid.

        Raises:
            ValueError: If the grid dimensions don't match the world.
        """
        if (grid.width, grid.height) != (self.width, self.height):
            raise ValueError(
                f"Grid {grid.width}x{grid.height} doesn't match "
                f"world dimensions {self.width}x{self.height}"
            )
        self._grid = grid

    @property
    def grid(self) -> TileGrid:
        if self._grid is None:
            raise GridNotSetError("World has no tile grid")
        return self._grid

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) is within world bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Tile:
        return self.grid.get_tile(x, y)

    def tile_type(self, x: int, y: int) -> TileType:
        return self.grid.tile_type(x, y)

    def tiles(self) -> Iterator[Tile]:
        """Iterate all tiles in row-major order."""
        grid = self.grid
        for y in range(self.height):
            for x in range(self.width):
                yield grid.get_tile(x, y)

    # --- Lookups ---

    def get_settlement(self, settlement_id: int) -> Settlement | None:
        for settlement in self.settlements:
            if settlement.id == settlement_id:
                return settlement
        return None

    def get_resource(self, resource_id: int) -> ResourceNode | None:
        for resource in self.resources:
            if resource.id == resource_id:
                return resource
        return None

    def road_tile_indices(self) -> set[int]:
        """Flat indices of every tile covered by an existing road."""
        return {
            step.y * self.width + step.x
            for road in self.roads
            for step in road.path
        }
