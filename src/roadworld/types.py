"""Core domain types: tiles, settlements, resource nodes and roads."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .terrain_types import TileType


class TileCoord(BaseModel, frozen=True):
    """Immutable 2D tile coordinate.

    Coordinate system: +X is East, +Y is South.
    """

    x: int
    y: int

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"TileCoord(x={self.x}, y={self.y})"


class Tile(BaseModel, frozen=True):
    """Classified tile, materialized on demand from the tile grid."""

    x: int
    y: int
    type: TileType
    elevation: float = Field(ge=0.0, le=1.0)
    moisture: float = Field(ge=0.0, le=1.0)


# --- Settlements ---


class SettlementSize(str, Enum):
    """Settlement size class."""

    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"


# Inclusive population bounds per size class
SETTLEMENT_POPULATION_RANGES: dict[SettlementSize, tuple[int, int]] = {
    SettlementSize.CITY: (80_000, 200_000),
    SettlementSize.TOWN: (15_000, 80_000),
    SettlementSize.VILLAGE: (2_000, 15_000),
}


class DemandProfile(BaseModel, frozen=True):
    """Per-tick demand of a settlement."""

    pax: int = Field(ge=0)
    goods: int = Field(ge=0)
    fuel: int = Field(ge=0)


class SupplyProfile(BaseModel, frozen=True):
    """Per-tick production of a settlement."""

    goods: int = Field(ge=0)
    fuel: int = Field(ge=0)


class Settlement(BaseModel, frozen=True):
    """A village, town or city placed at generation time."""

    id: int
    name: str
    x: int
    y: int
    size: SettlementSize
    population: int = Field(gt=0)
    demand: DemandProfile
    supply: SupplyProfile

    @model_validator(mode="after")
    def _check_population(self) -> "Settlement":
        low, high = SETTLEMENT_POPULATION_RANGES[self.size]
        if not low <= self.population <= high:
            raise ValueError(
                f"Population {self.population} outside {self.size.value} range "
                f"[{low}, {high}]"
            )
        return self


# --- Resources ---


class ResourceType(str, Enum):
    """Kinds of resource deposit."""

    WOOD = "wood"
    COAL = "coal"
    OIL = "oil"
    IRON = "iron"
    GRAIN = "grain"


class ResourceNode(BaseModel):
    """A resource deposit whose stock regenerates over time.

    Stock is mutable but always stays within [0, capacity]: assignments are
    validated and set_current() clamps.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
    type: ResourceType
    x: int
    y: int
    richness: float = Field(ge=0.0, le=1.0)
    capacity: int = Field(gt=0)
    current: float
    regen_per_tick: float = Field(ge=0.0)

    @model_validator(mode="after")
    def _check_stock(self) -> "ResourceNode":
        if not 0 <= self.current <= self.capacity:
            raise ValueError(
                f"Resource {self.id} stock {self.current} outside [0, {self.capacity}]"
            )
        return self

    @property
    def is_full(self) -> bool:
        return self.current >= self.capacity

    def set_current(self, value: float) -> None:
        """Set stock, clamped into [0, capacity]."""
        self.current = min(max(float(value), 0.0), float(self.capacity))

    def regenerate(self, amount: float) -> float:
        """Add amount to stock (clamped) and return the actual change."""
        before = self.current
        self.set_current(before + amount)
        return self.current - before


# --- Roads ---


class SettlementEndpoint(BaseModel, frozen=True):
    """Road endpoint anchored on a settlement."""

    kind: Literal["settlement"] = "settlement"
    x: int
    y: int

    @property
    def coord(self) -> TileCoord:
        return TileCoord(x=self.x, y=self.y)


class ResourceEndpoint(BaseModel, frozen=True):
    """Road endpoint anchored on a resource node."""

    kind: Literal["resource"] = "resource"
    x: int
    y: int

    @property
    def coord(self) -> TileCoord:
        return TileCoord(x=self.x, y=self.y)


RoadEndpoint = Annotated[
    Union[SettlementEndpoint, ResourceEndpoint],
    Field(discriminator="kind"),
]


class RoadConnection(BaseModel):
    """A built road: contiguous tile path between two endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    from_: RoadEndpoint = Field(alias="from")
    to: RoadEndpoint
    path: tuple[TileCoord, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_path(self) -> "RoadConnection":
        first, last = self.path[0], self.path[-1]
        if first != self.from_.coord:
            raise ValueError(f"Road {self.id} path starts at {first}, not at its origin")
        if last != self.to.coord:
            raise ValueError(f"Road {self.id} path ends at {last}, not at its destination")
        for a, b in zip(self.path, self.path[1:]):
            if abs(a.x - b.x) + abs(a.y - b.y) != 1:
                raise ValueError(f"Road {self.id} path jumps from {a} to {b}")
        return self
