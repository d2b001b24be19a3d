"""Tile types and their compact storage codes."""

from enum import Enum


class TileType(str, Enum):
    """Terrain classification of a single tile."""

    DEEP_WATER = "deep_water"
    SHALLOW_WATER = "shallow_water"
    COAST = "coast"
    PLAINS = "plains"
    FOREST = "forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    RIVER = "river"

    @property
    def code(self) -> int:
        """uint8 value used in tile arrays."""
        return TILE_TYPE_CODES[self]

    @property
    def is_land(self) -> bool:
        """Whether settlements may be founded here.

        Rivers and coast are excluded.
        """
        return self in _LAND_TYPES

    @property
    def is_water(self) -> bool:
        """Open water: roads cannot enter it and rivers end in it."""
        return self in _WATER_TYPES

    @property
    def is_water_source(self) -> bool:
        """Zero-distance tiles of the water-distance field."""
        return self in _WATER_SOURCE_TYPES


# Sequential codes for compact array storage
TILE_TYPE_CODES: dict[TileType, int] = {
    TileType.DEEP_WATER: 0,
    TileType.SHALLOW_WATER: 1,
    TileType.COAST: 2,
    TileType.PLAINS: 3,
    TileType.FOREST: 4,
    TileType.HILLS: 5,
    TileType.MOUNTAINS: 6,
    TileType.RIVER: 7,
}

_CODE_TO_TILE_TYPE: dict[int, TileType] = {v: k for k, v in TILE_TYPE_CODES.items()}

_LAND_TYPES = frozenset({
    TileType.PLAINS,
    TileType.FOREST,
    TileType.HILLS,
    TileType.MOUNTAINS,
})

_WATER_TYPES = frozenset({
    TileType.DEEP_WATER,
    TileType.SHALLOW_WATER,
})

_WATER_SOURCE_TYPES = frozenset({
    TileType.DEEP_WATER,
    TileType.SHALLOW_WATER,
    TileType.COAST,
})

LAND_CODES = tuple(sorted(t.code for t in _LAND_TYPES))
WATER_CODES = tuple(sorted(t.code for t in _WATER_TYPES))
WATER_SOURCE_CODES = tuple(sorted(t.code for t in _WATER_SOURCE_TYPES))


def tile_type_from_code(code: int) -> TileType:
    """Convert a uint8 array value back to TileType.

    Raises:
        ValueError: If the code is not a known tile type.
    """
    try:
        return _CODE_TO_TILE_TYPE[int(code)]
    except KeyError:
        raise ValueError(f"Unknown tile type code: {code}") from None
