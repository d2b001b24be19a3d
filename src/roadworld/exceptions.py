"""Custom exceptions for world generation and road building."""


class WorldError(Exception):
    """Base exception for world errors."""

    pass


class OutOfBoundsError(WorldError):
    """Raised when a tile coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"Tile ({x}, {y}) is outside the {width}x{height} grid"
        )
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class GridNotSetError(WorldError):
    """Raised when tiles are accessed on a world without a tile grid."""

    pass


class InvalidWorldFileError(WorldError):
    """Raised when a saved world file is missing data or malformed."""

    pass
