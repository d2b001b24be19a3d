"""Procedural world generation package.

This package implements seeded tile-world generation: elevation and moisture
noise, terrain classification, river carving, and settlement/resource
placement.
"""

from .config import WorldGenConfig
from .generator import (
    GenerationResult,
    generate_terrain,
    generate_tiles,
    generate_world,
)
from .persistence import load_world, save_world
from .validation import ValidationResult, validate_world

__all__ = [
    "GenerationResult",
    "ValidationResult",
    "WorldGenConfig",
    "generate_terrain",
    "generate_tiles",
    "generate_world",
    "load_world",
    "save_world",
    "validate_world",
]
