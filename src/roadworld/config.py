"""Configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .terrain.config import WorldGenConfig


class PathCostConfig(BaseModel):
    """Step cost multipliers for the road pathfinder."""

    road_multiplier: float = Field(
        default=0.2, description="Multiplier for tiles already covered by a road"
    )
    mountains: float = Field(default=3.0, description="Multiplier for mountains")
    hills: float = Field(default=1.5, description="Multiplier for hills")
    forest: float = Field(default=1.2, description="Multiplier for forest")


class Config(BaseModel):
    """Complete configuration: generation plus road building."""

    world: WorldGenConfig = Field(default_factory=WorldGenConfig)
    roads: PathCostConfig = Field(default_factory=PathCostConfig)


def load_config(config_path: Path) -> Config:
    """Load configuration from a TOML file.

    Missing tables and keys keep their defaults.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are invalid.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return Config.model_validate(data)
