"""Main world generation orchestration."""

import logging

import numpy as np

from ..rng import Rng, normalize_seed, time_seed
from ..state import IdAllocator, TileGrid, WorldMap
from ..terrain_types import TileType
from .classification import classify_terrain
from .config import NoiseConfig, TerrainThresholds, WorldGenConfig
from .hydrology import River, carve_rivers
from .noise import NoiseField, continent_mask, make_noise_fields
from .placement import generate_resources, generate_settlements

logger = logging.getLogger(__name__)


class GenerationResult:
    """Result of world generation with session state and intermediate data."""

    def __init__(
        self,
        world: WorldMap,
        config: WorldGenConfig,
        ids: IdAllocator,
        rivers: list[River],
    ):
        self.world = world
        self.config = config
        self.ids = ids
        self.rivers = rivers

    @property
    def grid(self) -> TileGrid:
        return self.world.grid


def resolve_seed(seed: object) -> int:
    """Return a usable integer seed, falling back to the clock.

    Invalid seeds are logged and replaced rather than rejected.
    """
    value = normalize_seed(seed)
    if value is None:
        value = time_seed()
        if seed is not None:
            logger.warning(f"Invalid seed {seed!r}, using time-derived seed {value}")
    return value


def generate_tiles(
    width: int,
    height: int,
    elevation_noise: NoiseField,
    moisture_noise: NoiseField,
    noise_config: NoiseConfig,
    thresholds: TerrainThresholds,
) -> TileGrid:
    """Sample elevation and moisture for every tile and classify it.

    elevation = noise * elevation_weight + continent_mask * continent_weight
    + elevation_bias, clamped to [0, 1]. Moisture is sampled from its own field
    at a different scale and offset, clamped to [0, 1].

    Args:
        width: World width in tiles.
        height: World height in tiles.
        elevation_noise: Elevation noise field.
        moisture_noise: Moisture noise field.
        noise_config: Field shaping parameters.
        thresholds: Classification bands.

    Returns:
        Classified TileGrid.
    """
    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(height, dtype=np.float64)

    raw_elevation = elevation_noise.sample_grid(
        xs * noise_config.elevation_scale, ys * noise_config.elevation_scale
    )
    mask = continent_mask(
        width,
        height,
        noise_config.continent_inner_radius,
        noise_config.continent_outer_radius,
    )
    elevation = np.clip(
        raw_elevation * noise_config.elevation_weight
        + mask * noise_config.continent_weight
        + noise_config.elevation_bias,
        0.0,
        1.0,
    ).astype(np.float32)

    moisture = np.clip(
        moisture_noise.sample_grid(
            xs * noise_config.moisture_scale + noise_config.moisture_offset,
            ys * noise_config.moisture_scale + noise_config.moisture_offset,
        ),
        0.0,
        1.0,
    ).astype(np.float32)

    # Classify the stored float32 values so tiles re-classify identically
    types = classify_terrain(elevation, moisture, thresholds)

    return TileGrid(
        width=width,
        height=height,
        types=types,
        elevation=elevation,
        moisture=moisture,
    )


def generate_terrain(config: WorldGenConfig) -> GenerationResult:
    """Generate a complete world from configuration.

    All randomness is drawn from one stream seeded by config.seed, in a fixed
    order: noise seeds, river sources and wobble, settlements, resources.

    Args:
        config: World generation configuration.

    Returns:
        GenerationResult holding the WorldMap and session id allocator.
    """
    seed = resolve_seed(config.seed)
    rng = Rng(seed)
    width, height = config.width, config.height
    ids = IdAllocator()

    logger.info(f"Generating world {width}x{height} with seed {seed}")

    # Stage A: Base fields and classification
    logger.info("Stage A: Sampling elevation and moisture...")
    elevation_noise, moisture_noise = make_noise_fields(rng)
    grid = generate_tiles(
        width,
        height,
        elevation_noise,
        moisture_noise,
        config.noise,
        config.thresholds,
    )

    # Stage B: Rivers
    rivers: list[River] = []
    if config.rivers.enabled:
        logger.info("Stage B: Carving rivers...")
        jitter_rng = rng if config.seeded_river_jitter else Rng(None)
        rivers = carve_rivers(grid, rng, config.rivers, jitter_rng)
        logger.info(f"Carved {len(rivers)} rivers")

    # Stage C: Settlements
    logger.info("Stage C: Placing settlements...")
    settlements = generate_settlements(grid, rng, ids, config.settlements)
    logger.info(f"Placed {len(settlements)} settlements")

    # Stage D: Resources
    logger.info("Stage D: Placing resources...")
    type_rng = rng if config.seeded_resource_types else Rng(None)
    resources = generate_resources(
        grid, settlements, rng, ids, config.resources, type_rng
    )
    logger.info(f"Placed {len(resources)} resource nodes")

    world = WorldMap(
        seed=seed,
        width=width,
        height=height,
        settlements=settlements,
        resources=resources,
        roads=[],
    )
    world.set_grid(grid)

    _log_terrain_stats(grid)

    return GenerationResult(
        world=world,
        config=config.model_copy(update={"seed": seed}),
        ids=ids,
        rivers=rivers,
    )


def generate_world(
    seed: int | None = None,
    config: WorldGenConfig | None = None,
) -> WorldMap:
    """Generate a World from a seed.

    Same seed and config always give the same tiles, settlements and
    resources.

    Args:
        seed: Random seed; overrides config.seed. Missing or invalid seeds
            fall back to a time-derived seed.
        config: Generation configuration (defaults if None).

    Returns:
        The generated WorldMap with an empty road list.
    """
    config = config or WorldGenConfig()
    resolved = resolve_seed(seed if seed is not None else config.seed)
    return generate_terrain(config.model_copy(update={"seed": resolved})).world


def _log_terrain_stats(grid: TileGrid) -> None:
    """Log terrain generation statistics."""
    total = grid.types.size

    logger.info(f"Terrain stats ({total:,} tiles):")
    for tile_type in TileType:
        count = int(np.sum(grid.types == tile_type.code))
        pct = count / total * 100
        logger.info(f"  {tile_type.value}: {count:,} ({pct:.1f}%)")
