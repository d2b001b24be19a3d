"""World persistence: save and load generated worlds."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from ..exceptions import InvalidWorldFileError
from ..state import TileGrid, WorldMap
from ..types import ResourceNode, RoadConnection, Settlement

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_TILE_ARRAYS = ("types", "elevation", "moisture")


def save_world(path: Path | str, world: WorldMap) -> None:
    """Save a world to disk.

    Uses numpy's compressed .npz format: tile arrays are stored as arrays,
    settlements, resources, roads and metadata as JSON.

    Args:
        path: Output path (".npz" is appended if missing, as numpy does).
        world: World to save; must have a tile grid.
    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")
    grid = world.grid

    entities = {
        "settlements": [s.model_dump(mode="json") for s in world.settlements],
        "resources": [r.model_dump(mode="json") for r in world.resources],
        "roads": [r.model_dump(mode="json", by_alias=True) for r in world.roads],
    }

    metadata = {
        "version": FORMAT_VERSION,
        "seed": world.seed,
        "width": world.width,
        "height": world.height,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        types=grid.types,
        elevation=grid.elevation,
        moisture=grid.moisture,
        entities=json.dumps(entities).encode("utf-8"),
        metadata=json.dumps(metadata).encode("utf-8"),
    )

    file_size = path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved world to {path} ({file_size:.1f} MB)")


def load_world(path: Path | str) -> WorldMap:
    """Load a world from disk.

    Args:
        path: Path to .npz file.

    Returns:
        The WorldMap with its tile grid attached.

    Raises:
        FileNotFoundError: If file doesn't exist.
        InvalidWorldFileError: If file format is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"World file not found: {path}")

    with np.load(path) as data:
        for name in (*_TILE_ARRAYS, "metadata"):
            if name not in data:
                raise InvalidWorldFileError(f"Invalid world file: missing '{name}'")

        metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        if "entities" in data:
            entities = json.loads(data["entities"].tobytes().decode("utf-8"))
        else:
            entities = {}

        try:
            grid = TileGrid(
                width=int(metadata["width"]),
                height=int(metadata["height"]),
                types=data["types"].astype(np.uint8),
                elevation=data["elevation"].astype(np.float32),
                moisture=data["moisture"].astype(np.float32),
            )
        except (KeyError, ValueError) as e:
            raise InvalidWorldFileError(f"Invalid world file: {e}") from e

    try:
        world = WorldMap(
            seed=metadata.get("seed", 0),
            width=grid.width,
            height=grid.height,
            settlements=[
                Settlement.model_validate(s) for s in entities.get("settlements", [])
            ],
            resources=[
                ResourceNode.model_validate(r) for r in entities.get("resources", [])
            ],
            roads=[RoadConnection.model_validate(r) for r in entities.get("roads", [])],
        )
    except ValidationError as e:
        raise InvalidWorldFileError(f"Invalid world file: {e}") from e

    world.set_grid(grid)

    logger.info(
        f"Loaded world from {path}: {world.width}x{world.height}, "
        f"{len(world.settlements)} settlements, {len(world.resources)} resources, "
        f"{len(world.roads)} roads"
    )
    return world
