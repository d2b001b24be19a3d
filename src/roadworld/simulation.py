"""Simulation tick: resource regeneration."""

import structlog

from .state import WorldMap

logger = structlog.get_logger()


def regenerate_resources(world: WorldMap, dt_seconds: float) -> int:
    """Regenerate every resource node for an elapsed interval.

    Each non-full node gains regen_per_tick * dt_seconds, clamped to its
    capacity.

    Args:
        world: World whose resources are updated in place.
        dt_seconds: Elapsed time; negative values are treated as zero.

    Returns:
        Number of nodes whose stock changed.
    """
    if dt_seconds <= 0:
        return 0

    changed = 0
    for resource in world.resources:
        if resource.is_full:
            continue
        if resource.regenerate(resource.regen_per_tick * dt_seconds) > 0:
            changed += 1

    logger.debug("resources_regenerated", changed=changed, dt_seconds=dt_seconds)
    return changed
