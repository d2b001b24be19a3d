"""Post-generation validation of world invariants."""

import logging

import numpy as np

from ..state import WorldMap
from ..terrain_types import LAND_CODES, WATER_CODES
from ..types import SETTLEMENT_POPULATION_RANGES
from .config import ResourceConfig, SettlementConfig

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of world validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(
    world: WorldMap,
    settlement_config: SettlementConfig | None = None,
    resource_config: ResourceConfig | None = None,
) -> ValidationResult:
    """Validate a world against its invariants.

    Args:
        world: World to check; must have a tile grid.
        settlement_config: Placement parameters used at generation.
        resource_config: Placement parameters used at generation.

    Returns:
        ValidationResult with any errors/warnings.
    """
    settlement_config = settlement_config or SettlementConfig()
    resource_config = resource_config or ResourceConfig()
    result = ValidationResult()

    # Check 1: Everything within bounds
    _check_bounds(world, result)

    # Check 2: Unique ids
    _check_unique_ids(world, result)

    # Check 3: Settlements on land, spaced, populations in range
    _check_settlements(world, settlement_config, result)

    # Check 4: Resource stock and border margin
    _check_resources(world, resource_config, result)

    # Check 5: Roads contiguous, anchored and dry
    _check_roads(world, result)

    if result.passed:
        logger.info("World validation passed")
    else:
        logger.warning(f"World validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_bounds(world: WorldMap, result: ValidationResult) -> None:
    """Check settlements, resources and road steps are within the grid."""
    out_of_bounds = 0
    for item in (*world.settlements, *world.resources):
        if not world.in_bounds(item.x, item.y):
            out_of_bounds += 1
    for road in world.roads:
        out_of_bounds += sum(1 for step in road.path if not world.in_bounds(step.x, step.y))

    if out_of_bounds > 0:
        result.add_error(f"{out_of_bounds} coordinates outside the grid")


def _check_unique_ids(world: WorldMap, result: ValidationResult) -> None:
    """Check ids are unique within each collection."""
    for name, items in (
        ("settlement", world.settlements),
        ("resource", world.resources),
        ("road", world.roads),
    ):
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            result.add_error(f"Duplicate {name} ids")


def _check_settlements(
    world: WorldMap,
    config: SettlementConfig,
    result: ValidationResult,
) -> None:
    """Check settlement placement constraints."""
    types = world.grid.types
    min_dist_sq = config.min_distance * config.min_distance

    for i, settlement in enumerate(world.settlements):
        if not world.in_bounds(settlement.x, settlement.y):
            continue

        if types[settlement.y, settlement.x] not in LAND_CODES:
            result.add_warning(f"Settlement {settlement.id} is not on a land tile")

        low, high = SETTLEMENT_POPULATION_RANGES[settlement.size]
        if not low <= settlement.population <= high:
            result.add_error(
                f"Settlement {settlement.id} population {settlement.population} "
                f"outside {settlement.size.value} range"
            )

        for other in world.settlements[i + 1:]:
            dist_sq = (settlement.x - other.x) ** 2 + (settlement.y - other.y) ** 2
            if dist_sq < min_dist_sq:
                result.add_error(
                    f"Settlements {settlement.id} and {other.id} closer than "
                    f"{config.min_distance} tiles"
                )


def _check_resources(
    world: WorldMap,
    config: ResourceConfig,
    result: ValidationResult,
) -> None:
    """Check resource stock and border margin."""
    margin = config.border_margin
    for resource in world.resources:
        if not 0 <= resource.current <= resource.capacity:
            result.add_error(
                f"Resource {resource.id} stock {resource.current} outside "
                f"[0, {resource.capacity}]"
            )

        if (
            resource.x < margin
            or resource.y < margin
            or resource.x > world.width - 1 - margin
            or resource.y > world.height - 1 - margin
        ):
            result.add_warning(f"Resource {resource.id} is within the border margin")


def _check_roads(world: WorldMap, result: ValidationResult) -> None:
    """Check roads are contiguous, match endpoints and avoid open water."""
    types = world.grid.types

    for road in world.roads:
        first, last = road.path[0], road.path[-1]
        if first != road.from_.coord or last != road.to.coord:
            result.add_error(f"Road {road.id} endpoints don't match its path")

        for a, b in zip(road.path, road.path[1:]):
            if abs(a.x - b.x) + abs(a.y - b.y) != 1:
                result.add_error(f"Road {road.id} is not contiguous at {a} -> {b}")
                break

        steps = [s for s in road.path[1:] if world.in_bounds(s.x, s.y)]
        if steps:
            ys = np.array([s.y for s in steps])
            xs = np.array([s.x for s in steps])
            wet = int(np.isin(types[ys, xs], WATER_CODES).sum())
            if wet > 0:
                result.add_error(f"Road {road.id} crosses {wet} water tiles")
