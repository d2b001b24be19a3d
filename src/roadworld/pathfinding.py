"""Road pathfinding: weighted shortest path over the tile grid."""

import heapq
import itertools
import math

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import PathCostConfig
from .state import WorldMap
from .terrain_types import WATER_CODES, TileType
from .types import TileCoord

logger = structlog.get_logger()

# 4-neighborhood (dx, dy): N, E, S, W
CARDINAL_OFFSETS: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

_DEFAULT_COSTS = PathCostConfig()


def compute_step_costs(
    world: WorldMap,
    costs: PathCostConfig | None = None,
) -> NDArray[np.float64]:
    """Cost of stepping into each tile, flattened row-major.

    Base cost is 1. Road tiles are multiplied by the road discount and rough
    terrain by its penalty; both apply when a road crosses rough terrain.
    Deep and shallow water cost infinity (impassable).

    Args:
        world: World with tile grid and existing roads.
        costs: Multipliers (defaults if None).

    Returns:
        Flat array of length width * height.
    """
    costs = costs or _DEFAULT_COSTS
    types = world.grid.types.ravel()

    step_cost = np.ones(types.shape, dtype=np.float64)

    road_indices = list(world.road_tile_indices())
    if road_indices:
        step_cost[road_indices] *= costs.road_multiplier

    step_cost[types == TileType.MOUNTAINS.code] *= costs.mountains
    step_cost[types == TileType.HILLS.code] *= costs.hills
    step_cost[types == TileType.FOREST.code] *= costs.forest

    step_cost[np.isin(types, WATER_CODES)] = np.inf
    return step_cost


def find_road_path(
    world: WorldMap,
    start: TileCoord,
    goal: TileCoord,
    costs: PathCostConfig | None = None,
) -> list[TileCoord] | None:
    """Find the cheapest 4-connected tile path from start to goal.

    Dijkstra search keyed by accumulated step cost. Among frontier entries of
    equal cost the earliest discovered is expanded first, so results are
    stable. The search stops as soon as the goal is expanded.

    Args:
        world: World with tile grid and existing roads.
        start: First tile of the path.
        goal: Last tile of the path.
        costs: Step cost multipliers (defaults if None).

    Returns:
        Tiles from start to goal inclusive, or None if the goal is unreachable.

    Raises:
        OutOfBoundsError: If start or goal is outside the world.
    """
    grid = world.grid
    grid.check_bounds(start.x, start.y)
    grid.check_bounds(goal.x, goal.y)

    width, height = world.width, world.height
    start_idx = grid.index(start.x, start.y)
    goal_idx = grid.index(goal.x, goal.y)

    if start_idx == goal_idx:
        return [TileCoord(x=start.x, y=start.y)]

    step_cost = compute_step_costs(world, costs).tolist()
    dist = [math.inf] * (width * height)
    came_from: dict[int, int] = {}

    dist[start_idx] = 0.0
    discovery = itertools.count()
    frontier: list[tuple[float, int, int]] = [(0.0, next(discovery), start_idx)]

    while frontier:
        current_dist, _, current = heapq.heappop(frontier)
        if current_dist > dist[current]:
            continue  # Stale entry
        if current == goal_idx:
            break

        x, y = current % width, current // width
        for dx, dy in CARDINAL_OFFSETS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue

            neighbor = ny * width + nx
            cost = step_cost[neighbor]
            if cost == math.inf:
                continue

            new_dist = current_dist + cost
            if new_dist < dist[neighbor]:
                dist[neighbor] = new_dist
                came_from[neighbor] = current
                heapq.heappush(frontier, (new_dist, next(discovery), neighbor))

    if goal_idx not in came_from:
        logger.debug("road_path_unreachable", start=str(start), goal=str(goal))
        return None

    path: list[TileCoord] = []
    node = goal_idx
    while True:
        path.append(TileCoord(x=node % width, y=node // width))
        if node == start_idx:
            break
        node = came_from[node]

    path.reverse()
    return path


def path_cost(
    world: WorldMap,
    path: list[TileCoord],
    costs: PathCostConfig | None = None,
) -> float:
    """Total cost of walking a path, excluding the start tile."""
    step_cost = compute_step_costs(world, costs)
    return float(sum(step_cost[step.y * world.width + step.x] for step in path[1:]))
