"""Tests for road pathfinding."""

import math

import pytest

from roadworld.config import PathCostConfig
from roadworld.exceptions import OutOfBoundsError
from roadworld.pathfinding import compute_step_costs, find_road_path, path_cost
from roadworld.terrain_types import TileType
from roadworld.types import (
    ResourceEndpoint,
    RoadConnection,
    SettlementEndpoint,
    TileCoord,
)


def _road_along_row(road_id: int, y: int, x0: int, x1: int) -> RoadConnection:
    return RoadConnection(
        id=road_id,
        from_=SettlementEndpoint(x=x0, y=y),
        to=ResourceEndpoint(x=x1, y=y),
        path=tuple(TileCoord(x=x, y=y) for x in range(x0, x1 + 1)),
    )


class TestStepCosts:
    """Tests for per-tile step costs."""

    def test_terrain_multipliers(self, make_world) -> None:
        world = make_world([".f", "h^", "~-", "cr"])
        cost = compute_step_costs(world)
        assert cost[0] == pytest.approx(1.0)
        assert cost[1] == pytest.approx(1.2)
        assert cost[2] == pytest.approx(1.5)
        assert cost[3] == pytest.approx(3.0)
        assert math.isinf(cost[4])
        assert math.isinf(cost[5])
        # Coast and river are passable at base cost
        assert cost[6] == pytest.approx(1.0)
        assert cost[7] == pytest.approx(1.0)

    def test_road_discount_stacks_with_terrain(self, make_world) -> None:
        """A road over mountains costs 3 * 0.2."""
        world = make_world([".^"])
        world.roads.append(_road_along_row(1, 0, 0, 1))
        cost = compute_step_costs(world)
        assert cost[0] == pytest.approx(0.2)
        assert cost[1] == pytest.approx(0.6)

    def test_custom_costs(self, make_world) -> None:
        world = make_world(["^"])
        cost = compute_step_costs(world, PathCostConfig(mountains=10.0))
        assert cost[0] == pytest.approx(10.0)


class TestFindRoadPath:
    """Tests for find_road_path."""

    def test_straight_line(self, make_world) -> None:
        world = make_world(["....."])
        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=4, y=0))
        assert path == [TileCoord(x=x, y=0) for x in range(5)]

    def test_start_equals_goal(self, make_world) -> None:
        world = make_world(["..", ".."])
        path = find_road_path(world, TileCoord(x=1, y=1), TileCoord(x=1, y=1))
        assert path == [TileCoord(x=1, y=1)]

    def test_path_is_four_connected(self, make_world) -> None:
        world = make_world([
            "......",
            "..^^..",
            "..^^..",
            "......",
        ])
        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=5, y=3))
        assert path[0] == TileCoord(x=0, y=0)
        assert path[-1] == TileCoord(x=5, y=3)
        for a, b in zip(path, path[1:]):
            assert abs(a.x - b.x) + abs(a.y - b.y) == 1

    def test_water_column_blocks(self, make_world) -> None:
        """A full column of water separates the halves."""
        world = make_world([
            ".~.",
            ".~.",
            ".~.",
        ])
        assert find_road_path(world, TileCoord(x=0, y=1), TileCoord(x=2, y=1)) is None

    def test_shallow_water_blocks(self, make_world) -> None:
        world = make_world([".-."])
        assert find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=2, y=0)) is None

    def test_river_and_coast_passable(self, make_world) -> None:
        world = make_world([".rc."])
        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=3, y=0))
        assert path is not None
        assert len(path) == 4

    def test_start_on_water_allowed(self, make_world) -> None:
        """The start tile is never entered, so its cost is irrelevant."""
        world = make_world(["~.."])
        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=2, y=0))
        assert path is not None
        assert len(path) == 3

    def test_goal_on_water_unreachable(self, make_world) -> None:
        world = make_world(["..~"])
        assert find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=2, y=0)) is None

    def test_out_of_bounds_raises(self, make_world) -> None:
        world = make_world(["..", ".."])
        with pytest.raises(OutOfBoundsError):
            find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=5, y=0))
        with pytest.raises(OutOfBoundsError):
            find_road_path(world, TileCoord(x=-1, y=0), TileCoord(x=1, y=0))

    def test_avoids_mountains(self, make_world) -> None:
        """Detour over plains (cost 6) beats crossing mountains (cost 10)."""
        world = make_world([
            ".^^^.",
            ".....",
        ])
        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=4, y=0))
        assert all(world.tile_type(p.x, p.y) != TileType.MOUNTAINS for p in path)
        assert path_cost(world, path) == pytest.approx(6.0)

    def test_prefers_existing_road(self, make_world) -> None:
        """Detour along a road (cost 5) beats fresh plains (cost 9)."""
        world = make_world([
            "..........",
            "..........",
            "..........",
        ])
        world.roads.append(_road_along_row(1, 2, 0, 9))

        path = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=9, y=0))
        assert TileCoord(x=5, y=2) in path
        assert path_cost(world, path) == pytest.approx(5.0)

    def test_reuse_whole_road(self, make_world) -> None:
        world = make_world(["..........", ".........."])
        world.roads.append(_road_along_row(1, 1, 0, 9))

        path = find_road_path(world, TileCoord(x=0, y=1), TileCoord(x=9, y=1))
        assert path == [TileCoord(x=x, y=1) for x in range(10)]
        assert path_cost(world, path) == pytest.approx(1.8)

    def test_deterministic(self, make_world) -> None:
        """Equal-cost alternatives resolve the same way every call."""
        world = make_world(["....", "....", "...."])
        first = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=3, y=2))
        second = find_road_path(world, TileCoord(x=0, y=0), TileCoord(x=3, y=2))
        assert first == second
        assert len(first) == 6


class TestPathCost:
    """Tests for path_cost."""

    def test_excludes_start_tile(self, make_world) -> None:
        world = make_world(["^.."])
        path = [TileCoord(x=0, y=0), TileCoord(x=1, y=0), TileCoord(x=2, y=0)]
        assert path_cost(world, path) == pytest.approx(2.0)

    def test_single_tile_path_is_free(self, make_world) -> None:
        world = make_world(["^"])
        assert path_cost(world, [TileCoord(x=0, y=0)]) == 0.0
