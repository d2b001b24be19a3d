"""Road building: turn two endpoints into a persisted road."""

from dataclasses import dataclass

import structlog

from .config import PathCostConfig
from .pathfinding import find_road_path
from .state import WorldMap
from .types import (
    ResourceEndpoint,
    ResourceNode,
    RoadConnection,
    RoadEndpoint,
    Settlement,
    SettlementEndpoint,
)

logger = structlog.get_logger()


@dataclass
class RoadBuildState:
    """Road-building session state.

    roads is the same list object as the world's road list, so appends are
    visible through both.
    """

    roads: list[RoadConnection]
    next_road_id: int = 1
    source: RoadEndpoint | None = None

    def allocate_id(self) -> int:
        value = self.next_road_id
        self.next_road_id += 1
        return value


def create_initial_road_build_state(roads: list[RoadConnection]) -> RoadBuildState:
    """Start a session over existing roads.

    Ids continue from max(existing id) + 1, or 1 when there are no roads.
    """
    max_id = max((road.id for road in roads), default=0)
    return RoadBuildState(roads=roads, next_road_id=max_id + 1)


def set_road_source(state: RoadBuildState, source: RoadEndpoint | None) -> None:
    """Remember (or clear) the first endpoint picked for the next road."""
    state.source = source


def endpoint_for(item: Settlement | ResourceNode) -> RoadEndpoint:
    """Coordinate-only endpoint for a settlement or resource node."""
    if isinstance(item, Settlement):
        return SettlementEndpoint(x=item.x, y=item.y)
    if isinstance(item, ResourceNode):
        return ResourceEndpoint(x=item.x, y=item.y)
    raise TypeError(f"Expected Settlement or ResourceNode, got {type(item)}")


def build_road_between(
    state: RoadBuildState,
    world: WorldMap,
    from_: RoadEndpoint,
    to: RoadEndpoint,
    costs: PathCostConfig | None = None,
) -> RoadConnection | None:
    """Pathfind between two endpoints and record the road.

    Rejecting a road from an endpoint to itself is the caller's job.

    Args:
        state: Session state; its road list receives the new road.
        world: World to pathfind over.
        from_: Origin endpoint.
        to: Destination endpoint.
        costs: Pathfinder cost multipliers (defaults if None).

    Returns:
        The new road, or None if no path exists (nothing is changed).
    """
    path = find_road_path(
        world,
        from_.coord,
        to.coord,
        costs,
    )

    if path is None:
        logger.warning(
            "road_no_path",
            from_kind=from_.kind,
            from_pos=f"({from_.x}, {from_.y})",
            to_kind=to.kind,
            to_pos=f"({to.x}, {to.y})",
        )
        return None

    road = RoadConnection(
        id=state.allocate_id(),
        from_=from_,
        to=to,
        path=tuple(path),
    )
    state.roads.append(road)
    if state.roads is not world.roads:
        world.roads.append(road)

    logger.info("road_built", road_id=road.id, length=len(road.path))
    return road
