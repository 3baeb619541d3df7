"""Mini README: Route planning subsystem for delivery flights.

Exports the movement model, the polygon geometry helpers and the A* planner
so services and scripts can plan routes without touching module internals.
"""

from .distance import euclidean_distance, is_close, next_position
from .errors import (
    AngleOutOfRange,
    EmptyPolygon,
    InvalidPolygon,
    NoMatchingHeading,
    PlanningError,
)
from .geometry import (
    LngLat,
    NamedRegion,
    PreparedRegion,
    contains_point,
    in_region_or_on_boundary,
    is_closed_polygon,
    on_boundary,
    on_region_boundary,
    validate_polygon,
)
from .movement import (
    HOVER_ANGLE,
    Heading,
    angle_of,
    compass_headings,
    heading_from_exact_angle,
    nearest_heading,
    step,
)
from .planner import PlannerConfig, RoutePlanner, SearchNode, plan_route

__all__ = [
    "AngleOutOfRange",
    "EmptyPolygon",
    "HOVER_ANGLE",
    "Heading",
    "InvalidPolygon",
    "LngLat",
    "NamedRegion",
    "NoMatchingHeading",
    "PlannerConfig",
    "PlanningError",
    "PreparedRegion",
    "RoutePlanner",
    "SearchNode",
    "angle_of",
    "compass_headings",
    "contains_point",
    "euclidean_distance",
    "heading_from_exact_angle",
    "in_region_or_on_boundary",
    "is_close",
    "is_closed_polygon",
    "nearest_heading",
    "next_position",
    "on_boundary",
    "on_region_boundary",
    "plan_route",
    "step",
    "validate_polygon",
]
