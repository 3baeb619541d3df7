"""Mini README: Distance and single-move primitives.

These helpers back both the planner (step costs, heuristic and goal test)
and the HTTP endpoints that expose the same calculations to clients.
"""

from __future__ import annotations

import math

from .geometry import LngLat
from .movement import heading_from_exact_angle, step


def euclidean_distance(first: LngLat, second: LngLat) -> float:
    """Planar distance between two positions, in degrees."""

    return math.hypot(first.lng - second.lng, first.lat - second.lat)


def is_close(first: LngLat, second: LngLat, threshold: float) -> bool:
    """Return True when the positions are strictly closer than ``threshold``."""

    return euclidean_distance(first, second) < threshold


def next_position(start: LngLat, angle: float, step_length: float) -> LngLat:
    """Return the position one move from ``start`` along the exact ``angle``.

    ``angle`` must be one of the sixteen compass angles or 999 for hovering;
    anything else raises ``NoMatchingHeading``.
    """

    return step(start, heading_from_exact_angle(angle), step_length)
