"""Mini README: Discrete movement model for the delivery drone.

Structure:
    * Heading - the sixteen compass headings plus the ``HOVER`` sentinel.
    * angle_of / heading_from_exact_angle / nearest_heading - angle lookups.
    * compass_headings - the headings the planner may expand.
    * displacement / step - project a position one move along a heading.

Angles are measured in degrees counter-clockwise from due east, so 90 is
north, 180 is west and 270 is south. Moves use a planar approximation:
longitude follows the cosine of the angle and latitude the sine.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Tuple

from .errors import AngleOutOfRange, NoMatchingHeading
from .geometry import LngLat

HOVER_ANGLE = 999.0


class Heading(Enum):
    """Compass headings available to the drone, valued by their angle."""

    EAST = 0.0
    EAST_NORTH_EAST = 22.5
    NORTH_EAST = 45.0
    NORTH_NORTH_EAST = 67.5
    NORTH = 90.0
    NORTH_NORTH_WEST = 112.5
    NORTH_WEST = 135.0
    WEST_NORTH_WEST = 157.5
    WEST = 180.0
    WEST_SOUTH_WEST = 202.5
    SOUTH_WEST = 225.0
    SOUTH_SOUTH_WEST = 247.5
    SOUTH = 270.0
    SOUTH_SOUTH_EAST = 292.5
    SOUTH_EAST = 315.0
    EAST_SOUTH_EAST = 337.5
    HOVER = HOVER_ANGLE

    @property
    def angle(self) -> float:
        return self.value

    @property
    def is_hover(self) -> bool:
        return self is Heading.HOVER


_COMPASS_HEADINGS: Tuple[Heading, ...] = tuple(
    heading for heading in Heading if not heading.is_hover
)


def compass_headings() -> Tuple[Heading, ...]:
    """Return the sixteen moving headings in enumeration order."""

    return _COMPASS_HEADINGS


def angle_of(heading: Heading) -> float:
    """Return the angle bound to ``heading``."""

    return heading.angle


def heading_from_exact_angle(degrees: float) -> Heading:
    """Return the heading whose angle equals ``degrees`` exactly.

    Used to validate angles supplied by API clients, so near misses such as
    ``22.4`` are rejected rather than rounded.
    """

    for heading in Heading:
        if heading.angle == degrees:
            return heading
    raise NoMatchingHeading(f"Invalid angle: {degrees}")


def nearest_heading(degrees: float) -> Heading:
    """Return the compass heading closest to ``degrees`` on the circle.

    Hover is never returned. When two headings are equally close the one
    enumerated first wins.
    """

    if not 0.0 <= degrees <= 360.0:
        raise AngleOutOfRange(f"Angle must be between 0 and 360, got {degrees}")

    best = _COMPASS_HEADINGS[0]
    best_difference = math.inf
    for heading in _COMPASS_HEADINGS:
        difference = abs(heading.angle - degrees)
        difference = min(difference, 360.0 - difference)
        if difference < best_difference:
            best = heading
            best_difference = difference
    return best


def displacement(heading: Heading, step_length: float) -> Tuple[float, float]:
    """Return the ``(dlng, dlat)`` offset of one move along ``heading``."""

    if heading.is_hover:
        return 0.0, 0.0
    radians = math.radians(heading.angle)
    return step_length * math.cos(radians), step_length * math.sin(radians)


def step(point: LngLat, heading: Heading, step_length: float) -> LngLat:
    """Project ``point`` one move along ``heading``; hovering stays put."""

    if heading.is_hover:
        return point
    delta_lng, delta_lat = displacement(heading, step_length)
    return LngLat(point.lng + delta_lng, point.lat + delta_lat)


def move_table(step_length: float) -> List[Tuple[Heading, float, float]]:
    """Precompute the displacement of every compass heading for a search run."""

    return [
        (heading, *displacement(heading, step_length))
        for heading in _COMPASS_HEADINGS
    ]
