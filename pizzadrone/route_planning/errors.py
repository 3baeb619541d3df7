"""Mini README: Error types raised by the route planning core.

All errors derive from ``ValueError`` so that callers which only care about
"bad input" can catch a single type. A route that cannot be found is not an
error; the planner returns an empty list instead.
"""

from __future__ import annotations


class PlanningError(ValueError):
    """Base class for route planning input errors."""


class InvalidPolygon(PlanningError):
    """Raised when a boundary has too few, coincident, or collinear vertices."""


class EmptyPolygon(PlanningError):
    """Raised when a containment query receives no vertices at all."""


class NoMatchingHeading(PlanningError):
    """Raised when an angle is not one of the defined compass angles."""


class AngleOutOfRange(PlanningError):
    """Raised when an angle falls outside the closed range [0, 360]."""
