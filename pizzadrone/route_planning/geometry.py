"""Mini README: Polygon geometry used to keep the drone in legal airspace.

Structure:
    * LngLat - immutable (longitude, latitude) position.
    * NamedRegion - a named polygon boundary, implicitly closed.
    * is_closed_polygon / validate_polygon - reject degenerate boundaries.
    * contains_point / on_boundary / in_region_or_on_boundary - membership.
    * PreparedRegion - validated region with a cached bounding box.

Every boundary is treated as closed: the last vertex connects back to the
first whether or not the caller repeats it. Points lying on an edge count
as inside the region. The arithmetic is planar on raw degrees, matching the
movement model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from .errors import EmptyPolygon, InvalidPolygon

BOUNDARY_TOLERANCE = 1e-6


@dataclass(frozen=True, slots=True)
class LngLat:
    """A position on the planar longitude/latitude grid."""

    lng: float
    lat: float

    def as_dict(self) -> dict:
        return {"lng": self.lng, "lat": self.lat}


@dataclass(frozen=True, slots=True)
class NamedRegion:
    """A named polygon such as the central area or a no-fly zone."""

    name: str
    vertices: Tuple[LngLat, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of vertices but store an immutable snapshot.
        object.__setattr__(self, "vertices", tuple(self.vertices))

    def validate(self) -> "NamedRegion":
        """Raise ``InvalidPolygon`` unless the boundary is a closed polygon."""

        try:
            validate_polygon(self.vertices)
        except InvalidPolygon as error:
            raise InvalidPolygon(f"Region '{self.name}': {error}") from error
        return self

    def as_dict(self) -> dict:
        return {"name": self.name, "vertices": [vertex.as_dict() for vertex in self.vertices]}


def _twice_signed_area(p1: LngLat, p2: LngLat, p3: LngLat) -> float:
    return (
        p1.lng * (p2.lat - p3.lat)
        + p2.lng * (p3.lat - p1.lat)
        + p3.lng * (p1.lat - p2.lat)
    )


def is_closed_polygon(vertices: Optional[Sequence[LngLat]]) -> bool:
    """Return True when ``vertices`` can form a polygon with non-zero area.

    The boundary needs at least three vertices, at least two consecutive
    pairs that differ, and at least one consecutive triple that is not
    exactly collinear.
    """

    if not vertices or len(vertices) < 3:
        return False

    distinct_steps = sum(
        1 for previous, current in zip(vertices, vertices[1:]) if previous != current
    )
    has_turn = any(
        _twice_signed_area(vertices[index - 2], vertices[index - 1], vertices[index]) != 0.0
        for index in range(2, len(vertices))
    )
    return distinct_steps >= 2 and has_turn


def validate_polygon(vertices: Optional[Sequence[LngLat]]) -> None:
    """Raise ``InvalidPolygon`` with a reason when the boundary is degenerate."""

    if not vertices or len(vertices) < 3:
        count = len(vertices) if vertices else 0
        raise InvalidPolygon(f"a polygon needs at least 3 vertices, got {count}")
    if not is_closed_polygon(vertices):
        raise InvalidPolygon("insufficient distinct non-collinear vertices to form a closed region")


def _require_vertices(vertices: Optional[Sequence[LngLat]]) -> Sequence[LngLat]:
    if not vertices:
        raise EmptyPolygon("Vertices list cannot be null or empty")
    return vertices


def contains_point(vertices: Optional[Sequence[LngLat]], point: LngLat) -> bool:
    """Crossing-number test over the implicitly closed boundary.

    Boundary points may fall either way; use ``in_region_or_on_boundary``
    when edges must count as inside.
    """

    vertices = _require_vertices(vertices)
    inside = False
    previous = vertices[-1]
    for current in vertices:
        if (current.lat > point.lat) != (previous.lat > point.lat):
            crossing_lng = (previous.lng - current.lng) * (point.lat - current.lat) / (
                previous.lat - current.lat
            ) + current.lng
            if point.lng < crossing_lng:
                inside = not inside
        previous = current
    return inside


def on_boundary(
    vertex_a: LngLat,
    vertex_b: LngLat,
    point: LngLat,
    tolerance: float = BOUNDARY_TOLERANCE,
) -> bool:
    """Return True when ``point`` lies on the segment from ``vertex_a`` to ``vertex_b``."""

    if not (
        min(vertex_a.lng, vertex_b.lng) <= point.lng <= max(vertex_a.lng, vertex_b.lng)
        and min(vertex_a.lat, vertex_b.lat) <= point.lat <= max(vertex_a.lat, vertex_b.lat)
    ):
        return False
    cross_product = (point.lat - vertex_a.lat) * (vertex_b.lng - vertex_a.lng) - (
        point.lng - vertex_a.lng
    ) * (vertex_b.lat - vertex_a.lat)
    return abs(cross_product) < tolerance


def _edges(vertices: Sequence[LngLat]) -> Iterable[Tuple[LngLat, LngLat]]:
    return zip(vertices, (*vertices[1:], vertices[0]))


def on_region_boundary(vertices: Optional[Sequence[LngLat]], point: LngLat) -> bool:
    """Return True when ``point`` lies on any edge, including last to first."""

    vertices = _require_vertices(vertices)
    return any(on_boundary(start, end, point) for start, end in _edges(vertices))


def in_region_or_on_boundary(vertices: Optional[Sequence[LngLat]], point: LngLat) -> bool:
    """Return True when ``point`` is inside the polygon or on one of its edges."""

    return contains_point(vertices, point) or on_region_boundary(vertices, point)


@dataclass(frozen=True, slots=True)
class PreparedRegion:
    """A validated region with its bounding box cached for repeated queries."""

    name: str
    vertices: Tuple[LngLat, ...]
    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    @classmethod
    def from_region(cls, region: NamedRegion) -> "PreparedRegion":
        vertices = _require_vertices(region.vertices)
        longitudes = [vertex.lng for vertex in vertices]
        latitudes = [vertex.lat for vertex in vertices]
        return cls(
            name=region.name,
            vertices=tuple(vertices),
            min_lng=min(longitudes),
            min_lat=min(latitudes),
            max_lng=max(longitudes),
            max_lat=max(latitudes),
        )

    def covers(self, point: LngLat) -> bool:
        """Same answer as ``in_region_or_on_boundary`` with a fast bounding-box reject."""

        if not (
            self.min_lng <= point.lng <= self.max_lng
            and self.min_lat <= point.lat <= self.max_lat
        ):
            return False
        return in_region_or_on_boundary(self.vertices, point)
