"""Mini README: GeoJSON helper utilities for Pizzadrone.

Structure:
    * route_to_geojson - FeatureCollection with the route and map context.
    * regions_from_geojson - read polygons from a GeoJSON payload.

Keeping the logic isolated avoids importing web framework dependencies when
running unit tests or reusing the helpers from the CLI.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Optional, Sequence

from ..orders import Restaurant
from ..route_planning import LngLat, NamedRegion

FLIGHT_PATH_COLOUR = "#ff0000"
DELIVERY_POINT_COLOUR = "#ffff00"
RESTAURANT_COLOUR = "#0000ff"
NO_FLY_ZONE_FILL = "#ff0000"


def _coordinates(points: Iterable[LngLat]) -> List[List[float]]:
    return [[point.lng, point.lat] for point in points]


def _closed_ring(region: NamedRegion) -> List[List[float]]:
    ring = _coordinates(region.vertices)
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    return ring


def _feature(geometry: Dict, properties: Dict) -> Dict:
    return {"type": "Feature", "geometry": geometry, "properties": properties}


def route_to_geojson(
    path: Sequence[LngLat],
    *,
    delivery_point: Optional[LngLat] = None,
    delivery_point_name: str = "Appleton Tower",
    central_area: Optional[NamedRegion] = None,
    no_fly_zones: Iterable[NamedRegion] = (),
    restaurants: Iterable[Restaurant] = (),
) -> Dict:
    """Return a FeatureCollection for a route and the map it was planned on."""

    features: List[Dict] = [
        _feature(
            {"type": "LineString", "coordinates": _coordinates(path)},
            {"name": "Flight Path", "color": FLIGHT_PATH_COLOUR},
        )
    ]
    if delivery_point is not None:
        features.append(
            _feature(
                {"type": "Point", "coordinates": [delivery_point.lng, delivery_point.lat]},
                {
                    "name": delivery_point_name,
                    "marker-symbol": "building",
                    "marker-color": DELIVERY_POINT_COLOUR,
                },
            )
        )
    if central_area is not None:
        features.append(
            _feature(
                {"type": "Polygon", "coordinates": [_closed_ring(central_area)]},
                {"name": central_area.name, "fill": "none"},
            )
        )
    for restaurant in restaurants:
        features.append(
            _feature(
                {
                    "type": "Point",
                    "coordinates": [restaurant.location.lng, restaurant.location.lat],
                },
                {
                    "name": restaurant.name,
                    "marker-color": RESTAURANT_COLOUR,
                    "marker-symbol": "building",
                },
            )
        )
    for zone in no_fly_zones:
        features.append(
            _feature(
                {"type": "Polygon", "coordinates": [_closed_ring(zone)]},
                {"name": zone.name, "fill": NO_FLY_ZONE_FILL},
            )
        )
    return {"type": "FeatureCollection", "features": features}


def regions_from_geojson(payload: str, default_name: str = "region") -> List[NamedRegion]:
    """Parse Polygon geometries from a Polygon, Feature or FeatureCollection.

    Only the outer ring of each polygon is used. Every region is validated
    as a closed polygon before it is returned.
    """

    try:
        document = json.loads(payload)
    except json.JSONDecodeError as error:
        raise ValueError("GeoJSON payload is invalid JSON") from error
    if not isinstance(document, dict):
        raise ValueError("GeoJSON payload must be an object")

    if document.get("type") == "FeatureCollection":
        features = document.get("features") or []
    elif document.get("type") == "Feature":
        features = [document]
    else:
        features = [{"geometry": document, "properties": {}}]

    regions: List[NamedRegion] = []
    for index, feature in enumerate(features):
        geometry = feature.get("geometry") if isinstance(feature, dict) else None
        if not isinstance(geometry, dict) or geometry.get("type") != "Polygon":
            raise ValueError("Only polygon GeoJSON payloads are supported")
        coordinates = geometry.get("coordinates")
        if not coordinates:
            raise ValueError("Polygon coordinates are required")
        properties = feature.get("properties") or {}
        name = properties.get("name") or f"{default_name}-{index + 1}"
        try:
            vertices = [LngLat(float(point[0]), float(point[1])) for point in coordinates[0]]
        except (TypeError, KeyError, IndexError, ValueError) as error:
            raise ValueError(f"Malformed polygon coordinates in {name!r}") from error
        regions.append(NamedRegion(name=name, vertices=vertices).validate())
    return regions
