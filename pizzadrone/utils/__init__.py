"""Mini README: Utility helper functions for Pizzadrone.

Currently exports the GeoJSON helpers used to render delivery routes and to
read polygon files supplied on the command line.
"""

from .geojson import regions_from_geojson, route_to_geojson

__all__ = ["regions_from_geojson", "route_to_geojson"]
