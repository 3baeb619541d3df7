"""Mini README: Access to the upstream service publishing map data.

Exports the REST client plus the payload parsers so tests and the CLI can
build domain objects from the same JSON shapes the service returns.
"""

from .client import (
    DataSourceError,
    RestDataClient,
    region_from_payload,
    restaurant_from_payload,
)

__all__ = [
    "DataSourceError",
    "RestDataClient",
    "region_from_payload",
    "restaurant_from_payload",
]
