"""Mini README: Delivery orchestration package.

Ties order validation, map data retrieval and route planning together. The
`service` module contains the primary public API.
"""

from .service import DeliveryPathService, InvalidOrderError, MapSnapshot

__all__ = ["DeliveryPathService", "InvalidOrderError", "MapSnapshot"]
