"""Mini README: Delivery path orchestration.

Structure:
    * MapDataSource - protocol implemented by ``RestDataClient`` and test stubs.
    * MapSnapshot - restaurants and regions fetched once for a request.
    * InvalidOrderError - raised when a route is requested for a bad order.
    * DeliveryPathService - validates orders and plans restaurant-to-drop routes.

Every request fetches a fresh snapshot of the map data and builds its own
planner run, so concurrent requests share nothing mutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence

from ..configuration import PizzadroneSettings
from ..logging_utils import get_logger
from ..orders import Order, OrderValidationResult, OrderValidator, Restaurant
from ..route_planning import LngLat, NamedRegion, RoutePlanner
from ..utils.geojson import route_to_geojson

LOGGER = get_logger(__name__)


class MapDataSource(Protocol):
    def fetch_restaurants(self) -> List[Restaurant]:
        ...

    def fetch_no_fly_zones(self) -> List[NamedRegion]:
        ...

    def fetch_central_area(self) -> NamedRegion:
        ...


@dataclass(frozen=True, slots=True)
class MapSnapshot:
    """Immutable view of the map data used for a single request."""

    restaurants: Sequence[Restaurant]
    no_fly_zones: Sequence[NamedRegion]
    central_area: NamedRegion


class InvalidOrderError(ValueError):
    """Raised when a delivery path is requested for an order that failed validation."""

    def __init__(self, result: OrderValidationResult) -> None:
        super().__init__(f"Invalid order: {result.order_validation_code.value}")
        self.result = result


class DeliveryPathService:
    """Validate orders and plan delivery routes to the drop-off point."""

    def __init__(self, data_source: MapDataSource, settings: PizzadroneSettings) -> None:
        self.data_source = data_source
        self.settings = settings
        self.planner = RoutePlanner(settings.planner_config())

    def load_snapshot(self) -> MapSnapshot:
        central_area = self.data_source.fetch_central_area()
        if central_area.name != self.settings.central_region_name:
            LOGGER.warning(
                "Central area is named '%s', expected '%s'",
                central_area.name,
                self.settings.central_region_name,
            )
        return MapSnapshot(
            restaurants=tuple(self.data_source.fetch_restaurants()),
            no_fly_zones=tuple(self.data_source.fetch_no_fly_zones()),
            central_area=central_area,
        )

    def _validator(self, restaurants: Sequence[Restaurant]) -> OrderValidator:
        return OrderValidator(
            restaurants,
            charge_in_pence=self.settings.order_charge_in_pence,
            max_pizzas=self.settings.max_pizzas_per_order,
        )

    def validate_order(self, order: Order) -> OrderValidationResult:
        """Validate ``order`` against the current restaurant list."""

        return self._validator(self.data_source.fetch_restaurants()).validate(order)

    def _plan(self, order: Order, snapshot: MapSnapshot) -> List[LngLat]:
        validator = self._validator(snapshot.restaurants)
        result = validator.validate(order)
        if not result.is_valid:
            raise InvalidOrderError(result)

        restaurant = validator.find_restaurant(order.pizzas_in_order[0].name)
        LOGGER.info(
            "Planning delivery for order %s from '%s'", order.order_no, restaurant.name
        )
        path = self.planner.plan(
            restaurant.location,
            self.settings.delivery_point,
            snapshot.no_fly_zones,
            snapshot.central_area,
        )
        if not path:
            LOGGER.warning("No route exists for order %s", order.order_no)
        elif len(path) > self.settings.max_moves:
            LOGGER.warning(
                "Route for order %s uses %s moves, above the limit of %s",
                order.order_no,
                len(path),
                self.settings.max_moves,
            )
        return path

    def calc_delivery_path(self, order: Order) -> List[LngLat]:
        """Return the waypoints from the order's restaurant to the drop-off point."""

        return self._plan(order, self.load_snapshot())

    def calc_delivery_path_geojson(self, order: Order) -> Dict:
        """Return the delivery route as a GeoJSON FeatureCollection."""

        snapshot = self.load_snapshot()
        path = self._plan(order, snapshot)
        return route_to_geojson(
            path,
            delivery_point=self.settings.delivery_point,
            delivery_point_name=self.settings.delivery_point_name,
            central_area=snapshot.central_area,
            no_fly_zones=snapshot.no_fly_zones,
            restaurants=snapshot.restaurants,
        )
