"""Mini README: Shared fixtures for the Pizzadrone test-suite.

Structure:
    * square - helper building a closed square region.
    * george_square_zone / edinburgh_central_area - the Edinburgh map.
    * unit_* - a small planar map (central area 0..20, Block 8..12) for fast runs.
    * restaurants / order_payload - order validation data.
    * StubDataSource - in-memory replacement for the REST client.
    * unit_settings - service settings matching the unit map.
"""

import pytest

from pizzadrone.configuration import PizzadroneSettings
from pizzadrone.orders import Pizza, Restaurant
from pizzadrone.route_planning import LngLat, NamedRegion


def square(name, min_lng, min_lat, max_lng, max_lat):
    """Return a square region with the first vertex repeated at the end."""

    return NamedRegion(
        name=name,
        vertices=[
            LngLat(min_lng, max_lat),
            LngLat(min_lng, min_lat),
            LngLat(max_lng, min_lat),
            LngLat(max_lng, max_lat),
            LngLat(min_lng, max_lat),
        ],
    )


class StubDataSource:
    """Serve fixed map data and count how often it was asked."""

    def __init__(self, restaurants, no_fly_zones, central_area, error=None):
        self.restaurants = list(restaurants)
        self.no_fly_zones = list(no_fly_zones)
        self.central_area = central_area
        self.error = error
        self.calls = []

    def _record(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def fetch_restaurants(self):
        self._record("restaurants")
        return list(self.restaurants)

    def fetch_no_fly_zones(self):
        self._record("noFlyZones")
        return list(self.no_fly_zones)

    def fetch_central_area(self):
        self._record("centralArea")
        return self.central_area


@pytest.fixture
def george_square_zone():
    return NamedRegion(
        name="George Square Area",
        vertices=[
            LngLat(-3.19057881832123, 55.9440241257753),
            LngLat(-3.18998873233795, 55.9428465054091),
            LngLat(-3.1870973110199, 55.9432881172426),
            LngLat(-3.18768203258514, 55.9444777403937),
            LngLat(-3.19057881832123, 55.9440241257753),
        ],
    )


@pytest.fixture
def edinburgh_central_area():
    return square("central", -3.192473, 55.942617, -3.184319, 55.946233)


@pytest.fixture
def unit_central_area():
    return square("central", 0.0, 0.0, 20.0, 20.0)


@pytest.fixture
def unit_no_fly_zone():
    return square("Block", 8.0, 8.0, 12.0, 12.0)


@pytest.fixture
def restaurants():
    return [
        Restaurant(
            name="Civerinos Slice",
            location=LngLat(2.0, 10.0),
            opening_days=("MONDAY", "TUESDAY", "FRIDAY", "SATURDAY"),
            menu=(
                Pizza("R1: Margarita", 1000),
                Pizza("R1: Calzone", 1400),
            ),
        ),
        Restaurant(
            name="Sora Lella Vegan Restaurant",
            location=LngLat(4.0, 4.0),
            opening_days=("MONDAY", "SATURDAY", "SUNDAY"),
            menu=(
                Pizza("R2: Meat Lover", 1400),
                Pizza("R2: Vegan Delight", 1100),
            ),
        ),
    ]


@pytest.fixture
def order_payload():
    """A valid order placed on Saturday 11 January 2025 at the first restaurant."""

    return {
        "orderNo": "26B2C04C",
        "orderDate": "2025-01-11",
        "orderStatus": "UNDEFINED",
        "orderValidationCode": "UNDEFINED",
        "priceTotalInPence": 2500,
        "pizzasInOrder": [
            {"name": "R1: Margarita", "priceInPence": 1000},
            {"name": "R1: Calzone", "priceInPence": 1400},
        ],
        "creditCardInformation": {
            "creditCardNumber": "4172767827650837",
            "creditCardExpiry": "06/26",
            "cvv": "989",
        },
    }


@pytest.fixture
def make_square():
    return square


@pytest.fixture
def unit_data_source(restaurants, unit_no_fly_zone, unit_central_area):
    return StubDataSource(restaurants, [unit_no_fly_zone], unit_central_area)


@pytest.fixture
def make_data_source():
    return StubDataSource


@pytest.fixture
def unit_settings():
    """Settings for the unit map: two-degree moves and a drop-off at (18, 10)."""

    return PizzadroneSettings(
        step_length=2.0,
        proximity_threshold=2.0,
        delivery_point_lng=18.0,
        delivery_point_lat=10.0,
        max_expansions=200_000,
    )
