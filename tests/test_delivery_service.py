"""Mini README: Tests for the delivery path orchestration service.

Structure:
    * snapshot tests - map data is fetched once per request.
    * planning tests - valid orders produce restaurant-to-drop-off routes.
    * failure tests - invalid orders and upstream errors propagate.
"""

import logging
from datetime import date

import pytest

from pizzadrone.data_source import DataSourceError
from pizzadrone.delivery import DeliveryPathService, InvalidOrderError
from pizzadrone.orders import (
    CreditCardInformation,
    Order,
    OrderValidationCode,
    Pizza,
)
from pizzadrone.route_planning import LngLat


def _order(total = 2500):
    return Order(
        order_no="ORDER001",
        order_date=date(2025, 1, 11),
        price_total_in_pence=total,
        credit_card_information=CreditCardInformation("4172767827650837", "06/26", "989"),
        pizzas_in_order=[Pizza("R1: Margarita", 1000), Pizza("R1: Calzone", 1400)],
    )


def test_validate_order_only_fetches_restaurants(unit_data_source, unit_settings):
    service = DeliveryPathService(unit_data_source, unit_settings)
    assert service.validate_order(_order()).is_valid
    assert unit_data_source.calls == ["restaurants"]


def test_calc_delivery_path_runs_from_restaurant_to_drop_off(
    unit_data_source, unit_settings
):
    """The route starts at the restaurant serving the first pizza."""

    service = DeliveryPathService(unit_data_source, unit_settings)
    path = service.calc_delivery_path(_order())

    assert path[0] == LngLat(2.0, 10.0)
    assert path[-1] == unit_settings.delivery_point
    assert sorted(unit_data_source.calls) == ["centralArea", "noFlyZones", "restaurants"]


def test_invalid_order_raises_with_validation_result(unit_data_source, unit_settings):
    service = DeliveryPathService(unit_data_source, unit_settings)
    with pytest.raises(InvalidOrderError) as caught:
        service.calc_delivery_path(_order(total=1))
    assert caught.value.result.order_validation_code is OrderValidationCode.TOTAL_INCORRECT


def test_upstream_failures_propagate(
    make_data_source, restaurants, unit_central_area, unit_settings
):
    source = make_data_source(restaurants, [], unit_central_area, error=DataSourceError("down"))
    service = DeliveryPathService(source, unit_settings)
    with pytest.raises(DataSourceError):
        service.calc_delivery_path(_order())


def test_unexpected_central_area_name_is_logged(
    make_data_source, make_square, restaurants, unit_settings, caplog
):
    source = make_data_source(restaurants, [], make_square("downtown", 0.0, 0.0, 20.0, 20.0))
    service = DeliveryPathService(source, unit_settings)
    with caplog.at_level(logging.WARNING):
        snapshot = service.load_snapshot()
    assert snapshot.central_area.name == "downtown"
    assert "expected 'central'" in caplog.text


def test_geojson_route_includes_map_context(unit_data_source, unit_settings):
    service = DeliveryPathService(unit_data_source, unit_settings)
    document = service.calc_delivery_path_geojson(_order())

    names = [feature["properties"]["name"] for feature in document["features"]]
    assert names[0] == "Flight Path"
    assert "Appleton Tower" in names
    assert "Block" in names
    coordinates = document["features"][0]["geometry"]["coordinates"]
    assert coordinates[0] == [2.0, 10.0]
    assert coordinates[-1] == [18.0, 10.0]
