"""Mini README: Tests for the FastAPI HTTP interface.

Requests go through ``TestClient`` against an application wired to an
in-memory data source on the unit map, so no network access is needed.
"""

import pytest
from fastapi.testclient import TestClient

from pizzadrone.data_source import DataSourceError
from pizzadrone.delivery import DeliveryPathService
from pizzadrone.interface import create_application

SQUARE_VERTICES = [
    {"lng": 0.0, "lat": 0.0},
    {"lng": 4.0, "lat": 0.0},
    {"lng": 4.0, "lat": 4.0},
    {"lng": 0.0, "lat": 4.0},
    {"lng": 0.0, "lat": 0.0},
]


@pytest.fixture
def client(unit_data_source, unit_settings):
    service = DeliveryPathService(unit_data_source, unit_settings)
    return TestClient(create_application(service=service, settings=unit_settings))


@pytest.fixture
def failing_client(make_data_source, restaurants, unit_central_area, unit_settings):
    source = make_data_source(
        restaurants, [], unit_central_area, error=DataSourceError("upstream unavailable")
    )
    service = DeliveryPathService(source, unit_settings)
    return TestClient(create_application(service=service, settings=unit_settings))


def test_uuid_returns_identifier(client):
    response = client.get("/uuid")
    assert response.status_code == 200
    assert response.text == "s2328889"


def test_distance_to(client):
    response = client.post(
        "/distanceTo",
        json={"position1": {"lng": 0.0, "lat": 0.0}, "position2": {"lng": 3.0, "lat": 4.0}},
    )
    assert response.status_code == 200
    assert response.json() == pytest.approx(5.0)


@pytest.mark.parametrize(
    "body",
    [
        {"position1": {"lng": 0.0, "lat": 0.0}},
        {"position1": {"lng": 0.0}, "position2": {"lng": 1.0, "lat": 1.0}},
        {"position1": {"lng": 0.0, "lat": 91.0}, "position2": {"lng": 1.0, "lat": 1.0}},
        {"position1": "north", "position2": {"lng": 1.0, "lat": 1.0}},
    ],
)
def test_distance_to_rejects_bad_positions(client, body):
    assert client.post("/distanceTo", json=body).status_code == 400


def test_malformed_json_is_a_bad_request(client):
    response = client.post(
        "/distanceTo", content="{", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


def test_is_close_to_uses_configured_threshold(client):
    near = {"position1": {"lng": 0.0, "lat": 0.0}, "position2": {"lng": 1.0, "lat": 1.0}}
    far = {"position1": {"lng": 0.0, "lat": 0.0}, "position2": {"lng": 2.0, "lat": 0.0}}
    assert client.post("/isCloseTo", json=near).json() is True
    assert client.post("/isCloseTo", json=far).json() is False


def test_next_position_moves_one_step(client):
    response = client.post("/nextPosition", json={"start": {"lng": 1.0, "lat": 1.0}, "angle": 90})
    assert response.status_code == 200
    moved = response.json()
    assert moved["lng"] == pytest.approx(1.0)
    assert moved["lat"] == pytest.approx(3.0)

    hover = client.post("/nextPosition", json={"start": {"lng": 1.0, "lat": 1.0}, "angle": 999})
    assert hover.json() == {"lng": 1.0, "lat": 1.0}


@pytest.mark.parametrize(
    "body",
    [
        {"start": {"lng": 1.0, "lat": 1.0}, "angle": 10},
        {"start": {"lng": 1.0, "lat": 1.0}},
        {"angle": 90},
    ],
)
def test_next_position_rejects_bad_requests(client, body):
    assert client.post("/nextPosition", json=body).status_code == 400


def test_is_in_region(client):
    region = {"name": "square", "vertices": SQUARE_VERTICES}
    inside = client.post("/isInRegion", json={"position": {"lng": 2.0, "lat": 2.0}, "region": region})
    edge = client.post("/isInRegion", json={"position": {"lng": 4.0, "lat": 2.0}, "region": region})
    outside = client.post(
        "/isInRegion", json={"position": {"lng": 6.0, "lat": 2.0}, "region": region}
    )
    assert inside.json() is True
    assert edge.json() is True
    assert outside.json() is False


@pytest.mark.parametrize(
    "body",
    [
        {"region": {"name": "square", "vertices": SQUARE_VERTICES}},
        {"position": {"lng": 2.0, "lat": 2.0}},
        {"position": {"lng": 2.0, "lat": 2.0}, "region": {"vertices": SQUARE_VERTICES}},
        {"position": {"lng": 2.0, "lat": 2.0}, "region": {"name": "square", "vertices": []}},
        {
            "position": {"lng": 2.0, "lat": 2.0},
            "region": {"name": "line", "vertices": SQUARE_VERTICES[:2]},
        },
        {
            "position": {"lng": 2.0, "lat": 2.0},
            "region": {"name": "bad", "vertices": [{"lng": 0.0}] + SQUARE_VERTICES},
        },
        {
            "position": {"lng": 2.0, "lat": 200.0},
            "region": {"name": "square", "vertices": SQUARE_VERTICES},
        },
    ],
)
def test_is_in_region_rejects_bad_requests(client, body):
    assert client.post("/isInRegion", json=body).status_code == 400


def test_validate_order(client, order_payload):
    response = client.post("/validateOrder", json=order_payload)
    assert response.status_code == 200
    assert response.json() == {"orderStatus": "VALID", "orderValidationCode": "NO_ERROR"}

    order_payload["priceTotalInPence"] = 2400
    response = client.post("/validateOrder", json=order_payload)
    assert response.json() == {
        "orderStatus": "INVALID",
        "orderValidationCode": "TOTAL_INCORRECT",
    }


@pytest.mark.parametrize("field", ["orderDate", "priceTotalInPence", "creditCardInformation"])
def test_validate_order_requires_core_fields(client, order_payload, field):
    del order_payload[field]
    assert client.post("/validateOrder", json=order_payload).status_code == 400


def test_calc_delivery_path(client, order_payload):
    response = client.post("/calcDeliveryPath", json=order_payload)
    assert response.status_code == 200
    path = response.json()
    assert path[0] == {"lng": 2.0, "lat": 10.0}
    assert path[-1] == {"lng": 18.0, "lat": 10.0}


def test_calc_delivery_path_rejects_invalid_order(client, order_payload):
    order_payload["creditCardInformation"]["cvv"] = "12"
    response = client.post("/calcDeliveryPath", json=order_payload)
    assert response.status_code == 400
    assert "CVV_INVALID" in response.json()["detail"]


def test_calc_delivery_path_as_geojson(client, order_payload):
    response = client.post("/calcDeliveryPathAsGeoJson", json=order_payload)
    assert response.status_code == 200
    document = response.json()
    assert document["type"] == "FeatureCollection"
    assert document["features"][0]["geometry"]["type"] == "LineString"


@pytest.mark.parametrize(
    "path", ["/validateOrder", "/calcDeliveryPath", "/calcDeliveryPathAsGeoJson"]
)
def test_upstream_failure_is_a_bad_gateway(failing_client, order_payload, path):
    response = failing_client.post(path, json=order_payload)
    assert response.status_code == 502
    assert "upstream unavailable" in response.json()["detail"]
