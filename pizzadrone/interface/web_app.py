"""Mini README: FastAPI-powered HTTP service for Pizzadrone.

Structure:
    * create_application - application factory wiring routes and services.
    * _require_* helpers - request checks mapped to 400 responses.

Geometry endpoints answer directly from the route planning core. Order and
delivery endpoints go through ``DeliveryPathService``, which fetches map
data from the upstream REST service on every request. Blocking endpoints are
plain functions so FastAPI runs them in its worker thread pool.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from ..configuration import PizzadroneSettings, get_settings
from ..data_source import DataSourceError, RestDataClient
from ..delivery import DeliveryPathService, InvalidOrderError
from ..logging_utils import configure_root_logger, get_logger
from ..orders import Order
from ..route_planning import (
    NoMatchingHeading,
    euclidean_distance,
    in_region_or_on_boundary,
    is_close,
    is_closed_polygon,
    next_position,
)
from .schemas import (
    IsInRegionRequest,
    NextPositionRequest,
    OrderRequest,
    PositionBody,
    PositionPairRequest,
)

LOGGER = get_logger(__name__)


def _bad_request(message: str) -> HTTPException:
    LOGGER.debug("Rejecting request: %s", message)
    return HTTPException(status_code=400, detail=message)


def _require_position(position: Optional[PositionBody], label: str) -> PositionBody:
    if position is None:
        raise _bad_request(f"Invalid Position Data: {label} is missing")
    if not position.is_valid():
        raise _bad_request(
            f"Invalid Position Data: Latitude or Longitude of the {label} are missing or out of range"
        )
    return position


def _require_order(body: OrderRequest) -> Order:
    missing = body.missing_fields()
    if missing:
        raise _bad_request(f"Invalid Order: missing or invalid {', '.join(missing)}")
    return body.to_order()


def create_application(
    service: Optional[DeliveryPathService] = None,
    settings: Optional[PizzadroneSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level.upper())
    if service is None:
        client = RestDataClient(
            settings.data_api_url,
            timeout=settings.request_timeout_seconds,
            retries=settings.request_retries,
            retry_delay=settings.request_retry_delay_seconds,
        )
        service = DeliveryPathService(client, settings)

    app = FastAPI(title="Pizzadrone Delivery Service", version="0.1.0")

    @app.exception_handler(RequestValidationError)
    async def _malformed_body(request: Request, error: RequestValidationError) -> JSONResponse:
        LOGGER.debug("Malformed request body for %s: %s", request.url.path, error.errors())
        return JSONResponse(status_code=400, content={"detail": "Malformed request body"})

    @app.get("/uuid", response_class=PlainTextResponse)
    async def uuid() -> str:
        """Return the identifier of this deployment."""

        return settings.student_id

    @app.post("/distanceTo")
    async def distance_to(body: PositionPairRequest) -> float:
        """Return the planar distance between two positions."""

        first = _require_position(body.position1, "position1")
        second = _require_position(body.position2, "position2")
        return euclidean_distance(first.to_lnglat(), second.to_lnglat())

    @app.post("/isCloseTo")
    async def is_close_to(body: PositionPairRequest) -> bool:
        """Return whether two positions are within the proximity threshold."""

        first = _require_position(body.position1, "position1")
        second = _require_position(body.position2, "position2")
        return is_close(first.to_lnglat(), second.to_lnglat(), settings.proximity_threshold)

    @app.post("/nextPosition")
    async def next_position_endpoint(body: NextPositionRequest) -> Dict[str, float]:
        """Return the position one move along a compass angle (999 hovers)."""

        start = _require_position(body.start, "start position")
        if body.angle is None:
            raise _bad_request("Invalid Angle: Angle is missing.")
        try:
            moved = next_position(start.to_lnglat(), body.angle, settings.step_length)
        except NoMatchingHeading as error:
            raise _bad_request(
                "Invalid Angle: Must be a valid compass direction or 999 for hovering."
            ) from error
        return moved.as_dict()

    @app.post("/isInRegion")
    async def is_in_region(body: IsInRegionRequest) -> bool:
        """Return whether a position is inside a region or on its boundary."""

        if body.position is None:
            raise _bad_request("Invalid Position Data: position is missing")
        if body.region is None:
            raise _bad_request("Invalid Region Data: region is missing")
        if body.region.name is None:
            raise _bad_request("Invalid Region Data: region name is missing")
        if not body.region.vertices:
            raise _bad_request("Invalid Region Data: region boundary vertices are missing")
        if not all(vertex.is_valid() for vertex in body.region.vertices):
            raise _bad_request(
                "Invalid Vertices Data: Latitude or Longitude are missing or out of range"
            )
        region = body.region.to_region()
        if not is_closed_polygon(region.vertices):
            raise _bad_request(
                "Invalid Region Data: insufficient distinct vertices to form a closed region"
            )
        position = _require_position(body.position, "position")
        return in_region_or_on_boundary(region.vertices, position.to_lnglat())

    @app.post("/validateOrder")
    def validate_order(body: OrderRequest) -> Dict[str, str]:
        """Validate an order and report its status and validation code."""

        order = _require_order(body)
        try:
            result = service.validate_order(order)
        except DataSourceError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error
        return result.as_dict()

    @app.post("/calcDeliveryPath")
    def calc_delivery_path(body: OrderRequest) -> List[Dict[str, float]]:
        """Return the delivery route for a valid order."""

        order = _require_order(body)
        try:
            path = service.calc_delivery_path(order)
        except InvalidOrderError as error:
            raise _bad_request(str(error)) from error
        except DataSourceError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error
        LOGGER.info("Returning route with %s waypoints", len(path))
        return [point.as_dict() for point in path]

    @app.post("/calcDeliveryPathAsGeoJson")
    def calc_delivery_path_geojson(body: OrderRequest) -> Dict:
        """Return the delivery route and map context as GeoJSON."""

        order = _require_order(body)
        try:
            return service.calc_delivery_path_geojson(order)
        except InvalidOrderError as error:
            raise _bad_request(str(error)) from error
        except DataSourceError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error

    return app
