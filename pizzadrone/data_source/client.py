"""Mini README: REST client for restaurants, no-fly zones and the central area.

Structure:
    * DataSourceError - raised when the upstream service fails or misbehaves.
    * region_from_payload / restaurant_from_payload - JSON to domain objects.
    * RestDataClient - ``requests`` session with timeouts and retry attempts.

Regions are validated as closed polygons when they are fetched so the
planner never sees a degenerate boundary. Transient HTTP failures are
retried here with a fixed delay; client errors (4xx) are not retried and
the planner itself never retries.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..logging_utils import get_logger
from ..orders import Pizza, Restaurant
from ..route_planning import InvalidPolygon, LngLat, NamedRegion

LOGGER = get_logger(__name__)

RESTAURANTS_PATH = "/restaurants"
NO_FLY_ZONES_PATH = "/noFlyZones"
CENTRAL_AREA_PATH = "/centralArea"


class DataSourceError(RuntimeError):
    """Raised when map data cannot be retrieved or parsed."""


def _position_from_payload(payload: Mapping[str, Any]) -> LngLat:
    try:
        return LngLat(float(payload["lng"]), float(payload["lat"]))
    except (KeyError, TypeError, ValueError) as error:
        raise DataSourceError(f"Malformed position payload: {payload!r}") from error


def region_from_payload(payload: Mapping[str, Any]) -> NamedRegion:
    """Build and validate a ``NamedRegion`` from ``{"name", "vertices"}``."""

    try:
        name = str(payload["name"])
        vertices = [_position_from_payload(vertex) for vertex in payload["vertices"]]
    except (KeyError, TypeError) as error:
        raise DataSourceError(f"Malformed region payload: {payload!r}") from error
    return NamedRegion(name=name, vertices=vertices).validate()


def restaurant_from_payload(payload: Mapping[str, Any]) -> Restaurant:
    """Build a ``Restaurant`` from the upstream JSON representation."""

    try:
        menu = tuple(
            Pizza(name=str(item["name"]), price_in_pence=int(item["priceInPence"]))
            for item in payload.get("menu", [])
        )
        return Restaurant(
            name=str(payload["name"]),
            location=_position_from_payload(payload["location"]),
            opening_days=tuple(str(day).upper() for day in payload.get("openingDays", [])),
            menu=menu,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as error:
        raise DataSourceError(f"Malformed restaurant payload: {payload!r}") from error


class RestDataClient:
    """Fetch map data from the upstream REST service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 3,
        retry_delay: float = 0.5,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay
        self.session = session if session is not None else requests.Session()
        LOGGER.debug("Initialised RestDataClient for %s", self.base_url)

    def _fetch(self, url: str) -> requests.Response:
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()
                return response
            except requests.HTTPError as error:
                status = getattr(error.response, "status_code", None)
                if status is not None and 400 <= status < 500 and status != 429:
                    raise DataSourceError(f"Failed to fetch {url}: {error}") from error
                failure = error
            except requests.RequestException as error:
                failure = error
            LOGGER.warning("Attempt %s/%s for %s failed: %s", attempt, attempts, url, failure)
            if attempt < attempts:
                time.sleep(self.retry_delay)
        LOGGER.error("Giving up on %s after %s attempts", url, attempts)
        raise DataSourceError(f"Failed to fetch {url}: {failure}") from failure

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        LOGGER.debug("Fetching %s", url)
        response = self._fetch(url)
        try:
            return response.json()
        except ValueError as error:
            raise DataSourceError(f"Invalid JSON returned by {url}") from error

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        payload = self._get_json(path)
        if not isinstance(payload, list):
            raise DataSourceError(f"Expected a JSON list from {path}")
        return payload

    def fetch_restaurants(self) -> List[Restaurant]:
        restaurants = [restaurant_from_payload(item) for item in self._get_list(RESTAURANTS_PATH)]
        LOGGER.info("Fetched %s restaurants", len(restaurants))
        return restaurants

    def _region(self, payload: Any) -> NamedRegion:
        try:
            return region_from_payload(payload)
        except InvalidPolygon as error:
            raise DataSourceError(f"Upstream region is not a closed polygon: {error}") from error

    def fetch_no_fly_zones(self) -> List[NamedRegion]:
        zones = [self._region(item) for item in self._get_list(NO_FLY_ZONES_PATH)]
        LOGGER.info("Fetched %s no-fly zones", len(zones))
        return zones

    def fetch_central_area(self) -> NamedRegion:
        payload = self._get_json(CENTRAL_AREA_PATH)
        if not isinstance(payload, dict):
            raise DataSourceError("Expected a JSON object for the central area")
        return self._region(payload)
