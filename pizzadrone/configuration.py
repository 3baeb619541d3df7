"""Mini README: Centralised configuration models and helpers for Pizzadrone.

Structure:
    * PizzadroneSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``PIZZADRONE_``), pick the upstream data service, and tune the movement
    model. The route planning core never reads these settings directly; the
    delivery service converts them into a ``PlannerConfig`` with
    ``planner_config`` and passes that to the planner.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .route_planning import LngLat, PlannerConfig


class PizzadroneSettings(BaseSettings):
    """Runtime configuration for the Pizzadrone service."""

    model_config = SettingsConfigDict(
        env_prefix="PIZZADRONE_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8080,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    student_id: str = Field("s2328889", description="Identifier returned by /uuid.")

    data_api_url: str = Field(
        "https://ilp-rest-2024.azurewebsites.net",
        description="Base URL of the service publishing restaurants and regions.",
    )
    request_timeout_seconds: float = Field(10.0, gt=0)
    request_retries: int = Field(3, ge=0)
    request_retry_delay_seconds: float = Field(0.5, ge=0)

    step_length: float = Field(
        0.00015,
        description="Distance in degrees covered by one compass move.",
        gt=0,
    )
    proximity_threshold: float = Field(
        0.00015,
        description="Distance below which two positions count as close.",
        gt=0,
    )
    max_moves: int = Field(
        2000,
        description="Upper bound on acceptable route length, checked by callers.",
        ge=1,
    )
    max_expansions: int = Field(
        500_000,
        description="Search guard handed to the planner; 0 disables it.",
        ge=0,
    )
    central_region_name: str = Field("central")
    delivery_point_name: str = Field("Appleton Tower")
    delivery_point_lng: float = Field(-3.186874, ge=-180, le=180)
    delivery_point_lat: float = Field(55.944494, ge=-90, le=90)

    order_charge_in_pence: int = Field(100, ge=0)
    max_pizzas_per_order: int = Field(4, ge=1)

    @field_validator("data_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        """Normalise the base URL so endpoint paths can be appended."""

        return value.rstrip("/")

    @property
    def delivery_point(self) -> LngLat:
        """Return the fixed drop-off location."""

        return LngLat(self.delivery_point_lng, self.delivery_point_lat)

    def planner_config(self) -> PlannerConfig:
        """Build the explicit planner configuration from these settings."""

        return PlannerConfig(
            step_length=self.step_length,
            proximity_threshold=self.proximity_threshold,
            max_expansions=self.max_expansions or None,
        )


@lru_cache()
def get_settings() -> PizzadroneSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PizzadroneSettings()
