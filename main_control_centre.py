"""Mini README: Entry point CLI for the Pizzadrone delivery service.

This script exposes a Typer CLI with two commands:
    * serve - start the FastAPI application through uvicorn.
    * plan - plan a single route offline and print it as JSON.

Settings come from ``PIZZADRONE_`` environment variables (or ``.env``) and
can be overridden per invocation with command options.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from pizzadrone.configuration import get_settings
from pizzadrone.logging_utils import configure_root_logger
from pizzadrone.route_planning import LngLat, NamedRegion, RoutePlanner
from pizzadrone.utils.geojson import regions_from_geojson, route_to_geojson

cli = typer.Typer(help="Serve and exercise the Pizzadrone route planner.")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level.upper())

    # Browsers cannot open the 0.0.0.0 sentinel, so suggest localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Pizzadrone on {effective_host}:{effective_port}.\n"
        f"Try http://{browser_host}:{effective_port}/docs for the API reference."
    )
    uvicorn.run(
        "pizzadrone.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


def _load_regions(path: Optional[Path], default_name: str) -> List[NamedRegion]:
    if path is None:
        return []
    return regions_from_geojson(path.read_text(encoding="utf-8"), default_name=default_name)


@cli.command()
def plan(
    origin_lng: float = typer.Option(..., help="Longitude of the start position."),
    origin_lat: float = typer.Option(..., help="Latitude of the start position."),
    destination_lng: float = typer.Option(None, help="Defaults to the delivery point."),
    destination_lat: float = typer.Option(None, help="Defaults to the delivery point."),
    central_area: Path = typer.Option(
        ..., exists=True, readable=True, help="GeoJSON polygon of the central area."
    ),
    no_fly_zones: Optional[Path] = typer.Option(
        None, exists=True, readable=True, help="GeoJSON polygons the route must avoid."
    ),
    geojson: bool = typer.Option(False, help="Print a GeoJSON FeatureCollection."),
) -> None:
    """Plan one route with the configured movement model and print it."""

    settings = get_settings()
    configure_root_logger(settings.log_level.upper())
    destination = settings.delivery_point
    if destination_lng is not None and destination_lat is not None:
        destination = LngLat(destination_lng, destination_lat)

    try:
        centrals = _load_regions(central_area, settings.central_region_name)
        if len(centrals) != 1:
            raise ValueError(
                f"Central area file must contain exactly one polygon, found {len(centrals)}"
            )
        central = centrals[0]
        zones = _load_regions(no_fly_zones, "no-fly")
    except ValueError as error:
        typer.echo(f"Could not read regions: {error}", err=True)
        raise typer.Exit(code=2) from error

    planner = RoutePlanner(settings.planner_config())
    path = planner.plan(LngLat(origin_lng, origin_lat), destination, zones, central)
    if not path:
        typer.echo("No route found.", err=True)
        raise typer.Exit(code=1)
    if len(path) > settings.max_moves:
        typer.echo(
            f"Warning: route uses {len(path)} moves, above the limit of {settings.max_moves}.",
            err=True,
        )

    if geojson:
        payload = route_to_geojson(
            path,
            delivery_point=destination,
            delivery_point_name=settings.delivery_point_name,
            central_area=central,
            no_fly_zones=zones,
        )
    else:
        payload = [point.as_dict() for point in path]
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    cli()
