"""Command line interface for voyage planning and maintenance forecasts."""

from pathlib import Path
import logging

import click
import numpy as np

from ..core.entities import (
    ENGINE_TYPES,
    GeoPoint,
    Location,
    ShipProfile,
    UsageTelemetry,
    VoyageRequest,
    as_datetime64,
)
from ..core.errors import EstimationError
from .collaborators import mock_route_forecast, mock_usage_telemetry
from .config import EstimationConfig, PredictorConfig
from .context import EstimatorContext
from .planning import plan_voyage
from .route import generate_waypoints


def build_context(predictor: str = "formula", seed: int = None) -> EstimatorContext:
    """Estimator context from CLI parameters."""
    return EstimatorContext.from_config(
        EstimationConfig(predictor=PredictorConfig(kind=predictor), random_seed=seed)
    )


def _emit(result, output_format: str, output: str = None) -> None:
    if output_format == "msgpack":
        data = result.to_msgpack()
        if output is None:
            click.get_binary_stream("stdout").write(data)
            return
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    elif output is None:
        click.echo(result.to_json())
        return
    else:
        result.dump_json(output)
    click.echo(f"Results saved to {output}", err=True)


def _common_options(func):
    options = [
        click.option(
            "--predictor",
            type=click.Choice(["formula", "trained"], case_sensitive=False),
            default="formula",
            show_default=True,
            help="Closed-form formulas or perceptrons trained on synthetic data.",
        ),
        click.option("--seed", type=int, default=None, help="Random seed."),
        click.option(
            "--format",
            "output_format",
            type=click.Choice(["json", "msgpack"], case_sensitive=False),
            default="json",
            show_default=True,
        ),
        click.option(
            "--output",
            type=click.Path(dir_okay=False),
            default=None,
            help="Output file, stdout if omitted.",
        ),
        click.option("--ship-id", type=str, default="SHIP-001", show_default=True),
        click.option(
            "--engine-type",
            type=click.Choice(ENGINE_TYPES),
            default="diesel",
            show_default=True,
        ),
        click.option("--capacity-tons", type=float, default=None),
        click.option("--year-built", type=int, default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
def main(verbose):
    """Voyage and maintenance estimation for a merchant fleet."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@main.command("plan-voyage")
@_common_options
@click.option("--origin-name", type=str, default="New York", show_default=True)
@click.option("--origin-lat", type=float, default=40.7128, show_default=True)
@click.option("--origin-lon", type=float, default=-74.0060, show_default=True)
@click.option("--destination-name", type=str, default="London", show_default=True)
@click.option("--destination-lat", type=float, default=51.5074, show_default=True)
@click.option("--destination-lon", type=float, default=-0.1278, show_default=True)
@click.option("--cargo-tons", type=float, default=15000.0, show_default=True)
@click.option(
    "--departure-time",
    type=str,
    default=None,
    help="Departure in ISO format (e.g., 2024-01-01T00:00), now if omitted.",
)
@click.option(
    "--mock-weather/--no-mock-weather",
    default=False,
    help="Attach a pseudo-random forecast along the route.",
)
def plan_voyage_command(
    predictor,
    seed,
    output_format,
    output,
    ship_id,
    engine_type,
    capacity_tons,
    year_built,
    origin_name,
    origin_lat,
    origin_lon,
    destination_name,
    destination_lat,
    destination_lon,
    cargo_tons,
    departure_time,
    mock_weather,
):
    """Plan a voyage and estimate its fuel consumption."""
    try:
        origin = Location.from_coordinates(origin_name, origin_lat, origin_lon)
        destination = Location.from_coordinates(
            destination_name, destination_lat, destination_lon
        )
        departure = as_datetime64(departure_time)
        forecast = ()
        if mock_weather:
            forecast = mock_route_forecast(
                generate_waypoints(
                    origin=origin.point,
                    destination=destination.point,
                    time_start=departure,
                ),
                rng=np.random.default_rng(seed),
            )
        request = VoyageRequest(
            ship=ShipProfile(
                ship_id=ship_id,
                engine_type=engine_type,
                capacity_tons=capacity_tons,
                year_built=year_built,
            ),
            origin=origin,
            destination=destination,
            cargo_weight_tons=cargo_tons,
            departure_time=departure,
            weather_forecast=forecast,
        )
        plan = plan_voyage(build_context(predictor, seed), request)
    except EstimationError as error:
        raise click.ClickException(str(error)) from error
    _emit(plan, output_format, output)


@main.command("forecast-maintenance")
@_common_options
@click.option("--hull-material", type=str, default=None)
@click.option("--lat", "latitude", type=float, default=None, help="Current latitude.")
@click.option("--lon", "longitude", type=float, default=None, help="Current longitude.")
@click.option(
    "--mock-telemetry/--no-mock-telemetry",
    default=False,
    help="Use pseudo-random usage telemetry instead of fleet defaults.",
)
@click.option("--engine-hours", type=float, default=None)
@click.option("--hours-per-day", type=float, default=None)
@click.option(
    "--last-maintenance",
    type=str,
    default=None,
    help="Date of the last maintenance in ISO format.",
)
def forecast_maintenance_command(
    predictor,
    seed,
    output_format,
    output,
    ship_id,
    engine_type,
    capacity_tons,
    year_built,
    hull_material,
    latitude,
    longitude,
    mock_telemetry,
    engine_hours,
    hours_per_day,
    last_maintenance,
):
    """Forecast maintenance of all components of a ship."""
    try:
        location = None
        if latitude is not None or longitude is not None:
            location = GeoPoint(latitude=latitude, longitude=longitude)
        ship = ShipProfile(
            ship_id=ship_id,
            engine_type=engine_type,
            capacity_tons=capacity_tons,
            year_built=year_built,
            current_location=location,
            hull_material=hull_material,
        )
        if mock_telemetry:
            telemetry = mock_usage_telemetry(ship, rng=np.random.default_rng(seed))
        else:
            telemetry = UsageTelemetry(
                engine_hours=engine_hours,
                operating_hours_per_day=hours_per_day,
                last_maintenance_date=last_maintenance,
            )
        forecast = build_context(predictor, seed).maintenance.forecast(ship, telemetry)
    except EstimationError as error:
        raise click.ClickException(str(error)) from error
    _emit(forecast, output_format, output)


if __name__ == "__main__":
    main()
