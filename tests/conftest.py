"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from fleet_estimation.app import EstimationConfig, EstimatorContext
from fleet_estimation.core import Location, ShipProfile, VoyageRequest, WeatherObservation


@pytest.fixture
def now():
    return np.datetime64("2025-06-01T00:00:00", "s")


@pytest.fixture
def new_york():
    return Location.from_coordinates("New York", 40.7128, -74.0060)


@pytest.fixture
def london():
    return Location.from_coordinates("London", 51.5074, -0.1278)


@pytest.fixture
def ship():
    return ShipProfile(ship_id="SHIP-001", engine_type="diesel", year_built=2010)


@pytest.fixture
def voyage_request(ship, new_york, london):
    return VoyageRequest(
        ship=ship,
        origin=new_york,
        destination=london,
        cargo_weight_tons=15_000.0,
    )


@pytest.fixture
def stormy_forecast():
    return (
        WeatherObservation(
            condition="storm", wind_speed_knots=35, wave_height_meters=6, visibility_km=0.5
        ),
        WeatherObservation(
            condition="storm", wind_speed_knots=28, wave_height_meters=5, visibility_km=2
        ),
    )


@pytest.fixture
def context():
    return EstimatorContext.from_config(EstimationConfig(random_seed=0))
