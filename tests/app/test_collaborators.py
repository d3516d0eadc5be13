import numpy as np
import pytest

from fleet_estimation.app.collaborators import (
    InMemoryShipRepository,
    ShipRepository,
    mock_route_forecast,
    mock_usage_telemetry,
    mock_weather,
)
from fleet_estimation.app.route import generate_waypoints
from fleet_estimation.core import GeoPoint, ShipProfile
from fleet_estimation.core.errors import ValidationError
from fleet_estimation.core.entities import WEATHER_CONDITIONS


class TestInMemoryShipRepository:
    def test_get(self, ship):
        repository = InMemoryShipRepository([ship])
        assert isinstance(repository, ShipRepository)
        assert repository.get("SHIP-001") is ship
        assert len(repository) == 1

    def test_add_replaces(self, ship):
        repository = InMemoryShipRepository([ship])
        renamed = ShipProfile(ship_id="SHIP-001", name="Renamed")
        repository.add(renamed)
        assert repository.get("SHIP-001") is renamed
        assert len(repository) == 1

    def test_unknown_ship(self):
        with pytest.raises(ValidationError, match="Ship not found"):
            InMemoryShipRepository().get("GHOST")


def test_mock_weather_ranges():
    rng = np.random.default_rng(3)
    for _ in range(50):
        observation = mock_weather(GeoPoint(0, 0), rng=rng)
        assert observation.condition in WEATHER_CONDITIONS
        assert 5 <= observation.wind_speed_knots <= 45
        assert 0.5 <= observation.wave_height_meters <= 6.5
        assert 0 < observation.visibility_km <= 15
        assert 10 <= observation.temperature <= 35
        assert 40 <= observation.humidity <= 90
        assert 1000 <= observation.pressure <= 1040


def test_mock_route_forecast_follows_waypoints(now):
    waypoints = generate_waypoints(
        origin=GeoPoint(0, 0), destination=GeoPoint(5, 5), num_segments=4, time_start=now
    )
    forecast = mock_route_forecast(waypoints, rng=np.random.default_rng(0))
    assert len(forecast) == 5
    assert [o.timestamp for o in forecast] == [w.timestamp for w in waypoints]


def test_mock_route_forecast_is_seeded(now):
    waypoints = generate_waypoints(
        origin=GeoPoint(0, 0), destination=GeoPoint(5, 5), time_start=now
    )
    a = mock_route_forecast(waypoints, rng=np.random.default_rng(7))
    b = mock_route_forecast(waypoints, rng=np.random.default_rng(7))
    assert a == b


def test_mock_usage_telemetry(ship, now):
    telemetry = mock_usage_telemetry(ship, rng=np.random.default_rng(0), now=now)
    assert telemetry.fields_present == 9
    assert 30_000 <= telemetry.engine_hours <= 31_000
    assert 18 <= telemetry.operating_hours_per_day <= 24
    assert 0.6 <= telemetry.average_load_factor <= 0.9
    assert telemetry.last_maintenance_date == now - np.timedelta64(180, "D")
