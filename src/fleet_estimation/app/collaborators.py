"""Interfaces and stand-ins for the systems around the estimators.

Ships come from a repository. Weather and usage telemetry come from sensor
feeds, mocked here with pseudo-random values in the ranges those feeds report.
"""

from __future__ import annotations

import threading
from typing import Iterable, Protocol, Sequence, runtime_checkable

import numpy as np

from ..core.entities import (
    WEATHER_CONDITIONS,
    GeoPoint,
    ShipProfile,
    UsageTelemetry,
    WeatherObservation,
    utc_now,
)
from ..core.errors import ValidationError


@runtime_checkable
class ShipRepository(Protocol):
    def get(self, ship_id: str) -> ShipProfile:
        """Ship snapshot by id; raises ValidationError for unknown ids."""
        ...


class InMemoryShipRepository:
    """Ship repository backed by a dict."""

    def __init__(self, ships: Iterable[ShipProfile] = ()):
        self._ships = {ship.ship_id: ship for ship in ships}
        self._lock = threading.Lock()

    def add(self, ship: ShipProfile) -> None:
        with self._lock:
            self._ships[ship.ship_id] = ship

    def get(self, ship_id: str) -> ShipProfile:
        with self._lock:
            try:
                return self._ships[ship_id]
            except KeyError:
                raise ValidationError(f"Ship not found: {ship_id}") from None

    def __len__(self):
        return len(self._ships)


def mock_weather(
    point: GeoPoint = None,
    rng: np.random.Generator = None,
    timestamp: np.datetime64 = None,
) -> WeatherObservation:
    """Pseudo-random weather observation; the position does not matter."""
    rng = np.random.default_rng() if rng is None else rng
    condition = WEATHER_CONDITIONS[rng.integers(len(WEATHER_CONDITIONS))]

    wind_speed = 5 + rng.uniform() * 25
    wave_height = 0.5 + rng.uniform() * 4
    visibility = 8 + rng.uniform() * 7
    if condition == "storm":
        wind_speed += 15
        wave_height += 2
        visibility *= 0.3
    elif condition == "fog":
        visibility *= 0.2

    return WeatherObservation(
        timestamp=utc_now() if timestamp is None else np.datetime64(timestamp, "s"),
        condition=str(condition),
        wind_speed_knots=round(float(wind_speed), 1),
        wave_height_meters=round(float(wave_height), 1),
        visibility_km=round(float(visibility), 1),
        temperature=float(10 + rng.uniform() * 25),
        humidity=float(40 + rng.uniform() * 50),
        pressure=float(1000 + rng.uniform() * 40),
    )


def mock_route_forecast(
    waypoints: Sequence, rng: np.random.Generator = None
) -> tuple[WeatherObservation, ...]:
    """One mock observation per waypoint, stamped with the waypoint time."""
    rng = np.random.default_rng() if rng is None else rng
    return tuple(
        mock_weather(
            point=GeoPoint(latitude=w.latitude, longitude=w.longitude),
            rng=rng,
            timestamp=getattr(w, "timestamp", None),
        )
        for w in waypoints
    )


def mock_usage_telemetry(
    ship: ShipProfile, rng: np.random.Generator = None, now: np.datetime64 = None
) -> UsageTelemetry:
    """Plausible telemetry for a ship without sensor data."""
    rng = np.random.default_rng() if rng is None else rng
    now = utc_now() if now is None else np.datetime64(now, "s")
    return UsageTelemetry(
        engine_hours=float(ship.age_years(now) * 2000 + rng.uniform() * 1000),
        operating_hours_per_day=float(18 + rng.uniform() * 6),
        average_speed_knots=float(12 + rng.uniform() * 8),
        average_load_factor=float(0.6 + rng.uniform() * 0.3),
        average_wave_height=float(1 + rng.uniform() * 3),
        average_wind_speed=float(10 + rng.uniform() * 15),
        operating_temperature=float(20 + rng.uniform() * 20),
        complex_routes=bool(rng.uniform() > 0.7),
        last_maintenance_date=now - np.timedelta64(180, "D"),
    )
