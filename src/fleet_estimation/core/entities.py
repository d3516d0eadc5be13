"""Input value types read by the estimators."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Sequence

import numpy as np
import pandas as pd

from .config import DEFAULT_CAPACITY_TONS, DEFAULT_YEAR_BUILT
from .errors import ValidationError

WEATHER_CONDITIONS = ("clear", "cloudy", "rain", "fog", "storm")
ENGINE_TYPES = ("diesel", "heavy-fuel-oil", "gas-turbine", "hybrid", "electric")


def utc_now() -> np.datetime64:
    """Current UTC time with seconds resolution."""
    return np.datetime64("now", "s")


def as_datetime64(value) -> np.datetime64 | None:
    """Cast str, datetime or datetime64 to datetime64[s]; None passes through."""
    if value is None:
        return None
    try:
        return np.datetime64(value, "s")
    except (TypeError, ValueError) as error:
        raise ValidationError(f"Invalid date: {value!r}") from error


def year_of(time: np.datetime64) -> int:
    """Calendar year of a datetime64."""
    return int(np.datetime64(time, "Y").astype(int)) + 1970


def days_between(start: np.datetime64, end: np.datetime64) -> float:
    """Fractional days from start to end."""
    return float((end - start) / np.timedelta64(1, "D"))


@dataclass(frozen=True)
class GeoPoint:
    """Position on the globe in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        for name, bound in (("latitude", 90.0), ("longitude", 180.0)):
            value = getattr(self, name)
            if value is None:
                raise ValidationError(f"Missing {name}")
            try:
                value = float(value)
            except (TypeError, ValueError) as error:
                raise ValidationError(f"Invalid {name}: {value!r}") from error
            if not np.isfinite(value) or abs(value) > bound:
                raise ValidationError(f"{name} out of range: {value}")
            object.__setattr__(self, name, value)

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class Location:
    """Named port or position."""

    name: str
    point: GeoPoint

    @classmethod
    def from_coordinates(cls, name: str, latitude: float, longitude: float):
        return cls(name=name, point=GeoPoint(latitude=latitude, longitude=longitude))


@dataclass(frozen=True)
class WeatherObservation:
    """One weather observation or forecast step."""

    timestamp: np.datetime64 | None = None
    condition: str = "clear"
    wind_speed_knots: float = 0.0
    wave_height_meters: float | None = None
    visibility_km: float = 10.0
    temperature: float | None = None
    humidity: float | None = None
    pressure: float | None = None

    def to_dict(self) -> dict:
        return {
            "timestamp": (
                None
                if self.timestamp is None
                else str(np.datetime_as_string(self.timestamp, unit="s"))
            ),
            "conditions": self.condition,
            "windSpeed": self.wind_speed_knots,
            "waveHeight": self.wave_height_meters,
            "visibility": self.visibility_km,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
        }


@dataclass(frozen=True)
class ShipProfile:
    """Snapshot of a ship as owned by the ship management system."""

    ship_id: str
    engine_type: str = "diesel"
    capacity_tons: float | None = None
    max_speed_knots: float | None = None
    year_built: int | None = None
    current_location: GeoPoint | None = None
    hull_material: str | None = None
    name: str | None = None

    @property
    def effective_capacity_tons(self) -> float:
        """Capacity with the fleet default for missing values."""
        return float(self.capacity_tons or DEFAULT_CAPACITY_TONS)

    def age_years(self, now: np.datetime64 = None) -> int:
        """Age in whole calendar years."""
        now = utc_now() if now is None else now
        return year_of(now) - int(self.year_built or DEFAULT_YEAR_BUILT)


@dataclass(frozen=True)
class VoyageRequest:
    """Everything needed to plan a single voyage."""

    ship: ShipProfile
    origin: Location
    destination: Location
    cargo_weight_tons: float
    departure_time: np.datetime64 | None = None
    weather_forecast: Sequence[WeatherObservation] = ()

    def __post_init__(self):
        if self.origin is None or self.destination is None:
            raise ValidationError("Origin and destination are required")
        if self.cargo_weight_tons is None:
            raise ValidationError("Cargo weight is required")
        try:
            cargo = float(self.cargo_weight_tons)
        except (TypeError, ValueError) as error:
            raise ValidationError(
                f"Invalid cargo weight: {self.cargo_weight_tons!r}"
            ) from error
        if not np.isfinite(cargo):
            raise ValidationError(f"Cargo weight must be finite: {cargo}")
        object.__setattr__(self, "cargo_weight_tons", cargo)
        if self.cargo_weight_tons < 0:
            raise ValidationError(
                f"Cargo weight must be non-negative: {self.cargo_weight_tons}"
            )
        object.__setattr__(self, "departure_time", as_datetime64(self.departure_time))
        object.__setattr__(self, "weather_forecast", tuple(self.weather_forecast or ()))


@dataclass(frozen=True)
class UsageTelemetry:
    """Operational telemetry of a ship; None marks a missing reading."""

    engine_hours: float | None = None
    operating_hours_per_day: float | None = None
    average_speed_knots: float | None = None
    average_load_factor: float | None = None
    average_wave_height: float | None = None
    average_wind_speed: float | None = None
    operating_temperature: float | None = None
    complex_routes: bool | None = None
    last_maintenance_date: np.datetime64 | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "last_maintenance_date", as_datetime64(self.last_maintenance_date)
        )

    @property
    def fields_present(self) -> int:
        """Number of populated readings."""
        return sum(getattr(self, f.name) is not None for f in fields(self))

    @property
    def data_frame(self):
        """Single-row data frame of all readings."""
        return pd.DataFrame(
            {f.name: getattr(self, f.name) for f in fields(self)},
            index=[
                0,
            ],
        )
