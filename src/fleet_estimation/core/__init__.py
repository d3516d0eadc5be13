"""Core layer: value types, constant tables, normalization, weather scores, geodesics."""

from .config import (
    COMPONENT_TYPES,
    COMPONENT_SPECS,
    ENGINE_TABLES,
    EARTH_RADIUS_NAUTICAL_MILES,
    NOMINAL_SPEED_KNOTS,
    ComponentSpec,
    EngineTables,
    component_spec,
    engine_tables,
)
from .entities import (
    GeoPoint,
    Location,
    ShipProfile,
    UsageTelemetry,
    VoyageRequest,
    WeatherObservation,
)
from .errors import ColdStartError, ConfigurationError, EstimationError, ValidationError
from .geodesics import (
    coordinate_delta_degrees,
    get_distance_nautical_miles,
    interpolate_linear,
)
from .normalization import clamp, denormalize, normalize
from .weather import (
    fuel_sea_conditions,
    fuel_weather_impact,
    observation_severity,
    route_weather_score,
)

__all__ = [
    "COMPONENT_TYPES",
    "COMPONENT_SPECS",
    "ENGINE_TABLES",
    "EARTH_RADIUS_NAUTICAL_MILES",
    "NOMINAL_SPEED_KNOTS",
    "ComponentSpec",
    "EngineTables",
    "component_spec",
    "engine_tables",
    "GeoPoint",
    "Location",
    "ShipProfile",
    "UsageTelemetry",
    "VoyageRequest",
    "WeatherObservation",
    "ColdStartError",
    "ConfigurationError",
    "EstimationError",
    "ValidationError",
    "coordinate_delta_degrees",
    "get_distance_nautical_miles",
    "interpolate_linear",
    "clamp",
    "denormalize",
    "normalize",
    "fuel_sea_conditions",
    "fuel_weather_impact",
    "observation_severity",
    "route_weather_score",
]
