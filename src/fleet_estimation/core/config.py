from __future__ import annotations

from dataclasses import dataclass

EARTH_RADIUS_NAUTICAL_MILES = 3440.065

COMPONENT_TYPES = ("engine", "hull", "navigation", "safety", "electrical", "propulsion")

DEFAULT_CAPACITY_TONS = 40_000.0
DEFAULT_YEAR_BUILT = 2010
NOMINAL_SPEED_KNOTS = 15.0


@dataclass(frozen=True)
class EngineTables:
    """Per engine type multipliers, fuel prices (USD/t) and CO2 factors (t/t)."""

    fuel_type_multiplier: float
    fuel_price_per_ton: float
    co2_per_ton_fuel: float


ENGINE_TABLES = {
    "diesel": EngineTables(1.0, 650.0, 3.2),
    "heavy-fuel-oil": EngineTables(1.15, 450.0, 3.4),
    "gas-turbine": EngineTables(0.85, 800.0, 2.8),
    "hybrid": EngineTables(0.75, 550.0, 2.0),
    "electric": EngineTables(0.1, 100.0, 0.5),
}

ENGINE_TABLES_DEFAULT = EngineTables(1.0, 500.0, 3.0)


def engine_tables(engine_type: str | None) -> EngineTables:
    """Look up engine tables, falling back to the default entry."""
    return ENGINE_TABLES.get(engine_type, ENGINE_TABLES_DEFAULT)


@dataclass(frozen=True)
class ComponentSpec:
    """Maintenance characteristics of one ship component."""

    base_lifespan_hours: float
    variability: float
    base_cost: float
    maintenance_duration_days: int
    base_vibration: float
    temperature_sensitive: bool = False


COMPONENT_SPECS = {
    "engine": ComponentSpec(8760.0, 0.3, 50_000.0, 7, 6.0, True),
    "hull": ComponentSpec(17520.0, 0.2, 80_000.0, 10, 4.0),
    "navigation": ComponentSpec(4380.0, 0.4, 15_000.0, 2, 2.0, True),
    "safety": ComponentSpec(2190.0, 0.3, 10_000.0, 1, 2.0),
    "electrical": ComponentSpec(6570.0, 0.35, 20_000.0, 3, 3.0, True),
    "propulsion": ComponentSpec(10950.0, 0.25, 40_000.0, 5, 7.0),
}

COMPONENT_SPEC_DEFAULT = ComponentSpec(8760.0, 0.3, 25_000.0, 3, 3.0)


def component_spec(component_type: str) -> ComponentSpec:
    """Look up component characteristics, falling back to the default entry."""
    return COMPONENT_SPECS.get(component_type, COMPONENT_SPEC_DEFAULT)


COMPLEX_REGIONS = ("Mediterranean", "Baltic", "Persian Gulf", "Malacca Strait")


@dataclass(frozen=True)
class RouteScales:
    """Normalization ranges of the route model."""

    distance_nm: float = 5000.0
    cargo_tons: float = 50_000.0
    weather_score: float = 10.0
    speed_knots: float = 25.0
    fuel_price: float = 500.0
    sea_conditions: float = 5.0
    traffic_density: float = 10.0
    port_congestion: float = 5.0
    time_hours: float = 300.0
    fuel_tons: float = 1000.0


@dataclass(frozen=True)
class FuelScales:
    """Normalization ranges of the fuel model."""

    capacity_tons: float = 80_000.0
    cargo_tons: float = 80_000.0
    distance_nm: float = 8000.0
    speed_knots: float = 25.0
    weather_impact: float = 10.0
    sea_conditions: float = 6.0
    route_complexity: float = 5.0
    ship_age_years: float = 30.0
    fuel_tons: float = 1000.0


@dataclass(frozen=True)
class MaintenanceScales:
    """Normalization ranges of the maintenance models."""

    ship_age_years: float = 25.0
    engine_hours: float = 100_000.0
    days_since_maintenance: float = 730.0
    operating_conditions: float = 10.0
    environmental_stress: float = 5.0
    vibration_level: float = 10.0
    temperature_stress: float = 5.0
    corrosion_risk: float = 8.0
    days_until_maintenance: float = 730.0


ROUTE_SCALES = RouteScales()
FUEL_SCALES = FuelScales()
MAINTENANCE_SCALES = MaintenanceScales()
