"""Synthetic training data for the estimation models.

Every generator returns (inputs, outputs) as float arrays with one sample per
row, normalized the same way the estimators normalize live requests.
"""

from __future__ import annotations

import numpy as np

from ..core.config import (
    COMPONENT_TYPES,
    FUEL_SCALES,
    MAINTENANCE_SCALES,
    ROUTE_SCALES,
)
from .formulas import fuel_consumption_tons, maintenance_targets, route_targets


def route_training_data(size: int = 1000, rng: np.random.Generator = None) -> tuple:
    """Voyages with speed, time and fuel targets."""
    rng = np.random.default_rng() if rng is None else rng
    distance = rng.uniform(100, 5100, size)
    cargo = rng.uniform(1000, 51000, size)
    weather = rng.uniform(0, 10, size)
    speed = rng.uniform(5, 25, size)
    fuel_price = rng.uniform(200, 700, size)
    sea = rng.uniform(0, 5, size)
    traffic = rng.uniform(0, 10, size)
    congestion = rng.uniform(0, 5, size)

    s = ROUTE_SCALES
    inputs = np.column_stack(
        [
            distance / s.distance_nm,
            cargo / s.cargo_tons,
            weather / s.weather_score,
            speed / s.speed_knots,
            fuel_price / s.fuel_price,
            sea / s.sea_conditions,
            traffic / s.traffic_density,
            congestion / s.port_congestion,
        ]
    )
    optimal_speed, estimated_time, fuel = route_targets(
        distance_nm=distance,
        cargo_tons=cargo,
        weather_score=weather,
        sea_conditions=sea,
    )
    outputs = np.column_stack(
        [
            optimal_speed / s.speed_knots,
            estimated_time / s.time_hours,
            fuel / s.fuel_tons,
        ]
    )
    return inputs, outputs


def fuel_training_data(size: int = 1500, rng: np.random.Generator = None) -> tuple:
    """Voyages with fuel consumption targets and +-10% multiplicative noise."""
    rng = np.random.default_rng() if rng is None else rng
    capacity = rng.uniform(5000, 85000, size)
    engine_power = rng.uniform(5000, 25000, size)
    age = rng.uniform(0, 30, size)
    cargo = rng.uniform(0, 1, size) * capacity * 0.9
    distance = rng.uniform(200, 8200, size)
    speed = rng.uniform(8, 23, size)
    weather = rng.uniform(0, 10, size)
    sea = rng.uniform(0, 6, size)
    engine_load = rng.uniform(0.6, 1.0, size)
    complexity = rng.uniform(0, 5, size)
    fuel_type = np.where(rng.uniform(0, 1, size) > 0.7, 1.2, 1.0)

    s = FUEL_SCALES
    inputs = np.column_stack(
        [
            capacity / s.capacity_tons,
            cargo / s.cargo_tons,
            distance / s.distance_nm,
            speed / s.speed_knots,
            weather / s.weather_impact,
            sea / s.sea_conditions,
            engine_load,
            complexity / s.route_complexity,
            fuel_type,
            age / s.ship_age_years,
        ]
    )
    consumption = fuel_consumption_tons(
        engine_power_kw=engine_power,
        distance_nm=distance,
        speed_knots=speed,
        engine_load=engine_load,
        cargo_tons=cargo,
        capacity_tons=capacity,
        weather_impact=weather,
        sea_conditions=sea,
        ship_age_years=age,
        fuel_type_multiplier=fuel_type,
        route_complexity=complexity,
    ) * rng.uniform(0.9, 1.1, size)
    return inputs, (consumption / s.fuel_tons)[:, np.newaxis]


def _sample_maintenance(size: int, rng: np.random.Generator) -> dict:
    """Draw one set of ship, usage and component samples."""
    samples = {
        "ship_age": rng.uniform(0, 25, size),
        "engine_hours": rng.uniform(0, 100_000, size),
        "days_since": rng.uniform(0, 730, size),
        "component_index": rng.integers(0, len(COMPONENT_TYPES), size),
        "usage": rng.uniform(0, 1, size),
        "operating": rng.uniform(0, 10, size),
        "quality": rng.uniform(0, 1, size),
        "environment": rng.uniform(0, 5, size),
        "load": rng.uniform(0, 1, size),
        "vibration": rng.uniform(0, 10, size),
        "temperature": rng.uniform(0, 5, size),
        "corrosion": rng.uniform(0, 8, size),
    }
    samples["days_until"], samples["risk"] = maintenance_targets(
        component_index=samples["component_index"],
        engine_hours=samples["engine_hours"],
        days_since_maintenance=samples["days_since"],
        usage_intensity=samples["usage"],
        operating_conditions=samples["operating"],
        maintenance_quality=samples["quality"],
        environmental_stress=samples["environment"],
        noise_fraction=rng.uniform(0, 1, size),
    )
    return samples


def maintenance_training_data(
    size: int = 2000, rng: np.random.Generator = None
) -> tuple:
    """Component samples with normalized days-until-maintenance and risk."""
    rng = np.random.default_rng() if rng is None else rng
    x = _sample_maintenance(size, rng)
    s = MAINTENANCE_SCALES
    inputs = np.column_stack(
        [
            x["ship_age"] / s.ship_age_years,
            x["engine_hours"] / s.engine_hours,
            x["days_since"] / s.days_since_maintenance,
            x["component_index"] / len(COMPONENT_TYPES),
            x["usage"],
            x["operating"] / s.operating_conditions,
            x["quality"],
            x["environment"] / s.environmental_stress,
            x["load"],
            x["vibration"] / s.vibration_level,
            x["temperature"] / s.temperature_stress,
            x["corrosion"] / s.corrosion_risk,
        ]
    )
    outputs = np.column_stack(
        [np.minimum(1.0, x["days_until"] / s.days_until_maintenance), x["risk"]]
    )
    return inputs, outputs


def failure_training_data(size: int = 2000, rng: np.random.Generator = None) -> tuple:
    """Component samples labelled 1 where the risk exceeds 0.7."""
    rng = np.random.default_rng() if rng is None else rng
    x = _sample_maintenance(size, rng)
    s = MAINTENANCE_SCALES
    component_age = rng.uniform(0, 1, size) * x["ship_age"]
    usage_hours = rng.uniform(0, 1, size) * x["engine_hours"]
    stress = (x["operating"] + x["environment"] + x["vibration"]) / 3
    inputs = np.column_stack(
        [
            component_age / s.ship_age_years,
            usage_hours / s.engine_hours,
            stress / 10,
            x["load"],
            x["temperature"] / s.temperature_stress,
            x["corrosion"] / s.corrosion_risk,
            x["quality"],
            x["usage"],
        ]
    )
    labels = (x["risk"] > 0.7).astype(float)
    return inputs, labels[:, np.newaxis]
