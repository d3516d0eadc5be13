"""Closed-form targets of the estimation models.

The same functions produce the synthetic training targets and, wrapped in a
FormulaPredictor, stand in for the fitted networks. Functions named
``*_formula`` take normalized feature matrices and return normalized outputs.
"""

from __future__ import annotations

import numpy as np
from scipy.special import expit

from ..core.config import (
    COMPONENT_SPECS,
    COMPONENT_TYPES,
    FUEL_SCALES,
    MAINTENANCE_SCALES,
    ROUTE_SCALES,
)

MIN_SPEED_KNOTS = 1.0
MIN_LIFE_HOURS = 1.0
MEAN_ENGINE_POWER_KW = 15_000.0  # mean of U(5000, 25000)
MEAN_NOISE_FRACTION = 0.5  # mean of U(0, 1)
TYPICAL_DAYS_SINCE_MAINTENANCE = 365.0  # mean of U(0, 730)
FAILURE_RISK_THRESHOLD = 0.7
FAILURE_LOGIT_STEEPNESS = 10.0

_LIFESPANS = np.array([COMPONENT_SPECS[c].base_lifespan_hours for c in COMPONENT_TYPES])
_VARIABILITIES = np.array([COMPONENT_SPECS[c].variability for c in COMPONENT_TYPES])


def route_targets(
    distance_nm=None,
    cargo_tons=None,
    weather_score=None,
    sea_conditions=None,
) -> tuple:
    """Optimal speed (kn), time (h) and fuel (t) of a voyage."""
    optimal_speed = np.clip(15.0 - 0.5 * weather_score - 0.3 * sea_conditions, 8, 22)
    estimated_time = distance_nm / optimal_speed
    fuel_consumption = distance_nm * cargo_tons * 0.0001 * (1 + 0.1 * weather_score)
    return optimal_speed, estimated_time, fuel_consumption


def route_formula(features: np.ndarray) -> np.ndarray:
    """Map (n, 8) route features onto (n, 3) normalized speed, time, fuel."""
    features = np.atleast_2d(np.asarray(features, dtype=float))
    speed, time, fuel = route_targets(
        distance_nm=features[:, 0] * ROUTE_SCALES.distance_nm,
        cargo_tons=features[:, 1] * ROUTE_SCALES.cargo_tons,
        weather_score=features[:, 2] * ROUTE_SCALES.weather_score,
        sea_conditions=features[:, 5] * ROUTE_SCALES.sea_conditions,
    )
    return np.column_stack(
        [
            speed / ROUTE_SCALES.speed_knots,
            time / ROUTE_SCALES.time_hours,
            fuel / ROUTE_SCALES.fuel_tons,
        ]
    )


def fuel_consumption_tons(
    engine_power_kw=MEAN_ENGINE_POWER_KW,
    distance_nm=None,
    speed_knots=None,
    engine_load=None,
    cargo_tons=None,
    capacity_tons=None,
    weather_impact=None,
    sea_conditions=None,
    ship_age_years=None,
    fuel_type_multiplier=None,
    route_complexity=None,
):
    """Multiplicative fuel consumption model in tons."""
    return (
        engine_power_kw
        * 0.0001
        * distance_nm
        / np.maximum(speed_knots, MIN_SPEED_KNOTS)
        * engine_load
        * (1 + cargo_tons / np.maximum(capacity_tons, 1.0) * 0.3)
        * (1 + weather_impact * 0.15)
        * (1 + sea_conditions * 0.1)
        * (1 + ship_age_years * 0.02)
        * fuel_type_multiplier
        * (1 + route_complexity * 0.05)
    )


def fuel_formula(features: np.ndarray) -> np.ndarray:
    """Map (n, 10) fuel features onto (n, 1) normalized consumption.

    Engine power is not a feature; its training mean is used.
    """
    features = np.atleast_2d(np.asarray(features, dtype=float))
    consumption = fuel_consumption_tons(
        capacity_tons=features[:, 0] * FUEL_SCALES.capacity_tons,
        cargo_tons=features[:, 1] * FUEL_SCALES.cargo_tons,
        distance_nm=features[:, 2] * FUEL_SCALES.distance_nm,
        speed_knots=features[:, 3] * FUEL_SCALES.speed_knots,
        weather_impact=features[:, 4] * FUEL_SCALES.weather_impact,
        sea_conditions=features[:, 5] * FUEL_SCALES.sea_conditions,
        engine_load=features[:, 6],
        route_complexity=features[:, 7] * FUEL_SCALES.route_complexity,
        fuel_type_multiplier=features[:, 8],
        ship_age_years=features[:, 9] * FUEL_SCALES.ship_age_years,
    )
    return (consumption / FUEL_SCALES.fuel_tons)[:, np.newaxis]


def adjusted_life_hours(
    lifespan_hours=None,
    usage_intensity=None,
    operating_conditions=None,
    maintenance_quality=None,
    environmental_stress=None,
):
    """Remaining component life in hours, floored at one hour."""
    life = (
        lifespan_hours
        * (1 - usage_intensity)
        * (1 - operating_conditions * 0.1)
        * (1 + maintenance_quality * 0.2)
        * (1 - environmental_stress * 0.05)
    )
    return np.maximum(life, MIN_LIFE_HOURS)


def maintenance_targets(
    component_index=None,
    engine_hours=None,
    days_since_maintenance=None,
    usage_intensity=None,
    operating_conditions=None,
    maintenance_quality=None,
    environmental_stress=None,
    noise_fraction=MEAN_NOISE_FRACTION,
) -> tuple:
    """Days until maintenance and risk in [0, 1] of a component."""
    index = np.clip(np.asarray(component_index, dtype=int), 0, len(COMPONENT_TYPES) - 1)
    lifespan = _LIFESPANS[index]
    life = adjusted_life_hours(
        lifespan_hours=lifespan,
        usage_intensity=usage_intensity,
        operating_conditions=operating_conditions,
        maintenance_quality=maintenance_quality,
        environmental_stress=environmental_stress,
    )
    days_until = np.maximum(
        1.0,
        (life - engine_hours) / 24 + noise_fraction * lifespan * _VARIABILITIES[index],
    )
    risk = np.clip(
        engine_hours
        / life
        * (1 + operating_conditions * 0.1)
        * (1 + days_since_maintenance / 365 * 0.3),
        0.0,
        1.0,
    )
    return days_until, risk


def maintenance_formula(features: np.ndarray) -> np.ndarray:
    """Map (n, 12) maintenance features onto (n, 2) normalized days and risk."""
    features = np.atleast_2d(np.asarray(features, dtype=float))
    days_until, risk = maintenance_targets(
        component_index=np.rint(features[:, 3] * len(COMPONENT_TYPES)),
        engine_hours=features[:, 1] * MAINTENANCE_SCALES.engine_hours,
        days_since_maintenance=features[:, 2] * MAINTENANCE_SCALES.days_since_maintenance,
        usage_intensity=features[:, 4],
        operating_conditions=features[:, 5] * MAINTENANCE_SCALES.operating_conditions,
        maintenance_quality=features[:, 6],
        environmental_stress=features[:, 7] * MAINTENANCE_SCALES.environmental_stress,
    )
    return np.column_stack(
        [
            np.minimum(1.0, days_until / MAINTENANCE_SCALES.days_until_maintenance),
            risk,
        ]
    )


def failure_formula(features: np.ndarray) -> np.ndarray:
    """Map (n, 8) component features onto (n, 1) failure probability.

    The classifier only sees the averaged stress factor and no component
    type, so the risk is rebuilt with the mean lifespan and a typical
    maintenance interval, then passed through a logistic around the label
    threshold.
    """
    features = np.atleast_2d(np.asarray(features, dtype=float))
    severity = features[:, 2] * MAINTENANCE_SCALES.operating_conditions
    usage = features[:, 7]
    quality = features[:, 6]
    engine_hours = features[:, 1] * MAINTENANCE_SCALES.engine_hours
    life = adjusted_life_hours(
        lifespan_hours=_LIFESPANS.mean(),
        usage_intensity=usage,
        operating_conditions=severity,
        maintenance_quality=quality,
        environmental_stress=np.minimum(severity / 2, 5.0),
    )
    risk = np.clip(
        engine_hours
        / life
        * (1 + severity * 0.1)
        * (1 + TYPICAL_DAYS_SINCE_MAINTENANCE / 365 * 0.3),
        0.0,
        1.0,
    )
    return expit(FAILURE_LOGIT_STEEPNESS * (risk - FAILURE_RISK_THRESHOLD))[:, np.newaxis]
