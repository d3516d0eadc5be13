"""Weather severity scores.

The route and fuel models were fitted against different threshold tables.
Both tables are kept as separate functions.
"""

from typing import Sequence

import numpy as np

from .entities import WeatherObservation

ROUTE_WEATHER_DEFAULT = 3.0
FUEL_WEATHER_DEFAULT = 3.0
FUEL_SEA_CONDITIONS_DEFAULT = 2
MAX_SEVERITY = 10.0


def _points(value, thresholds) -> int:
    """Points of the first (descending) threshold exceeded by value."""
    if value is None:
        return 0
    for limit, points in thresholds:
        if value > limit:
            return points
    return 0


def _points_below(value, thresholds) -> int:
    """Points of the first (ascending) threshold undercut by value."""
    if value is None:
        return 0
    for limit, points in thresholds:
        if value < limit:
            return points
    return 0


def _mean_capped(scores: Sequence[float]) -> float:
    return float(min(MAX_SEVERITY, np.mean(scores)))


def route_weather_score(observations: Sequence[WeatherObservation] = None) -> float:
    """Severity in [0, 10] as seen by the route model.

    Empty or missing forecasts yield 3 (moderate conditions).
    """
    if not observations:
        return ROUTE_WEATHER_DEFAULT
    scores = [
        _points(obs.wind_speed_knots, ((25, 3), (15, 2), (10, 1)))
        + _points(obs.wave_height_meters, ((4, 3), (2, 2), (1, 1)))
        + _points_below(obs.visibility_km, ((1, 2), (5, 1)))
        for obs in observations
    ]
    return _mean_capped(scores)


def fuel_weather_impact(observations: Sequence[WeatherObservation] = None) -> float:
    """Severity in [0, 10] as seen by the fuel model (wind and waves only).

    Empty or missing forecasts yield 3.
    """
    if not observations:
        return FUEL_WEATHER_DEFAULT
    scores = [
        _points(obs.wind_speed_knots, ((30, 4), (20, 3), (15, 2), (10, 1)))
        + _points(obs.wave_height_meters, ((5, 3), (3, 2), (1.5, 1)))
        for obs in observations
    ]
    return _mean_capped(scores)


def fuel_sea_conditions(observations: Sequence[WeatherObservation] = None) -> int:
    """Sea state in 0..6 from mean wave height; missing heights count as 1 m.

    Empty or missing forecasts yield 2.
    """
    if not observations:
        return FUEL_SEA_CONDITIONS_DEFAULT
    wave_heights = [
        obs.wave_height_meters if obs.wave_height_meters else 1.0
        for obs in observations
    ]
    return int(min(6, np.floor(np.mean(wave_heights))))


def observation_severity(observation: WeatherObservation) -> float:
    """Severity in [0, 10] of a single observation including its condition label."""
    score = (
        _points(observation.wind_speed_knots, ((35, 4), (25, 3), (15, 2), (10, 1)))
        + _points(observation.wave_height_meters, ((6, 4), (4, 3), (2, 2), (1, 1)))
        + _points_below(observation.visibility_km, ((1, 2), (3, 1)))
        + {"storm": 3, "fog": 2, "rain": 1}.get(observation.condition, 0)
    )
    return float(min(MAX_SEVERITY, score))
