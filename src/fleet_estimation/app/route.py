from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import numpy as np
import pandas as pd
from shapely.geometry import LineString, Point

from ..core.config import NOMINAL_SPEED_KNOTS, ROUTE_SCALES
from ..core.entities import VoyageRequest, utc_now
from ..core.geodesics import get_distance_nautical_miles, interpolate_linear
from ..core.normalization import denormalize, normalize
from ..core.weather import route_weather_score
from .config import FeedbackConfig, MarketConfig, PredictorConfig
from .estimator import Estimator

ROUTE_CONFIDENCE = 0.85
WAYPOINT_SEGMENTS = 10


@dataclass(frozen=True)
class Waypoint:
    """Planned position with time and nominal speed."""

    latitude: float
    longitude: float
    timestamp: np.datetime64
    speed_knots: float = NOMINAL_SPEED_KNOTS

    @property
    def point(self):
        """Point geometry with x=lon and y=lat."""
        return Point(self.longitude, self.latitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": str(np.datetime_as_string(self.timestamp, unit="s")),
            "speed": self.speed_knots,
        }


@dataclass(frozen=True)
class RouteEstimate:
    """Distance, speed, time, fuel and waypoints of a planned voyage.

    ``sea_conditions`` is drawn per call and makes speed, time and fuel vary
    between otherwise identical requests.

    Distance and cargo enter the route model clamped to 5000 nm and 50000 t,
    so time and fuel saturate on longer voyages while
    ``total_distance_nautical_miles`` stays the full great-circle distance.
    """

    total_distance_nautical_miles: float
    optimal_speed_knots: float
    estimated_time_hours: float
    estimated_fuel_consumption_tons: float
    waypoints: tuple[Waypoint, ...]
    confidence: float
    recommendations: tuple[str, ...]
    weather_score: float = 0.0
    sea_conditions: float = 0.0

    @property
    def data_frame(self):
        """Waypoints as data frame with cols latitude, longitude, timestamp, speed."""
        return pd.DataFrame(
            {
                "latitude": [w.latitude for w in self.waypoints],
                "longitude": [w.longitude for w in self.waypoints],
                "timestamp": [w.timestamp for w in self.waypoints],
                "speed": [w.speed_knots for w in self.waypoints],
            }
        )

    @property
    def line_string(self):
        """LineString geometry with x=lon and y=lat."""
        return LineString((w.point for w in self.waypoints))

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDistanceNauticalMiles": self.total_distance_nautical_miles,
            "optimalSpeedKnots": self.optimal_speed_knots,
            "estimatedTimeHours": self.estimated_time_hours,
            "estimatedFuelConsumption": self.estimated_fuel_consumption_tons,
            "waypoints": [w.to_dict() for w in self.waypoints],
            "confidence": self.confidence,
            "recommendations": list(self.recommendations),
        }


def generate_waypoints(
    origin=None,
    destination=None,
    num_segments: int = WAYPOINT_SEGMENTS,
    time_start: np.datetime64 = None,
    speed_knots: float = NOMINAL_SPEED_KNOTS,
) -> tuple[Waypoint, ...]:
    """Hourly waypoints on the straight lat/lon line from origin to destination."""
    time_start = utc_now() if time_start is None else np.datetime64(time_start, "s")
    lat, lon = interpolate_linear(start=origin, end=destination, num_segments=num_segments)
    return tuple(
        Waypoint(
            latitude=float(la),
            longitude=float(lo),
            timestamp=time_start + np.timedelta64(n, "h"),
            speed_knots=speed_knots,
        )
        for n, (la, lo) in enumerate(zip(lat, lon))
    )


def route_recommendations(weather_score: float, sea_conditions: float) -> list[str]:
    """Advisories keyed on weather severity and sea state."""
    recommendations = []
    if weather_score > 7:
        recommendations.append(
            "Consider delaying departure due to severe weather conditions"
        )
        recommendations.append("Monitor weather updates continuously during voyage")
    elif weather_score > 5:
        recommendations.append("Proceed with caution - moderate weather expected")
        recommendations.append("Maintain regular communication with weather services")

    if sea_conditions > 3:
        recommendations.append("Reduce speed in high sea conditions for safety")
        recommendations.append("Secure all cargo properly before departure")

    if not recommendations:
        recommendations.append("Optimal conditions for voyage - proceed as planned")
    return recommendations


def route_features(
    distance_nm: float = None,
    cargo_tons: float = None,
    weather_score: float = None,
    speed_knots: float = NOMINAL_SPEED_KNOTS,
    fuel_price: float = 450.0,
    sea_conditions: float = None,
    traffic_density: float = None,
    port_congestion: float = None,
) -> np.ndarray:
    """Normalized (1, 8) feature row of the route model."""
    s = ROUTE_SCALES
    return np.array(
        [
            [
                normalize(distance_nm, 0, s.distance_nm),
                normalize(cargo_tons, 0, s.cargo_tons),
                normalize(weather_score, 0, s.weather_score),
                normalize(speed_knots, 0, s.speed_knots),
                normalize(fuel_price, 0, s.fuel_price),
                normalize(sea_conditions, 0, s.sea_conditions),
                normalize(traffic_density, 0, s.traffic_density),
                normalize(port_congestion, 0, s.port_congestion),
            ]
        ]
    )


class RouteEstimator(Estimator):
    """Recommends speed, time and fuel for a voyage and lays out waypoints."""

    name = "route estimator"

    def __init__(
        self,
        predictor_config: PredictorConfig = PredictorConfig(),
        market: MarketConfig = MarketConfig(),
        batch_size: int = FeedbackConfig().route_batch_size,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(predictor_config=predictor_config, batch_size=batch_size, rng=rng)
        self.market = market

    def _model_settings(self):
        return {
            "route": (
                self.predictor_config.route_training_size,
                self.predictor_config.route_epochs,
            )
        }

    def estimate_route(
        self, request: VoyageRequest, now: np.datetime64 = None
    ) -> RouteEstimate:
        """Estimate the route of a voyage.

        Parameters
        ----------
        request : VoyageRequest
            Voyage to plan
        now : np.datetime64, optional
            Time of the first waypoint, defaults to the current time

        Returns
        -------
        RouteEstimate

        Raises
        ------
        ValidationError
            If origin or destination coordinates are missing
        """
        distance = get_distance_nautical_miles(
            start=getattr(request.origin, "point", None),
            end=getattr(request.destination, "point", None),
        )
        weather_score = route_weather_score(request.weather_forecast)

        # market conditions are mocked per call
        sea_conditions = self._uniform(self.market.sea_conditions_max)
        traffic_density = self._uniform(self.market.traffic_density_max)
        port_congestion = self._uniform(self.market.port_congestion_max)

        features = route_features(
            distance_nm=distance,
            cargo_tons=request.cargo_weight_tons,
            weather_score=weather_score,
            speed_knots=NOMINAL_SPEED_KNOTS,
            fuel_price=self.market.reference_fuel_price,
            sea_conditions=sea_conditions,
            traffic_density=traffic_density,
            port_congestion=port_congestion,
        )
        speed, time, fuel = self.predictor("route").predict(features)[0]

        s = ROUTE_SCALES
        estimate = RouteEstimate(
            total_distance_nautical_miles=distance,
            optimal_speed_knots=max(0.0, denormalize(speed, 0, s.speed_knots)),
            estimated_time_hours=max(0.0, denormalize(time, 0, s.time_hours)),
            estimated_fuel_consumption_tons=max(0.0, denormalize(fuel, 0, s.fuel_tons)),
            waypoints=generate_waypoints(
                origin=request.origin.point,
                destination=request.destination.point,
                time_start=now,
            ),
            confidence=ROUTE_CONFIDENCE,
            recommendations=tuple(route_recommendations(weather_score, sea_conditions)),
            weather_score=weather_score,
            sea_conditions=sea_conditions,
        )
        logging.info(
            "route %s -> %s: %.1f nm at %.1f kn",
            request.origin.name,
            request.destination.name,
            estimate.total_distance_nautical_miles,
            estimate.optimal_speed_knots,
        )
        return estimate

    def _feedback_payload(self, outcome) -> dict:
        """Normalized features and results of a completed voyage."""
        payload = super()._feedback_payload(outcome)
        s = ROUTE_SCALES
        features = {
            "distance": payload.get("planned_distance_nm"),
            "cargo_weight": payload.get("cargo_weight_tons"),
            "optimal_speed": payload.get("optimal_speed_knots"),
            "actual_duration": payload.get("actual_duration_hours"),
            "actual_fuel": payload.get("actual_fuel_consumption"),
        }
        scales = {
            "distance": s.distance_nm,
            "cargo_weight": s.cargo_tons,
            "optimal_speed": s.speed_knots,
            "actual_duration": s.time_hours,
            "actual_fuel": s.fuel_tons,
        }
        return {
            f"{key}_normalized": (None if value is None else value / scales[key])
            for key, value in features.items()
        }
