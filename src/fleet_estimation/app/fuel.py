from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from ..core.config import COMPLEX_REGIONS, FUEL_SCALES, NOMINAL_SPEED_KNOTS, engine_tables
from ..core.entities import Location, ShipProfile, VoyageRequest
from ..core.geodesics import coordinate_delta_degrees
from ..core.normalization import clamp, denormalize, normalize
from ..core.weather import fuel_sea_conditions, fuel_weather_impact
from .config import FeedbackConfig, PredictorConfig
from .estimator import Estimator
from .route import RouteEstimate

BASE_CONFIDENCE = 0.8
MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95


@dataclass(frozen=True)
class FuelEstimate:
    """Fuel consumption of a voyage with derived cost and emissions."""

    consumption_tons: float
    efficiency_score: float
    cost_estimate: float
    emissions_estimate_tons_co2: float
    confidence: float
    influencing_factors: tuple[str, ...]
    recommendations: tuple[str, ...]
    engine_load: float = 0.0
    weather_impact: float = 0.0
    sea_conditions: float = 0.0
    route_complexity: int = 1
    fuel_type_multiplier: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "consumptionTons": self.consumption_tons,
            "efficiencyScore": self.efficiency_score,
            "costEstimate": self.cost_estimate,
            "emissionsEstimateTonsCO2": self.emissions_estimate_tons_co2,
            "confidence": self.confidence,
            "influencingFactors": list(self.influencing_factors),
            "recommendations": list(self.recommendations),
        }


def engine_load(cargo_tons: float, capacity_tons: float, speed_knots: float) -> float:
    """Engine load fraction, assuming 20 kn as the most efficient speed."""
    load_factor = cargo_tons / capacity_tons if capacity_tons > 0 else 0.0
    return min(1.0, 0.6 + load_factor * 0.2 + speed_knots / 20 * 0.2)


def _in_complex_region(location: Location) -> bool:
    name = getattr(location, "name", None)
    return bool(name) and any(region in name for region in COMPLEX_REGIONS)


def route_complexity(origin: Location, destination: Location) -> int:
    """Navigational complexity in 1..5 from region names and coordinate span."""
    complexity = 1
    complexity += _in_complex_region(origin)
    complexity += _in_complex_region(destination)

    delta = coordinate_delta_degrees(start=origin.point, end=destination.point)
    if delta > 100:
        complexity += 1
    if delta > 180:
        complexity += 1
    return min(5, complexity)


def fuel_efficiency(
    consumption_tons: float, distance_nm: float, cargo_tons: float
) -> float:
    """Nautical mile tons of cargo per ton of fuel; 0 when undefined."""
    if consumption_tons == 0 or distance_nm == 0 or cargo_tons == 0:
        return 0.0
    return distance_nm * cargo_tons / consumption_tons


def fuel_confidence(weather_impact: float, distance_nm: float, ship_age: int) -> float:
    confidence = BASE_CONFIDENCE
    if weather_impact > 7:
        confidence -= 0.1
    if weather_impact > 9:
        confidence -= 0.1
    if distance_nm < 50 or distance_nm > 5000:
        confidence -= 0.1
    if ship_age < 5:
        confidence += 0.05
    return clamp(confidence, MIN_CONFIDENCE, MAX_CONFIDENCE)


def influencing_factors(
    weather_impact: float, sea_conditions: float, load: float
) -> list[str]:
    factors = []
    if weather_impact > 6:
        factors.append("High wind conditions (+15% consumption)")
    if sea_conditions > 4:
        factors.append("Rough seas (+10% consumption)")
    if load > 0.9:
        factors.append("High engine load (+8% consumption)")
    if weather_impact < 3 and sea_conditions < 2:
        factors.append("Excellent conditions (-5% consumption)")
    return factors


def efficiency_recommendations(efficiency: float, weather_impact: float) -> list[str]:
    recommendations = []
    if efficiency < 50:
        recommendations.append(
            "Consider reducing speed by 10% to improve fuel efficiency"
        )
        recommendations.append("Review cargo distribution for optimal trim")
    if weather_impact > 6:
        recommendations.append("Wait for better weather conditions if schedule permits")
        recommendations.append("Consider alternative route to avoid severe weather")
    if efficiency > 80:
        recommendations.append("Excellent efficiency - maintain current parameters")
    return recommendations


class FuelEstimator(Estimator):
    """Predicts fuel consumption, cost and emissions of a planned route."""

    name = "fuel estimator"

    def __init__(
        self,
        predictor_config: PredictorConfig = PredictorConfig(),
        batch_size: int = FeedbackConfig().fuel_batch_size,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(predictor_config=predictor_config, batch_size=batch_size, rng=rng)

    def _model_settings(self):
        return {
            "fuel": (
                self.predictor_config.fuel_training_size,
                self.predictor_config.fuel_epochs,
            )
        }

    def features(
        self,
        ship: ShipProfile,
        request: VoyageRequest,
        route: RouteEstimate,
        now: np.datetime64 = None,
    ) -> dict[str, float]:
        """Raw model inputs of a voyage."""
        capacity = ship.effective_capacity_tons
        speed = route.optimal_speed_knots
        if not speed or speed <= 0:
            speed = NOMINAL_SPEED_KNOTS
        return {
            "ship_capacity": capacity,
            "cargo_weight": request.cargo_weight_tons,
            "distance": route.total_distance_nautical_miles,
            "speed": speed,
            "weather_impact": fuel_weather_impact(request.weather_forecast),
            "sea_conditions": fuel_sea_conditions(request.weather_forecast),
            "engine_load": engine_load(request.cargo_weight_tons, capacity, speed),
            "route_complexity": route_complexity(request.origin, request.destination),
            "fuel_type_multiplier": engine_tables(ship.engine_type).fuel_type_multiplier,
            "ship_age": ship.age_years(now),
        }

    @staticmethod
    def feature_vector(features: dict[str, float]) -> np.ndarray:
        """Normalized (1, 10) feature row of the fuel model."""
        s = FUEL_SCALES
        return np.array(
            [
                [
                    normalize(features["ship_capacity"], 0, s.capacity_tons),
                    normalize(features["cargo_weight"], 0, s.cargo_tons),
                    normalize(features["distance"], 0, s.distance_nm),
                    normalize(features["speed"], 0, s.speed_knots),
                    normalize(features["weather_impact"], 0, s.weather_impact),
                    normalize(features["sea_conditions"], 0, s.sea_conditions),
                    clamp(features["engine_load"]),
                    normalize(features["route_complexity"], 0, s.route_complexity),
                    # multipliers are already on the model's scale
                    features["fuel_type_multiplier"],
                    normalize(features["ship_age"], 0, s.ship_age_years),
                ]
            ]
        )

    def estimate_fuel(
        self,
        ship: ShipProfile,
        request: VoyageRequest,
        route: RouteEstimate,
        now: np.datetime64 = None,
    ) -> FuelEstimate:
        """Estimate fuel consumption for a voyage along a route estimate.

        Parameters
        ----------
        ship : ShipProfile
            Ship snapshot
        request : VoyageRequest
            Voyage with cargo and weather forecast
        route : RouteEstimate
            Output of the route estimator
        now : np.datetime64, optional
            Reference time for the ship age

        Returns
        -------
        FuelEstimate
        """
        features = self.features(ship, request, route, now=now)
        prediction = self.predictor("fuel").predict(self.feature_vector(features))
        consumption = max(
            0.0, denormalize(prediction[0, 0], 0, FUEL_SCALES.fuel_tons)
        )

        tables = engine_tables(ship.engine_type)
        efficiency = fuel_efficiency(
            consumption, features["distance"], features["cargo_weight"]
        )
        estimate = FuelEstimate(
            consumption_tons=consumption,
            efficiency_score=efficiency,
            cost_estimate=consumption * tables.fuel_price_per_ton,
            emissions_estimate_tons_co2=consumption * tables.co2_per_ton_fuel,
            confidence=fuel_confidence(
                features["weather_impact"], features["distance"], features["ship_age"]
            ),
            influencing_factors=tuple(
                influencing_factors(
                    features["weather_impact"],
                    features["sea_conditions"],
                    features["engine_load"],
                )
            ),
            recommendations=tuple(
                efficiency_recommendations(efficiency, features["weather_impact"])
            ),
            engine_load=features["engine_load"],
            weather_impact=features["weather_impact"],
            sea_conditions=features["sea_conditions"],
            route_complexity=features["route_complexity"],
            fuel_type_multiplier=features["fuel_type_multiplier"],
        )
        logging.info(
            "fuel for ship %s: %.2f t, confidence %.2f",
            ship.ship_id,
            estimate.consumption_tons,
            estimate.confidence,
        )
        return estimate

    def _feedback_payload(self, outcome) -> dict:
        """Actual consumption next to the planned figures of a voyage."""
        payload = super()._feedback_payload(outcome)
        return {
            "planned_distance_nm": payload.get("planned_distance_nm"),
            "cargo_weight_tons": payload.get("cargo_weight_tons"),
            "estimated_fuel_consumption": payload.get("estimated_fuel_consumption"),
            "actual_fuel_consumption": float(payload["actual_fuel_consumption"]),
        }
