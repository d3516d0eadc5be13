"""Voyage planning on top of the route and fuel estimators."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Sequence

import numpy as np
import pandas as pd

from ..core.entities import GeoPoint, VoyageRequest, as_datetime64, utc_now
from .context import EstimatorContext
from .fuel import FuelEstimate
from .route import RouteEstimate
from .serialization import SerializableResult

TIME_EFFICIENCY = 85.0
COST_SAVINGS_FRACTION = 0.1


@dataclass(frozen=True)
class OptimizationMetrics:
    route_efficiency: float
    fuel_efficiency: float
    time_efficiency: float
    cost_savings: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "routeEfficiency": self.route_efficiency,
            "fuelEfficiency": self.fuel_efficiency,
            "timeEfficiency": self.time_efficiency,
            "costSavings": self.cost_savings,
        }


@dataclass(frozen=True)
class VoyagePlan(SerializableResult):
    """Route and fuel estimates of a planned voyage with its arrival time."""

    voyage_id: str
    ship_id: str
    cargo_weight_tons: float
    departure_time: np.datetime64
    estimated_arrival: np.datetime64
    route: RouteEstimate
    fuel: FuelEstimate
    metrics: OptimizationMetrics

    @property
    def data_frame(self) -> pd.DataFrame:
        """Planned waypoints."""
        return self.route.data_frame

    def to_dict(self) -> dict[str, Any]:
        return {
            "voyageId": self.voyage_id,
            "shipId": self.ship_id,
            "cargoWeightTons": self.cargo_weight_tons,
            "departureTime": str(np.datetime_as_string(self.departure_time, unit="s")),
            "estimatedArrival": str(
                np.datetime_as_string(self.estimated_arrival, unit="s")
            ),
            "route": self.route.to_dict(),
            "fuel": self.fuel.to_dict(),
            "optimizationMetrics": self.metrics.to_dict(),
        }


def plan_voyage(
    context: EstimatorContext, request: VoyageRequest, now: np.datetime64 = None
) -> VoyagePlan:
    """Plan a voyage: estimate the route, then the fuel along it.

    The arrival time follows the route model's time, which saturates at
    5000 nm. Arrivals of longer voyages are therefore early.

    Parameters
    ----------
    context : EstimatorContext
        Shared estimators
    request : VoyageRequest
        Voyage to plan
    now : np.datetime64, optional
        Current time, used for waypoints and as departure if none is given

    Returns
    -------
    VoyagePlan
    """
    now = utc_now() if now is None else np.datetime64(now, "s")
    departure = request.departure_time if request.departure_time is not None else now

    route = context.route.estimate_route(request, now=now)
    fuel = context.fuel.estimate_fuel(request.ship, request, route, now=now)

    arrival = departure + np.timedelta64(
        int(round(route.estimated_time_hours * 3600)), "s"
    )
    plan = VoyagePlan(
        voyage_id=f"VYG-{request.ship.ship_id}-{int(now.astype('int64'))}",
        ship_id=request.ship.ship_id,
        cargo_weight_tons=request.cargo_weight_tons,
        departure_time=departure,
        estimated_arrival=arrival,
        route=route,
        fuel=fuel,
        metrics=OptimizationMetrics(
            route_efficiency=route.confidence * 100,
            fuel_efficiency=fuel.efficiency_score,
            time_efficiency=TIME_EFFICIENCY,
            cost_savings=fuel.cost_estimate * COST_SAVINGS_FRACTION,
        ),
    )
    logging.info("planned voyage %s arriving %s", plan.voyage_id, plan.estimated_arrival)
    return plan


@dataclass(frozen=True)
class VoyageOutcome:
    """What actually happened on a completed voyage; None marks unknown."""

    actual_fuel_consumption: float | None = None
    actual_duration_hours: float | None = None
    actual_route: Sequence[GeoPoint] | None = None
    actual_arrival: np.datetime64 | None = None

    def __post_init__(self):
        object.__setattr__(self, "actual_arrival", as_datetime64(self.actual_arrival))
        if self.actual_route is not None:
            object.__setattr__(self, "actual_route", tuple(self.actual_route))


@dataclass(frozen=True)
class VoyageFeedback:
    """Planned and actual figures of a voyage as seen by the estimators."""

    voyage_id: str
    planned_distance_nm: float
    cargo_weight_tons: float
    optimal_speed_knots: float
    estimated_duration_hours: float
    estimated_fuel_consumption: float
    actual_duration_hours: float | None = None
    actual_fuel_consumption: float | None = None


@dataclass(frozen=True)
class FeedbackReceipt:
    voyage_id: str
    actual_efficiency: float | None
    fuel_accuracy: float | None
    route_updated: bool
    fuel_updated: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "voyageId": self.voyage_id,
            "updatedMetrics": {
                "actualEfficiency": self.actual_efficiency,
                "fuelAccuracy": self.fuel_accuracy,
            },
            "learningImpact": {
                "routeOptimization": self.route_updated,
                "fuelPrediction": self.fuel_updated,
            },
        }


def fuel_accuracy(actual: float, estimate: float) -> float | None:
    """Percentage agreement of actual and estimated fuel; None without estimate."""
    if not estimate:
        return None
    return (1 - abs((actual - estimate) / estimate)) * 100


def submit_voyage_feedback(
    context: EstimatorContext, plan: VoyagePlan, outcome: VoyageOutcome
) -> FeedbackReceipt:
    """Report the outcome of a planned voyage to the estimators.

    The route estimator receives the feedback when an actual route or
    duration is known, the fuel estimator when an actual consumption is known.
    Feedback handling never raises; a rejected update shows up as False in
    the receipt.
    """
    actual_fuel = outcome.actual_fuel_consumption
    feedback = VoyageFeedback(
        voyage_id=plan.voyage_id,
        planned_distance_nm=plan.route.total_distance_nautical_miles,
        cargo_weight_tons=plan.cargo_weight_tons,
        optimal_speed_knots=plan.route.optimal_speed_knots,
        estimated_duration_hours=plan.route.estimated_time_hours,
        estimated_fuel_consumption=plan.fuel.consumption_tons,
        actual_duration_hours=outcome.actual_duration_hours,
        actual_fuel_consumption=actual_fuel,
    )

    actual_efficiency = None
    accuracy = None
    if actual_fuel:
        if plan.route.total_distance_nautical_miles:
            actual_efficiency = (
                plan.route.total_distance_nautical_miles
                * plan.cargo_weight_tons
                / actual_fuel
            )
        accuracy = fuel_accuracy(actual_fuel, plan.fuel.consumption_tons)

    route_updated = False
    if outcome.actual_route or outcome.actual_duration_hours:
        route_updated = context.route.update_with_feedback(feedback)
    fuel_updated = False
    if actual_fuel:
        fuel_updated = context.fuel.update_with_feedback(feedback)

    logging.info("feedback submitted for voyage %s", plan.voyage_id)
    return FeedbackReceipt(
        voyage_id=plan.voyage_id,
        actual_efficiency=actual_efficiency,
        fuel_accuracy=accuracy,
        route_updated=route_updated,
        fuel_updated=fuel_updated,
    )
