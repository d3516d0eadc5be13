"""Component maintenance forecasts, fleet alerts and forecast accuracy."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterable

import numpy as np
import pandas as pd

from ..core.config import COMPONENT_TYPES, MAINTENANCE_SCALES, component_spec
from ..core.entities import (
    ShipProfile,
    UsageTelemetry,
    as_datetime64,
    days_between,
    utc_now,
)
from ..core.normalization import clamp, normalize
from .config import FeedbackConfig, PredictorConfig
from .estimator import Estimator
from .serialization import SerializableResult

PRIORITIES = ("low", "medium", "high", "critical")
ACTIONS = ("monitor", "plan_maintenance", "schedule_soon", "immediate_action")

HOURS_PER_YEAR_OF_SERVICE = 2000
DEFAULT_USAGE_INTENSITY = 0.6
DEFAULT_LOAD_FACTOR = 0.7
DEFAULT_DAYS_SINCE_MAINTENANCE = 365.0
MAINTENANCE_QUALITY = 0.8
COMPONENT_AGE_FRACTION = 0.75
WINDOW_HORIZON_DAYS = 90
SIX_MONTHS_DAYS = 180
ACCURACY_TOLERANCE_DAYS = 365.0


def _datetime_str(time: np.datetime64 | None) -> str | None:
    if time is None:
        return None
    return str(np.datetime_as_string(time, unit="s"))


def _above(value, threshold) -> bool:
    return value is not None and value > threshold


def _below(value, threshold) -> bool:
    return value is not None and value < threshold


@dataclass(frozen=True)
class MaintenanceRecord:
    """Completed maintenance job reported back to the forecaster."""

    ship_id: str
    component_type: str
    completed_date: np.datetime64
    cost: float | None = None
    predicted_failure_date: np.datetime64 | None = None
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "completed_date", as_datetime64(self.completed_date))
        object.__setattr__(
            self, "predicted_failure_date", as_datetime64(self.predicted_failure_date)
        )


@dataclass(frozen=True)
class ComponentPrediction:
    """Forecast of one component: due date, risk, priority and advice."""

    component_type: str
    days_until_maintenance: float
    risk_score: float
    failure_probability: float
    confidence: float
    priority: str
    estimated_cost: float
    recommended_action: str
    recommendations: tuple[str, ...]
    predicted_failure_date: np.datetime64

    def to_dict(self) -> dict[str, Any]:
        return {
            "componentType": self.component_type,
            "daysUntilMaintenance": self.days_until_maintenance,
            "riskScore": self.risk_score,
            "failureProbability": self.failure_probability,
            "confidence": self.confidence,
            "priority": self.priority,
            "estimatedCost": self.estimated_cost,
            "recommendedAction": self.recommended_action,
            "recommendations": list(self.recommendations),
            "predictedFailureDate": _datetime_str(self.predicted_failure_date),
        }


@dataclass(frozen=True)
class MaintenanceWindow:
    """Components worth servicing together in one yard period."""

    start_date: np.datetime64
    components: tuple[str, ...]
    total_cost: float
    duration_days: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": _datetime_str(self.start_date),
            "components": list(self.components),
            "totalCost": self.total_cost,
            "durationDays": self.duration_days,
        }


@dataclass(frozen=True)
class MaintenanceCostEstimate:
    """Maintenance cost in USD, in total and split by urgency."""

    total: float = 0.0
    critical: float = 0.0
    next_six_months: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "critical": self.critical,
            "nextSixMonths": self.next_six_months,
        }


@dataclass(frozen=True)
class MaintenanceForecast(SerializableResult):
    """Per-component predictions of one ship, highest risk first."""

    predictions: tuple[ComponentPrediction, ...]
    overall_recommendations: tuple[str, ...]
    maintenance_windows: tuple[MaintenanceWindow, ...]
    cost_estimate: MaintenanceCostEstimate
    timestamp: np.datetime64
    ship_id: str | None = None
    ship_name: str | None = None

    @property
    def next_critical_maintenance(self) -> ComponentPrediction:
        return self.predictions[0]

    @property
    def data_frame(self) -> pd.DataFrame:
        """Predictions as data frame, one row per component."""
        return pd.DataFrame(
            {
                "component_type": [p.component_type for p in self.predictions],
                "days_until_maintenance": [
                    p.days_until_maintenance for p in self.predictions
                ],
                "risk_score": [p.risk_score for p in self.predictions],
                "failure_probability": [p.failure_probability for p in self.predictions],
                "priority": [p.priority for p in self.predictions],
                "estimated_cost": [p.estimated_cost for p in self.predictions],
                "recommended_action": [p.recommended_action for p in self.predictions],
            }
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "shipId": self.ship_id,
            "predictions": [p.to_dict() for p in self.predictions],
            "overallRecommendations": list(self.overall_recommendations),
            "nextCriticalMaintenance": self.next_critical_maintenance.to_dict(),
            "maintenanceWindows": [w.to_dict() for w in self.maintenance_windows],
            "costEstimate": self.cost_estimate.to_dict(),
            "timestamp": _datetime_str(self.timestamp),
        }


def usage_intensity(telemetry: UsageTelemetry) -> float:
    if not telemetry.operating_hours_per_day:
        return DEFAULT_USAGE_INTENSITY
    return min(1.0, telemetry.operating_hours_per_day / 24)


def operating_conditions(telemetry: UsageTelemetry) -> float:
    """Severity of operation in 3..10."""
    severity = 3
    if _above(telemetry.average_wave_height, 3):
        severity += 2
    if _above(telemetry.average_wind_speed, 20):
        severity += 1
    if _above(telemetry.operating_temperature, 40) or _below(
        telemetry.operating_temperature, 0
    ):
        severity += 1
    if telemetry.complex_routes:
        severity += 2
    return min(10, severity)


def environmental_stress(ship: ShipProfile) -> float:
    """Base stress plus salt water, raised in arctic and tropical latitudes."""
    stress = 2 + 1
    location = ship.current_location
    if location is not None:
        if abs(location.latitude) > 60:
            stress += 2
        if abs(location.latitude) < 23.5:
            stress += 1
    return min(5, stress)


def vibration_level(component_type: str, telemetry: UsageTelemetry) -> float:
    vibration = component_spec(component_type).base_vibration
    if _above(telemetry.average_speed_knots, 20):
        vibration += 2
    if _above(telemetry.average_wave_height, 4):
        vibration += 1
    return min(10.0, vibration)


def temperature_stress(component_type: str, telemetry: UsageTelemetry) -> float:
    stress = 2
    if component_spec(component_type).temperature_sensitive:
        if _above(telemetry.operating_temperature, 35):
            stress += 2
        if _below(telemetry.operating_temperature, 5):
            stress += 1
    return min(5, stress)


def corrosion_risk(ship: ShipProfile, ship_age: float) -> float:
    risk = 3 + min(3.0, ship_age / 10)
    if ship.hull_material == "steel":
        risk += 1
    return min(8.0, risk)


def maintenance_priority(risk_score: float, days_until_maintenance: float) -> str:
    if risk_score > 80 or days_until_maintenance < 30:
        return "critical"
    if risk_score > 60 or days_until_maintenance < 90:
        return "high"
    if risk_score > 40 or days_until_maintenance < 180:
        return "medium"
    return "low"


def recommended_action(risk_score: float, days_until_maintenance: float) -> str:
    if risk_score > 85 or days_until_maintenance < 15:
        return "immediate_action"
    if risk_score > 70 or days_until_maintenance < 45:
        return "schedule_soon"
    if risk_score > 50 or days_until_maintenance < 120:
        return "plan_maintenance"
    return "monitor"


def maintenance_cost(component_type: str, risk_score: float) -> float:
    return component_spec(component_type).base_cost * (1 + risk_score / 100)


def prediction_confidence(telemetry: UsageTelemetry, now: np.datetime64) -> float:
    """Confidence rising with telemetry coverage and recent maintenance."""
    confidence = 0.75 + min(0.15, telemetry.fields_present * 0.02)
    last = telemetry.last_maintenance_date
    if last is not None and days_between(last, now) < 90:
        confidence += 0.05
    return min(0.95, confidence)


def component_recommendations(
    component_type: str,
    risk_score: float,
    days_until_maintenance: float,
    failure_probability: float,
) -> list[str]:
    recommendations = []
    if risk_score > 75:
        recommendations.append(
            f"High risk detected for {component_type} - prioritize inspection"
        )
    if days_until_maintenance < 60:
        recommendations.append(
            f"Schedule {component_type} maintenance within "
            f"{days_until_maintenance:.0f} days"
        )
    if failure_probability > 70:
        recommendations.append(
            f"Consider immediate replacement of {component_type} components"
        )

    if component_type == "engine" and risk_score > 60:
        recommendations.append("Perform oil analysis and engine performance diagnostics")
    elif component_type == "hull" and risk_score > 50:
        recommendations.append(
            "Schedule underwater hull inspection for corrosion and damage"
        )
    elif component_type == "navigation":
        recommendations.append(
            "Verify all navigation equipment calibration and software updates"
        )
    return recommendations


def overall_recommendations(predictions: Iterable[ComponentPrediction]) -> list[str]:
    predictions = list(predictions)
    recommendations = []
    critical = sum(p.priority == "critical" for p in predictions)
    high = sum(p.priority == "high" for p in predictions)
    if critical > 0:
        recommendations.append(
            f"{critical} critical maintenance item(s) require immediate attention"
        )
    if high > 2:
        recommendations.append(
            "Multiple high-priority maintenance items - consider extended maintenance window"
        )
    if predictions and min(p.days_until_maintenance for p in predictions) < 30:
        recommendations.append("Plan for upcoming maintenance window within 30 days")
    return recommendations


def maintenance_windows(
    predictions: Iterable[ComponentPrediction], start_date: np.datetime64
) -> tuple[MaintenanceWindow, ...]:
    """Group every component due within 90 days into a single window."""
    due = sorted(
        (p for p in predictions if p.days_until_maintenance < WINDOW_HORIZON_DAYS),
        key=lambda p: p.days_until_maintenance,
    )
    if not due:
        return ()
    return (
        MaintenanceWindow(
            start_date=start_date,
            components=tuple(p.component_type for p in due),
            total_cost=sum(p.estimated_cost for p in due),
            duration_days=max(
                component_spec(p.component_type).maintenance_duration_days for p in due
            ),
        ),
    )


def maintenance_costs(
    predictions: Iterable[ComponentPrediction],
) -> MaintenanceCostEstimate:
    predictions = list(predictions)
    return MaintenanceCostEstimate(
        total=sum(p.estimated_cost for p in predictions),
        critical=sum(p.estimated_cost for p in predictions if p.priority == "critical"),
        next_six_months=sum(
            p.estimated_cost
            for p in predictions
            if p.days_until_maintenance < SIX_MONTHS_DAYS
        ),
    )


class MaintenanceForecaster(Estimator):
    """Forecasts maintenance needs of the six standard ship components."""

    name = "maintenance forecaster"

    def __init__(
        self,
        predictor_config: PredictorConfig = PredictorConfig(),
        batch_size: int = FeedbackConfig().maintenance_batch_size,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(predictor_config=predictor_config, batch_size=batch_size, rng=rng)

    def _model_settings(self):
        size = self.predictor_config.maintenance_training_size
        return {
            "maintenance": (size, self.predictor_config.maintenance_epochs),
            "failure": (size, self.predictor_config.failure_epochs),
        }

    def predict_component(
        self,
        ship: ShipProfile,
        component_type: str,
        component_index: int,
        telemetry: UsageTelemetry = UsageTelemetry(),
        now: np.datetime64 = None,
    ) -> ComponentPrediction:
        """Predict maintenance need of a single component.

        Parameters
        ----------
        ship : ShipProfile
            Ship snapshot
        component_type : str
            One of the standard component types
        component_index : int
            Position of the component type in the standard list
        telemetry : UsageTelemetry
            Operational readings, missing values fall back to fleet defaults
        now : np.datetime64, optional
            Reference time, defaults to the current time

        Returns
        -------
        ComponentPrediction
        """
        now = utc_now() if now is None else np.datetime64(now, "s")
        s = MAINTENANCE_SCALES

        ship_age = ship.age_years(now)
        engine_hours = telemetry.engine_hours or ship_age * HOURS_PER_YEAR_OF_SERVICE
        days_since = (
            DEFAULT_DAYS_SINCE_MAINTENANCE
            if telemetry.last_maintenance_date is None
            else days_between(telemetry.last_maintenance_date, now)
        )
        usage = usage_intensity(telemetry)
        severity = operating_conditions(telemetry)
        environment = environmental_stress(ship)
        load = telemetry.average_load_factor or DEFAULT_LOAD_FACTOR
        vibration = vibration_level(component_type, telemetry)
        temperature = temperature_stress(component_type, telemetry)
        corrosion = corrosion_risk(ship, ship_age)

        maintenance_features = np.array(
            [
                [
                    normalize(ship_age, 0, s.ship_age_years),
                    normalize(engine_hours, 0, s.engine_hours),
                    normalize(days_since, 0, s.days_since_maintenance),
                    component_index / len(COMPONENT_TYPES),
                    clamp(usage),
                    normalize(severity, 0, s.operating_conditions),
                    MAINTENANCE_QUALITY,
                    normalize(environment, 0, s.environmental_stress),
                    clamp(load),
                    normalize(vibration, 0, s.vibration_level),
                    normalize(temperature, 0, s.temperature_stress),
                    normalize(corrosion, 0, s.corrosion_risk),
                ]
            ]
        )
        failure_features = np.array(
            [
                [
                    normalize(ship_age * COMPONENT_AGE_FRACTION, 0, s.ship_age_years),
                    normalize(engine_hours, 0, s.engine_hours),
                    normalize((severity + environment + vibration) / 3, 0, 10),
                    clamp(load),
                    normalize(temperature, 0, s.temperature_stress),
                    normalize(corrosion, 0, s.corrosion_risk),
                    MAINTENANCE_QUALITY,
                    clamp(usage),
                ]
            ]
        )

        days_norm, risk_norm = self.predictor("maintenance").predict(maintenance_features)[0]
        failure_norm = self.predictor("failure").predict(failure_features)[0, 0]

        days_until = max(0.0, float(days_norm) * s.days_until_maintenance)
        risk_score = clamp(float(risk_norm) * 100, 0, 100)
        failure_probability = clamp(float(failure_norm) * 100, 0, 100)

        return ComponentPrediction(
            component_type=component_type,
            days_until_maintenance=days_until,
            risk_score=risk_score,
            failure_probability=failure_probability,
            confidence=prediction_confidence(telemetry, now),
            priority=maintenance_priority(risk_score, days_until),
            estimated_cost=maintenance_cost(component_type, risk_score),
            recommended_action=recommended_action(risk_score, days_until),
            recommendations=tuple(
                component_recommendations(
                    component_type, risk_score, days_until, failure_probability
                )
            ),
            predicted_failure_date=now
            + np.timedelta64(int(round(days_until * 86400)), "s"),
        )

    def forecast(
        self,
        ship: ShipProfile,
        telemetry: UsageTelemetry = UsageTelemetry(),
        now: np.datetime64 = None,
    ) -> MaintenanceForecast:
        """Forecast all standard components of a ship, highest risk first."""
        now = utc_now() if now is None else np.datetime64(now, "s")
        predictions = [
            self.predict_component(ship, component_type, index, telemetry, now=now)
            for index, component_type in enumerate(COMPONENT_TYPES)
        ]
        predictions.sort(key=lambda p: p.risk_score, reverse=True)

        forecast = MaintenanceForecast(
            predictions=tuple(predictions),
            overall_recommendations=tuple(overall_recommendations(predictions)),
            maintenance_windows=maintenance_windows(predictions, start_date=now),
            cost_estimate=maintenance_costs(predictions),
            timestamp=now,
            ship_id=ship.ship_id,
            ship_name=ship.name,
        )
        logging.info(
            "maintenance forecast for ship %s: next %s (risk %.0f)",
            ship.ship_id,
            forecast.next_critical_maintenance.component_type,
            forecast.next_critical_maintenance.risk_score,
        )
        return forecast


@dataclass(frozen=True)
class MaintenanceAlert:
    """Critical or high priority component prediction of one ship."""

    alert_id: str
    ship_id: str
    component: str
    priority: str
    risk_score: float
    days_until_maintenance: float
    estimated_cost: float
    confidence: float
    recommendations: tuple[str, ...] = ()
    predicted_failure_date: np.datetime64 | None = None
    ship_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "alertId": self.alert_id,
            "shipId": self.ship_id,
            "shipName": self.ship_name,
            "component": self.component,
            "priority": self.priority,
            "riskScore": self.risk_score,
            "daysUntilMaintenance": self.days_until_maintenance,
            "estimatedCost": self.estimated_cost,
            "confidence": self.confidence,
            "recommendations": list(self.recommendations),
            "predictedFailureDate": _datetime_str(self.predicted_failure_date),
        }


@dataclass(frozen=True)
class AlertSummary:
    """Counts and cost over all alerts, independent of the alert limit."""

    total_alerts: int = 0
    critical_alerts: int = 0
    high_priority_alerts: int = 0
    next_30_days: int = 0
    total_estimated_cost: float = 0.0
    ships_requiring_attention: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAlerts": self.total_alerts,
            "criticalAlerts": self.critical_alerts,
            "highPriorityAlerts": self.high_priority_alerts,
            "next30Days": self.next_30_days,
            "totalEstimatedCost": self.total_estimated_cost,
            "shipsRequiringAttention": self.ships_requiring_attention,
        }


@dataclass(frozen=True)
class MaintenanceAlerts(SerializableResult):
    alerts: tuple[MaintenanceAlert, ...] = ()
    summary: AlertSummary = field(default_factory=AlertSummary)

    def to_dict(self) -> dict[str, Any]:
        return {
            "alerts": [a.to_dict() for a in self.alerts],
            "summary": self.summary.to_dict(),
        }


def maintenance_alerts(
    forecasts: Iterable[MaintenanceForecast], limit: int = 50
) -> MaintenanceAlerts:
    """Collect critical and high priority predictions across ships.

    Alerts are ordered by priority, then by risk score. The summary covers all
    alerts, the returned list at most ``limit`` of them.
    """
    alerts = [
        MaintenanceAlert(
            alert_id=f"AI-{forecast.ship_id}-{p.component_type}",
            ship_id=forecast.ship_id,
            ship_name=forecast.ship_name,
            component=p.component_type,
            priority=p.priority,
            risk_score=p.risk_score,
            days_until_maintenance=p.days_until_maintenance,
            estimated_cost=p.estimated_cost,
            confidence=p.confidence,
            recommendations=p.recommendations,
            predicted_failure_date=p.predicted_failure_date,
        )
        for forecast in forecasts
        for p in forecast.predictions
        if p.priority in ("critical", "high")
    ]
    alerts.sort(key=lambda a: (PRIORITIES.index(a.priority), a.risk_score), reverse=True)

    summary = AlertSummary(
        total_alerts=len(alerts),
        critical_alerts=sum(a.priority == "critical" for a in alerts),
        high_priority_alerts=sum(a.priority == "high" for a in alerts),
        next_30_days=sum(a.days_until_maintenance <= 30 for a in alerts),
        total_estimated_cost=sum(a.estimated_cost for a in alerts),
        ships_requiring_attention=len({a.ship_id for a in alerts}),
    )
    return MaintenanceAlerts(alerts=tuple(alerts[:limit]), summary=summary)


@dataclass(frozen=True)
class PredictionAccuracy:
    accuracy: float | None
    sample_size: int

    def to_dict(self) -> dict[str, Any]:
        return {"accuracy": self.accuracy, "sampleSize": self.sample_size}


def prediction_accuracy(pairs: Iterable[tuple]) -> PredictionAccuracy:
    """Mean accuracy in percent of predicted against actual maintenance dates.

    Parameters
    ----------
    pairs : iterable of (predicted, actual)
        Predicted failure dates and actual completion dates; pairs with a
        missing date are skipped.

    Returns
    -------
    PredictionAccuracy
        Accuracy drops linearly to zero at a difference of one year; None
        without any usable pair.
    """
    scores = [
        max(
            0.0,
            1
            - abs(days_between(as_datetime64(predicted), as_datetime64(actual)))
            / ACCURACY_TOLERANCE_DAYS,
        )
        for predicted, actual in pairs
        if predicted is not None and actual is not None
    ]
    if not scores:
        return PredictionAccuracy(accuracy=None, sample_size=0)
    return PredictionAccuracy(accuracy=100 * float(np.mean(scores)), sample_size=len(scores))
