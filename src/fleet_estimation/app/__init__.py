"""Application layer: estimators, voyage planning and maintenance forecasts."""

from .collaborators import (
    InMemoryShipRepository,
    ShipRepository,
    mock_route_forecast,
    mock_usage_telemetry,
    mock_weather,
)
from .config import EstimationConfig, FeedbackConfig, MarketConfig, PredictorConfig
from .context import EstimatorContext
from .estimator import Estimator, FeedbackRecord
from .fuel import FuelEstimate, FuelEstimator
from .maintenance import (
    ComponentPrediction,
    MaintenanceAlert,
    MaintenanceAlerts,
    MaintenanceCostEstimate,
    MaintenanceForecast,
    MaintenanceForecaster,
    MaintenanceRecord,
    MaintenanceWindow,
    PredictionAccuracy,
    maintenance_alerts,
    maintenance_priority,
    prediction_accuracy,
    recommended_action,
)
from .planning import (
    FeedbackReceipt,
    VoyageFeedback,
    VoyageOutcome,
    VoyagePlan,
    plan_voyage,
    submit_voyage_feedback,
)
from .route import RouteEstimate, RouteEstimator, Waypoint
from .cli import build_context

__all__ = [
    "InMemoryShipRepository",
    "ShipRepository",
    "mock_route_forecast",
    "mock_usage_telemetry",
    "mock_weather",
    "EstimationConfig",
    "FeedbackConfig",
    "MarketConfig",
    "PredictorConfig",
    "EstimatorContext",
    "Estimator",
    "FeedbackRecord",
    "FuelEstimate",
    "FuelEstimator",
    "ComponentPrediction",
    "MaintenanceAlert",
    "MaintenanceAlerts",
    "MaintenanceCostEstimate",
    "MaintenanceForecast",
    "MaintenanceForecaster",
    "MaintenanceRecord",
    "MaintenanceWindow",
    "PredictionAccuracy",
    "maintenance_alerts",
    "maintenance_priority",
    "prediction_accuracy",
    "recommended_action",
    "FeedbackReceipt",
    "VoyageFeedback",
    "VoyageOutcome",
    "VoyagePlan",
    "plan_voyage",
    "submit_voyage_feedback",
    "RouteEstimate",
    "RouteEstimator",
    "Waypoint",
    "build_context",
]
