from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..core.errors import ConfigurationError


@dataclass(frozen=True)
class PredictorConfig:
    """How the estimators obtain their predictors."""

    kind: Literal["formula", "trained"] = "formula"
    route_training_size: int = 1000
    fuel_training_size: int = 1500
    maintenance_training_size: int = 2000
    route_epochs: int = 100
    fuel_epochs: int = 150
    maintenance_epochs: int = 120
    failure_epochs: int = 100

    def __post_init__(self):
        if self.kind not in ("formula", "trained"):
            raise ConfigurationError(f"Unknown predictor kind: {self.kind}")


@dataclass(frozen=True)
class FeedbackConfig:
    """Number of buffered outcomes between retraining attempts."""

    route_batch_size: int = 100
    fuel_batch_size: int = 100
    maintenance_batch_size: int = 100

    def __post_init__(self):
        for name in ("route_batch_size", "fuel_batch_size", "maintenance_batch_size"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be positive")


@dataclass(frozen=True)
class MarketConfig:
    """Market reference values fed into the route model."""

    reference_fuel_price: float = 450.0  # USD per ton
    sea_conditions_max: float = 3.0  # calm seas
    traffic_density_max: float = 5.0
    port_congestion_max: float = 3.0


@dataclass(frozen=True)
class EstimationConfig:
    """Top-level configuration consumed by the estimator context."""

    predictor: PredictorConfig = PredictorConfig()
    feedback: FeedbackConfig = FeedbackConfig()
    market: MarketConfig = MarketConfig()
    random_seed: int | None = None
