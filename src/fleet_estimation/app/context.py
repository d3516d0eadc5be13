from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging

import numpy as np

from .config import EstimationConfig
from .fuel import FuelEstimator
from .maintenance import MaintenanceForecaster
from .route import RouteEstimator


@dataclass
class EstimatorContext:
    """Estimators shared by all requests of a process.

    Build one context at startup and hand it to every request handler.
    Predictors are initialized lazily, or eagerly with ``initialize``.
    """

    route: RouteEstimator
    fuel: FuelEstimator
    maintenance: MaintenanceForecaster
    config: EstimationConfig = EstimationConfig()

    @classmethod
    def from_config(cls, config: EstimationConfig = EstimationConfig()):
        """Create estimators with independent random streams."""
        seed_seq = np.random.SeedSequence(config.random_seed)
        route_seq, fuel_seq, maintenance_seq = seed_seq.spawn(3)
        return cls(
            route=RouteEstimator(
                predictor_config=config.predictor,
                market=config.market,
                batch_size=config.feedback.route_batch_size,
                rng=np.random.default_rng(route_seq),
            ),
            fuel=FuelEstimator(
                predictor_config=config.predictor,
                batch_size=config.feedback.fuel_batch_size,
                rng=np.random.default_rng(fuel_seq),
            ),
            maintenance=MaintenanceForecaster(
                predictor_config=config.predictor,
                batch_size=config.feedback.maintenance_batch_size,
                rng=np.random.default_rng(maintenance_seq),
            ),
            config=config,
        )

    @property
    def estimators(self):
        return (self.route, self.fuel, self.maintenance)

    @property
    def is_ready(self) -> bool:
        return all(e.is_ready for e in self.estimators)

    def initialize(self) -> None:
        """Warm up all estimators concurrently."""
        with ThreadPoolExecutor(max_workers=len(self.estimators)) as executor:
            futures = [executor.submit(e.initialize) for e in self.estimators]
            for future in futures:
                future.result()
        logging.info("estimator context ready (%s)", self.config.predictor.kind)
