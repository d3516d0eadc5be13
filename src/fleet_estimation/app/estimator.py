"""Shared machinery of the estimators: lazy predictors and feedback buffers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
import logging
import threading
from typing import Any, Mapping

import numpy as np
import pandas as pd

from ..core.entities import utc_now
from ..core.errors import ColdStartError, ConfigurationError
from ..predictors import Predictor, build_predictor
from .config import PredictorConfig


@dataclass(frozen=True)
class FeedbackRecord:
    """One observed outcome kept for future retraining."""

    payload: dict[str, Any]
    received: np.datetime64 = field(default_factory=utc_now)

    def to_record(self) -> dict[str, Any]:
        """Flat record with the receive time and payload items."""
        return {"received": self.received, **self.payload}


class Estimator:
    """Base class of the route, fuel and maintenance estimators.

    Predictors are built on first use. Concurrent first callers block on a
    single initialization; a failed initialization leaves the estimator
    uninitialized so that the next call tries again.
    """

    name = "estimator"

    def __init__(
        self,
        predictor_config: PredictorConfig = PredictorConfig(),
        batch_size: int = 100,
        rng: np.random.Generator | None = None,
    ):
        self.predictor_config = predictor_config
        self.batch_size = batch_size
        self._rng = np.random.default_rng() if rng is None else rng
        self._rng_lock = threading.Lock()
        self._predictors: dict[str, Predictor] | None = None
        self._init_lock = threading.Lock()
        self._feedback: list[FeedbackRecord] = []
        self._feedback_lock = threading.Lock()
        self.retrain_requests = 0

    def _model_settings(self) -> dict[str, tuple[int, int]]:
        """Map model name to (training size, epochs)."""
        raise NotImplementedError

    @property
    def is_ready(self) -> bool:
        return self._predictors is not None

    def initialize(self) -> None:
        """Build all predictors of this estimator (idempotent)."""
        if self._predictors is not None:
            return
        with self._init_lock:
            if self._predictors is not None:
                return
            try:
                predictors = {
                    model: build_predictor(
                        model,
                        kind=self.predictor_config.kind,
                        training_size=training_size,
                        max_iter=epochs,
                        rng=self._rng,
                    )
                    for model, (training_size, epochs) in self._model_settings().items()
                }
            except ConfigurationError:
                raise
            except Exception as error:
                logging.error("initializing %s failed: %s", self.name, error)
                raise ColdStartError(f"Could not initialize {self.name}") from error
            self._predictors = predictors
            logging.info(
                "%s initialized with %s predictors", self.name, self.predictor_config.kind
            )

    def predictor(self, model: str) -> Predictor:
        self.initialize()
        return self._predictors[model]

    def _uniform(self, high: float) -> float:
        with self._rng_lock:
            return float(self._rng.uniform(0.0, high))

    def _feedback_payload(self, outcome) -> dict[str, Any]:
        """Turn an outcome into a flat dict; subclasses extract features."""
        if is_dataclass(outcome):
            return asdict(outcome)
        if isinstance(outcome, Mapping):
            return dict(outcome)
        raise TypeError(f"Unsupported feedback type {type(outcome)!r}")

    def update_with_feedback(self, outcome) -> bool:
        """Buffer an observed outcome; never raises.

        Every ``batch_size`` records a retraining is requested.

        Returns
        -------
        bool
            True if the outcome was buffered
        """
        try:
            record = FeedbackRecord(payload=self._feedback_payload(outcome))
            with self._feedback_lock:
                self._feedback.append(record)
                buffered = len(self._feedback)
            if buffered % self.batch_size == 0:
                self.retrain()
            logging.info("%s received feedback (%d buffered)", self.name, buffered)
            return True
        except Exception:
            logging.exception("%s could not process feedback", self.name)
            return False

    def retrain(self) -> None:
        """Request retraining on the buffered outcomes.

        Parameter updates are not implemented; the request is only logged.
        """
        with self._feedback_lock:
            self.retrain_requests += 1
            buffered = len(self._feedback)
        logging.info(
            "retraining %s with %d feedback records requested (no-op)",
            self.name,
            buffered,
        )

    @property
    def feedback_count(self) -> int:
        with self._feedback_lock:
            return len(self._feedback)

    @property
    def feedback_frame(self) -> pd.DataFrame:
        """Buffered outcomes, one row per record."""
        with self._feedback_lock:
            records = [r.to_record() for r in self._feedback]
        if not records:
            return pd.DataFrame(columns=["received"])
        return pd.DataFrame(records)
