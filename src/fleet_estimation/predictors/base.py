from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Predictor(Protocol):
    """Maps normalized feature rows onto normalized output rows."""

    def fit(self, inputs: np.ndarray, outputs: np.ndarray) -> "Predictor": ...

    def predict(self, features: np.ndarray) -> np.ndarray: ...


class FormulaPredictor:
    """Predictor evaluating a closed-form formula.

    Deterministic and free of training cost; ``fit`` is accepted for
    interface compatibility and ignored.
    """

    def __init__(self, formula: Callable[[np.ndarray], np.ndarray], name: str = None):
        self.formula = formula
        self.name = name or getattr(formula, "__name__", "formula")

    def fit(self, inputs: np.ndarray = None, outputs: np.ndarray = None):
        return self

    def predict(self, features: np.ndarray) -> np.ndarray:
        return np.atleast_2d(self.formula(np.atleast_2d(features)))

    def __repr__(self):
        return f"FormulaPredictor({self.name})"
