"""Model definitions shared by the formula and trained predictor variants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

import numpy as np

from ..core.errors import ConfigurationError
from .base import FormulaPredictor, Predictor
from .formulas import failure_formula, fuel_formula, maintenance_formula, route_formula
from .synthetic import (
    failure_training_data,
    fuel_training_data,
    maintenance_training_data,
    route_training_data,
)
from .trained import MLPPredictor, MLPProbabilityPredictor


@dataclass(frozen=True)
class ModelSpec:
    """Topology, closed-form formula and training data source of one model."""

    name: str
    n_inputs: int
    n_outputs: int
    hidden_layer_sizes: tuple
    output: Literal["linear", "sigmoid", "probability"]
    formula: Callable[[np.ndarray], np.ndarray]
    training_data: Callable[..., tuple]


MODEL_SPECS = {
    "route": ModelSpec(
        "route", 8, 3, (32, 16, 8), "linear", route_formula, route_training_data
    ),
    "fuel": ModelSpec(
        "fuel", 10, 1, (64, 32, 16), "linear", fuel_formula, fuel_training_data
    ),
    "maintenance": ModelSpec(
        "maintenance",
        12,
        2,
        (64, 32, 16),
        "sigmoid",
        maintenance_formula,
        maintenance_training_data,
    ),
    "failure": ModelSpec(
        "failure", 8, 1, (32, 16), "probability", failure_formula, failure_training_data
    ),
}


def build_predictor(
    name: str,
    kind: Literal["formula", "trained"] = "formula",
    training_size: int = 1000,
    max_iter: int = 100,
    rng: np.random.Generator = None,
) -> Predictor:
    """Create a ready-to-use predictor for one of the models.

    Parameters
    ----------
    name : str
        One of "route", "fuel", "maintenance", "failure"
    kind : {"formula", "trained"}
        Closed-form formula or perceptron trained on synthetic data
    training_size : int
        Number of synthetic samples (trained only)
    max_iter : int
        Training epochs (trained only)
    rng : np.random.Generator, optional
        Source of synthetic data and weight seeds (trained only)

    Returns
    -------
    Predictor
        Fitted predictor

    Raises
    ------
    ConfigurationError
        If model name or kind are unknown
    """
    if name not in MODEL_SPECS:
        raise ConfigurationError(f"Unknown model: {name}")
    spec = MODEL_SPECS[name]

    if kind == "formula":
        return FormulaPredictor(spec.formula, name=name)
    if kind != "trained":
        raise ConfigurationError(f"Unknown predictor kind: {kind}")

    rng = np.random.default_rng() if rng is None else rng
    inputs, outputs = spec.training_data(size=training_size, rng=rng)
    random_state = int(rng.integers(0, 2**31 - 1))
    if spec.output == "probability":
        predictor = MLPProbabilityPredictor(
            hidden_layer_sizes=spec.hidden_layer_sizes,
            max_iter=max_iter,
            random_state=random_state,
        )
    else:
        predictor = MLPPredictor(
            hidden_layer_sizes=spec.hidden_layer_sizes,
            output_activation=spec.output,
            max_iter=max_iter,
            random_state=random_state,
        )
    logging.info("training %s model on %d synthetic samples", name, training_size)
    return predictor.fit(inputs, outputs)
