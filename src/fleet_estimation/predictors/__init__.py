"""Predictor layer: closed-form formulas, synthetic data and trainable perceptrons."""

from .base import FormulaPredictor, Predictor
from .formulas import (
    failure_formula,
    fuel_consumption_tons,
    fuel_formula,
    maintenance_formula,
    maintenance_targets,
    route_formula,
    route_targets,
)
from .registry import MODEL_SPECS, ModelSpec, build_predictor
from .synthetic import (
    failure_training_data,
    fuel_training_data,
    maintenance_training_data,
    route_training_data,
)
from .trained import MLPPredictor, MLPProbabilityPredictor

__all__ = [
    "FormulaPredictor",
    "Predictor",
    "failure_formula",
    "fuel_consumption_tons",
    "fuel_formula",
    "maintenance_formula",
    "maintenance_targets",
    "route_formula",
    "route_targets",
    "MODEL_SPECS",
    "ModelSpec",
    "build_predictor",
    "failure_training_data",
    "fuel_training_data",
    "maintenance_training_data",
    "route_training_data",
    "MLPPredictor",
    "MLPProbabilityPredictor",
]
