"""Trainable fixed-topology predictors backed by scikit-learn perceptrons."""

from __future__ import annotations

import logging
from typing import Literal

import numpy as np
from sklearn.neural_network import MLPClassifier, MLPRegressor

from ..core.errors import ColdStartError


class MLPPredictor:
    """Feed-forward regressor with ReLU hidden layers.

    Parameters
    ----------
    hidden_layer_sizes : tuple of int
        Units per hidden layer
    output_activation : {"linear", "sigmoid"}
        "sigmoid" bounds predictions to [0, 1] by clipping the linear output
    learning_rate : float
        Adam learning rate
    max_iter : int
        Training epochs
    batch_size : int
        Mini-batch size
    random_state : int, optional
        Seed for weight initialization and shuffling
    """

    def __init__(
        self,
        hidden_layer_sizes: tuple = (32, 16, 8),
        output_activation: Literal["linear", "sigmoid"] = "linear",
        learning_rate: float = 0.001,
        max_iter: int = 100,
        batch_size: int = 32,
        random_state: int | None = None,
    ):
        self.output_activation = output_activation
        self.model = MLPRegressor(
            hidden_layer_sizes=hidden_layer_sizes,
            activation="relu",
            solver="adam",
            learning_rate_init=learning_rate,
            max_iter=max_iter,
            batch_size=batch_size,
            random_state=random_state,
        )
        self.is_fitted = False

    def fit(self, inputs: np.ndarray, outputs: np.ndarray) -> "MLPPredictor":
        outputs = np.asarray(outputs, dtype=float)
        if outputs.ndim == 2 and outputs.shape[1] == 1:
            outputs = outputs.ravel()
        try:
            self.model.fit(np.asarray(inputs, dtype=float), outputs)
        except ValueError as error:
            raise ColdStartError(f"Training failed: {error}") from error
        self.is_fitted = True
        logging.info(
            "trained %s on %d samples, final loss %.5f",
            type(self).__name__,
            len(inputs),
            self.model.loss_,
        )
        return self

    def predict(self, features: np.ndarray) -> np.ndarray:
        prediction = self.model.predict(np.atleast_2d(np.asarray(features, dtype=float)))
        prediction = prediction.reshape(len(np.atleast_2d(features)), -1)
        if self.output_activation == "sigmoid":
            prediction = np.clip(prediction, 0.0, 1.0)
        return prediction


class MLPProbabilityPredictor:
    """Feed-forward binary classifier returning the probability of class 1."""

    def __init__(
        self,
        hidden_layer_sizes: tuple = (32, 16),
        learning_rate: float = 0.001,
        max_iter: int = 100,
        batch_size: int = 32,
        random_state: int | None = None,
    ):
        self.model = MLPClassifier(
            hidden_layer_sizes=hidden_layer_sizes,
            activation="relu",
            solver="adam",
            learning_rate_init=learning_rate,
            max_iter=max_iter,
            batch_size=batch_size,
            random_state=random_state,
        )
        self._constant = None
        self.is_fitted = False

    def fit(self, inputs: np.ndarray, labels: np.ndarray) -> "MLPProbabilityPredictor":
        labels = np.asarray(labels, dtype=float).ravel()
        classes = np.unique(labels)
        if len(classes) == 1:
            # a classifier cannot be fitted on a single class
            logging.warning(
                "only class %s in training labels; predicting a constant", classes[0]
            )
            self._constant = float(classes[0])
        else:
            try:
                self.model.fit(np.asarray(inputs, dtype=float), labels)
            except ValueError as error:
                raise ColdStartError(f"Training failed: {error}") from error
            logging.info(
                "trained %s on %d samples, final loss %.5f",
                type(self).__name__,
                len(inputs),
                self.model.loss_,
            )
        self.is_fitted = True
        return self

    def predict(self, features: np.ndarray) -> np.ndarray:
        features = np.atleast_2d(np.asarray(features, dtype=float))
        if self._constant is not None:
            return np.full((len(features), 1), self._constant)
        probabilities = self.model.predict_proba(features)
        positive = list(self.model.classes_).index(1.0)
        return probabilities[:, positive][:, np.newaxis]
