"""Full-batch gradient descent for LogisticModel.

Each epoch accumulates ``(p - y) * x`` over the whole dataset and applies
one update of ``learning_rate / N`` times that sum. There is no early
stopping; every call runs exactly ``epochs`` epochs.
"""

import logging
import math

import numpy as np

from services.scoring.model import LogisticModel, sigmoid

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.3
DEFAULT_EPOCHS = 300
_LOG_EVERY = 100


class TrainingError(RuntimeError):
    """Fitting produced parameters that cannot be installed."""


def _cross_entropy(p: np.ndarray, y: np.ndarray) -> float:
    p = np.clip(p, 1e-12, 1 - 1e-12)
    return float(-np.mean(y * np.log(p) + (1 - y) * np.log(1 - p)))


def log_loss(model: LogisticModel, X: np.ndarray, y: np.ndarray) -> float:
    return _cross_entropy(model.score_batch(X), np.asarray(y, dtype=np.float64))


def fit(
    model: LogisticModel,
    features: np.ndarray,
    labels: np.ndarray,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epochs: int = DEFAULT_EPOCHS,
) -> LogisticModel:
    """Fit ``model`` in place and return it.

    Updates are computed on private copies and written back only after the
    last epoch, so a failure never leaves the model half-trained.
    """
    X = np.asarray(features, dtype=np.float64)
    y = np.asarray(labels, dtype=np.float64)

    if X.ndim != 2 or X.shape[0] == 0:
        raise ValueError("Training requires a non-empty 2-D feature matrix")
    if X.shape[1] != model.n_features:
        raise ValueError(f"Feature width {X.shape[1]} != model width {model.n_features}")
    if y.shape != (X.shape[0],):
        raise ValueError(f"Expected {X.shape[0]} labels, got shape {y.shape}")
    if learning_rate <= 0:
        raise ValueError("learning_rate must be positive")
    if epochs < 0:
        raise ValueError("epochs must be non-negative")

    n = X.shape[0]
    step = learning_rate / n
    w = np.array(model.weights, dtype=np.float64, copy=True)
    b = float(model.bias)

    logger.info("Training logistic model: %d examples, %d features, lr=%.3f, epochs=%d",
                n, X.shape[1], learning_rate, epochs)

    for epoch in range(epochs):
        error = sigmoid(X @ w + b) - y
        w -= step * (X.T @ error)
        b -= step * float(error.sum())

        if logger.isEnabledFor(logging.DEBUG) and (epoch + 1) % _LOG_EVERY == 0:
            logger.debug("epoch %d/%d loss=%.5f", epoch + 1, epochs, _cross_entropy(sigmoid(X @ w + b), y))

    if not (np.all(np.isfinite(w)) and math.isfinite(b)):
        raise TrainingError("Gradient descent diverged to non-finite parameters")

    model.weights = w
    model.bias = b
    logger.info("Training finished: loss=%.5f", log_loss(model, X, y))
    return model
