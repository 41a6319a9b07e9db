"""Linear-in-features logistic classifier."""

import numpy as np

from models.schemas.model_state import ModelParameters


def sigmoid(z):
    # Clipped so exp() cannot overflow for extreme logits
    return 1.0 / (1.0 + np.exp(-np.clip(z, -500.0, 500.0)))


class LogisticModel:
    """Weight vector + bias, zero-initialized.

    Parameters change only through ``services.scoring.trainer.fit`` (or by
    loading persisted parameters).
    """

    def __init__(self, n_features: int) -> None:
        self.weights = np.zeros(n_features, dtype=np.float64)
        self.bias = 0.0

    @property
    def n_features(self) -> int:
        return int(self.weights.shape[0])

    @classmethod
    def from_parameters(cls, params: ModelParameters) -> "LogisticModel":
        model = cls(len(params.weights))
        model.weights = np.asarray(params.weights, dtype=np.float64)
        model.bias = float(params.bias)
        return model

    def to_parameters(self) -> ModelParameters:
        return ModelParameters(weights=self.weights.tolist(), bias=float(self.bias))

    def freeze(self) -> "LogisticModel":
        """Mark the weight array read-only once the model is live."""
        self.weights.setflags(write=False)
        return self

    def decision(self, x: np.ndarray) -> float:
        return float(self.bias + np.dot(self.weights, x))

    def score(self, x: np.ndarray) -> float:
        """Probability in (0, 1) for one feature vector."""
        return float(sigmoid(self.decision(x)))

    def score_batch(self, X: np.ndarray) -> np.ndarray:
        return sigmoid(np.asarray(X, dtype=np.float64) @ self.weights + self.bias)
