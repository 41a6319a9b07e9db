"""Learned parameters and their on-disk representation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelParameters(BaseModel):
    """Weight vector (one entry per feature dimension) plus scalar bias."""
    model_config = ConfigDict(allow_inf_nan=False)

    weights: list[float] = []
    bias: float = 0.0


class FeatureLayout(BaseModel):
    """Fingerprint of the feature layout a model was trained against."""
    categories: list[str] = []
    locations: list[str] = []
    funding: str = ""
    audience_length: str = ""


class TrainingInfo(BaseModel):
    n_examples: int = 0
    seed: Optional[int] = None
    learning_rate: float = 0.0
    epochs: int = 0
    trained_at: str = ""  # ISO-8601, UTC


class PersistedModel(BaseModel):
    """JSON document written by the model store.

    Only ``weights`` and ``bias`` are required to reload; the layout and
    training block are kept for compatibility diagnostics.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    weights: list[float]
    bias: float
    feature_order: FeatureLayout = Field(default_factory=FeatureLayout)
    training: Optional[TrainingInfo] = None

    def parameters(self) -> ModelParameters:
        return ModelParameters(weights=list(self.weights), bias=self.bias)
