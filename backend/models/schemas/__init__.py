"""Pydantic contracts for the success-rate scoring engine."""

from models.schemas.idea_signal import Category, IdeaSignal, Location, resolve_location
from models.schemas.model_state import FeatureLayout, ModelParameters, PersistedModel, TrainingInfo
from models.schemas.explanation import Explanation, ExplanationFactor, ExplanationTerm

__all__ = [
    "Category",
    "Location",
    "IdeaSignal",
    "resolve_location",
    "FeatureLayout",
    "ModelParameters",
    "PersistedModel",
    "TrainingInfo",
    "Explanation",
    "ExplanationFactor",
    "ExplanationTerm",
]
