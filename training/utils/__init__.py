"""Training utility package -- evaluation metrics for the success-rate model."""

from .metrics import (
    classification_report,
    decision_accuracy,
)

__all__ = [
    "classification_report",
    "decision_accuracy",
]
