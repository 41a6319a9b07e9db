"""Evaluation metrics for the success-rate classifier.

Provides binary-classification metrics for held-out evaluation:
- Accuracy of the thresholded probability (sign of the decision value)
- ROC AUC and log loss via scikit-learn
- Per-label prevalence so skewed synthetic draws are visible in reports

All public functions accept plain Python lists or NumPy arrays and return
simple Python scalars or dicts so their output can be dumped to JSON.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence, Union

import numpy as np
from sklearn.metrics import accuracy_score, log_loss, roc_auc_score

logger = logging.getLogger(__name__)

_ArrayLike = Union[Sequence[float], "np.ndarray"]


def _validate(y_true: _ArrayLike, y_prob: _ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    y_true_arr = np.asarray(y_true, dtype=np.float64)
    y_prob_arr = np.asarray(y_prob, dtype=np.float64)

    if y_true_arr.shape != y_prob_arr.shape:
        raise ValueError(
            f"Shape mismatch: {y_true_arr.shape} vs {y_prob_arr.shape}"
        )
    if y_true_arr.size == 0:
        raise ValueError("Inputs must not be empty")
    return y_true_arr, y_prob_arr


def decision_accuracy(
    y_true: _ArrayLike,
    y_prob: _ArrayLike,
    threshold: float = 0.5,
) -> float:
    """Fraction of examples whose thresholded probability matches the label.

    Parameters
    ----------
    y_true:
        Binary ground-truth labels (0 or 1).
    y_prob:
        Predicted probabilities with the same length.
    threshold:
        Probability above which the prediction counts as positive. 0.5
        corresponds to the sign of the logit.

    Raises
    ------
    ValueError
        If the input lengths do not match or are empty.
    """
    y_true_arr, y_prob_arr = _validate(y_true, y_prob)
    y_pred = (y_prob_arr > threshold).astype(np.int32)
    return float(accuracy_score(y_true_arr.astype(np.int32), y_pred))


def classification_report(
    y_true: _ArrayLike,
    y_prob: _ArrayLike,
) -> Dict[str, float]:
    """Accuracy, ROC AUC, log loss and prevalence for one evaluation split.

    ROC AUC is undefined when only one class is present; it is omitted in
    that case and a warning is logged.
    """
    y_true_arr, y_prob_arr = _validate(y_true, y_prob)

    report: Dict[str, float] = {
        "support": int(y_true_arr.size),
        "prevalence": float(np.mean(y_true_arr)),
        "accuracy": decision_accuracy(y_true_arr, y_prob_arr),
        "log_loss": float(log_loss(y_true_arr, y_prob_arr, labels=[0, 1])),
    }

    if np.unique(y_true_arr).size >= 2:
        report["roc_auc"] = float(roc_auc_score(y_true_arr, y_prob_arr))
    else:
        logger.warning("Only one class in evaluation labels; ROC AUC skipped")

    return report
