"""Process-wide success-rate service singleton.

Created on first access and initialized exactly once; all callers share
the same read-only model afterwards.
"""

from threading import Lock
from typing import Optional

from config import settings
from services.scoring.service import SuccessRateService
from services.scoring.store import ModelStore

_scorer: Optional[SuccessRateService] = None
_scorer_lock = Lock()


def _create_scorer() -> SuccessRateService:
    return SuccessRateService(
        ModelStore(settings.model_path),
        dataset_size=settings.dataset_size,
        dataset_seed=settings.dataset_seed,
        learning_rate=settings.learning_rate,
        epochs=settings.epochs,
        training_csv_path=settings.training_csv_path if settings.export_training_csv else None,
        strict_persistence=settings.strict_persistence,
    )


def get_scorer() -> SuccessRateService:
    """Get the global scorer, creating and initializing it on first access."""
    global _scorer
    if _scorer is None:
        with _scorer_lock:
            if _scorer is None:
                _scorer = _create_scorer()
    _scorer.ensure_loaded()
    return _scorer


def preload() -> None:
    """Initialize the scorer eagerly (e.g. at process start)."""
    get_scorer()


def clear() -> None:
    """Drop the global scorer. Useful for testing."""
    global _scorer
    with _scorer_lock:
        _scorer = None
