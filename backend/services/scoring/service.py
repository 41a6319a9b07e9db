"""Success-rate scoring service.

Loads persisted parameters on first use; if none are usable, generates the
synthetic dataset, trains a fresh model and persists it. Initialization
runs once per instance and must finish before any prediction is served.
After that the model is read-only, so ``predict``/``explain`` need no
coordination between callers.
"""

import datetime as dt
import logging
from pathlib import Path
from threading import Lock
from typing import Optional

from models.schemas.explanation import Explanation
from models.schemas.idea_signal import IdeaSignal
from models.schemas.model_state import TrainingInfo
from services.scoring import dataset
from services.scoring.explanation import build_terms
from services.scoring.features import FEATURE_DIM, encode, feature_layout
from services.scoring.model import LogisticModel
from services.scoring.store import ModelStore
from services.scoring.trainer import fit

logger = logging.getLogger(__name__)


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class SuccessRateService:
    model_name = "success_rate"

    def __init__(
        self,
        store: ModelStore,
        *,
        dataset_size: int = 1500,
        dataset_seed: int = 123,
        learning_rate: float = 0.5,
        epochs: int = 500,
        training_csv_path: Optional[Path | str] = None,
        strict_persistence: bool = False,
    ) -> None:
        self._store = store
        self._dataset_size = dataset_size
        self._dataset_seed = dataset_seed
        self._learning_rate = learning_rate
        self._epochs = epochs
        self._training_csv_path = Path(training_csv_path) if training_csv_path else None
        self._strict_persistence = strict_persistence

        self._model: Optional[LogisticModel] = None
        self._source = ""
        self._loaded = False
        self._lock = Lock()

    # ------------------------------------------------------------------
    # One-time initialization
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def source(self) -> str:
        """"store" if parameters were reloaded, "trained" if fitted in-process."""
        return self._source

    def ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            logger.info("Loading model: %s", self.model_name)
            self.load()
            self._loaded = True
            logger.info("Model loaded: %s (%s)", self.model_name, self._source)

    def load(self) -> None:
        params = self._store.load(FEATURE_DIM, feature_layout())
        if params is not None:
            self._model = LogisticModel.from_parameters(params).freeze()
            self._source = "store"
            return

        examples = dataset.generate(self._dataset_size, self._dataset_seed)
        X, y = dataset.to_arrays(examples)
        model = fit(LogisticModel(FEATURE_DIM), X, y, learning_rate=self._learning_rate, epochs=self._epochs)
        self._persist(model, examples)
        self._model = model.freeze()
        self._source = "trained"

    def _persist(self, model: LogisticModel, examples: list) -> None:
        info = TrainingInfo(
            n_examples=len(examples),
            seed=self._dataset_seed,
            learning_rate=self._learning_rate,
            epochs=self._epochs,
            trained_at=dt.datetime.now(dt.timezone.utc).isoformat(),
        )
        try:
            self._store.save(model.to_parameters(), feature_layout(), info)
            if self._training_csv_path is not None:
                dataset.export_csv(examples, self._training_csv_path)
        except OSError as e:
            if self._strict_persistence:
                raise
            logger.warning("Could not persist success-rate model, serving from memory: %s", e)

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    @property
    def model(self) -> LogisticModel:
        self.ensure_loaded()
        return self._model

    def predict(self, signal: IdeaSignal) -> float:
        """Success probability in [0, 1]."""
        return _clamp01(self.model.score(encode(signal)))

    def explain(self, signal: IdeaSignal) -> Explanation:
        model = self.model
        x = encode(signal)
        return Explanation(
            probability=_clamp01(model.score(x)),
            bias=float(model.bias),
            terms=build_terms(x, model.weights),
            model_path=str(self._store.path),
            csv_path=str(self._training_csv_path) if self._training_csv_path else None,
        )
