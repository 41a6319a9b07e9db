"""JSON persistence for trained success-rate parameters.

Any problem reading a stored model (missing file, bad JSON, schema errors,
wrong weight count) is a cache miss: ``load`` returns None and the caller
retrains. Write errors from ``save`` propagate.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.schemas.model_state import FeatureLayout, ModelParameters, PersistedModel, TrainingInfo

logger = logging.getLogger(__name__)


class ModelStore:
    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(
        self,
        params: ModelParameters,
        layout: FeatureLayout,
        training: Optional[TrainingInfo] = None,
    ) -> Path:
        """Write parameters + layout fingerprint, replacing any previous file."""
        doc = PersistedModel(
            weights=list(params.weights),
            bias=params.bias,
            feature_order=layout,
            training=training,
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(doc.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
        logger.info("Saved success-rate model (%d weights) to %s", len(params.weights), self._path)
        return self._path

    def read(self) -> Optional[PersistedModel]:
        """Parse the stored document, or None if it is absent or malformed."""
        if not self._path.is_file():
            logger.info("No persisted model at %s", self._path)
            return None
        try:
            return PersistedModel.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable model file %s: %s", self._path, e)
            return None

    def load(
        self,
        expected_length: int,
        expected_layout: Optional[FeatureLayout] = None,
    ) -> Optional[ModelParameters]:
        """Return stored parameters if they fit ``expected_length`` weights."""
        doc = self.read()
        if doc is None:
            return None

        if len(doc.weights) != expected_length:
            logger.warning(
                "Persisted model has %d weights, expected %d -- ignoring %s",
                len(doc.weights), expected_length, self._path,
            )
            return None

        if expected_layout is not None and doc.feature_order != expected_layout:
            logger.warning(
                "Persisted model layout %s differs from current layout %s; using it anyway",
                doc.feature_order.model_dump(), expected_layout.model_dump(),
            )

        logger.info("Loaded success-rate model from %s", self._path)
        return doc.parameters()

