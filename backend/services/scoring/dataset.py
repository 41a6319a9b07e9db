"""Synthetic training set for the success-rate model.

Samples idea-like records from a seeded Mulberry32 stream, labels them
with the hidden desirability rule, and encodes them with the production
feature encoder. Same (count, seed) always yields the same examples.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np

from models.schemas.idea_signal import Category, IdeaSignal, Location
from services.scoring import ground_truth
from services.scoring.features import encode
from services.scoring.prng import create

logger = logging.getLogger(__name__)

AUDIENCE_LENGTHS = (20, 60, 120, 180)
AUDIENCE_WORDS = (
    "youth", "farmers", "smes", "patients", "developers",
    "teachers", "commuters", "tourists", "parents", "seniors",
)
CSV_COLUMNS = ["category", "author_location", "required_funding", "target_audience", "success"]


@dataclass(frozen=True)
class TrainingExample:
    signal: IdeaSignal  # sampled fields, kept for the audit export
    features: tuple[float, ...]
    label: int


def _random_audience(rand) -> str:
    length = rand.choice(AUDIENCE_LENGTHS)
    return " ".join(rand.choice(AUDIENCE_WORDS) for _ in range(length // 6))


def generate(count: int, seed: int) -> list[TrainingExample]:
    """Draw ``count`` labelled examples from the stream seeded with ``seed``."""
    rand = create(seed)
    categories = list(Category)
    locations = list(Location)
    examples: list[TrainingExample] = []

    for _ in range(count):
        category = rand.choice(categories)
        location = rand.choice(locations)
        funding = rand.below(ground_truth.FUNDING_CAP)
        audience = _random_audience(rand)

        score = ground_truth.desirability(category, location, funding, len(audience), rand())
        signal = IdeaSignal(
            category=category.value,
            required_funding=funding,
            target_audience=audience,
            author_location=location.value,
        )
        examples.append(TrainingExample(
            signal=signal,
            features=tuple(encode(signal).tolist()),
            label=ground_truth.label(score),
        ))

    logger.debug("Generated %d synthetic examples (seed=%d)", count, seed)
    return examples


def to_arrays(examples: Sequence[TrainingExample]) -> tuple[np.ndarray, np.ndarray]:
    """Stack examples into (X, y) for the trainer."""
    if not examples:
        return np.zeros((0, 0), dtype=np.float64), np.zeros(0, dtype=np.float64)
    X = np.array([ex.features for ex in examples], dtype=np.float64)
    y = np.array([ex.label for ex in examples], dtype=np.float64)
    return X, y


def export_csv(examples: Sequence[TrainingExample], path: Path | str) -> Path:
    """Write the sampled rows and their labels for audit."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for ex in examples:
            writer.writerow([
                ex.signal.category,
                ex.signal.author_location,
                int(ex.signal.required_funding),
                ex.signal.target_audience,
                ex.label,
            ])
    logger.info("Exported %d training rows to %s", len(examples), path)
    return path
