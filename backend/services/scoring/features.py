"""Feature engineering for the success-rate model.

Maps an IdeaSignal to a fixed-width vector, in this order:

    category    (6) : one-hot over Category, fallback "other"
    funding     (1) : log(1 + funding) / log(1 + 1e6)
    audience    (1) : min(1, len(target_audience) / 200)
    location    (6) : one-hot over Location, fallback "unknown"

The funding feature is not clamped: amounts above ~1M give values slightly
above 1.
"""

import math

import numpy as np

from models.schemas.idea_signal import Category, IdeaSignal, Location
from models.schemas.model_state import FeatureLayout

FUNDING_SCALE = 1_000_000
AUDIENCE_SATURATION = 200

FUNDING_SCHEME = "log1p(funding) / log1p(1e6)"
AUDIENCE_SCHEME = "min(1, len / 200)"

CATEGORIES = list(Category)
LOCATIONS = list(Location)

FUNDING_FEATURE = "required_funding"
AUDIENCE_FEATURE = "target_audience_length"

FEATURE_NAMES = (
    [f"category:{c.value}" for c in CATEGORIES]
    + [FUNDING_FEATURE, AUDIENCE_FEATURE]
    + [f"location:{loc.value}" for loc in LOCATIONS]
)
FEATURE_DIM = len(FEATURE_NAMES)

CATEGORY_OFFSET = 0
FUNDING_INDEX = len(CATEGORIES)
AUDIENCE_INDEX = FUNDING_INDEX + 1
LOCATION_OFFSET = AUDIENCE_INDEX + 1


def funding_feature(funding: float) -> float:
    return math.log1p(max(0.0, funding)) / math.log1p(FUNDING_SCALE)


def audience_feature(target_audience: str) -> float:
    return min(1.0, len(target_audience or "") / AUDIENCE_SATURATION)


def feature_layout() -> FeatureLayout:
    """Fingerprint persisted alongside trained weights."""
    return FeatureLayout(
        categories=[c.value for c in CATEGORIES],
        locations=[loc.value for loc in LOCATIONS],
        funding=FUNDING_SCHEME,
        audience_length=AUDIENCE_SCHEME,
    )


def encode(signal: IdeaSignal) -> np.ndarray:
    """Encode a signal into a FEATURE_DIM float64 vector. Never raises."""
    x = np.zeros(FEATURE_DIM, dtype=np.float64)
    x[CATEGORY_OFFSET + CATEGORIES.index(signal.category_bucket)] = 1.0
    x[FUNDING_INDEX] = funding_feature(signal.required_funding)
    x[AUDIENCE_INDEX] = audience_feature(signal.target_audience)
    x[LOCATION_OFFSET + LOCATIONS.index(signal.location_bucket)] = 1.0
    return x
