"""Hand-authored desirability rule behind the synthetic labels.

Only the dataset generator uses this module. Trainers see feature vectors
and labels, never these coefficients.
"""

from models.schemas.idea_signal import Category, Location

FUNDING_CAP = 300_000
FUNDING_PENALTY = 1.2
AUDIENCE_BONUS = 0.6
NOISE_AMPLITUDE = 0.3

_CATEGORY_BASE = {
    Category.TECHNOLOGY: 1.0,
    Category.HEALTHCARE: 0.8,
    Category.EDUCATION: 0.6,
    Category.AGRICULTURE: 0.5,
    Category.INFRASTRUCTURE: 0.4,
    Category.OTHER: 0.3,
}

_LOCATION_BASE = {
    Location.URBAN: 0.5,
    Location.SUBURBAN: 0.35,
    Location.COASTAL: 0.3,
    Location.INLAND: 0.15,
    Location.RURAL: 0.1,
    Location.UNKNOWN: 0.0,
}


def desirability(
    category: Category,
    location: Location,
    required_funding: float,
    audience_length: int,
    noise_draw: float,
) -> float:
    """Hidden score; the synthetic label is 1 iff this is positive.

    ``noise_draw`` is a uniform draw in [0, 1), centred here into
    [-0.15, 0.15).
    """
    score = _CATEGORY_BASE[category]
    score -= (required_funding / FUNDING_CAP) * FUNDING_PENALTY
    score += min(1.0, audience_length / 200) * AUDIENCE_BONUS
    score += _LOCATION_BASE[location]
    score += (noise_draw - 0.5) * NOISE_AMPLITUDE
    return score


def label(score: float) -> int:
    # sigmoid(score) > 0.5 <=> score > 0
    return 1 if score > 0 else 0
