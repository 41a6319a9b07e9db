"""Contribution breakdown for a single success-rate prediction.

Tier 1: one term per active one-hot dimension plus the two scalar
features, each carrying its learned weight. ``describe`` turns the terms
into the sentences shown to users.
"""

import numpy as np

from models.schemas.explanation import Explanation, ExplanationFactor, ExplanationTerm
from services.scoring.features import (
    AUDIENCE_FEATURE,
    AUDIENCE_INDEX,
    CATEGORIES,
    CATEGORY_OFFSET,
    FEATURE_NAMES,
    FUNDING_FEATURE,
    FUNDING_INDEX,
    LOCATIONS,
    LOCATION_OFFSET,
)


def _impact(weight: float) -> str:
    return "positive" if weight >= 0 else "negative"


def _term(index: int, weights: np.ndarray, value: float | None = None) -> ExplanationTerm:
    weight = float(weights[index])
    return ExplanationTerm(feature=FEATURE_NAMES[index], weight=weight, value=value, impact=_impact(weight))


def build_terms(x: np.ndarray, weights: np.ndarray) -> list[ExplanationTerm]:
    """Terms in feature order: category, funding, audience, location."""
    terms: list[ExplanationTerm] = []
    for i in range(len(CATEGORIES)):
        if x[CATEGORY_OFFSET + i] == 1:
            terms.append(_term(CATEGORY_OFFSET + i, weights))
    terms.append(_term(FUNDING_INDEX, weights, float(x[FUNDING_INDEX])))
    terms.append(_term(AUDIENCE_INDEX, weights, float(x[AUDIENCE_INDEX])))
    for i in range(len(LOCATIONS)):
        if x[LOCATION_OFFSET + i] == 1:
            terms.append(_term(LOCATION_OFFSET + i, weights))
    return terms


# ---------------------------------------------------------------------------
# Sentence templates
# ---------------------------------------------------------------------------

def _sentence(term: ExplanationTerm) -> str:
    impact = term.impact
    pct = round(abs(term.weight) * 100)

    if term.feature.startswith("category:"):
        name = term.feature.split(":", 1)[1]
        return f"Projects in the {name} category influence the success rate ({impact})."
    if term.feature == FUNDING_FEATURE:
        direction = "raises" if impact == "positive" else "reduces"
        return f"Higher funding requirement {direction} success likelihood by ~{pct}% (relative)."
    if term.feature == AUDIENCE_FEATURE:
        direction = "improves" if impact == "positive" else "lowers"
        return f"A clearer target audience description {direction} success likelihood by ~{pct}% (relative)."
    if term.feature.startswith("location:"):
        name = term.feature.split(":", 1)[1]
        return f"Founder location {name} affects feasibility ({impact})."
    return f"{term.feature} has a {impact} effect."


def describe(explanation: Explanation) -> list[ExplanationFactor]:
    """One user-facing factor per explanation term."""
    return [
        ExplanationFactor(factor=t.feature, impact=t.impact, explanation=_sentence(t))
        for t in explanation.terms
    ]
