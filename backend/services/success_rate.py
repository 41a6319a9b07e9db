"""Entry points used by the idea endpoints.

``predict_success_rate`` is called when an idea is created or updated (the
caller stores the result with the idea). ``get_success_rate_explanation``
is called on demand when a user asks why.
"""

import logging
from typing import Any, Mapping, Optional, Union

from models.schemas.explanation import Explanation, ExplanationFactor
from models.schemas.idea_signal import IdeaSignal
from services.scoring.explanation import describe
from services.scoring.registry import get_scorer

logger = logging.getLogger(__name__)

IdeaInput = Union[IdeaSignal, Mapping[str, Any]]


def _to_signal(idea: IdeaInput, author_location: Optional[str] = None) -> IdeaSignal:
    if isinstance(idea, IdeaSignal):
        return idea
    return IdeaSignal.from_record(idea, author_location=author_location)


def predict_success_rate(idea: IdeaInput, author_location: Optional[str] = None) -> float:
    """Probability in [0, 1] that the idea succeeds."""
    signal = _to_signal(idea, author_location)
    probability = get_scorer().predict(signal)
    logger.debug("Predicted success rate %.4f for category=%s location=%s",
                 probability, signal.category, signal.author_location)
    return probability


def get_success_rate_explanation(idea: IdeaInput, author_location: Optional[str] = None) -> Explanation:
    return get_scorer().explain(_to_signal(idea, author_location))


def get_success_rate_factors(idea: IdeaInput, author_location: Optional[str] = None) -> list[ExplanationFactor]:
    """Explanation rendered as one sentence per term."""
    return describe(get_success_rate_explanation(idea, author_location))
