"""Success-rate explanation: per-feature weights behind one prediction."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Impact = Literal["positive", "negative"]


class ExplanationTerm(BaseModel):
    feature: str  # e.g. "category:technology", "required_funding"
    weight: float
    value: Optional[float] = None  # raw feature value, scalar features only
    impact: Impact = "positive"


class Explanation(BaseModel):
    """Bias plus one term per active one-hot dimension and per scalar feature."""
    model_config = ConfigDict(protected_namespaces=())

    probability: float = 0.0
    bias: float = 0.0
    terms: list[ExplanationTerm] = []
    model_path: Optional[str] = None
    csv_path: Optional[str] = None  # synthetic training rows, when exported


class ExplanationFactor(BaseModel):
    """One human-readable sentence derived from an explanation term."""
    factor: str
    impact: Impact
    explanation: str
