"""Scoring input: the four idea attributes the success-rate model looks at."""

import math
import sys
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Closed set of idea categories, in one-hot order.

    The last member is the fallback bucket: any value that does not match
    a member case-insensitively resolves to it instead of raising.
    """
    AGRICULTURE = "agriculture"
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    TECHNOLOGY = "technology"
    INFRASTRUCTURE = "infrastructure"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "Category":
        return _match_or_fallback(cls, value)


class Location(str, Enum):
    """Closed set of location tags, in one-hot order. ``UNKNOWN`` is the fallback."""
    URBAN = "urban"
    SUBURBAN = "suburban"
    RURAL = "rural"
    COASTAL = "coastal"
    INLAND = "inland"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "Location":
        return _match_or_fallback(cls, value)


def _match_or_fallback(enum_cls, value: object):
    if isinstance(value, str):
        lowered = value.lower()
        for member in enum_cls:
            if member.value == lowered:
                return member
    return list(enum_cls)[-1]


def resolve_location(idea_location: Optional[str], author_location: Optional[str]) -> str:
    """Pick the location used for scoring.

    The idea's own location wins unless it is missing or "unknown", in which
    case the author's profile location is used.
    """
    if isinstance(idea_location, str) and idea_location and idea_location.lower() != Location.UNKNOWN.value:
        return idea_location
    if isinstance(author_location, str) and author_location:
        return author_location
    return Location.UNKNOWN.value


class IdeaSignal(BaseModel):
    """Immutable scoring input built fresh for every prediction.

    Accepts both snake_case names and the camelCase keys used by idea
    records. Bad values are coerced, never rejected: non-numeric funding
    becomes 0, a missing audience becomes "".
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str = ""
    required_funding: float = Field(0.0, alias="requiredFunding")
    target_audience: str = Field("", alias="targetAudience")
    author_location: str = Field(Location.UNKNOWN.value, alias="authorLocation")

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("author_location", mode="before")
    @classmethod
    def _coerce_location(cls, v: Any) -> str:
        return v if isinstance(v, str) and v else Location.UNKNOWN.value

    @field_validator("required_funding", mode="before")
    @classmethod
    def _coerce_funding(cls, v: Any) -> float:
        if isinstance(v, bool):
            return 0.0
        try:
            funding = float(v)
        except OverflowError:
            # ints beyond float range
            return sys.float_info.max if v > 0 else 0.0
        except (TypeError, ValueError):
            return 0.0
        if math.isnan(funding) or funding == -math.inf:
            return 0.0
        # +inf saturates so the funding feature stays monotonic and finite
        return min(funding, sys.float_info.max)

    @field_validator("target_audience", mode="before")
    @classmethod
    def _coerce_audience(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @property
    def category_bucket(self) -> Category:
        return Category(self.category)

    @property
    def location_bucket(self) -> Location:
        return Location(self.author_location)

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        author_location: Optional[str] = None,
    ) -> "IdeaSignal":
        """Build a signal from a raw idea record.

        ``record["location"]`` is the idea's declared location; the author's
        profile location comes from ``author_location`` or, failing that,
        ``record["authorLocation"]``.
        """
        idea_location = record.get("location")
        profile_location = author_location or record.get("authorLocation") or record.get("author_location")
        return cls(
            category=record.get("category"),
            required_funding=record.get("requiredFunding", record.get("required_funding")),
            target_audience=record.get("targetAudience", record.get("target_audience")),
            author_location=resolve_location(idea_location, profile_location),
        )
