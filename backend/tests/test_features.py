"""Tests for the feature encoder."""

import math

import numpy as np
import pytest

from models.schemas.idea_signal import Category, IdeaSignal, Location
from services.scoring.features import (
    AUDIENCE_INDEX,
    FEATURE_DIM,
    FEATURE_NAMES,
    FUNDING_INDEX,
    LOCATION_OFFSET,
    encode,
    feature_layout,
    funding_feature,
)


def _category_block(x):
    return x[:len(Category)]


def _location_block(x):
    return x[LOCATION_OFFSET:LOCATION_OFFSET + len(Location)]


def test_feature_dim():
    assert FEATURE_DIM == len(Category) + 2 + len(Location) == 14
    assert len(FEATURE_NAMES) == FEATURE_DIM


def test_scenario_technology_urban():
    x = encode(IdeaSignal(category="technology", required_funding=0, target_audience="", author_location="urban"))
    assert x.shape == (FEATURE_DIM,)
    assert _category_block(x).tolist() == [0, 0, 0, 1, 0, 0]
    assert x[FUNDING_INDEX] == 0.0
    assert x[AUDIENCE_INDEX] == 0.0
    assert _location_block(x).tolist() == [1, 0, 0, 0, 0, 0]


@pytest.mark.parametrize("category", [c.value for c in Category])
def test_category_one_hot_has_single_one(category):
    block = _category_block(encode(IdeaSignal(category=category)))
    assert block.sum() == 1.0
    assert block[list(Category).index(Category(category))] == 1.0


@pytest.mark.parametrize("location", [loc.value for loc in Location])
def test_location_one_hot_has_single_one(location):
    block = _location_block(encode(IdeaSignal(author_location=location)))
    assert block.sum() == 1.0


@pytest.mark.parametrize("raw", ["space", "", "TECH", "other "])
def test_unknown_category_encodes_as_other(raw):
    assert np.array_equal(
        _category_block(encode(IdeaSignal(category=raw))),
        _category_block(encode(IdeaSignal(category="other"))),
    )


def test_unknown_location_encodes_as_unknown():
    a = encode(IdeaSignal(category="education", author_location="moon base"))
    b = encode(IdeaSignal(category="education", author_location="unknown"))
    assert np.array_equal(a, b)


def test_category_match_is_case_insensitive():
    assert np.array_equal(
        encode(IdeaSignal(category="HealthCare", author_location="RURAL")),
        encode(IdeaSignal(category="healthcare", author_location="rural")),
    )


def test_funding_monotonic():
    amounts = [0, 1, 10, 999, 50_000, 299_999, 1_000_000, 5_000_000]
    values = [funding_feature(a) for a in amounts]
    assert values == sorted(values)


def test_funding_monotonic_through_extreme_inputs():
    amounts = [0, 1_000_000, 1e300, 10**400, float("inf")]
    values = [encode(IdeaSignal(required_funding=a))[FUNDING_INDEX] for a in amounts]
    assert values == sorted(values)
    assert all(math.isfinite(v) for v in values)
    assert values[-1] > values[2] > 1.0


def test_funding_normalization_points():
    assert funding_feature(0) == 0.0
    assert funding_feature(-500) == 0.0
    assert funding_feature(1_000_000) == pytest.approx(1.0)
    # Not clamped above the nominal cap
    assert funding_feature(10_000_000) > 1.0
    assert funding_feature(300_000) == pytest.approx(math.log1p(300_000) / math.log1p(1_000_000))


@pytest.mark.parametrize("length", [0, 1, 50, 199, 200, 201, 1000])
def test_audience_feature(length):
    x = encode(IdeaSignal(target_audience="a" * length))
    assert 0.0 <= x[AUDIENCE_INDEX] <= 1.0
    if length <= 200:
        assert x[AUDIENCE_INDEX] == pytest.approx(length / 200)
    else:
        assert x[AUDIENCE_INDEX] == 1.0


def test_degenerate_inputs_stay_in_unit_range():
    x = encode(IdeaSignal(category=None, required_funding="lots", target_audience=None, author_location=None))
    assert np.all((x >= 0) & (x <= 1))
    assert x[FUNDING_INDEX] == 0.0


def test_feature_layout_fingerprint():
    layout = feature_layout()
    assert layout.categories[-1] == "other"
    assert layout.locations[-1] == "unknown"
    assert layout.funding and layout.audience_length
