"""Tests for the logistic model and the batch gradient-descent trainer."""

import numpy as np
import pytest

from models.schemas.model_state import ModelParameters
from services.scoring.dataset import generate, to_arrays
from services.scoring.features import FEATURE_DIM, LOCATION_OFFSET
from services.scoring.model import LogisticModel, sigmoid
from services.scoring.trainer import TrainingError, fit, log_loss


class TestLogisticModel:
    def test_zero_initialized(self):
        model = LogisticModel(FEATURE_DIM)
        assert model.weights.tolist() == [0.0] * FEATURE_DIM
        assert model.bias == 0.0
        assert model.score(np.ones(FEATURE_DIM)) == pytest.approx(0.5)

    def test_score_is_sigmoid_of_decision(self):
        model = LogisticModel.from_parameters(ModelParameters(weights=[1.0, -2.0, 0.5], bias=0.25))
        x = np.array([1.0, 0.5, 2.0])
        assert model.decision(x) == pytest.approx(0.25 + 1.0 - 1.0 + 1.0)
        assert model.score(x) == pytest.approx(1 / (1 + np.exp(-1.25)))

    def test_extreme_logits_stay_in_range(self):
        model = LogisticModel.from_parameters(ModelParameters(weights=[1e6], bias=0.0))
        assert 0.0 <= model.score(np.array([1.0])) <= 1.0
        assert 0.0 <= model.score(np.array([-1.0])) <= 1.0

    def test_parameters_roundtrip(self):
        params = ModelParameters(weights=[0.1, 0.2], bias=-0.3)
        assert LogisticModel.from_parameters(params).to_parameters() == params

    def test_freeze(self):
        model = LogisticModel(2).freeze()
        with pytest.raises(ValueError):
            model.weights[0] = 1.0


class TestFit:
    def test_single_batch_update(self):
        # One epoch from zero: p = 0.5 everywhere, so the update is -lr/N * sum((0.5 - y) * x)
        X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
        y = np.array([1.0, 0.0, 1.0])
        model = fit(LogisticModel(2), X, y, learning_rate=0.3, epochs=1)

        error = 0.5 - y
        expected_w = -(0.3 / 3) * (X.T @ error)
        expected_b = -(0.3 / 3) * error.sum()
        assert model.weights == pytest.approx(expected_w)
        assert model.bias == pytest.approx(expected_b)

    def test_batch_not_online(self):
        # Per-example updates would see p != 0.5 for the second row.
        X = np.array([[1.0], [1.0]])
        y = np.array([1.0, 1.0])
        model = fit(LogisticModel(1), X, y, learning_rate=1.0, epochs=1)
        assert model.weights[0] == pytest.approx(0.5)
        assert model.bias == pytest.approx(0.5)

    def test_zero_epochs_keeps_parameters(self):
        X, y = to_arrays(generate(10, 1))
        model = fit(LogisticModel(FEATURE_DIM), X, y, epochs=0)
        assert not model.weights.any()
        assert model.bias == 0.0

    def test_loss_decreases(self):
        X, y = to_arrays(generate(300, 2))
        start = log_loss(LogisticModel(FEATURE_DIM), X, y)
        model = fit(LogisticModel(FEATURE_DIM), X, y, learning_rate=0.5, epochs=200)
        assert log_loss(model, X, y) < start

    @pytest.mark.parametrize("kwargs", [
        {"learning_rate": 0.0},
        {"learning_rate": -0.1},
        {"epochs": -1},
    ])
    def test_rejects_bad_hyperparameters(self, kwargs):
        X, y = to_arrays(generate(5, 1))
        with pytest.raises(ValueError):
            fit(LogisticModel(FEATURE_DIM), X, y, **kwargs)

    def test_rejects_empty_and_mismatched(self):
        with pytest.raises(ValueError):
            fit(LogisticModel(FEATURE_DIM), np.zeros((0, FEATURE_DIM)), np.zeros(0))
        with pytest.raises(ValueError):
            fit(LogisticModel(3), np.zeros((4, 2)), np.zeros(4))
        with pytest.raises(ValueError):
            fit(LogisticModel(2), np.zeros((4, 2)), np.zeros(3))

    def test_divergence_leaves_model_untouched(self):
        X = np.array([[np.inf], [1.0]])
        y = np.array([1.0, 0.0])
        model = LogisticModel(1)
        with pytest.raises(TrainingError):
            fit(model, X, y, epochs=3)
        assert model.weights.tolist() == [0.0]
        assert model.bias == 0.0


def _known_rule_labels(X):
    # Linear rule over one-hot blocks: categories agriculture/education/
    # healthcare positive, the rest negative; location nudges by +-0.25.
    known = np.zeros(FEATURE_DIM)
    known[:6] = [1.0, 1.0, 1.0, -1.0, -1.0, -1.0]
    known[LOCATION_OFFSET:LOCATION_OFFSET + 6] = [0.25, 0.25, 0.25, -0.25, -0.25, -0.25]
    return (X @ known > 0).astype(np.float64)


@pytest.mark.training
def test_recovers_linearly_separable_rule():
    X_train, _ = to_arrays(generate(1500, 123))
    X_test, _ = to_arrays(generate(500, 456))
    y_train = _known_rule_labels(X_train)
    y_test = _known_rule_labels(X_test)

    model = fit(LogisticModel(FEATURE_DIM), X_train, y_train, learning_rate=0.5, epochs=500)

    predicted = (model.score_batch(X_test) > 0.5).astype(np.float64)
    assert np.mean(predicted == y_test) >= 0.9


def test_sigmoid_vectorized():
    z = np.array([-1000.0, 0.0, 1000.0])
    p = sigmoid(z)
    assert p[1] == pytest.approx(0.5)
    assert 0.0 <= p[0] < 1e-100
    assert p[2] == pytest.approx(1.0)
