"""Shared test configuration and pytest markers."""

import pytest

from config import settings
from services.scoring.registry import clear as clear_scorer


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "training: runs the full synthetic training pass (slower)"
    )


@pytest.fixture
def model_dir(tmp_path, monkeypatch):
    """Point persisted artifacts at a temp dir and reset the global scorer."""
    monkeypatch.setattr(settings, "model_dir", str(tmp_path / "ml"))
    clear_scorer()
    yield tmp_path / "ml"
    clear_scorer()
