"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.scene import Scene, RenderSettings  # noqa: E402


@pytest.fixture
def rng():
    """Seeded generator so sampling-dependent tests are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def empty_scene(rng):
    """A scene with no primitives and no room planes."""
    return Scene(planes=[], rng=rng)


@pytest.fixture
def tiny_settings():
    return RenderSettings(width=16, height=12, seed=7, progress_every=4)


def assert_vec_close(actual, expected, abs_tol=1e-6):
    assert actual.x == pytest.approx(expected.x, abs=abs_tol)
    assert actual.y == pytest.approx(expected.y, abs=abs_tol)
    assert actual.z == pytest.approx(expected.z, abs=abs_tol)


@pytest.fixture
def vec_close():
    return assert_vec_close
