"""Shared fixtures for LumenForge tests."""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """A seeded generator so random-dependent tests are repeatable."""
    return np.random.default_rng(12345)
