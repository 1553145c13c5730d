"""Shared fixtures for the raylume test suite."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A deterministically seeded random generator."""
    return np.random.default_rng(1234)
