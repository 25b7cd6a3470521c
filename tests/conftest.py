"""Shared pytest fixtures for all tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from corrkit import CorrelationMatrix


@pytest.fixture
def cars() -> pd.DataFrame:
    """Six numeric columns with a known two-block structure and a few holes."""
    rng = np.random.default_rng(2025)
    n = 60
    size = rng.normal(size=n)
    speed = rng.normal(size=n)
    df = pd.DataFrame({
        "v1": size + 0.3 * rng.normal(size=n),
        "v2": size + 0.4 * rng.normal(size=n),
        "v3": -size + 0.5 * rng.normal(size=n),
        "v4": speed + 0.3 * rng.normal(size=n),
        "v5": speed + 0.6 * rng.normal(size=n),
        "v6": rng.normal(size=n),
    })
    df.loc[[0, 7], "v1"] = np.nan
    df.loc[[3], "v4"] = np.nan
    df.loc[[7, 11, 12], "v6"] = np.nan
    return df


@pytest.fixture
def equal_matrix() -> CorrelationMatrix:
    """Three variables with r = 0.7 for every pair."""
    return CorrelationMatrix(np.full((3, 3), 0.7), names=["v1", "v2", "v3"])


@pytest.fixture
def block_matrix() -> CorrelationMatrix:
    """Two tight pairs (a1, a2) and (b1, b2) stored interleaved."""
    names = ["a1", "b1", "a2", "b2"]
    r = np.array([
        [1.0, 0.1, 0.9, 0.1],
        [0.1, 1.0, 0.1, 0.9],
        [0.9, 0.1, 1.0, 0.2],
        [0.1, 0.9, 0.2, 1.0],
    ])
    return CorrelationMatrix(r, names=names)
