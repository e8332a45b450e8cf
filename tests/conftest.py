"""Pytest configuration and shared fixtures."""
import numpy as np
import pandas as pd
import pytest

from intro_stats import datasets


@pytest.fixture(scope="session")
def iris_df():
    """The 150-row iris data with R column names."""
    return datasets.load_iris()


@pytest.fixture
def synthetic_df():
    """Small mixed-type dataset for unit tests."""
    rng = np.random.default_rng(42)
    n = 60
    return pd.DataFrame({
        "group": np.repeat(["a", "b", "c"], n // 3),
        "height": np.concatenate([rng.normal(10, 1, 20), rng.normal(12, 1, 20), rng.normal(15, 2, 20)]),
        "weight": rng.normal(70, 8, n),
        "count": rng.integers(0, 50, n),
        "flag": rng.choice([True, False], n),
    })
