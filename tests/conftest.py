"""Shared pytest fixtures for spending cross-validation tests."""
import pytest
import numpy as np
import pandas as pd

from spending_cv.data import create_sample_data, encode_categoricals


@pytest.fixture
def linear_data():
    """Four records on the line y = 2x."""
    return pd.DataFrame({'x': [1.0, 2.0, 3.0, 4.0], 'y': [2.0, 4.0, 6.0, 8.0]})


@pytest.fixture
def raw_spending_data():
    """Synthetic spending table with a categorical region column (120 records)."""
    return create_sample_data(n_samples=120, n_conditions=3, random_state=7)


@pytest.fixture
def spending_data(raw_spending_data):
    """Encoded synthetic spending table, numeric columns only."""
    return encode_categoricals(raw_spending_data, target='totpay')


@pytest.fixture
def noisy_linear_data():
    """Two numeric features with noise (60 records)."""
    rng = np.random.RandomState(3)
    x1 = rng.normal(size=60)
    x2 = rng.normal(size=60)
    return pd.DataFrame({
        'x1': x1,
        'x2': x2,
        'totpay': 100.0 + 3.0 * x1 - 2.0 * x2 + rng.normal(scale=0.5, size=60)
    })
