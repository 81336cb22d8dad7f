"""
Data loading utilities for annual health care spending tables.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from ..config import DEFAULT_TARGET

logger = logging.getLogger(__name__)


def load_spending_data(
    filepath: Union[str, Path],
    target: str = DEFAULT_TARGET
) -> pd.DataFrame:
    """
    Load a spending table from file.

    Parameters:
    -----------
    filepath : str or Path
        Path to a CSV or Excel file with one record per row
    target : str
        Name of the spending column that must be present

    Returns:
    --------
    pd.DataFrame
        Records in file order, with a fresh 0..n-1 index
    """

    filepath = Path(filepath)

    if filepath.suffix.lower() == '.csv':
        data = pd.read_csv(filepath)
    elif filepath.suffix.lower() in ['.xlsx', '.xls']:
        data = pd.read_excel(filepath)
    else:
        raise ValueError(f"Unsupported file format: {filepath.suffix}")

    if target not in data.columns:
        raise ValueError(f"Target column '{target}' not found in {filepath.name}")

    data = data.reset_index(drop=True)
    logger.info("Loaded spending data from %s: %d records x %d columns",
                filepath, data.shape[0], data.shape[1])

    return data


def create_sample_data(
    n_samples: int = 1000,
    n_conditions: int = 5,
    missing_rate: float = 0.0,
    random_state: Optional[int] = 42
) -> pd.DataFrame:
    """
    Create a synthetic annual spending table for testing and demonstration.

    Spending is linear in age, sex and condition-group flags plus a
    regional offset and normal noise.

    Parameters:
    -----------
    n_samples : int
        Number of records
    n_conditions : int
        Number of binary condition-group columns (cond1, cond2, ...)
    missing_rate : float
        Fraction of feature values replaced by NaN
    random_state : int, optional
        Random seed for reproducibility

    Returns:
    --------
    pd.DataFrame
        Columns age, female, region, cond1..condN and totpay
    """

    rng = np.random.RandomState(random_state)

    data = pd.DataFrame({
        'age': rng.randint(18, 90, n_samples),
        'female': rng.binomial(1, 0.5, n_samples),
        'region': rng.choice(['midwest', 'northeast', 'south', 'west'], n_samples)
    })

    condition_cols = [f"cond{i + 1}" for i in range(n_conditions)]
    for col in condition_cols:
        data[col] = rng.binomial(1, 0.15, n_samples)

    region_effect = data['region'].map(
        {'midwest': 0.0, 'northeast': 800.0, 'south': -300.0, 'west': 400.0}
    )
    condition_costs = rng.uniform(1500, 9000, n_conditions)

    data['totpay'] = (
        1200.0
        + 45.0 * data['age']
        + 350.0 * data['female']
        + region_effect
        + data[condition_cols].to_numpy() @ condition_costs
        + rng.normal(0, 1500, n_samples)
    )

    if missing_rate > 0:
        features = ['age', 'female'] + condition_cols
        mask = rng.uniform(size=(n_samples, len(features))) < missing_rate
        data[features] = data[features].astype(float).mask(mask)

    logger.debug("Generated synthetic spending data: %s", data.shape)

    return data
