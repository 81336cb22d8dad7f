"""
Validation and encoding of spending tables before model fitting.
"""

import logging
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from ..config import DEFAULT_TARGET

logger = logging.getLogger(__name__)


def validate_dataset(data: pd.DataFrame, target: str = DEFAULT_TARGET) -> Dict[str, Any]:
    """
    Check that a table can be used for spending regression.

    Parameters:
    -----------
    data : pd.DataFrame
        Records as rows, features and target as columns
    target : str
        Target column name

    Returns:
    --------
    Dict[str, Any]
        Summary with n_records, n_features, categorical_features and
        missing_values (count per column, only columns with missing values)

    Raises:
    -------
    ValueError
        If the target is absent or non-numeric, there are no feature
        columns, or column names are duplicated
    """
    if not isinstance(data, pd.DataFrame):
        raise ValueError(f"Expected a pandas DataFrame, got {type(data).__name__}")

    duplicated = data.columns[data.columns.duplicated()].tolist()
    if duplicated:
        raise ValueError(f"Duplicate column names: {duplicated}")

    if target not in data.columns:
        raise ValueError(f"Target column '{target}' not found in data")

    if not pd.api.types.is_numeric_dtype(data[target]):
        raise ValueError(f"Target column '{target}' must be numeric")

    features = [col for col in data.columns if col != target]
    if not features:
        raise ValueError("Data has no feature columns besides the target")

    missing = data.isnull().sum()

    return {
        'n_records': len(data),
        'n_features': len(features),
        'categorical_features': _categorical_columns(data, target),
        'missing_values': {col: int(n) for col, n in missing[missing > 0].items()}
    }


def _categorical_columns(data: pd.DataFrame, target: str) -> List[str]:
    return [
        col for col in data.columns
        if col != target and not pd.api.types.is_numeric_dtype(data[col])
    ]


def encode_categoricals(data: pd.DataFrame, target: str = DEFAULT_TARGET) -> pd.DataFrame:
    """
    One-hot encode non-numeric feature columns.

    The first level of each categorical column is dropped and serves as the
    reference level. A missing categorical value is missing in every dummy
    column for that record, so it is never read as the reference level.

    Parameters:
    -----------
    data : pd.DataFrame
        Table with numeric and categorical features
    target : str
        Target column name (never encoded)

    Returns:
    --------
    pd.DataFrame
        New table with only numeric columns, original column order kept
    """
    categorical = _categorical_columns(data, target)
    if not categorical:
        return data.copy()

    pieces = []
    for col in data.columns:
        if col in categorical:
            dummies = pd.get_dummies(data[col], prefix=col, drop_first=True, dtype=float)
            dummies.loc[data[col].isna(), :] = np.nan
            pieces.append(dummies)
        else:
            pieces.append(data[[col]])

    encoded = pd.concat(pieces, axis=1)
    logger.info("Encoded %d categorical column(s) into %d total columns",
                len(categorical), encoded.shape[1])

    return encoded


def prepare_spending_data(data: pd.DataFrame, target: str = DEFAULT_TARGET) -> pd.DataFrame:
    """Validate a raw spending table and return its numeric encoding."""
    summary = validate_dataset(data, target)
    if summary['missing_values']:
        logger.info("Missing values per column: %s", summary['missing_values'])

    return encode_categoricals(data, target)
