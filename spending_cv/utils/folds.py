"""
Contiguous fold assignment for cross-validation.
"""

from typing import Tuple

import numpy as np

from ..config import check_n_folds
from ..exceptions import EmptyFoldError


def assign_folds(n_records: int, n_folds: int) -> np.ndarray:
    """
    Assign each record to one of ``n_folds`` contiguous blocks by row order.

    Record ``i`` (0-based) gets label ``floor(i * n_folds / n_records) + 1``,
    so blocks are nearly equal in size and labels run from 1 to ``n_folds``.
    Rows are never shuffled.

    Parameters:
    -----------
    n_records : int
        Number of records in the dataset
    n_folds : int
        Number of folds (K >= 2)

    Returns:
    --------
    np.ndarray
        Integer fold label for every record, in row order

    Raises:
    -------
    InvalidConfigurationError
        If n_folds < 2
    EmptyFoldError
        If some fold would receive no records (n_folds > n_records)
    """
    check_n_folds(n_folds)

    labels = np.arange(n_records, dtype=np.int64) * n_folds // max(n_records, 1) + 1

    empty = np.setdiff1d(np.arange(1, n_folds + 1), labels)
    if len(empty) > 0:
        raise EmptyFoldError(
            f"Cannot split {n_records} records into {n_folds} folds: "
            f"fold {int(empty[0])} would be empty",
            fold=int(empty[0])
        )

    return labels


def fold_indices(labels: np.ndarray, fold: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Positional train/test indices for one fold.

    Parameters:
    -----------
    labels : np.ndarray
        Fold labels as returned by ``assign_folds``
    fold : int
        Fold to hold out

    Returns:
    --------
    Tuple[np.ndarray, np.ndarray]
        Training positions (all other folds) and held-out positions
    """
    labels = np.asarray(labels)
    test_idx = np.flatnonzero(labels == fold)
    train_idx = np.flatnonzero(labels != fold)

    if len(test_idx) == 0:
        raise EmptyFoldError(f"Fold {fold} has no held-out records", fold=fold)
    if len(train_idx) == 0:
        raise EmptyFoldError(f"Fold {fold} leaves no training records", fold=fold)

    return train_idx, test_idx


def fold_sizes(labels: np.ndarray) -> dict:
    """Number of records per fold label."""
    values, counts = np.unique(np.asarray(labels), return_counts=True)
    return {int(v): int(c) for v, c in zip(values, counts)}
