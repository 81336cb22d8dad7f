"""
K-fold cross-validation of the spending regression.
"""

import logging
from typing import List

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from ..config import DEFAULT_TARGET, check_n_folds, check_workers
from ..exceptions import EmptyFoldError, InsufficientDataError, InvalidConfigurationError
from ..models.regressors import OLSRegressor
from .folds import assign_folds, fold_indices
from .parallel import run_tasks

logger = logging.getLogger(__name__)


def _evaluate_fold(
    data: pd.DataFrame,
    labels: np.ndarray,
    fold: int,
    target: str
) -> pd.DataFrame:
    """Train on every other fold and predict the held-out one."""
    try:
        train_idx, test_idx = fold_indices(labels, fold)
        model = OLSRegressor(target=target).fit(data.iloc[train_idx])
    except (EmptyFoldError, InsufficientDataError) as exc:
        raise type(exc)(f"cross-validation fold {fold}: {exc}", fold=fold) from exc

    test = data.iloc[test_idx]

    return pd.DataFrame(
        {'pred': model.predict(test), 'fold': fold},
        index=test.index
    )


def cross_validate(
    data: pd.DataFrame,
    n_folds: int = 5,
    target: str = DEFAULT_TARGET,
    n_workers: int = 1,
    backend: str = 'loky'
) -> pd.DataFrame:
    """
    Out-of-fold OLS predictions over contiguous folds.

    Each fold is held out in turn while the model is trained on the
    remaining folds. With ``n_workers > 1`` the folds run concurrently on a
    scoped worker pool and are concatenated in completion order, so rows may
    not be fold-major; the ``fold`` column always identifies the source fold
    and rows within a fold keep their original order.

    Parameters:
    -----------
    data : pd.DataFrame
        Encoded dataset (numeric features plus target). Not modified.
    n_folds : int
        Number of folds (2 <= n_folds <= number of records)
    target : str
        Target column name
    n_workers : int
        Worker-pool size. 1 evaluates folds sequentially.
    backend : str
        joblib backend used when n_workers > 1

    Returns:
    --------
    pd.DataFrame
        Columns 'pred' and 'fold', indexed by the held-out records' labels

    Raises:
    -------
    InvalidConfigurationError
        If n_folds, n_workers or backend is invalid
    EmptyFoldError
        If a fold has no training or no held-out records (``fold`` is set)
    InsufficientDataError
        If a fold's training set is too small to fit (``fold`` is set)

    Error messages start with "cross-validation" and name the failing fold.
    """
    try:
        check_n_folds(n_folds)
        check_workers(n_workers, backend)
    except InvalidConfigurationError as exc:
        raise InvalidConfigurationError(f"cross-validation: {exc}") from exc
    if target not in data.columns:
        raise ValueError(f"Target column '{target}' not found in data")

    try:
        labels = assign_folds(len(data), n_folds)
    except EmptyFoldError as exc:
        raise EmptyFoldError(
            f"cross-validation fold {exc.fold}: {exc}", fold=exc.fold
        ) from exc
    folds = range(1, n_folds + 1)

    logger.info(
        "Cross-validating %d records over %d folds with %d worker(s)",
        len(data), n_folds, n_workers
    )

    if n_workers == 1:
        results: List[pd.DataFrame] = [
            _evaluate_fold(data, labels, fold, target) for fold in folds
        ]
    else:
        results = run_tasks(
            _evaluate_fold,
            [(data, labels, fold, target) for fold in folds],
            n_workers=n_workers,
            backend=backend,
            ordered=False
        )

    predictions = pd.concat(results)
    predictions['fold'] = predictions['fold'].astype(int)

    n_missing = int(predictions['pred'].isna().sum())
    if n_missing:
        logger.warning("%d out-of-fold predictions are missing", n_missing)

    return predictions


def fold_metrics(
    predictions: pd.DataFrame,
    data: pd.DataFrame,
    target: str = DEFAULT_TARGET
) -> pd.DataFrame:
    """
    Per-fold accuracy of out-of-fold predictions.

    Missing predictions or targets are left out of each fold's metrics.

    Parameters:
    -----------
    predictions : pd.DataFrame
        Output of ``cross_validate``
    data : pd.DataFrame
        Dataset the predictions were made on
    target : str
        Target column name

    Returns:
    --------
    pd.DataFrame
        One row per fold with n, mean_pred, mean_observed, rmse, mae, r2
    """
    observed = data.loc[predictions.index, target]
    rows = []

    for fold, group in predictions.groupby('fold', sort=True):
        y_true = observed.loc[group.index].to_numpy(dtype=float)
        y_pred = group['pred'].to_numpy(dtype=float)
        valid = ~(np.isnan(y_true) | np.isnan(y_pred))
        y_true, y_pred = y_true[valid], y_pred[valid]

        row = {'fold': int(fold), 'n': int(valid.sum())}
        if row['n'] > 0:
            row.update({
                'mean_pred': float(np.mean(y_pred)),
                'mean_observed': float(np.mean(y_true)),
                'rmse': float(np.sqrt(mean_squared_error(y_true, y_pred))),
                'mae': float(mean_absolute_error(y_true, y_pred)),
                'r2': float(r2_score(y_true, y_pred)) if row['n'] > 1 else np.nan
            })
        rows.append(row)

    return pd.DataFrame(rows).set_index('fold')
