"""
Bootstrap confidence interval for mean predicted spending.

Resamples are split into batches, one per worker, and every batch draws
from its own random sub-stream of the global seed. The interval is read off
the sorted distribution of resample means, so it does not depend on the
order in which batches complete.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..config import check_bounds, check_n_resamples, check_workers
from ..exceptions import InsufficientDataError, InvalidConfigurationError
from .parallel import run_tasks
from .rng import spawn_seeds

logger = logging.getLogger(__name__)

PredictionInput = Union[Sequence[float], np.ndarray, pd.Series, pd.DataFrame]


@dataclass(frozen=True, eq=False)
class BootstrapResult:
    """Distribution of bootstrap resample means and its percentile interval.

    Attributes:
        lower: Lower bound of the interval.
        upper: Upper bound of the interval.
        mean: Mean of the valid resample means.
        means: Sorted resample means, missing ones excluded.
        n_resamples: Number of resamples drawn.
        n_missing: Resamples whose draws were all missing (excluded).
        lower_quantile: Quantile used for ``lower``.
        upper_quantile: Quantile used for ``upper``.
    """
    lower: float
    upper: float
    mean: float
    means: np.ndarray
    n_resamples: int
    n_missing: int
    lower_quantile: float = 0.025
    upper_quantile: float = 0.975

    @property
    def interval(self) -> Tuple[float, float]:
        return (self.lower, self.upper)


def _prediction_values(predictions: PredictionInput) -> np.ndarray:
    """Flatten the accepted prediction containers to a float array."""
    if isinstance(predictions, pd.DataFrame):
        if 'pred' not in predictions.columns:
            raise ValueError("bootstrap: prediction table must have a 'pred' column")
        predictions = predictions['pred']

    values = np.asarray(predictions, dtype=float)
    if values.ndim != 1:
        raise ValueError(
            f"bootstrap: predictions must be one-dimensional, got shape {values.shape}"
        )
    return values


def _ignore_missing_mean(sample: np.ndarray) -> float:
    present = sample[~np.isnan(sample)]
    if len(present) == 0:
        return np.nan
    return float(present.mean())


def _resample_means(
    values: np.ndarray,
    n_draws: int,
    stream: np.random.SeedSequence
) -> np.ndarray:
    """Means of ``n_draws`` resamples drawn from one sub-stream."""
    rng = np.random.default_rng(stream)
    n = len(values)
    means = np.empty(n_draws)
    for i in range(n_draws):
        means[i] = _ignore_missing_mean(values[rng.integers(0, n, size=n)])
    return means


def bootstrap_distribution(
    predictions: PredictionInput,
    n_resamples: int = 500,
    lower: float = 0.025,
    upper: float = 0.975,
    seed: Optional[int] = None,
    n_workers: int = 1,
    backend: str = 'loky'
) -> BootstrapResult:
    """
    Bootstrap the mean of the predictions.

    Each resample draws ``len(predictions)`` values uniformly with
    replacement from all predictions, missing ones included, and averages
    the values that are present. A resample with no present value has a
    missing mean and is left out of the quantiles and counted in
    ``n_missing``.

    Parameters:
    -----------
    predictions : sequence, np.ndarray, pd.Series or pd.DataFrame
        Point predictions; a DataFrame must have a 'pred' column
    n_resamples : int
        Number of bootstrap resamples
    lower, upper : float
        Quantiles of the interval, 0 <= lower < upper <= 1
    seed : int, optional
        Global seed. Output is identical for the same seed and n_workers.
    n_workers : int
        Worker-pool size; resamples are split into this many batches
    backend : str
        joblib backend used when n_workers > 1

    Returns:
    --------
    BootstrapResult
        Interval bounds, bootstrap mean and the resample-mean distribution
    """
    try:
        check_n_resamples(n_resamples)
        check_bounds(lower, upper)
        check_workers(n_workers, backend)
    except InvalidConfigurationError as exc:
        raise InvalidConfigurationError(f"bootstrap: {exc}") from exc

    values = _prediction_values(predictions)
    if len(values) == 0:
        raise InsufficientDataError("bootstrap: no predictions to resample")

    n_batches = min(n_workers, n_resamples)
    batch_sizes = [len(batch) for batch in np.array_split(np.arange(n_resamples), n_batches)]
    streams = spawn_seeds(seed, n_batches)

    logger.info(
        "Bootstrapping mean of %d predictions: %d resamples in %d batch(es)",
        len(values), n_resamples, n_batches
    )

    if n_workers == 1:
        batches = [_resample_means(values, batch_sizes[0], streams[0])]
    else:
        batches = run_tasks(
            _resample_means,
            [(values, size, stream) for size, stream in zip(batch_sizes, streams)],
            n_workers=n_workers,
            backend=backend,
            ordered=False
        )

    all_means = np.concatenate(batches)
    missing = np.isnan(all_means)
    means = np.sort(all_means[~missing])
    n_missing = int(missing.sum())

    if n_missing:
        logger.warning("%d of %d resamples had only missing predictions", n_missing, n_resamples)

    if len(means) == 0:
        warnings.warn(
            "bootstrap: every resample mean is missing; interval is undefined",
            RuntimeWarning
        )
        lo = hi = center = np.nan
    else:
        lo, hi = np.quantile(means, [lower, upper])
        center = float(np.mean(means))

    return BootstrapResult(
        lower=float(lo),
        upper=float(hi),
        mean=center,
        means=means,
        n_resamples=n_resamples,
        n_missing=n_missing,
        lower_quantile=lower,
        upper_quantile=upper
    )


def bootstrap_ci(
    predictions: PredictionInput,
    n_resamples: int = 500,
    lower: float = 0.025,
    upper: float = 0.975,
    seed: Optional[int] = None,
    n_workers: int = 1,
    backend: str = 'loky'
) -> Tuple[float, float]:
    """Percentile bootstrap interval ``(lower, upper)`` of the mean prediction."""
    result = bootstrap_distribution(
        predictions,
        n_resamples=n_resamples,
        lower=lower,
        upper=upper,
        seed=seed,
        n_workers=n_workers,
        backend=backend
    )
    return result.interval
