"""
Run configuration for the spending cross-validation pipeline.

The checks here are shared by the individual stages, so calling
``cross_validate`` or ``bootstrap_ci`` directly enforces the same rules as
building an ``AnalysisConfig``.
"""

import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidConfigurationError

DEFAULT_TARGET = 'totpay'
SUPPORTED_BACKENDS = ('loky', 'threading', 'multiprocessing')


def check_n_folds(n_folds: int) -> int:
    """Validate the number of cross-validation folds (K >= 2)."""
    if isinstance(n_folds, bool) or not isinstance(n_folds, numbers.Integral):
        raise InvalidConfigurationError(
            f"n_folds must be an integer, got {type(n_folds).__name__}"
        )
    if n_folds < 2:
        raise InvalidConfigurationError(
            f"n_folds must be at least 2 to leave a held-out fold, got {n_folds}"
        )
    return n_folds


def check_n_resamples(n_resamples: int) -> int:
    """Validate the number of bootstrap resamples."""
    if isinstance(n_resamples, bool) or not isinstance(n_resamples, numbers.Integral):
        raise InvalidConfigurationError(
            f"n_resamples must be an integer, got {type(n_resamples).__name__}"
        )
    if n_resamples <= 0:
        raise InvalidConfigurationError(
            f"n_resamples must be positive, got {n_resamples}"
        )
    return n_resamples


def check_bounds(lower: float, upper: float) -> None:
    """Validate the quantile bounds of a confidence interval."""
    for name, value in (('lower', lower), ('upper', upper)):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidConfigurationError(
                f"{name} bound must be a number, got {type(value).__name__}"
            )
        if not 0.0 <= value <= 1.0:
            raise InvalidConfigurationError(
                f"{name} bound must lie within [0, 1], got {value}"
            )
    if lower >= upper:
        raise InvalidConfigurationError(
            f"lower bound ({lower}) must be smaller than upper bound ({upper})"
        )


def check_workers(n_workers: int, backend: str) -> None:
    """Validate worker-pool size and joblib backend name."""
    is_integer = isinstance(n_workers, numbers.Integral) and not isinstance(n_workers, bool)
    if not is_integer or n_workers < 1:
        raise InvalidConfigurationError(
            f"n_workers must be a positive integer, got {n_workers!r}"
        )
    if backend not in SUPPORTED_BACKENDS:
        raise InvalidConfigurationError(
            f"Unknown backend: {backend}. Choose from: {', '.join(SUPPORTED_BACKENDS)}"
        )


@dataclass
class AnalysisConfig:
    """Configuration for a full spending analysis run.

    Attributes:
        n_folds: Number of contiguous cross-validation folds.
        n_resamples: Number of bootstrap resamples of the predictions.
        lower: Lower quantile of the bootstrap confidence interval.
        upper: Upper quantile of the bootstrap confidence interval.
        n_workers: Size of the worker pool used for folds and resample batches.
        backend: joblib backend ('loky', 'threading' or 'multiprocessing').
        seed: Global seed from which every random sub-stream is derived.
        target: Name of the numeric target column.
    """
    n_folds: int = 5
    n_resamples: int = 500
    lower: float = 0.025
    upper: float = 0.975
    n_workers: int = 4
    backend: str = 'loky'
    seed: Optional[int] = 1248
    target: str = DEFAULT_TARGET

    def __post_init__(self):
        check_n_folds(self.n_folds)
        check_n_resamples(self.n_resamples)
        check_bounds(self.lower, self.upper)
        check_workers(self.n_workers, self.backend)
        if not self.target:
            raise InvalidConfigurationError("target column name must not be empty")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'AnalysisConfig':
        """Build a configuration from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration keys: {sorted(unknown)}"
            )
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
