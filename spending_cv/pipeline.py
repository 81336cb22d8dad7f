"""
End-to-end spending analysis: full-data fit, cross-validation, bootstrap.

Example:
    >>> from spending_cv import create_sample_data, run_analysis
    >>>
    >>> data = create_sample_data(n_samples=500)
    >>> result = run_analysis(data, n_folds=5, n_workers=4, seed=1248)
    >>> lo, hi = result.interval
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Optional, Tuple

import pandas as pd

from .config import AnalysisConfig
from .data.preprocessing import prepare_spending_data
from .models.regressors import OLSRegressor
from .utils.bootstrap import BootstrapResult, bootstrap_distribution
from .utils.validation import cross_validate

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Outputs of one ``run_analysis`` call.

    Attributes:
        model: OLS model fitted on the full dataset.
        predictions: Out-of-fold predictions ('pred', 'fold').
        bootstrap: Bootstrap distribution of the mean prediction.
        config: Configuration the run used.
        timings: Wall-clock seconds per stage.
    """
    model: OLSRegressor
    predictions: pd.DataFrame
    bootstrap: BootstrapResult
    config: AnalysisConfig
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def interval(self) -> Tuple[float, float]:
        return self.bootstrap.interval

    def summary(self) -> Dict[str, Any]:
        return {
            'n_records': len(self.predictions),
            'n_folds': self.config.n_folds,
            'bootstrap_mean': self.bootstrap.mean,
            'ci_lower': self.bootstrap.lower,
            'ci_upper': self.bootstrap.upper,
            'missing_predictions': int(self.predictions['pred'].isna().sum()),
            'missing_resamples': self.bootstrap.n_missing,
            'timings': dict(self.timings),
        }


@contextmanager
def _stage(name: str, timings: Dict[str, float]) -> Iterator[None]:
    t0 = time.perf_counter()
    logger.info("[%s] start", name)
    try:
        yield
    except Exception:
        logger.error("[%s] failed after %.2f s", name, time.perf_counter() - t0)
        raise
    timings[name] = time.perf_counter() - t0
    logger.info("[%s] done in %.2f s", name, timings[name])


def run_analysis(
    data: pd.DataFrame,
    config: Optional[AnalysisConfig] = None,
    **overrides: Any
) -> AnalysisResult:
    """
    Run the full spending analysis on ``data``.

    Parameters:
    -----------
    data : pd.DataFrame
        Raw spending table; categorical features are encoded here
    config : AnalysisConfig, optional
        Run configuration (defaults to ``AnalysisConfig()``)
    **overrides
        Individual configuration fields to override, e.g. ``n_folds=4``

    Returns:
    --------
    AnalysisResult
        Fitted model, out-of-fold predictions and bootstrap interval

    Any stage failure aborts the run and propagates to the caller.
    """
    config = replace(config or AnalysisConfig(), **overrides)
    timings: Dict[str, float] = {}

    with _stage('prepare', timings):
        encoded = prepare_spending_data(data, target=config.target)

    with _stage('ols', timings):
        model = OLSRegressor(target=config.target).fit(encoded)

    with _stage('cross-validation', timings):
        predictions = cross_validate(
            encoded,
            n_folds=config.n_folds,
            target=config.target,
            n_workers=config.n_workers,
            backend=config.backend
        )

    with _stage('bootstrap', timings):
        bootstrap = bootstrap_distribution(
            predictions,
            n_resamples=config.n_resamples,
            lower=config.lower,
            upper=config.upper,
            seed=config.seed,
            n_workers=config.n_workers,
            backend=config.backend
        )

    logger.info(
        "Bootstrapped mean spending %.2f, interval [%.2f, %.2f]",
        bootstrap.mean, bootstrap.lower, bootstrap.upper
    )

    return AnalysisResult(
        model=model,
        predictions=predictions,
        bootstrap=bootstrap,
        config=config,
        timings=timings
    )
