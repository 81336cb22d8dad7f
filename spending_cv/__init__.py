"""
Spending Cross-Validation Package

Cross-validated prediction of annual health care spending with ordinary
least squares, parallel fold evaluation and a bootstrap confidence interval
for the mean prediction.
"""

__version__ = "0.1.0"
__author__ = "Spending CV Analysis Team"

# Core module imports
from .config import AnalysisConfig
from .exceptions import (
    SpendingCVError,
    InvalidConfigurationError,
    InsufficientDataError,
    EmptyFoldError
)
from .data.loaders import load_spending_data, create_sample_data
from .data.preprocessing import prepare_spending_data
from .models.regressors import OLSRegressor
from .utils.validation import cross_validate
from .utils.bootstrap import bootstrap_ci, bootstrap_distribution, BootstrapResult
from .pipeline import run_analysis, AnalysisResult

# Convenience aliases
boot = bootstrap_ci
xval = cross_validate

__all__ = [
    'AnalysisConfig',
    'SpendingCVError',
    'InvalidConfigurationError',
    'InsufficientDataError',
    'EmptyFoldError',
    'load_spending_data',
    'create_sample_data',
    'prepare_spending_data',
    'OLSRegressor',
    'cross_validate',
    'xval',
    'bootstrap_ci',
    'bootstrap_distribution',
    'boot',
    'BootstrapResult',
    'run_analysis',
    'AnalysisResult'
]
