"""
Visualization tools for spending cross-validation results.
"""

from .plots import plot_bootstrap_distribution, plot_fold_predictions

__all__ = [
    'plot_bootstrap_distribution',
    'plot_fold_predictions'
]
