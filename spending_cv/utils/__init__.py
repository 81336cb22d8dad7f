"""
Cross-validation, bootstrap and parallel execution utilities.
"""

from .folds import assign_folds, fold_indices, fold_sizes
from .validation import cross_validate, fold_metrics
from .bootstrap import bootstrap_ci, bootstrap_distribution, BootstrapResult
from .parallel import worker_pool, run_tasks
from .rng import spawn_seeds, spawn_generators, parallel_normal_draws

__all__ = [
    'assign_folds',
    'fold_indices',
    'fold_sizes',
    'cross_validate',
    'fold_metrics',
    'bootstrap_ci',
    'bootstrap_distribution',
    'BootstrapResult',
    'worker_pool',
    'run_tasks',
    'spawn_seeds',
    'spawn_generators',
    'parallel_normal_draws'
]
