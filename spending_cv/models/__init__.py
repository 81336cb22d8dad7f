"""
Regression models for spending prediction.
"""

from .regressors import OLSRegressor, fit, predict

__all__ = [
    'OLSRegressor',
    'fit',
    'predict'
]
