"""
Data loading and preprocessing utilities for spending tables.
"""

from .loaders import load_spending_data, create_sample_data
from .preprocessing import validate_dataset, encode_categoricals, prepare_spending_data

__all__ = [
    'load_spending_data',
    'create_sample_data',
    'validate_dataset',
    'encode_categoricals',
    'prepare_spending_data'
]
