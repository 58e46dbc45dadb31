"""Utility functions for temporal sequential pattern mining."""

from .embedding import SubsequenceMatcher, is_subset, is_subsequence
from .validators import validate_delta, validate_margin, validate_theta, validate_datasets, validate_n_jobs
from .formatters import parse_result_line
from .sampling import random_dataset

__all__ = [
    'SubsequenceMatcher',
    'is_subset',
    'is_subsequence',
    'validate_delta',
    'validate_margin',
    'validate_theta',
    'validate_datasets',
    'validate_n_jobs',
    'parse_result_line',
    'random_dataset',
]
