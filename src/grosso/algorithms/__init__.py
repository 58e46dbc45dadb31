"""Pattern classification policies."""

from .base_algorithm import BaseAlgorithm
from .stable import StablePatterns
from .trend import EmergingPatterns, DescendingPatterns

__all__ = [
    'BaseAlgorithm',
    'StablePatterns',
    'EmergingPatterns',
    'DescendingPatterns',
]
