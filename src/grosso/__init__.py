"""grosso - statistically sound temporal sequential patterns

Finds the sequential patterns whose frequency is stable, emerging or
descending across time-ordered datasets. Frequencies are compared through
deviation bounds estimated from an upper bound on the VC-dimension of each
dataset, so the reported patterns hold with probability at least 1 - delta.

Example:
    >>> from grosso import TemporalPatternMiner
    >>> miner = TemporalPatternMiner('emerging', ['q1.txt', 'q2.txt'], epsilon=0.01)
    >>> for p in miner.mine():
    ...     print(p.to_line())
"""

__version__ = '0.1.0'
__author__ = 'grosso developers'

from .core.data_structures import ItemsetSequence, SequentialPattern
from .core.dataset import SequenceDataset
from .core.candidates import CandidateTracker
from .core.result import MiningResult

from .bounds.capacity import CapacityEstimator, capacity, compare_capacities
from .bounds.shatter import ShatterBoundEstimator, deviation_bound, estimate_bounds

from .algorithms.base_algorithm import BaseAlgorithm
from .algorithms.stable import StablePatterns
from .algorithms.trend import EmergingPatterns, DescendingPatterns

from .miners import BaseSequenceMiner, FunctionMiner, SpmfMiner, parse_mined_patterns
from .miner import TemporalPatternMiner
from .factory import AlgorithmRegistry
from .evaluation import false_positive_stats
from .utils.sampling import random_dataset

from .config import config

from .exceptions import (
    GrossoError,
    InvalidDataError,
    MalformedTransactionError,
    InvalidAlgorithmError,
    InvalidParameterError,
    PreconditionError,
    MiningError,
    NotFittedError,
)

__all__ = [
    'ItemsetSequence',
    'SequentialPattern',
    'SequenceDataset',
    'CandidateTracker',
    'MiningResult',
    'CapacityEstimator',
    'capacity',
    'compare_capacities',
    'ShatterBoundEstimator',
    'deviation_bound',
    'estimate_bounds',
    'BaseAlgorithm',
    'StablePatterns',
    'EmergingPatterns',
    'DescendingPatterns',
    'BaseSequenceMiner',
    'FunctionMiner',
    'SpmfMiner',
    'parse_mined_patterns',
    'TemporalPatternMiner',
    'AlgorithmRegistry',
    'false_positive_stats',
    'random_dataset',
    'config',
    'GrossoError',
    'InvalidDataError',
    'MalformedTransactionError',
    'InvalidAlgorithmError',
    'InvalidParameterError',
    'PreconditionError',
    'MiningError',
    'NotFittedError',
]


def list_algorithms():
    """List all available algorithms."""
    return AlgorithmRegistry.list_algorithms()
