"""Core components for temporal sequential pattern mining."""

from .data_structures import ItemsetSequence, SequentialPattern
from .dataset import SequenceDataset
from .candidates import CandidateTracker
from .result import MiningResult

__all__ = [
    'ItemsetSequence',
    'SequentialPattern',
    'SequenceDataset',
    'CandidateTracker',
    'MiningResult',
]
