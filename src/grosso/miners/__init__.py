"""Adapters for the external miners that seed the candidates."""

from .base import BaseSequenceMiner, FunctionMiner, parse_mined_patterns
from .spmf import SpmfMiner

__all__ = [
    'BaseSequenceMiner',
    'FunctionMiner',
    'SpmfMiner',
    'parse_mined_patterns',
]
