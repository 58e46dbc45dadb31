"""Capacity and deviation bounds of sequence datasets."""

from .capacity import (
    CapacityEstimator,
    CapacityComparison,
    capacity,
    capacity_naive,
    capacity_partial_overlap,
    compare_capacities,
)
from .shatter import ShatterBound, ShatterBoundEstimator, deviation_bound, estimate_bounds

__all__ = [
    'CapacityEstimator',
    'CapacityComparison',
    'capacity',
    'capacity_naive',
    'capacity_partial_overlap',
    'compare_capacities',
    'ShatterBound',
    'ShatterBoundEstimator',
    'deviation_bound',
    'estimate_bounds',
]
