"""Stable sequential patterns."""
from typing import Any, Dict, List, Optional
import numpy as np

from .base_algorithm import BaseAlgorithm
from ..core.data_structures import SequentialPattern
from ..utils.validators import validate_margin


class StablePatterns(BaseAlgorithm):
    """Patterns frequent in every dataset whose frequency barely moves.

    A pattern is kept when, in every dataset ``i``, its frequency is at least
    ``theta`` even after subtracting ``mu_i``, and for every pair of datasets
    the largest gap compatible with the bounds stays within ``alpha``::

        (f_i + mu_i) - (f_j - mu_j) <= alpha
        (f_j + mu_j) - (f_i - mu_i) <= alpha

    The candidates are mined from the dataset with the largest ``theta + mu``
    at that minimum frequency; the other datasets are visited in order.

    Args:
        delta: Confidence parameter
        theta: Minimum frequency threshold, applied to every dataset
        alpha: Maximum frequency variation
        **kwargs: See BaseAlgorithm

    Example:
        >>> sp = StablePatterns(theta=0.2, alpha=0.1)
        >>> patterns = sp.mine(['2005q1_SPMF.txt', '2005q2_SPMF.txt', '2005q3_SPMF.txt'])
    """

    def __init__(self, delta: float = 0.1, theta: Optional[float] = 0.2, alpha: float = 0.1, **kwargs):
        self.alpha = alpha
        super().__init__(delta=delta, theta=theta, **kwargs)

    def _validate(self):
        super()._validate()
        validate_margin(self.alpha, 'alpha')

    def _policy_params(self) -> Dict[str, Any]:
        return {'alpha': self.alpha}

    @property
    def _min_frequency(self) -> float:
        return self.theta if self.theta is not None else 0.0

    def _anchor_index(self, mu: np.ndarray) -> int:
        return int(np.argmax(self._min_frequency + mu))

    def _seed_threshold(self, mu: np.ndarray, anchor: int) -> float:
        return self._min_frequency + mu[anchor]

    def _exploration_order(self, anchor: int) -> List[int]:
        return [i for i in range(len(self.datasets)) if i != anchor]

    def _survives(self, pattern: SequentialPattern, index: int, freq: float) -> bool:
        mu_i = self.mu[index]
        if freq - mu_i < self._min_frequency:
            return False

        stable = True
        for j in pattern.evaluated_indices():
            freq_j = pattern.frequency(j)
            mu_j = self.mu[j]
            if (freq + mu_i) - (freq_j - mu_j) > self.alpha:
                stable = False
            if (freq_j + mu_j) - (freq - mu_i) > self.alpha:
                stable = False
        return stable
