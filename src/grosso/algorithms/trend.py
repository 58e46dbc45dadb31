"""Emerging and descending sequential patterns.

Both policies compare consecutive datasets: a pattern is emerging when its
frequency grows by more than ``epsilon`` from every dataset to the next even
in the worst case allowed by the bounds, descending when it shrinks that way.
"""
from typing import Any, Dict, List, Optional
import numpy as np

from .base_algorithm import BaseAlgorithm
from ..core.data_structures import SequentialPattern
from ..exceptions import InvalidParameterError
from ..utils.validators import validate_margin

THETA_SCOPES = ('anchor', 'all')


class _TrendPatterns(BaseAlgorithm):
    """Shared parameters and seeding chain of the trend policies.

    The seeding chain starts at the dataset farthest from the anchor with
    ``m = 0`` and adds ``mu`` of both neighbours plus ``epsilon`` at every
    step towards the anchor: ``m`` at the anchor is the smallest frequency a
    pattern can have there and still survive every pass.

    With ``theta``, ``theta_scope='anchor'`` raises the anchor threshold to
    at least ``theta + mu_anchor``; ``theta_scope='all'`` starts the chain at
    ``theta + mu`` of the farthest dataset instead.
    """

    def __init__(
        self,
        delta: float = 0.1,
        epsilon: float = 0.01,
        theta: Optional[float] = None,
        theta_scope: str = 'anchor',
        **kwargs
    ):
        self.epsilon = epsilon
        self.theta_scope = theta_scope
        super().__init__(delta=delta, theta=theta, **kwargs)

    def _validate(self):
        super()._validate()
        validate_margin(self.epsilon, 'epsilon')
        if self.theta_scope not in THETA_SCOPES:
            raise InvalidParameterError(
                f"theta_scope must be one of {', '.join(THETA_SCOPES)}, got '{self.theta_scope}'"
            )

    def _policy_params(self) -> Dict[str, Any]:
        return {'epsilon': self.epsilon, 'theta_scope': self.theta_scope}

    def _chain(self, mu: np.ndarray, order: List[int]) -> float:
        """Threshold at the last index of ``order``, walking from its first."""
        start = order[0]
        threshold = 0.0
        if self.theta is not None and self.theta_scope == 'all':
            threshold = self.theta + mu[start]

        for previous, current in zip(order, order[1:]):
            threshold = mu[current] + mu[previous] + threshold + self.epsilon

        anchor = order[-1]
        if self.theta is not None and self.theta_scope == 'anchor':
            threshold = max(threshold, self.theta + mu[anchor])
        return float(threshold)

    def _gap(self, current: float, current_mu: float, reference: float, reference_mu: float) -> float:
        return (reference - reference_mu) - (current + current_mu)


class EmergingPatterns(_TrendPatterns):
    """Patterns whose frequency grows by more than ``epsilon`` at every step.

    Candidates are mined from the last dataset; the others are visited from
    the most recent backwards. A candidate survives dataset ``i`` when::

        f[i+1] - mu[i+1] - (f[i] + mu[i]) > epsilon

    Example:
        >>> ep = EmergingPatterns(epsilon=0.01)
        >>> patterns = ep.mine(['2005q1_SPMF.txt', '2005q2_SPMF.txt'])
    """

    def _anchor_index(self, mu: np.ndarray) -> int:
        return len(mu) - 1

    def _seed_threshold(self, mu: np.ndarray, anchor: int) -> float:
        return self._chain(mu, list(range(len(mu))))

    def _exploration_order(self, anchor: int) -> List[int]:
        return list(range(anchor - 1, -1, -1))

    def _survives(self, pattern: SequentialPattern, index: int, freq: float) -> bool:
        later = index + 1
        gap = self._gap(freq, self.mu[index], pattern.frequency(later), self.mu[later])
        return gap > self.epsilon


class DescendingPatterns(_TrendPatterns):
    """Patterns whose frequency shrinks by more than ``epsilon`` at every step.

    Candidates are mined from the first dataset; the others are visited in
    order. A candidate survives dataset ``i`` when::

        f[i-1] - mu[i-1] - (f[i] + mu[i]) > epsilon
    """

    def _anchor_index(self, mu: np.ndarray) -> int:
        return 0

    def _seed_threshold(self, mu: np.ndarray, anchor: int) -> float:
        return self._chain(mu, list(range(len(mu) - 1, -1, -1)))

    def _exploration_order(self, anchor: int) -> List[int]:
        return list(range(anchor + 1, len(self.datasets)))

    def _survives(self, pattern: SequentialPattern, index: int, freq: float) -> bool:
        earlier = index - 1
        gap = self._gap(freq, self.mu[index], pattern.frequency(earlier), self.mu[earlier])
        return gap > self.epsilon
