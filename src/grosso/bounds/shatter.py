"""Uniform deviation bound of a dataset from an empirical VC-dimension bound.

The estimator scans a dataset once and greedily keeps an antichain of the
transactions with the largest capacities: a transaction that embeds into a kept
one of larger or equal capacity is rejected, and kept transactions that embed
into a newcomer are evicted. The s-index ``s`` grows whenever a full antichain
of larger capacities justifies it and never goes down. With probability at
least ``1 - delta`` the frequency of every sequential pattern in the dataset
is within::

    mu = sqrt((s + ln(1 / delta)) / (2 * |D|))

of its true frequency.
"""
import logging
import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from .capacity import CapacityEstimator
from ..core.data_structures import ItemsetSequence
from ..core.dataset import SequenceDataset
from ..exceptions import GrossoError, PreconditionError
from ..utils.embedding import SubsequenceMatcher
from ..utils.validators import validate_delta, validate_n_jobs

logger = logging.getLogger(__name__)


@dataclass
class AntichainEntry:
    """A transaction kept by the estimator.

    Attributes:
        line: Raw text of the transaction
        capacity: Its capacity
        sequence: Its parsed form
    """
    line: str
    capacity: int
    sequence: ItemsetSequence


@dataclass
class ShatterBound:
    """Outcome of one estimator pass over a dataset.

    Attributes:
        name: Dataset label
        mu: Uniform deviation bound
        s_index: Final s-index
        size: Number of transactions
        delta: Confidence parameter used
        antichain: Kept transactions, by non-increasing capacity
    """
    name: str
    mu: float
    s_index: int
    size: int
    delta: float
    antichain: List[AntichainEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'mu': self.mu,
            's_index': self.s_index,
            'size': self.size,
            'delta': self.delta,
        }


def deviation_bound(s_index: int, delta: float, size: int) -> float:
    """Compute ``sqrt((s_index + ln(1/delta)) / (2 * size))``.

    Args:
        s_index: Upper bound on the VC-dimension of the pattern space
        delta: Confidence parameter in (0, 1)
        size: Number of transactions

    Returns:
        The deviation bound mu

    Raises:
        InvalidParameterError: If delta is not in (0, 1)
        PreconditionError: If the dataset is empty or mu is not finite
    """
    validate_delta(delta)
    if size <= 0:
        raise PreconditionError("Cannot bound the deviation of an empty dataset")
    if s_index < 0:
        raise PreconditionError(f"s-index must be non-negative, got {s_index}")

    mu = math.sqrt((s_index + math.log(1.0 / delta)) / (2.0 * size))
    if not math.isfinite(mu):
        raise PreconditionError(f"Deviation bound is not finite (s_index={s_index}, size={size})")
    return mu


class ShatterBoundEstimator:
    """Greedy antichain estimator of the s-index of a dataset.

    Args:
        delta: Confidence parameter in (0, 1)
        estimator: Capacity estimator (default: the tightest strategy)

    Example:
        >>> estimator = ShatterBoundEstimator(delta=0.1)
        >>> bound = estimator.estimate(SequenceDataset('2005q1_SPMF.txt'))
        >>> bound.mu
    """

    def __init__(self, delta: float, estimator: Optional[CapacityEstimator] = None):
        validate_delta(delta)
        self.delta = delta
        self.estimator = estimator or CapacityEstimator()

    @staticmethod
    def _threshold(s_index: int) -> int:
        return (1 << s_index) - 1

    @staticmethod
    def _dominated(sequence: ItemsetSequence, cap: int, antichain: List[AntichainEntry]) -> bool:
        # antichain is sorted by non-increasing capacity
        for entry in antichain:
            if entry.capacity < cap:
                return False
            if SubsequenceMatcher.is_subsequence(sequence, entry.sequence):
                return True
        return False

    def estimate(self, dataset: SequenceDataset) -> ShatterBound:
        """Scan the dataset and compute its deviation bound.

        Args:
            dataset: The dataset

        Returns:
            ShatterBound with mu, the s-index and the kept transactions

        Raises:
            PreconditionError: If the dataset has no valid transaction
        """
        if dataset.size == 0:
            raise PreconditionError(f"Dataset {dataset.name} has no valid transaction")

        s_index = 0
        antichain: List[AntichainEntry] = []
        members: Set[str] = set()

        for line, sequence in zip(dataset.lines, dataset.transactions):
            if line in members:
                continue

            cap = self.estimator(sequence)
            if cap <= self._threshold(s_index):
                continue

            if self._dominated(sequence, cap, antichain):
                continue

            for entry in [e for e in antichain if SubsequenceMatcher.is_subsequence(e.sequence, sequence)]:
                antichain.remove(entry)
                members.discard(entry.line)
                logger.debug(f"{dataset.name}: '{entry.line}' embeds into '{line}', evicted")

            position = 0
            while position < len(antichain) and antichain[position].capacity > cap:
                position += 1
            antichain.insert(position, AntichainEntry(line, cap, sequence))
            members.add(line)

            # after an eviction the antichain is no larger than s_index
            if len(antichain) <= s_index:
                continue

            if antichain[-1].capacity > self._threshold(s_index):
                s_index += 1
                logger.debug(f"{dataset.name}: s-index raised to {s_index}")
            else:
                evicted = antichain.pop()
                members.discard(evicted.line)

        mu = deviation_bound(s_index, self.delta, dataset.size)
        logger.info(f"{dataset.name}: s-index={s_index}, size={dataset.size}, mu={mu:.6f}")

        return ShatterBound(
            name=dataset.name,
            mu=mu,
            s_index=s_index,
            size=dataset.size,
            delta=self.delta,
            antichain=antichain,
        )


def _estimate_one(args) -> ShatterBound:
    dataset, delta, strategy = args
    return ShatterBoundEstimator(delta, CapacityEstimator(strategy)).estimate(dataset)


def estimate_bounds(
    datasets: Sequence[SequenceDataset],
    delta: float,
    n_jobs: int = 1,
    strategy: str = 'ours'
) -> List[ShatterBound]:
    """Estimate the deviation bound of every dataset.

    The passes are independent, so with ``n_jobs > 1`` they run in a process
    pool. Results are always returned in dataset order.

    Args:
        datasets: Datasets of the run
        delta: Confidence parameter of each dataset
        n_jobs: Number of worker processes (-1 for all cores)
        strategy: Capacity strategy

    Returns:
        List of ShatterBound, one per dataset
    """
    validate_delta(delta)
    n_jobs = validate_n_jobs(n_jobs)
    tasks = [(dataset, delta, strategy) for dataset in datasets]

    n_workers = min(n_jobs, len(tasks))
    if n_workers > 1:
        try:
            with ProcessPoolExecutor(max_workers=n_workers) as executor:
                return list(executor.map(_estimate_one, tasks))
        except GrossoError:
            raise
        except Exception as e:
            logger.warning(f"Parallel bound estimation failed: {e}, falling back to sequential")

    return [_estimate_one(task) for task in tasks]
