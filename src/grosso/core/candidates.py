"""Candidate set of a run, refined dataset by dataset."""
import logging
from typing import Callable, Dict, List, Mapping, Sequence, Set

from .data_structures import ItemsetSequence, SequentialPattern
from .dataset import SequenceDataset
from ..exceptions import PreconditionError
from ..utils.embedding import SubsequenceMatcher

logger = logging.getLogger(__name__)

# survives(pattern, dataset index, observed frequency) -> keep?
SurvivalTest = Callable[[SequentialPattern, int, float], bool]


class CandidateTracker:
    """Holds the candidate patterns of a run and prunes them pass by pass.

    The tracker is seeded once from the patterns mined in the anchor dataset.
    Every later pass computes the observed frequency of each remaining
    candidate in one dataset and asks a survival test whether to keep it.
    The candidate set never grows.

    Args:
        n_datasets: Number of datasets of the run

    Example:
        >>> tracker = CandidateTracker(n_datasets=2)
        >>> tracker.seed({ItemsetSequence([[1]]): 3}, anchor=1, anchor_size=4)
        1
        >>> tracker.explore(0, dataset, lambda p, i, f: f > 0.5)
    """

    def __init__(self, n_datasets: int):
        if n_datasets < 1:
            raise PreconditionError("A run needs at least one dataset")
        self.n_datasets = n_datasets
        self._candidates: Dict[ItemsetSequence, SequentialPattern] = {}

    def seed(self, supports: Mapping[ItemsetSequence, int], anchor: int, anchor_size: int) -> int:
        """Create one candidate per mined pattern.

        Args:
            supports: Pattern -> support count in the anchor dataset
            anchor: Index of the anchor dataset
            anchor_size: Number of transactions of the anchor dataset

        Returns:
            Number of candidates
        """
        if anchor_size <= 0:
            raise PreconditionError("Cannot seed candidates from an empty dataset")

        self._candidates = {}
        for sequence, support in supports.items():
            pattern = SequentialPattern(sequence, self.n_datasets)
            pattern.set_frequency(anchor, support / anchor_size)
            self._candidates[sequence] = pattern

        logger.info(f"Seeded {len(self._candidates)} candidates from dataset {anchor + 1}")
        return len(self._candidates)

    @staticmethod
    def frequency(
        sequence: ItemsetSequence,
        transactions: Sequence[ItemsetSequence],
        item_index: Dict[int, Set[int]]
    ) -> float:
        """Observed frequency of ``sequence`` among ``transactions``.

        Only the transactions containing every item of the pattern are
        tested for embedding.
        """
        if not transactions:
            return 0.0
        candidates = SubsequenceMatcher.candidate_transactions(sequence, item_index)
        if not candidates:
            return 0.0
        return SubsequenceMatcher.support(sequence, transactions, candidates) / len(transactions)

    def explore(self, index: int, dataset: SequenceDataset, survives: SurvivalTest) -> int:
        """Evaluate every candidate in one dataset.

        Args:
            index: Position of the dataset in the run
            dataset: The dataset
            survives: Survival test of the policy

        Returns:
            Number of removed candidates
        """
        item_index = dataset.item_index()
        removed: List[ItemsetSequence] = []

        for sequence, pattern in self._candidates.items():
            freq = self.frequency(sequence, dataset.transactions, item_index)
            if survives(pattern, index, freq):
                pattern.set_frequency(index, freq)
            else:
                removed.append(sequence)

        for sequence in removed:
            del self._candidates[sequence]

        logger.info(
            f"Dataset {index + 1} ({dataset.name}): removed {len(removed)}, "
            f"{len(self._candidates)} candidates left"
        )
        return len(removed)

    @property
    def patterns(self) -> List[SequentialPattern]:
        """Remaining candidates, in seeding order."""
        return list(self._candidates.values())

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, sequence: ItemsetSequence) -> bool:
        return sequence in self._candidates
