"""Main interface for temporal sequential pattern mining."""
from typing import List, Optional, Sequence
import logging

from .algorithms.base_algorithm import DatasetInput
from .core.data_structures import SequentialPattern
from .core.result import MiningResult
from .factory import AlgorithmRegistry
from .config import config

logger = logging.getLogger(__name__)


class TemporalPatternMiner:
    """Main interface for temporal sequential pattern mining.

    Provides a simple, unified API for finding stable, emerging and
    descending sequential patterns in time-ordered datasets.

    Args:
        algorithm: Algorithm name (e.g., 'stable', 'emerging', 'dp-freq')
        datasets: Dataset paths or SequenceDataset objects, oldest first
        **kwargs: Algorithm parameters (delta, theta, alpha, epsilon, ...)

    Example:
        >>> # Simple usage
        >>> miner = TemporalPatternMiner('emerging', ['q1.txt', 'q2.txt'], epsilon=0.01)
        >>> patterns = miner.mine()

        >>> # With result metadata
        >>> result = miner.mine_and_get_result()
        >>> print(result.summary())
        >>> result.save_text('emerging.txt')
    """

    def __init__(
        self,
        algorithm: str,
        datasets: Optional[Sequence[DatasetInput]] = None,
        **kwargs
    ):
        """Initialize the miner.

        Args:
            algorithm: Algorithm name
            datasets: Input datasets (optional, can be provided in mine())
            **kwargs: Algorithm-specific parameters
        """
        if not config.suppress_prints:
            config.setup_logging()

        self.algorithm_name = algorithm
        algorithm_class = AlgorithmRegistry.get(algorithm)
        self.algorithm = algorithm_class(**kwargs)
        self.datasets = datasets
        self.is_fitted = False

        logger.info(f"Initialized {algorithm} miner with {self.algorithm.get_params()}")

    def _resolve(self, datasets):
        if datasets is None:
            datasets = self.datasets

        if datasets is None:
            raise ValueError("No datasets provided. Pass datasets to constructor or mine() method.")
        return datasets

    def mine(self, datasets: Optional[Sequence[DatasetInput]] = None) -> List[SequentialPattern]:
        """Mine patterns from the datasets.

        Args:
            datasets: Input datasets (if not provided in constructor)

        Returns:
            List of surviving SequentialPattern objects

        Raises:
            ValueError: If no datasets are provided
        """
        patterns = self.algorithm.mine(self._resolve(datasets))
        self.is_fitted = True

        return patterns

    def mine_and_get_result(self, datasets: Optional[Sequence[DatasetInput]] = None) -> MiningResult:
        """Mine patterns and return result with metadata.

        Raises:
            ValueError: If no datasets are provided
        """
        result = self.algorithm.mine_and_get_result(self._resolve(datasets))
        self.is_fitted = True

        return result

    def get_patterns(self) -> List[SequentialPattern]:
        """Get patterns from last mining operation.

        Raises:
            NotFittedError: If mine() hasn't been called yet
        """
        return self.algorithm.get_patterns()

    def get_result(self) -> MiningResult:
        """Get result from last mining operation.

        Raises:
            NotFittedError: If mine() hasn't been called yet
        """
        return self.algorithm.get_result()

    def __repr__(self) -> str:
        """String representation."""
        return f"TemporalPatternMiner(algorithm='{self.algorithm_name}', delta={self.algorithm.delta})"
