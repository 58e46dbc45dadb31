"""Base class for all temporal sequential pattern mining algorithms."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union, Optional, Dict, Any, Sequence
import numpy as np
import tempfile
import time
import logging

from ..bounds.shatter import estimate_bounds
from ..config import config
from ..core.candidates import CandidateTracker
from ..core.data_structures import ItemsetSequence, SequentialPattern
from ..core.dataset import SequenceDataset
from ..core.result import MiningResult
from ..exceptions import NotFittedError, PreconditionError
from ..miners.base import BaseSequenceMiner, FunctionMiner, parse_mined_patterns
from ..miners.spmf import SpmfMiner
from ..utils.validators import validate_datasets, validate_delta, validate_n_jobs, validate_theta

logger = logging.getLogger(__name__)

DatasetInput = Union[str, Path, SequenceDataset]


class BaseAlgorithm(ABC):
    """Abstract base class for temporal sequential pattern mining algorithms.

    A run has four steps: the deviation bound ``mu`` of every dataset is
    estimated, the policy picks the anchor dataset and the minimum frequency
    at which it is mined, the mined patterns seed the candidates, and the
    remaining datasets are visited in the policy's order, each pass dropping
    the candidates that fail the policy's survival test.

    Subclasses implement the policy through ``_anchor_index``,
    ``_seed_threshold``, ``_exploration_order`` and ``_survives``.

    Attributes:
        delta: Confidence parameter of the whole run
        theta: Minimum frequency threshold (None when unused)
        datasets: SequenceDataset objects of the last fit
        mu: Read-only numpy array of per-dataset deviation bounds
        patterns: Surviving patterns (after fit)
        execution_time: Time taken to mine patterns
        is_fitted: Whether the algorithm has been fitted

    Example:
        >>> algo = EmergingPatterns(delta=0.1, epsilon=0.01)
        >>> algo.fit(['2005q1_SPMF.txt', '2005q2_SPMF.txt'])
        >>> patterns = algo.get_patterns()
    """

    min_datasets = 2

    def __init__(
        self,
        delta: float = 0.1,
        theta: Optional[float] = None,
        n_jobs: Optional[int] = None,
        miner=None,
        use_bounds: bool = True,
        **kwargs
    ):
        """Initialize base algorithm.

        Args:
            delta: Confidence parameter in (0, 1), split uniformly among datasets
            theta: Minimum frequency threshold in [0, 1]
            n_jobs: Parallel jobs for bound estimation (default: config.n_jobs)
            miner: BaseSequenceMiner or callable (default: SpmfMiner)
            use_bounds: Use the deviation bounds; False compares observed
                frequencies only
            **kwargs: Additional algorithm-specific parameters

        Raises:
            InvalidParameterError: If parameters are invalid
        """
        self.delta = delta
        self.theta = theta
        self.n_jobs = n_jobs if n_jobs is not None else config.n_jobs
        self.miner = miner
        self.use_bounds = use_bounds
        self._params = kwargs
        self._validate()

        self.datasets: List[SequenceDataset] = []
        self.mu: Optional[np.ndarray] = None
        self.anchor: Optional[int] = None
        self.seed_threshold: Optional[float] = None
        self.patterns: List[SequentialPattern] = []
        self.execution_time: Optional[float] = None
        self.is_fitted = False

        logger.debug(f"Initialized {self.__class__.__name__} with delta={delta}")

    def _validate(self):
        validate_delta(self.delta)
        validate_theta(self.theta)
        validate_n_jobs(self.n_jobs)

    def _policy_params(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    def _anchor_index(self, mu: np.ndarray) -> int:
        """Index of the dataset the candidates are mined from."""
        raise NotImplementedError("Subclass must implement _anchor_index() method")

    @abstractmethod
    def _seed_threshold(self, mu: np.ndarray, anchor: int) -> float:
        """Minimum frequency at which the anchor dataset is mined."""
        raise NotImplementedError("Subclass must implement _seed_threshold() method")

    @abstractmethod
    def _exploration_order(self, anchor: int) -> List[int]:
        """Indices of the datasets to visit after seeding, in visiting order."""
        raise NotImplementedError("Subclass must implement _exploration_order() method")

    @abstractmethod
    def _survives(self, pattern: SequentialPattern, index: int, freq: float) -> bool:
        """Whether a candidate with observed frequency ``freq`` in dataset ``index`` is kept."""
        raise NotImplementedError("Subclass must implement _survives() method")

    def _load(self, datasets: Sequence[DatasetInput]) -> List[SequenceDataset]:
        validate_datasets(datasets)
        if len(datasets) < self.min_datasets:
            raise PreconditionError(
                f"{self.__class__.__name__} needs at least {self.min_datasets} datasets, got {len(datasets)}"
            )
        loaded = [d if isinstance(d, SequenceDataset) else SequenceDataset(d) for d in datasets]
        for dataset in loaded:
            if dataset.size == 0:
                raise PreconditionError(f"Dataset {dataset.name} has no valid transaction")
        return loaded

    def _compute_bounds(self) -> np.ndarray:
        n = len(self.datasets)
        if self.use_bounds:
            bounds = estimate_bounds(self.datasets, self.delta / n, n_jobs=self.n_jobs)
            mu = np.array([b.mu for b in bounds], dtype=float)
        else:
            mu = np.zeros(n, dtype=float)
        mu.flags.writeable = False
        return mu

    def _get_miner(self) -> BaseSequenceMiner:
        if self.miner is None:
            return SpmfMiner()
        if isinstance(self.miner, BaseSequenceMiner):
            return self.miner
        return FunctionMiner(self.miner)

    def _run_miner(self, dataset: SequenceDataset, threshold: float, directory: Path) -> Dict[ItemsetSequence, int]:
        if dataset.path is not None and not dataset.skipped:
            input_file = dataset.path
        else:
            input_file = directory / 'anchor.txt'
            with open(input_file, 'w') as f:
                for line in dataset.lines:
                    f.write(line + '\n')

        output_file = directory / f"{Path(dataset.name).stem}_mined.txt"
        mined = self._get_miner().mine(input_file, threshold, output_file)
        return parse_mined_patterns(mined)

    def _mine_anchor(self, dataset: SequenceDataset, threshold: float) -> Dict[ItemsetSequence, int]:
        """Mine the anchor dataset into a scratch directory."""
        # the miner needs a positive threshold: a pattern must occur at least once
        threshold = max(threshold, 1.0 / dataset.size)

        if config.work_dir is not None:
            Path(config.work_dir).mkdir(parents=True, exist_ok=True)

        if config.keep_mined_files:
            directory = Path(tempfile.mkdtemp(prefix='grosso_', dir=config.work_dir))
            logger.info(f"Keeping mined files in {directory}")
            return self._run_miner(dataset, threshold, directory)

        with tempfile.TemporaryDirectory(prefix='grosso_', dir=config.work_dir) as tmpdir:
            return self._run_miner(dataset, threshold, Path(tmpdir))

    def _mine(self) -> List[SequentialPattern]:
        self.mu = self._compute_bounds()
        for dataset, mu in zip(self.datasets, self.mu):
            logger.info(f"{dataset.name}: size={dataset.size}, mu={mu:.6f}")

        self.anchor = self._anchor_index(self.mu)
        self.seed_threshold = float(self._seed_threshold(self.mu, self.anchor))
        anchor_dataset = self.datasets[self.anchor]
        logger.info(
            f"Anchor dataset {self.anchor + 1} ({anchor_dataset.name}), "
            f"minimum frequency {self.seed_threshold:.6f}"
        )

        if self.seed_threshold > 1:
            logger.warning(
                f"Minimum frequency {self.seed_threshold:.6f} exceeds 1: no pattern can qualify"
            )
            return []

        tracker = CandidateTracker(len(self.datasets))
        supports = self._mine_anchor(anchor_dataset, self.seed_threshold)
        if not tracker.seed(supports, self.anchor, anchor_dataset.size):
            logger.warning(f"No candidate mined from {anchor_dataset.name}")
            return []

        for index in self._exploration_order(self.anchor):
            tracker.explore(index, self.datasets[index], self._survives)
            if not len(tracker):
                break

        return tracker.patterns

    def fit(self, datasets: Sequence[DatasetInput]) -> 'BaseAlgorithm':
        """Run the algorithm on time-ordered datasets.

        Args:
            datasets: Paths or SequenceDataset objects, oldest first

        Returns:
            Self for method chaining

        Raises:
            PreconditionError: If there are too few or empty datasets
            MiningError: If the external miner fails
        """
        self.datasets = self._load(datasets)

        logger.info(f"Fitting {self.__class__.__name__} on {len(self.datasets)} datasets")

        start_time = time.time()
        try:
            self.patterns = self._mine()
            self.execution_time = time.time() - start_time
            self.is_fitted = True

            logger.info(f"Mining completed in {self.execution_time:.3f}s, found {len(self.patterns)} patterns")

        except Exception as e:
            logger.error(f"Mining failed: {e}")
            raise

        return self

    def get_patterns(self) -> List[SequentialPattern]:
        """Get the surviving patterns.

        Raises:
            NotFittedError: If algorithm hasn't been fitted yet
        """
        if not self.is_fitted:
            raise NotFittedError("Algorithm must be fitted before getting patterns. Call fit() first.")

        return self.patterns

    def get_result(self) -> MiningResult:
        """Get mining results as MiningResult object.

        Raises:
            NotFittedError: If algorithm hasn't been fitted yet
        """
        if not self.is_fitted:
            raise NotFittedError("Algorithm must be fitted before getting results. Call fit() first.")

        params = self.get_params()
        params.pop('delta')
        return MiningResult(
            patterns=self.patterns,
            algorithm=self.__class__.__name__,
            delta=self.delta,
            mu=self.mu.tolist(),
            dataset_names=[d.name for d in self.datasets],
            dataset_sizes=[d.size for d in self.datasets],
            execution_time=self.execution_time,
            anchor=self.anchor,
            seed_threshold=self.seed_threshold,
            **params
        )

    def mine(self, datasets: Sequence[DatasetInput]) -> List[SequentialPattern]:
        """Convenience method to fit and get patterns in one call."""
        self.fit(datasets)
        return self.get_patterns()

    def mine_and_get_result(self, datasets: Sequence[DatasetInput]) -> MiningResult:
        """Convenience method to fit and get result in one call."""
        self.fit(datasets)
        return self.get_result()

    def get_params(self) -> Dict[str, Any]:
        """Get algorithm parameters.

        Returns:
            Dictionary of parameters
        """
        return {
            'delta': self.delta,
            'theta': self.theta,
            'n_jobs': self.n_jobs,
            'use_bounds': self.use_bounds,
            **self._policy_params(),
            **self._params
        }

    def set_params(self, **params):
        """Set algorithm parameters.

        Args:
            **params: Parameters to set

        Returns:
            Self for method chaining

        Raises:
            InvalidParameterError: If a new value is invalid
        """
        for name in list(params):
            if name == 'miner' or (name in self.get_params() and hasattr(self, name)):
                setattr(self, name, params.pop(name))

        self._params.update(params)
        self._validate()
        self.is_fitted = False  # Reset fit status
        return self

    def __repr__(self) -> str:
        """String representation."""
        params_str = ', '.join(f"{k}={v}" for k, v in self.get_params().items())
        return f"{self.__class__.__name__}({params_str})"
