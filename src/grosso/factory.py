"""Algorithm factory for temporal sequential pattern mining."""
import functools
from typing import Any, Dict, List, Type
import logging

from .algorithms.base_algorithm import BaseAlgorithm
from .algorithms.stable import StablePatterns
from .algorithms.trend import EmergingPatterns, DescendingPatterns
from .exceptions import InvalidAlgorithmError

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Registry for temporal sequential pattern mining algorithms."""

    # Values are either a class (Type[BaseAlgorithm]) or a functools.partial
    # that pre-sets default kwargs (the *-freq keys run without bounds).
    _algorithms: Dict[str, Any] = {
        'stable':     StablePatterns,
        'sp':         StablePatterns,
        'emerging':   EmergingPatterns,
        'ep':         EmergingPatterns,
        'descending': DescendingPatterns,
        'dp':         DescendingPatterns,
        'sp-freq':    functools.partial(StablePatterns, use_bounds=False),
        'ep-freq':    functools.partial(EmergingPatterns, use_bounds=False),
        'dp-freq':    functools.partial(DescendingPatterns, use_bounds=False),
    }

    @classmethod
    def register(cls, name: str, algorithm_class: Type[BaseAlgorithm]):
        if not isinstance(algorithm_class, type) or not issubclass(algorithm_class, BaseAlgorithm):
            raise ValueError(f"{algorithm_class} must inherit from BaseAlgorithm")
        cls._algorithms[name.lower()] = algorithm_class
        logger.info(f"Registered algorithm: {name}")

    @classmethod
    def get(cls, name: str) -> Any:
        name_lower = name.lower()
        if name_lower not in cls._algorithms:
            available = cls.list_algorithms()
            raise InvalidAlgorithmError(
                f"Unknown algorithm '{name}'. Available algorithms: {', '.join(available)}"
            )
        return cls._algorithms[name_lower]

    @classmethod
    def list_algorithms(cls) -> List[str]:
        return sorted(set(cls._algorithms.keys()))

    @classmethod
    def has_algorithm(cls, name: str) -> bool:
        return name.lower() in cls._algorithms
