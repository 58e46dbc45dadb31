"""False positive statistics of a run against a ground truth.

The ground truth is the set of patterns found on the whole population (or on
the datasets a sample was drawn from); a pattern reported on a sample but
missing from the ground truth is a false positive.
"""
import logging
from pathlib import Path
from typing import Iterable, Set, Tuple, Union

from .core.data_structures import ItemsetSequence, SequentialPattern
from .core.result import MiningResult
from .exceptions import InvalidDataError, MalformedTransactionError, PreconditionError
from .utils.formatters import parse_result_line

logger = logging.getLogger(__name__)

PatternSource = Union[str, Path, MiningResult, Iterable[SequentialPattern]]


def load_pattern_set(source: PatternSource) -> Set[ItemsetSequence]:
    """Collect the pattern bodies of a result file or a result object.

    Args:
        source: Result file path, MiningResult or iterable of patterns

    Returns:
        Set of patterns

    Raises:
        InvalidDataError: If the file does not exist
    """
    if not isinstance(source, (str, Path)):
        return {p.sequence for p in source}

    file_path = Path(source)
    if not file_path.exists():
        raise InvalidDataError(f"Result file not found: {file_path}")

    patterns = set()
    with open(file_path, 'r') as f:
        for line_number, raw in enumerate(f, 1):
            line = raw.strip()
            if not line:
                continue
            try:
                sequence, _ = parse_result_line(line)
            except MalformedTransactionError as error:
                logger.warning(f"{file_path.name}:{line_number}: skipping '{line}' ({error})")
                continue
            patterns.add(sequence)
    return patterns


def false_positive_stats(ground_truth: PatternSource, found: PatternSource) -> Tuple[float, float]:
    """Compare the patterns of a run with a ground truth.

    Args:
        ground_truth: Reference patterns
        found: Patterns reported by the run

    Returns:
        (fraction of found patterns absent from the ground truth,
        number of found patterns / number of ground truth patterns)

    Raises:
        PreconditionError: If the ground truth is empty

    Example:
        >>> fp_ratio, size_ratio = false_positive_stats('GT_EP.txt', result)
    """
    truth = load_pattern_set(ground_truth)
    reported = load_pattern_set(found)

    if not truth:
        raise PreconditionError("Ground truth has no pattern")

    false_positives = len(reported - truth)
    fp_ratio = false_positives / len(reported) if reported else 0.0
    size_ratio = len(reported) / len(truth)

    logger.info(f"{false_positives} false positives out of {len(reported)} patterns ({len(truth)} in ground truth)")
    return fp_ratio, size_ratio
