"""Random resampling of sequence datasets."""
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..core.dataset import SequenceDataset
from ..exceptions import PreconditionError, InvalidParameterError

logger = logging.getLogger(__name__)


def random_dataset(
    source: Union[str, Path, SequenceDataset],
    output: Union[str, Path],
    size: int,
    seed: Optional[int] = None
) -> Path:
    """Write ``size`` transactions drawn uniformly with replacement from ``source``.

    The replicas share the distribution of the source dataset, so the
    patterns mined on the source act as ground truth for them.

    Args:
        source: Dataset path or SequenceDataset
        output: Output file path
        size: Number of transactions to draw
        seed: Seed of the random generator

    Returns:
        Path of the written file

    Raises:
        InvalidParameterError: If size is negative
        PreconditionError: If the source has no transaction
    """
    if size < 0:
        raise InvalidParameterError(f"size must be non-negative, got {size}")

    dataset = source if isinstance(source, SequenceDataset) else SequenceDataset(source)
    if dataset.size == 0:
        raise PreconditionError(f"Cannot sample from the empty dataset {dataset.name}")

    rng = np.random.default_rng(seed)
    picks = rng.integers(0, dataset.size, size=size)

    output = Path(output)
    with open(output, 'w') as f:
        for index in picks:
            f.write(dataset.lines[index] + '\n')

    logger.info(f"Wrote {size} transactions sampled from {dataset.name} to {output}")
    return output
