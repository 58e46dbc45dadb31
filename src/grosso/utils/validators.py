"""Validation utilities for temporal sequential pattern mining."""
import math
from pathlib import Path
from typing import Optional, Sequence

from ..exceptions import InvalidParameterError, InvalidDataError


def _check_number(value, param_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(f"{param_name} must be a number, got {type(value)}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"{param_name} must be finite, got {value}")


def validate_delta(delta: float, param_name: str = "delta") -> None:
    """Validate a confidence parameter.

    Args:
        delta: Value to validate, must lie in the open interval (0, 1)
        param_name: Name of parameter (for error messages)

    Raises:
        InvalidParameterError: If delta is invalid
    """
    _check_number(delta, param_name)

    if not 0 < delta < 1:
        raise InvalidParameterError(f"{param_name} must be in (0, 1), got {delta}")


def validate_margin(margin: float, param_name: str) -> None:
    """Validate a non-negative margin such as alpha or epsilon.

    Raises:
        InvalidParameterError: If margin is negative or not a number
    """
    _check_number(margin, param_name)

    if margin < 0:
        raise InvalidParameterError(f"{param_name} must be non-negative, got {margin}")


def validate_theta(theta: Optional[float], param_name: str = "theta") -> None:
    """Validate a minimum frequency threshold (None means no threshold).

    Raises:
        InvalidParameterError: If theta is outside [0, 1]
    """
    if theta is None:
        return

    _check_number(theta, param_name)

    if not 0 <= theta <= 1:
        raise InvalidParameterError(f"{param_name} must be in [0, 1], got {theta}")


def validate_datasets(datasets: Sequence, min_count: int = 1) -> None:
    """Validate the list of datasets of a run.

    Args:
        datasets: File paths or SequenceDataset objects, in temporal order
        min_count: Minimum number of datasets required

    Raises:
        InvalidDataError: If a path does not exist or the list is too short
    """
    if isinstance(datasets, (str, Path)):
        raise InvalidDataError("Datasets must be given as a list, in temporal order")

    if len(datasets) < min_count:
        raise InvalidDataError(f"At least {min_count} dataset(s) required, got {len(datasets)}")

    for data in datasets:
        if isinstance(data, (str, Path)):
            file_path = Path(data)
            if not file_path.exists():
                raise InvalidDataError(f"File not found: {data}")

            if not file_path.is_file():
                raise InvalidDataError(f"Path is not a file: {data}")


def validate_n_jobs(n_jobs: int) -> int:
    """Validate and normalize n_jobs parameter.

    Args:
        n_jobs: Number of parallel jobs

    Returns:
        Normalized n_jobs value

    Raises:
        InvalidParameterError: If n_jobs is invalid
    """
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, int):
        raise InvalidParameterError(f"n_jobs must be an integer, got {type(n_jobs)}")

    if n_jobs == 0:
        raise InvalidParameterError("n_jobs cannot be 0")

    if n_jobs == -1:
        import multiprocessing
        return multiprocessing.cpu_count()

    if n_jobs < -1:
        raise InvalidParameterError(f"n_jobs must be -1 or positive, got {n_jobs}")

    return n_jobs
