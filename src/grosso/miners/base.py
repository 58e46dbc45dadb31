"""Adapters around external frequent sequential pattern miners.

A miner reads a dataset in the SPMF sequence format and writes one line per
frequent pattern::

    <pattern> #SUP: <support count>

The run only relies on that output file, so any program producing it can seed
the candidates.
"""
import inspect
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..core.data_structures import ItemsetSequence
from ..exceptions import InvalidDataError, MalformedTransactionError, MiningError

logger = logging.getLogger(__name__)

SUPPORT_MARKER = '#SUP:'


class BaseSequenceMiner(ABC):
    """Abstract base class for frequent sequential pattern miners."""

    @abstractmethod
    def mine(
        self,
        input_file: Union[str, Path],
        min_frequency: float,
        output_file: Optional[Union[str, Path]] = None
    ) -> Path:
        """Mine the patterns of ``input_file`` with frequency >= min_frequency.

        Args:
            input_file: Dataset in the SPMF sequence format
            min_frequency: Relative minimum frequency in (0, 1]
            output_file: Where to write the patterns

        Returns:
            Path of the written output file

        Raises:
            MiningError: If the miner fails
        """
        raise NotImplementedError("Subclass must implement mine() method")

    @staticmethod
    def _default_output(input_file: Union[str, Path]) -> Path:
        path = Path(input_file)
        return path.with_name(f"{path.stem}_mined.txt")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class FunctionMiner(BaseSequenceMiner):
    """Wrap a plain callable ``func(input_file, min_frequency[, output_file]) -> output_file``.

    A callable taking a third argument receives the path chosen by the run
    (inside its scratch directory). A two-argument callable picks its own
    output path and owns that file.

    Example:
        >>> def my_miner(input_file, min_frequency, output_file):
        ...     return write_patterns(input_file, min_frequency, output_file)
        >>> miner = FunctionMiner(my_miner)
    """

    def __init__(self, func: Callable[..., Union[str, Path]]):
        if not callable(func):
            raise MiningError(f"Miner must be callable, got {type(func)}")
        self.func = func
        self.accepts_output = self._accepts_output(func)

    @staticmethod
    def _accepts_output(func) -> bool:
        try:
            parameters = inspect.signature(func).parameters.values()
        except (TypeError, ValueError):
            return False
        positional = 0
        for parameter in parameters:
            if parameter.kind == parameter.VAR_POSITIONAL:
                return True
            if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
                positional += 1
        return positional >= 3

    def mine(self, input_file, min_frequency, output_file=None) -> Path:
        args = [str(input_file), min_frequency]
        if output_file is not None and self.accepts_output:
            args.append(str(output_file))
        try:
            result = self.func(*args)
        except MiningError:
            raise
        except Exception as e:
            raise MiningError(f"Miner {self.func!r} failed: {e}") from e

        if result is None:
            raise MiningError(f"Miner {self.func!r} returned no output file")
        return Path(result)

    def __repr__(self) -> str:
        name = getattr(self.func, '__name__', repr(self.func))
        return f"FunctionMiner({name})"


def parse_mined_line(line: str, line_number: Optional[int] = None):
    """Split one miner output line into its pattern and support count.

    Raises:
        MalformedTransactionError: If the line has no valid support marker
    """
    body, marker, support = line.partition(SUPPORT_MARKER)
    if not marker:
        raise MalformedTransactionError(
            f"Missing '{SUPPORT_MARKER}' marker", line=line, line_number=line_number
        )
    try:
        count = int(support.split()[0])
    except (IndexError, ValueError):
        raise MalformedTransactionError(
            f"Invalid support '{support.strip()}'", line=line, line_number=line_number
        )
    return ItemsetSequence.from_string(body, line_number=line_number), count


def parse_mined_patterns(file_path: Union[str, Path]) -> Dict[ItemsetSequence, int]:
    """Read a miner output file.

    Args:
        file_path: Output of a miner

    Returns:
        Dictionary pattern -> support count, in file order

    Raises:
        InvalidDataError: If the file does not exist
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise InvalidDataError(f"Mined pattern file not found: {file_path}")

    patterns: Dict[ItemsetSequence, int] = {}
    with open(file_path, 'r') as f:
        for line_number, raw in enumerate(f, 1):
            line = raw.strip()
            if not line:
                continue
            try:
                sequence, count = parse_mined_line(line, line_number)
            except MalformedTransactionError as error:
                logger.warning(f"{file_path.name}:{line_number}: skipping '{line}' ({error})")
                continue
            patterns[sequence] = count

    logger.debug(f"Parsed {len(patterns)} patterns from {file_path}")
    return patterns
