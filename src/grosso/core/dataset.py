"""Dataset handling for temporal sequential pattern mining."""
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from .data_structures import ItemsetSequence
from ..exceptions import InvalidDataError, MalformedTransactionError

logger = logging.getLogger(__name__)


class SequenceDataset:
    """One time slice of a sequence database in the SPMF line format.

    The dataset keeps the parsed transactions in file order together with
    their raw text (the shatter estimator deduplicates on the raw line).
    Lines that fail to parse are reported and skipped; blank lines are
    ignored.

    Attributes:
        name: Label of the dataset (file name by default)
        path: Source file, if any
        transactions: Parsed ItemsetSequence objects in file order
        lines: Raw text of each parsed transaction
        skipped: (line number, text) of every malformed line

    Example:
        >>> dataset = SequenceDataset('2005q1_SPMF.txt')
        >>> dataset.size
        2
        >>> index = dataset.item_index()
    """

    def __init__(self, data_source: Union[str, Path, Iterable[str]], name: Optional[str] = None):
        """Load a dataset.

        Args:
            data_source: Path to a SPMF sequence file or an iterable of lines
            name: Optional label (defaults to the file name)

        Raises:
            InvalidDataError: If the file does not exist or cannot be read
        """
        self.path: Optional[Path] = None
        self.transactions: List[ItemsetSequence] = []
        self.lines: List[str] = []
        self.skipped: List[Tuple[int, str]] = []

        if isinstance(data_source, (str, Path)):
            self.path = Path(data_source)
            self.name = name or self.path.name
            lines = self._read(self.path)
        else:
            self.name = name or 'memory'
            lines = list(data_source)

        self._parse(lines)

        logger.info(f"Loaded dataset {self.name}: {self.size} transactions")
        if self.skipped:
            logger.warning(f"Skipped {len(self.skipped)} malformed lines in {self.name}")

    @staticmethod
    def _read(file_path: Path) -> List[bytes]:
        if not file_path.exists():
            raise InvalidDataError(f"File not found: {file_path}")

        # decoded line by line so that one bad line is skipped, not the file
        try:
            with open(file_path, 'rb') as f:
                return f.read().splitlines()
        except OSError as error:
            raise InvalidDataError(f"Error reading {file_path}: {error}")

    def _skip(self, line_number: int, line: str, error: Exception):
        logger.warning(f"{self.name}:{line_number}: skipping malformed line '{line}' ({error})")
        self.skipped.append((line_number, line))

    def _parse(self, lines: Iterable[Union[str, bytes]]):
        for line_number, raw in enumerate(lines, 1):
            if isinstance(raw, bytes):
                try:
                    raw = raw.decode('utf-8')
                except UnicodeDecodeError as error:
                    self._skip(line_number, raw.decode('utf-8', errors='replace').strip(), error)
                    continue
            line = raw.strip()
            if not line:
                continue
            try:
                sequence = ItemsetSequence.from_string(line, line_number=line_number)
            except MalformedTransactionError as error:
                self._skip(line_number, line, error)
                continue
            self.transactions.append(sequence)
            self.lines.append(line)

    @property
    def size(self) -> int:
        """Number of valid transactions."""
        return len(self.transactions)

    def item_index(self) -> Dict[int, Set[int]]:
        """Build the item -> containing transaction indices map.

        The index is rebuilt on every call; callers keep it for the duration
        of one pass over the dataset.

        Returns:
            Dictionary mapping each item to the set of transaction indices
        """
        index: Dict[int, Set[int]] = defaultdict(set)
        for tid, transaction in enumerate(self.transactions):
            for itemset in transaction:
                for item in itemset:
                    index[item].add(tid)
        return dict(index)

    def describe(self) -> dict:
        """Compute descriptive statistics of the dataset.

        Returns:
            Dictionary with the number of distinct items and transactions,
            the average number of itemsets and items per transaction, and
            whether some item occurs twice inside one transaction
        """
        items = set()
        n_itemsets = 0
        n_items = 0
        repeated = False
        for transaction in self.transactions:
            n_itemsets += len(transaction)
            n_items += transaction.length
            seen = transaction.items()
            if not repeated and len(seen) < transaction.length:
                repeated = True
            items |= seen

        n = self.size
        return {
            'name': self.name,
            'num_items': len(items),
            'num_transactions': n,
            'avg_itemsets': n_itemsets / n if n else 0.0,
            'avg_items': n_items / n if n else 0.0,
            'repeated_items': repeated,
            'skipped_lines': len(self.skipped),
        }

    def __len__(self) -> int:
        return self.size

    def __iter__(self):
        return iter(self.transactions)

    def __repr__(self) -> str:
        return f"SequenceDataset(name='{self.name}', size={self.size})"
