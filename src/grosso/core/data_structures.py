"""Core data structures for temporal sequential pattern mining.

This module provides the two shapes every other component works with: the
itemset sequence (a transaction or the body of a pattern) and the sequential
pattern candidate that carries one observed frequency per dataset.
"""
import math
import numpy as np
from typing import Iterable, List, Optional, Tuple

from ..exceptions import MalformedTransactionError

ITEMSET_END = -1
SEQUENCE_END = -2

Itemset = Tuple[int, ...]


class ItemsetSequence:
    """An ordered sequence of itemsets.

    Each itemset is a tuple of positive item identifiers kept in
    non-decreasing order, which is what the two-pointer subset scan of the
    matcher relies on. Instances are immutable and hashable so they can key
    the candidate map.

    Example:
        >>> seq = ItemsetSequence.from_string('10 20 -1 30 -1 -2')
        >>> seq.itemsets
        ((10, 20), (30,))
        >>> seq.to_string()
        '10 20 -1 30 -1 -2'

    Attributes:
        itemsets: Tuple of sorted item tuples
    """

    __slots__ = ('_itemsets', '_hash')

    def __init__(self, itemsets: Iterable[Iterable[int]]):
        """Initialize a sequence.

        Args:
            itemsets: Iterable of itemsets, each an iterable of item ids

        Raises:
            MalformedTransactionError: If an itemset is empty or an item id is not positive
        """
        normalized = []
        for itemset in itemsets:
            items = tuple(sorted(int(item) for item in itemset))
            if not items:
                raise MalformedTransactionError("Itemsets must not be empty")
            if items[0] <= 0:
                raise MalformedTransactionError(f"Item ids must be positive, got itemset {items}")
            normalized.append(items)

        self._itemsets: Tuple[Itemset, ...] = tuple(normalized)
        self._hash = hash(self._itemsets)

    @classmethod
    def from_string(cls, line: str, line_number: Optional[int] = None) -> 'ItemsetSequence':
        """Parse the SPMF encoding of a sequence.

        Items of one itemset are followed by ``-1``; a transaction ends with
        ``-2``. The trailing ``-2`` is optional so that pattern bodies written
        by the miner parse with the same function.

        Args:
            line: Encoded sequence
            line_number: Line number reported in errors

        Returns:
            Parsed ItemsetSequence

        Raises:
            MalformedTransactionError: If a token is not an integer or the
                encoding is violated
        """
        itemsets: List[List[int]] = []
        current: List[int] = []
        tokens = line.split()
        for position, token in enumerate(tokens):
            try:
                value = int(token)
            except ValueError:
                raise MalformedTransactionError(
                    f"Invalid token '{token}'", line=line, line_number=line_number
                )

            if value == ITEMSET_END:
                if not current:
                    raise MalformedTransactionError(
                        "Empty itemset", line=line, line_number=line_number
                    )
                itemsets.append(current)
                current = []
            elif value == SEQUENCE_END:
                if position != len(tokens) - 1:
                    raise MalformedTransactionError(
                        "Tokens found after the end of sequence marker",
                        line=line, line_number=line_number
                    )
            elif value <= 0:
                raise MalformedTransactionError(
                    f"Invalid item id {value}", line=line, line_number=line_number
                )
            else:
                current.append(value)

        if current:
            itemsets.append(current)
        if not itemsets:
            raise MalformedTransactionError(
                "Sequence has no itemsets", line=line, line_number=line_number
            )

        return cls(itemsets)

    @property
    def itemsets(self) -> Tuple[Itemset, ...]:
        return self._itemsets

    @property
    def length(self) -> int:
        """Total number of items over all itemsets."""
        return sum(len(itemset) for itemset in self._itemsets)

    def items(self) -> set:
        """Return the set of distinct items of the sequence."""
        return {item for itemset in self._itemsets for item in itemset}

    def to_string(self, terminate: bool = True) -> str:
        """Encode the sequence in the SPMF format.

        Args:
            terminate: Append the ``-2`` end of sequence marker

        Returns:
            Encoded string
        """
        tokens = []
        for itemset in self._itemsets:
            tokens.extend(str(item) for item in itemset)
            tokens.append(str(ITEMSET_END))
        if terminate:
            tokens.append(str(SEQUENCE_END))
        return ' '.join(tokens)

    def __len__(self) -> int:
        return len(self._itemsets)

    def __iter__(self):
        return iter(self._itemsets)

    def __getitem__(self, index: int) -> Itemset:
        return self._itemsets[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ItemsetSequence):
            return False
        return self._itemsets == other._itemsets

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return self.to_string(terminate=False)

    def __repr__(self) -> str:
        return f"ItemsetSequence({[list(itemset) for itemset in self._itemsets]})"


class SequentialPattern:
    """A candidate sequential pattern and its observed frequencies.

    The frequency vector holds one slot per dataset of the run; ``NaN`` marks
    a dataset where the pattern has not been evaluated yet.

    Example:
        >>> sp = SequentialPattern(ItemsetSequence([[1], [2, 3]]), n_datasets=3)
        >>> sp.set_frequency(2, 0.4)
        >>> sp.is_evaluated(0)
        False
        >>> print(sp)
        1 -1 2 3 -1 freq_1: -1.0 freq_2: -1.0 freq_3: 0.4

    Attributes:
        sequence: The pattern body
        frequencies: Observed frequency per dataset (NaN when unknown)
    """

    UNKNOWN = float('nan')

    def __init__(self, sequence: ItemsetSequence, n_datasets: int):
        """Initialize a pattern with every slot unknown.

        Args:
            sequence: Pattern body
            n_datasets: Number of datasets in the run
        """
        self.sequence = sequence
        self.frequencies = np.full(n_datasets, np.nan, dtype=float)

    def set_frequency(self, index: int, frequency: float):
        """Record the observed frequency in dataset ``index``."""
        self.frequencies[index] = frequency

    def frequency(self, index: int) -> float:
        return float(self.frequencies[index])

    def is_evaluated(self, index: int) -> bool:
        return not math.isnan(self.frequencies[index])

    def evaluated_indices(self) -> List[int]:
        """Indices of the datasets where the pattern has a recorded frequency."""
        return [int(i) for i in np.flatnonzero(~np.isnan(self.frequencies))]

    def to_string(self) -> str:
        return self.sequence.to_string(terminate=False)

    def to_dict(self) -> dict:
        """Convert pattern to dictionary."""
        return {
            'pattern': self.to_string(),
            'frequencies': [None if math.isnan(f) else float(f) for f in self.frequencies],
        }

    def to_line(self) -> str:
        """Format the pattern as one line of the result file."""
        parts = [self.to_string()]
        for j, freq in enumerate(self.frequencies, 1):
            value = -1.0 if math.isnan(freq) else float(freq)
            parts.append(f"freq_{j}: {value}")
        return ' '.join(parts)

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return self.to_line()

    def __repr__(self) -> str:
        return f"SequentialPattern(pattern='{self.to_string()}', frequencies={self.frequencies.tolist()})"
