"""Result container for temporal sequential pattern mining."""
import json
import math
import pandas as pd
from typing import List, Dict, Any, Optional, Sequence
from datetime import datetime

from .data_structures import SequentialPattern


class MiningResult:
    """Container for the patterns that survived a run.

    Stores patterns and metadata from mining operations.

    Attributes:
        patterns: Surviving patterns, in seeding order
        algorithm: Name of algorithm used
        delta: Run-level confidence parameter
        mu: Deviation bound of each dataset
        dataset_names: Dataset labels, in run order
        dataset_sizes: Number of transactions of each dataset
        execution_time: Time taken to mine patterns (seconds)
        metadata: Additional algorithm-specific metadata

    Example:
        >>> result = MiningResult(patterns, 'stable', 0.1, mu=[0.02, 0.03])
        >>> print(result.to_json())
        >>> df = result.to_dataframe()
    """

    def __init__(
        self,
        patterns: List[SequentialPattern],
        algorithm: str,
        delta: float,
        mu: Optional[Sequence[float]] = None,
        dataset_names: Optional[Sequence[str]] = None,
        dataset_sizes: Optional[Sequence[int]] = None,
        execution_time: Optional[float] = None,
        **metadata
    ):
        """Initialize mining result.

        Args:
            patterns: List of surviving patterns
            algorithm: Algorithm name
            delta: Confidence parameter used
            mu: Per-dataset deviation bounds
            dataset_names: Per-dataset labels
            dataset_sizes: Per-dataset sizes
            execution_time: Execution time in seconds
            **metadata: Additional metadata (parameters, anchor, etc.)
        """
        self.patterns = patterns
        self.algorithm = algorithm
        self.delta = delta
        self.mu = [float(m) for m in mu] if mu is not None else []
        self.dataset_names = list(dataset_names) if dataset_names is not None else []
        self.dataset_sizes = list(dataset_sizes) if dataset_sizes is not None else []
        self.execution_time = execution_time
        self.metadata = metadata
        self.timestamp = datetime.now()

    @property
    def n_datasets(self) -> int:
        if self.patterns:
            return len(self.patterns[0].frequencies)
        return len(self.mu) or len(self.dataset_names)

    def __len__(self) -> int:
        """Return number of patterns."""
        return len(self.patterns)

    def __iter__(self):
        """Iterate over patterns."""
        return iter(self.patterns)

    def __getitem__(self, index: int) -> SequentialPattern:
        """Get pattern by index."""
        return self.patterns[index]

    def _copy_with(self, patterns: List[SequentialPattern]) -> 'MiningResult':
        return MiningResult(
            patterns=patterns,
            algorithm=self.algorithm,
            delta=self.delta,
            mu=self.mu,
            dataset_names=self.dataset_names,
            dataset_sizes=self.dataset_sizes,
            execution_time=self.execution_time,
            **self.metadata
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary.

        Returns:
            Dictionary with all result information
        """
        return {
            'algorithm': self.algorithm,
            'delta': self.delta,
            'num_patterns': len(self.patterns),
            'execution_time': self.execution_time,
            'timestamp': self.timestamp.isoformat(),
            'datasets': [
                {'name': name, 'size': size, 'mu': mu}
                for name, size, mu in zip(self.dataset_names, self.dataset_sizes, self.mu)
            ],
            'patterns': [p.to_dict() for p in self.patterns],
            'metadata': self.metadata
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert result to JSON string.

        Args:
            indent: JSON indentation level

        Returns:
            JSON string representation
        """
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save_json(self, filepath: str):
        """Save result to JSON file.

        Args:
            filepath: Path to output file
        """
        with open(filepath, 'w') as f:
            f.write(self.to_json())

    def to_dataframe(self) -> pd.DataFrame:
        """Convert result to pandas DataFrame.

        Returns:
            DataFrame with pattern, length and one freq_<j> column per dataset
            (NaN where the pattern was not evaluated)
        """
        columns = ['pattern', 'length'] + [f"freq_{j}" for j in range(1, self.n_datasets + 1)]
        data = []
        for pattern in self.patterns:
            row = {
                'pattern': pattern.to_string(),
                'length': len(pattern)
            }
            for j, freq in enumerate(pattern.frequencies, 1):
                row[f"freq_{j}"] = float(freq)
            data.append(row)

        return pd.DataFrame(data, columns=columns)

    def save_csv(self, filepath: str):
        """Save result to CSV file.

        Args:
            filepath: Path to output file
        """
        df = self.to_dataframe()
        df.to_csv(filepath, index=False)

    def to_lines(self) -> List[str]:
        """Format each pattern as one line of the result file."""
        return [p.to_line() for p in self.patterns]

    def save_text(self, filepath: str):
        """Write the result file, one pattern per line."""
        with open(filepath, 'w') as f:
            for line in self.to_lines():
                f.write(line + '\n')

    def filter_by_length(self, min_length: Optional[int] = None, max_length: Optional[int] = None) -> 'MiningResult':
        """Filter patterns by number of itemsets.

        Args:
            min_length: Minimum pattern length
            max_length: Maximum pattern length

        Returns:
            New MiningResult with filtered patterns
        """
        filtered = self.patterns
        if min_length is not None:
            filtered = [p for p in filtered if len(p) >= min_length]
        if max_length is not None:
            filtered = [p for p in filtered if len(p) <= max_length]

        return self._copy_with(filtered)

    def sort_by_frequency(self, dataset: int = 0, reverse: bool = True) -> 'MiningResult':
        """Sort patterns by their frequency in one dataset.

        Patterns not evaluated in that dataset go last.

        Args:
            dataset: Dataset index
            reverse: Sort in descending order (default True)

        Returns:
            New MiningResult with sorted patterns
        """
        evaluated = [p for p in self.patterns if p.is_evaluated(dataset)]
        missing = [p for p in self.patterns if not p.is_evaluated(dataset)]
        evaluated.sort(key=lambda p: p.frequency(dataset), reverse=reverse)
        return self._copy_with(evaluated + missing)

    def summary(self) -> str:
        """Get a summary of the mining results.

        Returns:
            Summary string
        """
        lines = [
            f"Algorithm: {self.algorithm}",
            f"Delta: {self.delta}",
            f"Datasets: {len(self.dataset_names)}",
            f"Patterns Found: {len(self.patterns)}",
        ]

        if self.mu:
            lines.append("Deviation Bounds: " + ', '.join(f"{m:.4f}" for m in self.mu))

        if self.execution_time is not None:
            lines.append(f"Execution Time: {self.execution_time:.3f}s")

        if self.patterns:
            lengths = [len(p) for p in self.patterns]
            lines.append(f"Pattern Length Range: [{min(lengths)}, {max(lengths)}]")

            known = [f for p in self.patterns for f in p.frequencies if not math.isnan(f)]
            if known:
                lines.append(f"Frequency Range: [{min(known):.3f}, {max(known):.3f}]")

        return "\n".join(lines)

    def __str__(self) -> str:
        """String representation of result."""
        return self.summary()

    def __repr__(self) -> str:
        """Detailed representation of result."""
        return f"MiningResult(algorithm='{self.algorithm}', patterns={len(self.patterns)}, delta={self.delta})"
