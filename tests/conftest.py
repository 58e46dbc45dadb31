"""Pytest fixtures for grosso tests."""

from pathlib import Path

import numpy as np
import pytest

from grosso import ItemsetSequence, SequenceDataset
from grosso.utils.embedding import SubsequenceMatcher


# Quarter 1: item 1 is rare, item 2 common.
Q1_LINES = ["1 -1 -2"] + ["2 -1 -2"] * 5 + ["3 -1 -2"] * 4

# Quarter 2: item 1 took off, often followed by item 2.
Q2_LINES = ["1 -1 -2"] * 5 + ["1 -1 2 -1 -2"] * 3 + ["2 -1 -2"] * 2

# Quarter 3: item 2 unchanged from quarter 1, item 3 faded.
Q3_LINES = ["2 -1 -2"] * 5 + ["3 -1 -2"] + ["1 -1 -2"] * 4

CANDIDATES = ["1 -1", "2 -1", "3 -1", "1 -1 2 -1"]


def write_lines(path: Path, lines) -> Path:
    with open(path, 'w') as f:
        for line in lines:
            f.write(line + '\n')
    return path


def random_sequence(rng: np.random.Generator, max_itemsets: int = 4, max_items: int = 3, n_items: int = 6):
    """Random sequence over items 1..n_items, so that itemsets overlap often."""
    n_itemsets = int(rng.integers(1, max_itemsets + 1))
    itemsets = []
    for _ in range(n_itemsets):
        size = int(rng.integers(1, max_items + 1))
        itemsets.append((rng.choice(n_items, size=size, replace=False) + 1).tolist())
    return ItemsetSequence(itemsets)


def candidate_miner(candidates=CANDIDATES):
    """Miner stub reporting the given candidates that reach the minimum frequency."""
    patterns = [ItemsetSequence.from_string(c) for c in candidates]

    def mine(input_file, min_frequency, output_file):
        dataset = SequenceDataset(input_file)
        output = Path(output_file)
        with open(output, 'w') as f:
            for pattern in patterns:
                support = SubsequenceMatcher.support(pattern, dataset.transactions)
                if support / dataset.size >= min_frequency - 1e-12:
                    f.write(f"{pattern.to_string(terminate=False)} #SUP: {support}\n")
        return output

    return mine


def failing_miner(input_file, min_frequency):
    raise AssertionError("the miner must not run")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240611)


@pytest.fixture
def quarter_files(tmp_path):
    """Three time-ordered dataset files."""
    return [
        write_lines(tmp_path / 'q1.txt', Q1_LINES),
        write_lines(tmp_path / 'q2.txt', Q2_LINES),
        write_lines(tmp_path / 'q3.txt', Q3_LINES),
    ]


@pytest.fixture
def q1_dataset() -> SequenceDataset:
    return SequenceDataset(Q1_LINES, name='q1')


@pytest.fixture
def q2_dataset() -> SequenceDataset:
    return SequenceDataset(Q2_LINES, name='q2')
