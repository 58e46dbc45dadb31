"""Tests for false positive statistics and dataset sampling."""

import pytest

from grosso import ItemsetSequence, MiningResult, SequenceDataset, SequentialPattern
from grosso.evaluation import false_positive_stats, load_pattern_set
from grosso.exceptions import InvalidParameterError, PreconditionError
from grosso.utils.sampling import random_dataset

from conftest import write_lines, Q2_LINES


def result_of(*texts):
    patterns = []
    for text in texts:
        pattern = SequentialPattern(ItemsetSequence.from_string(text), n_datasets=2)
        pattern.set_frequency(1, 0.5)
        patterns.append(pattern)
    return MiningResult(patterns, 'EmergingPatterns', 0.1)


class TestFalsePositives:

    def test_files(self, tmp_path):
        truth = write_lines(tmp_path / 'gt.txt', [
            "1 -1 freq_1: 0.1 freq_2: 0.8",
            "2 -1 freq_1: 0.2 freq_2: 0.6",
        ])
        found = write_lines(tmp_path / 'found.txt', [
            "1 -1 freq_1: 0.12 freq_2: 0.79",
            "3 -1 freq_1: -1.0 freq_2: 0.4",
            "2 -1 freq_1: 0.2 freq_2: 0.6",
            "4 -1 freq_1: 0.0 freq_2: 0.3",
        ])
        fp_ratio, size_ratio = false_positive_stats(truth, found)
        assert fp_ratio == pytest.approx(0.5)
        assert size_ratio == pytest.approx(2.0)

    def test_results(self):
        fp_ratio, size_ratio = false_positive_stats(result_of("1 -1", "2 -1"), result_of("1 -1"))
        assert fp_ratio == 0.0
        assert size_ratio == pytest.approx(0.5)

    def test_nothing_found(self):
        assert false_positive_stats(result_of("1 -1"), result_of()) == (0.0, 0.0)

    def test_empty_ground_truth(self):
        with pytest.raises(PreconditionError):
            false_positive_stats(result_of(), result_of("1 -1"))

    def test_saved_result_matches_object(self, tmp_path):
        result = result_of("1 -1", "1 2 -1 3 -1")
        path = tmp_path / 'saved.txt'
        result.save_text(path)
        assert load_pattern_set(path) == load_pattern_set(result)


class TestRandomDataset:

    def test_sample(self, tmp_path):
        source = write_lines(tmp_path / 'q2.txt', Q2_LINES)
        output = random_dataset(source, tmp_path / 'sample.txt', size=25, seed=3)
        sample = SequenceDataset(output)
        assert sample.size == 25
        assert set(sample.lines) <= set(Q2_LINES)

    def test_same_seed_same_sample(self, tmp_path, q2_dataset):
        first = random_dataset(q2_dataset, tmp_path / 'a.txt', size=30, seed=7)
        second = random_dataset(q2_dataset, tmp_path / 'b.txt', size=30, seed=7)
        assert first.read_text() == second.read_text()

    def test_negative_size(self, tmp_path, q2_dataset):
        with pytest.raises(InvalidParameterError):
            random_dataset(q2_dataset, tmp_path / 'a.txt', size=-1)

    def test_empty_source(self, tmp_path):
        with pytest.raises(PreconditionError):
            random_dataset(SequenceDataset([]), tmp_path / 'a.txt', size=5)
