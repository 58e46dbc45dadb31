"""Tests for the deviation bound estimator."""

import math

import pytest

from grosso import SequenceDataset
from grosso.bounds.shatter import ShatterBoundEstimator, deviation_bound, estimate_bounds
from grosso.exceptions import InvalidParameterError, PreconditionError
from grosso.utils.embedding import is_subsequence

from conftest import random_sequence, Q1_LINES, Q2_LINES


class TestDeviationBound:

    def test_formula(self):
        assert deviation_bound(2, 0.1, 3) == pytest.approx(math.sqrt((2 + math.log(10)) / 6))

    def test_non_increasing_in_size(self):
        values = [deviation_bound(5, 0.1, size) for size in (10, 100, 1000, 10000)]
        assert values == sorted(values, reverse=True)

    def test_non_decreasing_in_s_index(self):
        values = [deviation_bound(s, 0.1, 100) for s in range(10)]
        assert values == sorted(values)

    def test_non_decreasing_in_confidence(self):
        values = [deviation_bound(5, delta, 100) for delta in (0.5, 0.1, 0.01, 0.001)]
        assert values == sorted(values)

    def test_empty_dataset(self):
        with pytest.raises(PreconditionError):
            deviation_bound(1, 0.1, 0)

    @pytest.mark.parametrize("delta", [0, 1, -0.5, 1.5, float('nan')])
    def test_bad_delta(self, delta):
        with pytest.raises(InvalidParameterError):
            deviation_bound(1, delta, 10)


class TestShatterBoundEstimator:

    def test_dominated_transaction_is_not_kept(self):
        lines = [
            "1 2 3 -1 4 5 -1 -2",   # capacity 31
            "1 2 -1 4 -1 -2",       # embeds into the first one
            "7 8 9 -1 -2",          # capacity 7, independent
        ]
        bound = ShatterBoundEstimator(delta=0.1).estimate(SequenceDataset(lines))
        assert bound.s_index == 2
        assert [entry.line for entry in bound.antichain] == [lines[0], lines[2]]
        assert [entry.capacity for entry in bound.antichain] == [31, 7]
        assert bound.mu == pytest.approx(deviation_bound(2, 0.1, 3))

    def test_duplicates_count_once(self):
        bound = ShatterBoundEstimator(delta=0.1).estimate(SequenceDataset(["1 2 -1 -2"] * 5))
        assert bound.s_index == 1
        assert bound.size == 5

    def test_low_capacity_transactions_are_skipped(self, q1_dataset):
        # every transaction has capacity 1 = 2^1 - 1 once the first is kept
        bound = ShatterBoundEstimator(delta=0.1).estimate(q1_dataset)
        assert bound.s_index == 1

    def test_eviction(self, q2_dataset):
        bound = ShatterBoundEstimator(delta=0.1).estimate(q2_dataset)
        assert bound.s_index == 1
        assert [entry.line for entry in bound.antichain] == ["1 -1 2 -1 -2"]

    def test_member_embedding_into_newcomer_is_evicted(self):
        lines = ["7 8 -1 -2", "1 2 -1 -2", "1 2 3 -1 -2"]
        bound = ShatterBoundEstimator(delta=0.1).estimate(SequenceDataset(lines))
        assert [(entry.line, entry.capacity) for entry in bound.antichain] == [
            ("1 2 3 -1 -2", 7),
            ("7 8 -1 -2", 3),
        ]
        # the s-index never goes down
        assert bound.s_index == 2

    def test_antichain_invariants(self, rng):
        lines = [random_sequence(rng, max_itemsets=4, max_items=3, n_items=8).to_string() for _ in range(200)]
        bound = ShatterBoundEstimator(delta=0.05).estimate(SequenceDataset(lines))

        capacities = [entry.capacity for entry in bound.antichain]
        assert capacities == sorted(capacities, reverse=True)
        assert len(bound.antichain) <= bound.s_index
        assert all(cap > (1 << (bound.s_index - 1)) - 1 for cap in capacities)
        assert len({entry.line for entry in bound.antichain}) == len(bound.antichain)
        for i, a in enumerate(bound.antichain):
            for b in bound.antichain[i + 1:]:
                assert not is_subsequence(a.sequence, b.sequence)
                assert not is_subsequence(b.sequence, a.sequence)

    def test_empty_dataset(self):
        with pytest.raises(PreconditionError):
            ShatterBoundEstimator(delta=0.1).estimate(SequenceDataset([]))

    def test_bad_delta(self):
        with pytest.raises(InvalidParameterError):
            ShatterBoundEstimator(delta=1.0)


class TestEstimateBounds:

    def test_dataset_order(self, q1_dataset, q2_dataset):
        bounds = estimate_bounds([q1_dataset, q2_dataset], delta=0.05)
        assert [b.name for b in bounds] == ['q1', 'q2']
        assert [b.size for b in bounds] == [10, 10]

    def test_parallel_matches_sequential(self):
        datasets = [SequenceDataset(Q1_LINES, name='a'), SequenceDataset(Q2_LINES, name='b')]
        sequential = estimate_bounds(datasets, delta=0.05, n_jobs=1)
        parallel = estimate_bounds(datasets, delta=0.05, n_jobs=2)
        assert [b.mu for b in parallel] == pytest.approx([b.mu for b in sequential])
        assert [b.s_index for b in parallel] == [b.s_index for b in sequential]
