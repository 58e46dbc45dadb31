"""Embedding tests between itemset sequences."""
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..core.data_structures import Itemset, ItemsetSequence


class SubsequenceMatcher:
    """Helper class for sequence embedding.

    A sequence ``a`` embeds into ``b`` when there is a strictly increasing
    mapping from the positions of ``a`` to positions of ``b`` such that every
    itemset of ``a`` is a subset of the itemset it is mapped to. The relation
    is a partial order (reflexive and transitive).
    """

    @staticmethod
    def is_subset(small: Itemset, large: Itemset) -> bool:
        """Check that every item of ``small`` is in ``large``.

        Both itemsets must be sorted in non-decreasing order.

        Args:
            small: Candidate subset
            large: Candidate superset

        Returns:
            True if small is a subset of large
        """
        if len(small) > len(large):
            return False

        k = 0
        for item in large:
            if k == len(small):
                break
            if item == small[k]:
                k += 1
            elif item > small[k]:
                return False
        return k == len(small)

    @staticmethod
    def is_subsequence(a: Sequence[Itemset], b: Sequence[Itemset]) -> bool:
        """Check whether sequence ``a`` embeds into sequence ``b``.

        Itemsets of ``a`` are matched greedily, left to right, against the
        first itemset of ``b`` that contains them.

        Args:
            a: Pattern (ItemsetSequence or sequence of sorted itemsets)
            b: Transaction

        Returns:
            True if a is a subsequence of b
        """
        if len(a) > len(b):
            return False

        i = 0
        for itemset in b:
            if i == len(a):
                break
            if SubsequenceMatcher.is_subset(a[i], itemset):
                i += 1
        return i == len(a)

    @staticmethod
    def candidate_transactions(sequence: ItemsetSequence, item_index: Dict[int, Set[int]]) -> Set[int]:
        """Intersect the transaction sets of every item of ``sequence``.

        Only the returned transactions can contain the sequence. Sets are
        intersected from the smallest to the largest.

        Args:
            sequence: Pattern
            item_index: Item -> transaction indices map of one dataset

        Returns:
            Set of transaction indices (empty if some item never occurs)
        """
        postings: List[Set[int]] = []
        for item in sequence.items():
            tids = item_index.get(item)
            if not tids:
                return set()
            postings.append(tids)

        if not postings:
            return set()

        postings.sort(key=len)
        result = set(postings[0])
        for tids in postings[1:]:
            result &= tids
            if not result:
                break
        return result

    @staticmethod
    def support(
        sequence: ItemsetSequence,
        transactions: Sequence[ItemsetSequence],
        candidates: Optional[Iterable[int]] = None
    ) -> int:
        """Count the transactions ``sequence`` embeds into.

        Args:
            sequence: Pattern
            transactions: Transactions of one dataset
            candidates: Indices to test (all transactions when None)

        Returns:
            Number of matching transactions
        """
        if candidates is None:
            candidates = range(len(transactions))
        return sum(
            1 for tid in candidates
            if SubsequenceMatcher.is_subsequence(sequence, transactions[tid])
        )


is_subset = SubsequenceMatcher.is_subset
is_subsequence = SubsequenceMatcher.is_subsequence
