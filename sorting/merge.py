from __future__ import annotations

from typing import List

from customers.models import Customer
from .base import SortStrategy, canonical_key


class MergeSort(SortStrategy):
    """
    Top-down merge sort. Stable and predictable, pays for it with O(n) extra memory.
    """

    name = "mergesort"
    label = "Merge Sort"
    time_complexity = "O(n log n) guaranteed"
    space_complexity = "O(n)"
    stable = True

    def _sort(self, items: List[Customer]) -> List[Customer]:
        if len(items) <= 1:
            return items

        middle = len(items) // 2
        left = self._sort(items[:middle])
        right = self._sort(items[middle:])
        return _merge(left, right)


def _merge(left: List[Customer], right: List[Customer]) -> List[Customer]:
    merged: List[Customer] = []
    i = j = 0

    while i < len(left) and j < len(right):
        # <= keeps equal keys in input order
        if canonical_key(left[i]) <= canonical_key(right[j]):
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1

    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged
