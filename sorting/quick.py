from __future__ import annotations

from typing import List

from customers.models import Customer
from .base import SortStrategy, canonical_key


class QuickSort(SortStrategy):
    """
    Quicksort with a Lomuto partition around the last element.

    Already-sorted input is the worst case for this pivot rule (O(n²) comparisons).
    The recursion always descends into the smaller partition and loops over the larger one,
    so the call stack stays O(log n) even then.
    """

    name = "quicksort"
    label = "Quick Sort"
    time_complexity = "O(n log n) average, O(n²) worst case"
    space_complexity = "O(log n)"

    def _sort(self, items: List[Customer]) -> List[Customer]:
        self._quicksort(items, 0, len(items) - 1)
        return items

    def _quicksort(self, items: List[Customer], low: int, high: int) -> None:
        while low < high:
            pivot_index = _partition(items, low, high)
            if pivot_index - low < high - pivot_index:
                self._quicksort(items, low, pivot_index - 1)
                low = pivot_index + 1
            else:
                self._quicksort(items, pivot_index + 1, high)
                high = pivot_index - 1


def _partition(items: List[Customer], low: int, high: int) -> int:
    pivot_key = canonical_key(items[high])
    boundary = low - 1

    for index in range(low, high):
        if canonical_key(items[index]) <= pivot_key:
            boundary += 1
            items[boundary], items[index] = items[index], items[boundary]

    items[boundary + 1], items[high] = items[high], items[boundary + 1]
    return boundary + 1
