from __future__ import annotations

from typing import List

from customers.models import Customer
from .base import SortStrategy, canonical_key


class HeapSort(SortStrategy):
    """
    In-place heapsort over a max-heap keyed by the canonical order.
    Guaranteed O(n log n) with O(1) extra memory, but not stable.
    """

    name = "heapsort"
    label = "Heap Sort"
    time_complexity = "O(n log n) guaranteed"
    space_complexity = "O(1)"

    def _sort(self, items: List[Customer]) -> List[Customer]:
        size = len(items)

        # build the max-heap bottom up
        for root in range(size // 2 - 1, -1, -1):
            _sift_down(items, root, size)

        # move the current max behind the heap, shrink, repair
        for end in range(size - 1, 0, -1):
            items[0], items[end] = items[end], items[0]
            _sift_down(items, 0, end)

        return items


def _sift_down(items: List[Customer], root: int, size: int) -> None:
    while True:
        largest = root
        left = 2 * root + 1
        right = left + 1

        if left < size and canonical_key(items[left]) > canonical_key(items[largest]):
            largest = left
        if right < size and canonical_key(items[right]) > canonical_key(items[largest]):
            largest = right

        if largest == root:
            return

        items[root], items[largest] = items[largest], items[root]
        root = largest
