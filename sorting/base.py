"""
Purpose: Shared contract for the interchangeable sort strategies.
What it does:
- canonical_key(): the total order every strategy must reproduce
  (tier priority ascending, then arrival time ascending)
- is_canonically_ordered(): O(n) verification scan used by the benchmark
- SortStrategy: abstract base with the complexity descriptors

Rule: Strategies are pure. They return a new list and never touch the input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from customers.models import Customer, SortKey


def canonical_key(customer: Customer) -> SortKey:
    return customer.sort_key


def is_canonically_ordered(customers: Sequence[Customer]) -> bool:
    """
    True when the sequence is non-decreasing under the canonical order.
    """
    for index in range(len(customers) - 1):
        if canonical_key(customers[index]) > canonical_key(customers[index + 1]):
            return False
    return True


class SortStrategy(ABC):
    """
    A comparison sort over customers. Subclasses fill in the descriptors and `_sort`.
    """

    name: str = ""
    label: str = ""
    time_complexity: str = ""
    space_complexity: str = ""
    stable: bool = False

    def sort(self, customers: Sequence[Customer]) -> List[Customer]:
        result = list(customers)
        if len(result) <= 1:
            return result
        return self._sort(result)

    @abstractmethod
    def _sort(self, items: List[Customer]) -> List[Customer]:
        """
        Sort `items`, a private copy the strategy may rearrange freely.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
