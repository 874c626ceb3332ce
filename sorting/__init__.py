"""
Sorting subpackage: interchangeable comparison sorts over customers.

Public API:
- SortStrategy, canonical_key, is_canonically_ordered
- QuickSort, MergeSort, HeapSort
- get_strategy, available_strategies, resolve_names, STRATEGY_NAMES
"""

from .base import SortStrategy, canonical_key, is_canonically_ordered
from .heap import HeapSort
from .merge import MergeSort
from .quick import QuickSort
from .registry import (
    DEFAULT_STRATEGY,
    STRATEGY_NAMES,
    available_strategies,
    get_strategy,
    resolve_names,
)

__all__ = [
    "SortStrategy",
    "canonical_key",
    "is_canonically_ordered",
    "HeapSort",
    "MergeSort",
    "QuickSort",
    "DEFAULT_STRATEGY",
    "STRATEGY_NAMES",
    "available_strategies",
    "get_strategy",
    "resolve_names",
]
