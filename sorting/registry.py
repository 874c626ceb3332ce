"""
Purpose: Name -> strategy lookup.
What it does:
- Keeps the three strategies in declaration order (quick, merge, heap).
  That order also breaks timing ties in the benchmark.
- get_strategy() falls back to quicksort for unknown names.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .base import SortStrategy
from .heap import HeapSort
from .merge import MergeSort
from .quick import QuickSort

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "quicksort"

_STRATEGIES: Dict[str, SortStrategy] = {
    strategy.name: strategy for strategy in (QuickSort(), MergeSort(), HeapSort())
}

STRATEGY_NAMES = tuple(_STRATEGIES.keys())


def available_strategies() -> List[SortStrategy]:
    return list(_STRATEGIES.values())


def resolve_name(name: Optional[str]) -> str:
    key = (name or "").strip().lower()
    if key in _STRATEGIES:
        return key
    logger.warning("Unknown sort strategy %r, falling back to %s", name, DEFAULT_STRATEGY)
    return DEFAULT_STRATEGY


def get_strategy(name: Optional[str]) -> SortStrategy:
    return _STRATEGIES[resolve_name(name)]


def resolve_names(names: Optional[Sequence[str]] = None) -> List[str]:
    """
    Requested names resolved, de-duplicated and put back in declaration order.
    None or an empty selection means every strategy.
    """
    if not names:
        return list(STRATEGY_NAMES)
    wanted = {resolve_name(name) for name in names}
    return [name for name in STRATEGY_NAMES if name in wanted]
