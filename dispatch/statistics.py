"""
Purpose: Aggregate service metrics over the customers served so far.
What it does:
- mean / max / min / p90 wait, mean service and total time (minutes)
- per-tier served counts and mean wait
- occupancy (% of registered customers already served) and throughput (served per minute)
- the complexity labels of the queue operations, for reporting

Rule: Pure computation over the lists it is given. It does not read the queues itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import numpy as np

from customers.models import Customer, Tier
from queues.manager import QueueSizes

INSERTION_COMPLEXITY = "O(1) - append to the back of the tier queue"
REMOVAL_COMPLEXITY = "O(1) - pop from the front of the tier queue"
SORTING_COMPLEXITY = "O(n log n) - quicksort / mergesort / heapsort"


@dataclass(frozen=True)
class ServiceStatistics:
    total_registered: int
    total_served: int
    total_waiting: int
    total_cancelled: int

    mean_wait_minutes: float = 0.0
    mean_service_minutes: float = 0.0
    mean_total_minutes: float = 0.0
    max_wait_minutes: float = 0.0
    min_wait_minutes: float = 0.0
    p90_wait_minutes: float = 0.0

    # first arrival -> last service end among served customers
    span_minutes: float = 0.0

    served_by_tier: Dict[str, int] = field(default_factory=dict)
    mean_wait_by_tier: Dict[str, float] = field(default_factory=dict)
    queue_sizes: Optional[QueueSizes] = None

    insertion_complexity: str = INSERTION_COMPLEXITY
    removal_complexity: str = REMOVAL_COMPLEXITY
    sorting_complexity: str = SORTING_COMPLEXITY

    @property
    def occupancy_rate(self) -> float:
        if self.total_registered == 0:
            return 0.0
        return self.total_served / self.total_registered * 100

    @property
    def throughput(self) -> float:
        if self.span_minutes == 0:
            return 0.0
        return self.total_served / self.span_minutes


def compute_statistics(
    served: Sequence[Customer],
    *,
    total_registered: int,
    total_cancelled: int = 0,
    sizes: Optional[QueueSizes] = None,
) -> ServiceStatistics:
    waiting = sizes.total if sizes is not None else 0
    empty_tiers = {tier.name: 0 for tier in Tier}

    if not served:
        return ServiceStatistics(
            total_registered=total_registered,
            total_served=0,
            total_waiting=waiting,
            total_cancelled=total_cancelled,
            served_by_tier=dict(empty_tiers),
            mean_wait_by_tier={name: 0.0 for name in empty_tiers},
            queue_sizes=sizes,
        )

    waits = np.array([c.wait_minutes() for c in served], dtype=float)
    service_times = np.array([c.service_minutes for c in served], dtype=float)
    totals = np.array([c.total_minutes() for c in served], dtype=float)

    first_arrival = min(c.arrival_at for c in served)
    last_end = max(c.service_ended_at or c.arrival_at for c in served)
    span_minutes = (last_end - first_arrival).total_seconds() / 60.0

    served_by_tier: Dict[str, int] = {}
    mean_wait_by_tier: Dict[str, float] = {}
    tiers = np.array([c.tier.name for c in served])
    for tier in Tier:
        mask = tiers == tier.name
        served_by_tier[tier.name] = int(mask.sum())
        mean_wait_by_tier[tier.name] = float(waits[mask].mean()) if mask.any() else 0.0

    return ServiceStatistics(
        total_registered=total_registered,
        total_served=len(served),
        total_waiting=waiting,
        total_cancelled=total_cancelled,
        mean_wait_minutes=float(waits.mean()),
        mean_service_minutes=float(service_times.mean()),
        mean_total_minutes=float(totals.mean()),
        max_wait_minutes=float(waits.max()),
        min_wait_minutes=float(waits.min()),
        p90_wait_minutes=float(np.percentile(waits, 90)),
        span_minutes=span_minutes,
        served_by_tier=served_by_tier,
        mean_wait_by_tier=mean_wait_by_tier,
        queue_sizes=sizes,
    )
