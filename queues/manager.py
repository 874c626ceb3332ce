"""
Purpose: Owns the three tier queues and decides who is served next.
What it does:
- Routes new customers to the queue of their tier
- Weighted round-robin selection: 1 Corporate -> 1 Preferential -> up to 2 Standard, repeating
- Falls back to strict priority order when the tier whose turn it is has nobody waiting
- Snapshot / bulk replace of the combined waiting population (used after a sort)

Every public method runs inside one lock, so a manager instance can be shared by worker threads.
Sorting never happens here; callers sort a snapshot outside the lock and hand it back.

Rule: Manager owns queue state + fairness counters. Sorting and timing live elsewhere.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from customers.models import Customer, ServiceStatus, Tier
from .policy import FairnessPolicy, default_fairness_policy
from .tier_queue import TierQueue

logger = logging.getLogger(__name__)


class UnknownTierError(Exception):
    """Raised when a customer carries a tier the manager has no queue for."""
    pass


@dataclass(frozen=True)
class QueueSizes:
    corporate: int
    preferential: int
    standard: int
    total: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "corporate": self.corporate,
            "preferential": self.preferential,
            "standard": self.standard,
            "total": self.total,
        }


class QueueManager:
    """
    Three tier queues plus the plain integer counters of the fairness state machine.
    """

    def __init__(self, policy: Optional[FairnessPolicy] = None):
        self.policy = policy or default_fairness_policy()
        self.policy.validate()

        self._lock = threading.Lock()
        self._queues: Dict[Tier, TierQueue] = {tier: TierQueue(tier) for tier in Tier}

        # fairness cycle counters, reset together
        self._corporate_count = 0
        self._preferential_count = 0
        self._standard_count = 0

    def queue(self, tier: Tier) -> TierQueue:
        return self._queues[tier]

    # --- Public API ---

    def enqueue(self, customer: Customer) -> None:
        with self._lock:
            target = self._queues.get(customer.tier) if isinstance(customer.tier, Tier) else None
            if target is None:
                logger.error("Rejected customer %s: unknown tier %r", customer.id, customer.tier)
                raise UnknownTierError(f"Unknown tier {customer.tier!r} for customer {customer.id}")
            target.enqueue(customer)

    def next_customer(self) -> Optional[Customer]:
        """
        Pops the next customer under the weighted round-robin rule, or None if all queues are empty.
        """
        with self._lock:
            corporate = self._queues[Tier.CORPORATE]
            preferential = self._queues[Tier.PREFERENTIAL]
            standard = self._queues[Tier.STANDARD]

            customer: Optional[Customer] = None
            if not corporate.is_empty() and self._corporate_count < self.policy.corporate_slots:
                self._corporate_count += 1
                customer = corporate.dequeue()
            elif not preferential.is_empty() and self._preferential_count < self.policy.preferential_slots:
                self._preferential_count += 1
                customer = preferential.dequeue()
            elif not standard.is_empty() and self._standard_count < self.policy.standard_slots:
                self._standard_count += 1
                customer = standard.dequeue()
            else:
                # the tier whose turn it is has nobody waiting: strict priority order
                for tier in Tier:
                    if not self._queues[tier].is_empty():
                        customer = self._queues[tier].dequeue()
                        break

            if customer is not None:
                self._close_cycle_if_complete()
            return customer

    def total_waiting(self) -> int:
        with self._lock:
            return self._total_waiting()

    def has_customers(self) -> bool:
        with self._lock:
            return self._total_waiting() > 0

    def sizes(self) -> QueueSizes:
        with self._lock:
            return QueueSizes(
                corporate=self._queues[Tier.CORPORATE].size(),
                preferential=self._queues[Tier.PREFERENTIAL].size(),
                standard=self._queues[Tier.STANDARD].size(),
                total=self._total_waiting(),
            )

    def all_waiting_snapshot(self) -> List[Customer]:
        """
        Every waiting customer: Corporate queue, then Preferential, then Standard, each in FIFO order.
        """
        with self._lock:
            return self._snapshot()

    def bulk_replace(self, sorted_customers: Sequence[Customer]) -> None:
        """
        Clear the three queues and refill them from `sorted_customers`, partitioned by tier
        with relative order preserved.

        The sequence usually comes from a snapshot taken earlier and sorted outside the lock.
        Only customers still waiting right now are put back, and anyone who arrived after the
        snapshot keeps their place at the back, so nothing is lost or served twice.
        """
        with self._lock:
            live = {customer.id: customer for customer in self._snapshot()}

            partitions: Dict[Tier, List[Customer]] = {tier: [] for tier in Tier}
            placed = set()
            for customer in sorted_customers:
                if customer.id not in live or customer.id in placed:
                    continue
                if customer.status is not ServiceStatus.WAITING:
                    continue
                partitions[customer.tier].append(customer)
                placed.add(customer.id)

            # late arrivals keep their existing FIFO order
            for tier in Tier:
                for customer in self._queues[tier].drain_to_list():
                    if customer.id not in placed:
                        partitions[tier].append(customer)

            for tier in Tier:
                self._queues[tier].replace_all(partitions[tier])

            logger.debug("Bulk replace restored %d customers", sum(len(p) for p in partitions.values()))

    def remove(self, customer_id: int) -> Optional[Customer]:
        """
        Takes a waiting customer out of whichever queue holds it (cancellations). O(n).
        """
        with self._lock:
            for tier in Tier:
                customer = self._queues[tier].remove(customer_id)
                if customer is not None:
                    return customer
            return None

    def served_history(self) -> List[Customer]:
        with self._lock:
            history: List[Customer] = []
            for tier in Tier:
                history.extend(self._queues[tier].served_history())
            return history

    def counters(self) -> Tuple[int, int, int]:
        with self._lock:
            return (self._corporate_count, self._preferential_count, self._standard_count)

    def reset_all(self) -> None:
        with self._lock:
            for tier_queue in self._queues.values():
                tier_queue.clear()
                tier_queue.clear_history()
            self._reset_counters()

    # --- Internal helpers (caller holds the lock) ---

    def _total_waiting(self) -> int:
        return sum(tier_queue.size() for tier_queue in self._queues.values())

    def _snapshot(self) -> List[Customer]:
        combined: List[Customer] = []
        for tier in Tier:
            combined.extend(self._queues[tier].drain_to_list())
        return combined

    def _close_cycle_if_complete(self) -> None:
        if (
            self._corporate_count >= self.policy.corporate_slots
            and self._preferential_count >= self.policy.preferential_slots
            and self._standard_count >= self.policy.standard_slots
        ):
            self._reset_counters()

    def _reset_counters(self) -> None:
        self._corporate_count = 0
        self._preferential_count = 0
        self._standard_count = 0
