"""
Purpose: One FIFO waiting line for a single customer tier.
What it does:
- Owns the waiting deque and an append-only served history
- enqueue / dequeue / peek in O(1)
- replace_all after a bulk sort, drain_to_list snapshots, targeted remove for cancellations

Rule: No fairness logic here. The QueueManager decides which tier is served next.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

from customers.models import Customer, Tier

logger = logging.getLogger(__name__)


class TierMismatchError(Exception):
    """Raised when a customer is offered to a queue of a different tier."""
    pass


class TierQueue:
    """
    FIFO of customers sharing one tier, plus the history of customers it handed out.
    """

    def __init__(self, tier: Tier):
        self.tier = tier
        self._waiting: Deque[Customer] = deque()
        self._served: List[Customer] = []

    def __len__(self) -> int:
        return len(self._waiting)

    def __repr__(self) -> str:
        return f"TierQueue({self.tier.name}, waiting={len(self._waiting)}, served={len(self._served)})"

    # --- Public API ---

    def enqueue(self, customer: Customer) -> None:
        if customer.tier is not self.tier:
            logger.error(
                "Rejected customer %s: tier %r offered to %s queue",
                customer.id, customer.tier, self.tier.name,
            )
            raise TierMismatchError(
                f"Customer {customer.id} has tier {customer.tier!r}, queue is {self.tier.name}"
            )
        self._waiting.append(customer)

    def dequeue(self) -> Optional[Customer]:
        """
        Pops the front customer and records it in the served history. None when empty.
        """
        if not self._waiting:
            return None
        customer = self._waiting.popleft()
        self._served.append(customer)
        return customer

    def peek(self) -> Optional[Customer]:
        return self._waiting[0] if self._waiting else None

    def size(self) -> int:
        return len(self._waiting)

    def is_empty(self) -> bool:
        return not self._waiting

    def drain_to_list(self) -> List[Customer]:
        """
        O(n) snapshot of the waiting customers in FIFO order. Does not empty the queue.
        """
        return list(self._waiting)

    def replace_all(self, customers: Iterable[Customer]) -> None:
        """
        Swap the waiting content for `customers` (kept in the given order).
        Tiers are checked first so a mismatch leaves the queue untouched.
        """
        replacement = list(customers)
        for customer in replacement:
            if customer.tier is not self.tier:
                logger.error(
                    "replace_all aborted: customer %s (%s) does not belong to %s queue",
                    customer.id, customer.tier.name, self.tier.name,
                )
                raise TierMismatchError(
                    f"Customer {customer.id} has tier {customer.tier.name}, queue is {self.tier.name}"
                )
        self._waiting = deque(replacement)

    def remove(self, customer_id: int) -> Optional[Customer]:
        for customer in self._waiting:
            if customer.id == customer_id:
                self._waiting.remove(customer)
                return customer
        return None

    def clear(self) -> None:
        self._waiting.clear()

    # --- Served history ---

    def served_history(self) -> List[Customer]:
        return list(self._served)

    def clear_history(self) -> None:
        self._served.clear()
