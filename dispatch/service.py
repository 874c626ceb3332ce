"""
Purpose: Orchestrator / external interface of the dispatcher (the "glue").
What it does:
Accepts new customers, hands out the next one to serve through the QueueManager,
reorders the waiting population with a chosen sort strategy, and runs strategy benchmarks.

The service is an explicitly constructed object; whoever needs it gets the instance passed in.
Queue state is protected by the QueueManager's lock. Sorting and benchmarking work on a
private snapshot outside that lock and only the final swap goes back through it.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from benchmark.comparator import AlgorithmComparator, BenchmarkReport
from customers.models import Customer, Tier, utc_now
from queues.manager import QueueManager, QueueSizes
from sorting import get_strategy
from .config import DispatcherSettings
from .state_machines.customer_state import cancel_customer, complete_service, start_service
from .statistics import ServiceStatistics, compute_statistics

logger = logging.getLogger(__name__)


class CustomerNotFoundError(KeyError):
    """Raised when complete/cancel is asked for a customer id that is not where it should be."""
    pass


class DispatchService:
    """
    Single entry point for callers (REST layer, CLI, scripts).
    """

    def __init__(
        self,
        manager: Optional[QueueManager] = None,
        settings: Optional[DispatcherSettings] = None,
        comparator: Optional[AlgorithmComparator] = None,
        clock: Callable[[], datetime] = utc_now,
        sleeper: Callable[[float], None] = time.sleep,
    ):
        self.manager = manager or QueueManager()
        self.settings = settings or DispatcherSettings()
        self.settings.validate()
        self.comparator = comparator or AlgorithmComparator()
        self.clock = clock
        self.sleeper = sleeper

        # guards the registries below and is always taken before the manager lock
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._registered = 0
        self._in_service: Dict[int, Customer] = {}
        self._served: List[Customer] = []
        self._cancelled: List[Customer] = []

    # --- Arrivals ---

    def enqueue(self, name: Any, tier: Any, estimated_minutes: Any) -> Customer:
        """
        Validate and register a new customer at the back of its tier queue.
        Raises CustomerValidationError for a blank name, missing/unknown tier or a duration < 1.
        """
        with self._lock:
            # ids are only consumed by accepted customers, in queue order
            customer = Customer.new(0, name, tier, estimated_minutes, arrival_at=self.clock())
            customer.id = next(self._ids)
            self.manager.enqueue(customer)
            self._registered += 1

        logger.info("Customer registered: %s (#%d) - tier %s", customer.name, customer.id, customer.tier.label)
        return customer

    def simulate_arrivals(self, count: int, seed: Optional[int] = None) -> List[Customer]:
        """
        Enqueue `count` synthetic customers cycling through the tiers, 5-24 estimated minutes each.
        """
        logger.info("Simulating %d arrivals", count)
        rng = np.random.default_rng(seed)
        tiers = list(Tier)

        arrivals = []
        for index in range(1, count + 1):
            tier = tiers[index % len(tiers)]
            minutes = int(rng.integers(5, 25))
            arrivals.append(self.enqueue(f"Customer {index}", tier, minutes))
        return arrivals

    # --- Service ---

    def start_next(self) -> Optional[Customer]:
        """
        Pull the next customer under the fairness rule and mark them IN_SERVICE.
        None when nobody is waiting.
        """
        with self._lock:
            customer = self.manager.next_customer()
            if customer is None:
                logger.debug("No customer waiting")
                return None

            start_service(customer, self.clock())
            self._in_service[customer.id] = customer

        logger.info("Serving: %s (#%d) - waited %.1f min", customer.name, customer.id, customer.wait_minutes())
        return customer

    def complete(self, customer_id: int) -> Customer:
        with self._lock:
            customer = self._in_service.get(customer_id)
            if customer is None:
                raise CustomerNotFoundError(f"Customer {customer_id} is not in service")
            complete_service(customer, self.clock())
            del self._in_service[customer_id]
            self._served.append(customer)

        logger.info("Finished: %s (#%d) - total %.1f min", customer.name, customer.id, customer.total_minutes())
        return customer

    def dispatch_next(self) -> Optional[Customer]:
        """
        Serve the next customer start to finish. None is the normal "nobody waiting" outcome.
        """
        customer = self.start_next()
        if customer is None:
            return None

        if self.settings.service_time_scale > 0:
            self.sleeper(customer.estimated_minutes * self.settings.service_time_scale)

        return self.complete(customer.id)

    def dispatch_all(self) -> int:
        logger.info("Serving every waiting customer...")
        served = 0
        while self.dispatch_next() is not None:
            served += 1
        logger.info("Done: %d customers served", served)
        return served

    def cancel(self, customer_id: int) -> Customer:
        """
        Take a waiting customer out of line. Only WAITING customers can be cancelled.
        """
        with self._lock:
            customer = self.manager.remove(customer_id)
            if customer is None:
                raise CustomerNotFoundError(f"Customer {customer_id} is not waiting")

            cancel_customer(customer)
            self._cancelled.append(customer)

        logger.info("Cancelled: %s (#%d)", customer.name, customer.id)
        return customer

    # --- Sorting / benchmarking ---

    def reorder(self, strategy_name: Optional[str] = None) -> int:
        """
        Re-sort every waiting customer with the named strategy and put them back in their queues.
        Unknown names fall back to quicksort. Returns the sort time in whole milliseconds.
        """
        strategy = get_strategy(strategy_name or self.settings.default_strategy)
        logger.info("Reordering queues with %s", strategy.label)

        snapshot = self.manager.all_waiting_snapshot()
        if not snapshot:
            return 0

        started = time.perf_counter_ns()
        ordered = strategy.sort(snapshot)
        elapsed_ms = (time.perf_counter_ns() - started) // 1_000_000

        self.manager.bulk_replace(ordered)

        logger.info("Queues reordered: %s - %d ms", strategy.label, elapsed_ms)
        return int(elapsed_ms)

    def compare(self, strategy_names: Optional[Sequence[str]] = None, runs: Optional[int] = None) -> BenchmarkReport:
        """
        Benchmark the strategies over the current waiting population (a private copy).
        """
        runs = self.settings.benchmark_runs if runs is None else runs
        snapshot = self.manager.all_waiting_snapshot()

        if runs == 1:
            return self.comparator.compare(snapshot, strategy_names)
        return self.comparator.compare_repeated(snapshot, runs, strategy_names)

    # --- Read side ---

    def list_waiting(self) -> List[Customer]:
        return self.manager.all_waiting_snapshot()

    def list_served(self) -> List[Customer]:
        with self._lock:
            return list(self._served)

    def list_cancelled(self) -> List[Customer]:
        with self._lock:
            return list(self._cancelled)

    def queue_sizes(self) -> QueueSizes:
        return self.manager.sizes()

    @property
    def total_registered(self) -> int:
        with self._lock:
            return self._registered

    def statistics(self) -> ServiceStatistics:
        with self._lock:
            served = list(self._served)
            cancelled = len(self._cancelled)
            registered = self._registered

        return compute_statistics(
            served,
            total_registered=registered,
            total_cancelled=cancelled,
            sizes=self.manager.sizes(),
        )

    def reset(self) -> None:
        with self._lock:
            self.manager.reset_all()
            self._ids = itertools.count(1)
            self._registered = 0
            self._in_service.clear()
            self._served.clear()
            self._cancelled.clear()
        logger.info("Dispatcher reset")
