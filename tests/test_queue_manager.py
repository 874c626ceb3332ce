import pytest
import random
import threading
from datetime import datetime, timedelta, timezone

from customers.models import Customer, Tier
from queues.manager import QueueManager, UnknownTierError
from queues.policy import FairnessPolicy

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def make_customer(customer_id: int, tier: Tier, minute: int = 0) -> Customer:
    return Customer(
        id=customer_id,
        name=f"customer_{customer_id}",
        tier=tier,
        estimated_minutes=5,
        arrival_at=BASE_TIME + timedelta(minutes=minute),
    )


def fill(manager: QueueManager, tier: Tier, count: int, start_id: int) -> None:
    for offset in range(count):
        manager.enqueue(make_customer(start_id + offset, tier, start_id + offset))


def drain(manager: QueueManager):
    served = []
    while True:
        customer = manager.next_customer()
        if customer is None:
            return served
        served.append(customer)


@pytest.fixture
def manager():
    return QueueManager()


def test_weighted_pattern_repeats(manager):
    """
    With every tier well stocked the dispatch order is Corporate, Preferential, Standard, Standard, repeating.
    """
    fill(manager, Tier.CORPORATE, 5, 100)
    fill(manager, Tier.PREFERENTIAL, 5, 200)
    fill(manager, Tier.STANDARD, 10, 300)

    tiers = [manager.next_customer().tier for _ in range(16)]

    expected_cycle = [Tier.CORPORATE, Tier.PREFERENTIAL, Tier.STANDARD, Tier.STANDARD]
    assert tiers == expected_cycle * 4
    # each completed cycle resets the counters together
    assert manager.counters() == (0, 0, 0)


def test_counters_track_partial_cycle(manager):
    fill(manager, Tier.CORPORATE, 2, 100)
    fill(manager, Tier.PREFERENTIAL, 2, 200)
    fill(manager, Tier.STANDARD, 2, 300)

    manager.next_customer()
    assert manager.counters() == (1, 0, 0)
    manager.next_customer()
    assert manager.counters() == (1, 1, 0)
    manager.next_customer()
    assert manager.counters() == (1, 1, 1)
    manager.next_customer()
    assert manager.counters() == (0, 0, 0)


def test_no_starvation_without_corporate(manager):
    """
    Corporate empty, others waiting: next_customer never reports an empty dispatcher.
    """
    fill(manager, Tier.PREFERENTIAL, 3, 200)
    fill(manager, Tier.STANDARD, 7, 300)

    served = drain(manager)
    assert len(served) == 10


def test_fallback_serves_corporate_when_only_corporate_waits(manager):
    fill(manager, Tier.CORPORATE, 3, 100)

    served = drain(manager)
    assert [c.id for c in served] == [100, 101, 102]
    # the fallback branch does not advance the cycle
    assert manager.counters() == (1, 0, 0)


def test_fallback_uses_priority_order(manager):
    """
    Once Corporate and Preferential used their slot and Standard is empty,
    the next pick is the highest-priority non-empty tier.
    """
    fill(manager, Tier.CORPORATE, 2, 100)
    fill(manager, Tier.PREFERENTIAL, 2, 200)

    served_tiers = [c.tier for c in drain(manager)]
    assert served_tiers == [Tier.CORPORATE, Tier.PREFERENTIAL, Tier.CORPORATE, Tier.PREFERENTIAL]


def test_empty_manager_returns_none(manager):
    assert manager.next_customer() is None
    assert manager.total_waiting() == 0
    assert not manager.has_customers()


def test_dispatch_returns_every_customer_once(manager):
    random.seed(7)
    ids = []
    for customer_id in range(1, 201):
        tier = random.choice(list(Tier))
        manager.enqueue(make_customer(customer_id, tier, customer_id))
        ids.append(customer_id)

    served_ids = [c.id for c in drain(manager)]
    assert sorted(served_ids) == ids
    assert len(set(served_ids)) == len(served_ids)
    assert len(manager.served_history()) == 200


def test_enqueue_unknown_tier_is_rejected(manager):
    broken = make_customer(1, Tier.STANDARD)
    broken.tier = "VIP"

    with pytest.raises(UnknownTierError):
        manager.enqueue(broken)
    assert manager.total_waiting() == 0


def test_sizes_and_snapshot_order(manager):
    manager.enqueue(make_customer(1, Tier.STANDARD, 1))
    manager.enqueue(make_customer(2, Tier.CORPORATE, 2))
    manager.enqueue(make_customer(3, Tier.PREFERENTIAL, 3))
    manager.enqueue(make_customer(4, Tier.STANDARD, 4))

    sizes = manager.sizes()
    assert sizes.as_dict() == {"corporate": 1, "preferential": 1, "standard": 2, "total": 4}
    assert [c.id for c in manager.all_waiting_snapshot()] == [2, 3, 1, 4]


def test_bulk_replace_partitions_by_tier(manager):
    a = make_customer(1, Tier.STANDARD, 1)
    b = make_customer(2, Tier.STANDARD, 2)
    c = make_customer(3, Tier.CORPORATE, 3)
    for customer in (a, b, c):
        manager.enqueue(customer)

    manager.bulk_replace([c, b, a])

    assert [x.id for x in manager.queue(Tier.STANDARD).drain_to_list()] == [2, 1]
    assert [x.id for x in manager.queue(Tier.CORPORATE).drain_to_list()] == [3]


def test_bulk_replace_skips_served_and_keeps_late_arrivals(manager):
    """
    A snapshot sorted outside the lock must not resurrect customers served meanwhile
    nor drop customers who arrived after the snapshot.
    """
    fill(manager, Tier.STANDARD, 3, 1)
    snapshot = manager.all_waiting_snapshot()

    served = manager.next_customer()
    manager.enqueue(make_customer(99, Tier.STANDARD, 99))

    manager.bulk_replace(list(reversed(snapshot)))

    remaining = [c.id for c in manager.queue(Tier.STANDARD).drain_to_list()]
    assert served.id not in remaining
    assert remaining == [3, 2, 99]


def test_reset_all_clears_queues_history_and_counters(manager):
    fill(manager, Tier.CORPORATE, 2, 100)
    manager.next_customer()

    manager.reset_all()

    assert manager.total_waiting() == 0
    assert manager.served_history() == []
    assert manager.counters() == (0, 0, 0)


def test_custom_policy_changes_the_pattern():
    manager = QueueManager(FairnessPolicy(corporate_slots=2, preferential_slots=1, standard_slots=1))
    fill(manager, Tier.CORPORATE, 4, 100)
    fill(manager, Tier.PREFERENTIAL, 2, 200)
    fill(manager, Tier.STANDARD, 2, 300)

    tiers = [manager.next_customer().tier for _ in range(8)]
    cycle = [Tier.CORPORATE, Tier.CORPORATE, Tier.PREFERENTIAL, Tier.STANDARD]
    assert tiers == cycle * 2


def test_invalid_policy_is_rejected():
    with pytest.raises(ValueError):
        QueueManager(FairnessPolicy(standard_slots=0))


def test_concurrent_enqueue_and_dispatch_lose_nobody(manager):
    """
    Producers and consumers hammering one manager: every customer comes out exactly once.
    """
    served = []
    served_lock = threading.Lock()
    tiers = list(Tier)

    def producer(start: int):
        for offset in range(250):
            customer_id = start + offset
            manager.enqueue(make_customer(customer_id, tiers[customer_id % 3], customer_id))

    def consumer():
        for _ in range(400):
            customer = manager.next_customer()
            if customer is not None:
                with served_lock:
                    served.append(customer.id)

    threads = [threading.Thread(target=producer, args=(i * 1000,)) for i in range(4)]
    threads += [threading.Thread(target=consumer) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    served.extend(c.id for c in drain(manager))
    assert len(served) == 1000
    assert len(set(served)) == 1000
