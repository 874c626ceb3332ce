import pytest
from datetime import datetime, timedelta, timezone

from customers.models import Customer, Tier
from queues.tier_queue import TierMismatchError, TierQueue

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def make_customer(customer_id: int, tier: Tier, minute: int = 0) -> Customer:
    return Customer(
        id=customer_id,
        name=f"customer_{customer_id}",
        tier=tier,
        estimated_minutes=5,
        arrival_at=BASE_TIME + timedelta(minutes=minute),
    )


@pytest.fixture
def standard_queue():
    return TierQueue(Tier.STANDARD)


def test_fifo_order_and_served_history(standard_queue):
    """
    Customers leave in arrival order and every dequeued customer lands in the served history.
    """
    for i in range(1, 4):
        standard_queue.enqueue(make_customer(i, Tier.STANDARD, i))

    assert standard_queue.size() == 3
    assert standard_queue.peek().id == 1

    served_ids = [standard_queue.dequeue().id for _ in range(3)]
    assert served_ids == [1, 2, 3]
    assert [c.id for c in standard_queue.served_history()] == [1, 2, 3]
    assert standard_queue.is_empty()


def test_dequeue_and_peek_on_empty_queue(standard_queue):
    assert standard_queue.dequeue() is None
    assert standard_queue.peek() is None
    assert standard_queue.served_history() == []


def test_enqueue_rejects_other_tier(standard_queue):
    with pytest.raises(TierMismatchError):
        standard_queue.enqueue(make_customer(1, Tier.CORPORATE))
    assert standard_queue.is_empty()


def test_peek_does_not_mutate(standard_queue):
    standard_queue.enqueue(make_customer(1, Tier.STANDARD))
    standard_queue.peek()
    standard_queue.peek()
    assert len(standard_queue) == 1
    assert standard_queue.served_history() == []


def test_replace_all_swaps_content_in_given_order(standard_queue):
    for i in range(1, 4):
        standard_queue.enqueue(make_customer(i, Tier.STANDARD, i))

    replacement = [make_customer(9, Tier.STANDARD), make_customer(8, Tier.STANDARD)]
    standard_queue.replace_all(replacement)

    assert [c.id for c in standard_queue.drain_to_list()] == [9, 8]


def test_replace_all_with_wrong_tier_leaves_queue_untouched(standard_queue):
    standard_queue.enqueue(make_customer(1, Tier.STANDARD))

    with pytest.raises(TierMismatchError):
        standard_queue.replace_all([make_customer(2, Tier.STANDARD), make_customer(3, Tier.PREFERENTIAL)])

    assert [c.id for c in standard_queue.drain_to_list()] == [1]


def test_drain_to_list_is_a_snapshot(standard_queue):
    standard_queue.enqueue(make_customer(1, Tier.STANDARD))
    snapshot = standard_queue.drain_to_list()
    snapshot.clear()
    assert standard_queue.size() == 1


def test_remove_and_clear(standard_queue):
    for i in range(1, 4):
        standard_queue.enqueue(make_customer(i, Tier.STANDARD, i))

    removed = standard_queue.remove(2)
    assert removed.id == 2
    assert standard_queue.remove(42) is None
    assert [c.id for c in standard_queue.drain_to_list()] == [1, 3]

    standard_queue.clear()
    assert standard_queue.is_empty()


def test_enqueue_rejects_unparsed_tier(standard_queue):
    """
    A raw string where a Tier is expected is still reported as a mismatch.
    """
    with pytest.raises(TierMismatchError):
        standard_queue.enqueue(make_customer(1, "standard"))
    assert standard_queue.is_empty()
