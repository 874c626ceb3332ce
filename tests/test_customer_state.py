import pytest
from datetime import datetime, timedelta, timezone

from customers.models import Customer, ServiceStatus, Tier
from dispatch.state_machines.customer_state import (
    CustomerStateException,
    cancel_customer,
    complete_service,
    start_service,
)

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def waiting_customer():
    return Customer(id=1, name="Ana", tier=Tier.STANDARD, estimated_minutes=5, arrival_at=BASE_TIME)


def test_full_lifecycle(waiting_customer):
    start_service(waiting_customer, BASE_TIME + timedelta(minutes=3))
    assert waiting_customer.status is ServiceStatus.IN_SERVICE

    complete_service(waiting_customer, BASE_TIME + timedelta(minutes=8))
    assert waiting_customer.status is ServiceStatus.SERVED
    assert waiting_customer.arrival_at <= waiting_customer.service_started_at <= waiting_customer.service_ended_at


def test_timestamps_never_precede_previous_step(waiting_customer):
    """
    A clock reading earlier than arrival (or service start) is clamped to keep the timeline ordered.
    """
    start_service(waiting_customer, BASE_TIME - timedelta(minutes=5))
    assert waiting_customer.service_started_at == BASE_TIME

    complete_service(waiting_customer, BASE_TIME - timedelta(minutes=1))
    assert waiting_customer.service_ended_at == waiting_customer.service_started_at


def test_cannot_complete_a_waiting_customer(waiting_customer):
    with pytest.raises(CustomerStateException):
        complete_service(waiting_customer)


def test_cannot_start_twice(waiting_customer):
    start_service(waiting_customer)
    with pytest.raises(CustomerStateException):
        start_service(waiting_customer)


def test_cancel_only_from_waiting(waiting_customer):
    cancel_customer(waiting_customer)
    assert waiting_customer.status is ServiceStatus.CANCELLED

    with pytest.raises(CustomerStateException):
        cancel_customer(waiting_customer)
    with pytest.raises(CustomerStateException):
        start_service(waiting_customer)
