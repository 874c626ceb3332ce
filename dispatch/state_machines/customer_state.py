from datetime import datetime
from typing import Optional

from customers.models import Customer, ServiceStatus, utc_now


class CustomerStateException(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def start_service(customer: Customer, now: Optional[datetime] = None) -> Customer:
    """
    Called when the dispatcher pulls a customer off a tier queue.
    WAITING -> IN_SERVICE, stamping the service start (never before arrival).
    """
    if customer.status != ServiceStatus.WAITING:
        raise CustomerStateException(f"Cannot start service for customer {customer.id} from {customer.status}")

    now = now or utc_now()
    customer.service_started_at = max(now, customer.arrival_at)
    customer.status = ServiceStatus.IN_SERVICE
    return customer


def complete_service(customer: Customer, now: Optional[datetime] = None) -> Customer:
    """
    IN_SERVICE -> SERVED, stamping the service end (never before the start).
    """
    if customer.status != ServiceStatus.IN_SERVICE:
        raise CustomerStateException(f"Customer {customer.id} is not IN_SERVICE. Current: {customer.status}")

    now = now or utc_now()
    customer.service_ended_at = max(now, customer.service_started_at)
    customer.status = ServiceStatus.SERVED
    return customer


def cancel_customer(customer: Customer) -> Customer:
    """
    Only a customer still in line can give up. WAITING -> CANCELLED.
    """
    if customer.status != ServiceStatus.WAITING:
        raise CustomerStateException(f"Cannot cancel customer {customer.id} from {customer.status}")

    customer.status = ServiceStatus.CANCELLED
    return customer
