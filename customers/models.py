"""
Purpose: Domain models for the Customers capability.
What it does:
- Defines core data structures:
- Customer (id, name, tier, estimated service minutes, timestamps, status)

Defines enums/constants:
- Tier = CORPORATE | PREFERENTIAL | STANDARD (with priority weight + label)
- ServiceStatus = WAITING | IN_SERVICE | SERVED | CANCELLED

Defines the input validation rules for new customers.

Rule: No queue logic, no sorting logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Tuple


class CustomerValidationError(ValueError):
    """Raised when a new customer is rejected (blank name, missing tier, bad duration)."""
    pass


class Tier(Enum):
    """
    Customer priority class. Lower priority number = served first.
    """
    CORPORATE = (1, "Corporate")
    PREFERENTIAL = (2, "Preferential")
    STANDARD = (3, "Standard")

    def __init__(self, priority: int, label: str):
        self.priority = priority
        self.label = label

    @classmethod
    def parse(cls, value: Any) -> Tier:
        """
        Accepts a Tier, or a tier name/label string in any case ("corporate", "Standard").
        """
        if isinstance(value, cls):
            return value
        if value is None:
            raise CustomerValidationError("tier is required")
        if isinstance(value, str):
            key = value.strip().upper()
            for tier in cls:
                if key == tier.name or key == tier.label.upper():
                    return tier
        raise CustomerValidationError(f"unknown tier: {value!r}")


class ServiceStatus(Enum):
    WAITING = "WAITING"
    IN_SERVICE = "IN_SERVICE"
    SERVED = "SERVED"
    CANCELLED = "CANCELLED"


SortKey = Tuple[int, datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Customer:
    """
    A single customer waiting for (or done with) service.
    """

    id: int
    name: str
    tier: Tier
    estimated_minutes: int

    arrival_at: datetime = field(default_factory=utc_now)
    service_started_at: Optional[datetime] = None
    service_ended_at: Optional[datetime] = None

    status: ServiceStatus = ServiceStatus.WAITING

    @property
    def sort_key(self) -> SortKey:
        return (self.tier.priority, self.arrival_at)

    def wait_minutes(self, now: Optional[datetime] = None) -> float:
        """
        Minutes between arrival and service start (or `now` while still waiting).
        """
        end = self.service_started_at or now or utc_now()
        return (end - self.arrival_at).total_seconds() / 60.0

    def total_minutes(self, now: Optional[datetime] = None) -> float:
        if self.service_ended_at is None:
            return self.wait_minutes(now)
        return (self.service_ended_at - self.arrival_at).total_seconds() / 60.0

    @property
    def service_minutes(self) -> float:
        if self.service_started_at is None or self.service_ended_at is None:
            return 0.0
        return (self.service_ended_at - self.service_started_at).total_seconds() / 60.0

    @staticmethod  # Factory method that applies the enqueue validation rules
    def new(
        customer_id: int,
        name: Any,
        tier: Any,
        estimated_minutes: Any,
        arrival_at: Optional[datetime] = None,
    ) -> Customer:
        if not isinstance(name, str) or not name.strip():
            raise CustomerValidationError("name must be a non-blank string")

        parsed_tier = Tier.parse(tier)

        # bool is an int subclass; True is not a duration
        if isinstance(estimated_minutes, bool) or not isinstance(estimated_minutes, int):
            raise CustomerValidationError("estimated_minutes must be an integer")
        if estimated_minutes < 1:
            raise CustomerValidationError("estimated_minutes must be >= 1")

        return Customer(
            id=customer_id,
            name=name.strip(),
            tier=parsed_tier,
            estimated_minutes=estimated_minutes,
            arrival_at=arrival_at or utc_now(),
        )
