"""
Purpose: Mock customer data for benchmarks and simulations.
What it does:
- generate_customers(): builds a realistic population of customers spread across tiers,
  with strictly increasing arrival timestamps (no two customers share a sort key).
- customers_to_frame() / customers_from_frame(): convert to and from a pandas DataFrame.
- write_customers_csv() / load_customers_csv(): persist the population as CSV.

CSV columns: customer_id,name,tier,estimated_minutes,arrival_at (ISO-8601)

Rule: No queue or dispatch logic here.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .models import Customer, Tier

CSV_COLUMNS = ["customer_id", "name", "tier", "estimated_minutes", "arrival_at"]

FIRST_NAMES = [
    "Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Henrique",
    "Isabela", "Joao", "Karina", "Lucas", "Marina", "Nuno", "Olivia", "Paulo",
]
LAST_NAMES = [
    "Silva", "Santos", "Oliveira", "Souza", "Costa", "Pereira", "Almeida", "Ferreira",
]

# Corporate customers are the rarest, standard the most common
DEFAULT_TIER_WEIGHTS = (0.15, 0.25, 0.60)


def generate_customers(
    count: int = 1000,
    *,
    seed: Optional[int] = None,
    start: Optional[datetime] = None,
    tier_weights: Sequence[float] = DEFAULT_TIER_WEIGHTS,
    min_minutes: int = 5,
    max_minutes: int = 24,
    shuffle: bool = True,
) -> List[Customer]:
    """
    Generates `count` customers with random tiers and service durations.

    Arrivals are spaced by a random positive gap so every (tier, arrival) key is unique,
    which makes the output of every sort strategy comparable element by element.
    With shuffle=True the list comes back in random order instead of arrival order.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if min_minutes < 1 or max_minutes < min_minutes:
        raise ValueError("need 1 <= min_minutes <= max_minutes")

    rng = np.random.default_rng(seed)
    start = start or datetime.now(timezone.utc)
    tiers = list(Tier)

    tier_indexes = rng.choice(len(tiers), size=count, p=tier_weights)
    durations = rng.integers(min_minutes, max_minutes + 1, size=count)
    # at least one millisecond between consecutive arrivals
    gaps_ms = rng.integers(1, 60_000, size=count)
    offsets_ms = np.cumsum(gaps_ms)

    customers = []
    for index in range(count):
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        customers.append(
            Customer(
                id=index + 1,
                name=name,
                tier=tiers[int(tier_indexes[index])],
                estimated_minutes=int(durations[index]),
                arrival_at=start + timedelta(milliseconds=int(offsets_ms[index])),
            )
        )

    if shuffle:
        order = rng.permutation(count)
        customers = [customers[int(i)] for i in order]

    return customers


def customers_to_frame(customers: Sequence[Customer]) -> pd.DataFrame:
    rows = [
        {
            "customer_id": c.id,
            "name": c.name,
            "tier": c.tier.name,
            "estimated_minutes": c.estimated_minutes,
            "arrival_at": c.arrival_at.isoformat(),
        }
        for c in customers
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def customers_from_frame(df: pd.DataFrame) -> List[Customer]:
    missing = [column for column in CSV_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"customer data is missing columns: {missing}")

    customers = []
    for _, row in df.iterrows():
        customers.append(
            Customer.new(
                int(row["customer_id"]),
                str(row["name"]),
                str(row["tier"]),
                int(row["estimated_minutes"]),
                arrival_at=datetime.fromisoformat(str(row["arrival_at"])),
            )
        )
    return customers


def write_customers_csv(customers: Sequence[Customer], output_file: str) -> pd.DataFrame:
    df = customers_to_frame(customers)
    df.to_csv(output_file, index=False)
    return df


def load_customers_csv(filepath: str, limit: Optional[int] = None) -> List[Customer]:
    df = pd.read_csv(filepath)
    if limit is not None:
        df = df.head(limit)
    return customers_from_frame(df)
