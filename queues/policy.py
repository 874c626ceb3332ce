"""
Purpose: Central configuration for the weighted round-robin dispatcher (single source of truth).
What it does:

Stores the slot counts of one fairness cycle:

CORPORATE_SLOTS = 1

PREFERENTIAL_SLOTS = 1

STANDARD_SLOTS = 2

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FairnessPolicy:
    """
    How many customers of each tier are served per fairness cycle.

    Notes:
    - the default 1:1:2 pattern serves Corporate, Preferential, Standard, Standard
    - when a tier has no customers its slot is skipped, never waited on
    """

    corporate_slots: int = 1
    preferential_slots: int = 1
    standard_slots: int = 2

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.corporate_slots < 1:
            raise ValueError("corporate_slots must be >= 1")

        if self.preferential_slots < 1:
            raise ValueError("preferential_slots must be >= 1")

        if self.standard_slots < 1:
            raise ValueError("standard_slots must be >= 1")

    @property
    def cycle_length(self) -> int:
        return self.corporate_slots + self.preferential_slots + self.standard_slots


def default_fairness_policy() -> FairnessPolicy:
    """
    Convenience factory for the default 1:1:2 policy.
    """
    p = FairnessPolicy()
    p.validate()
    return p
