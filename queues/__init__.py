"""
Queues package: per-tier FIFOs and the weighted round-robin manager.

Public API:
- TierQueue, TierMismatchError
- QueueManager, QueueSizes, UnknownTierError
- FairnessPolicy, default_fairness_policy
"""

from .policy import FairnessPolicy, default_fairness_policy
from .tier_queue import TierMismatchError, TierQueue
from .manager import QueueManager, QueueSizes, UnknownTierError

__all__ = [
    "FairnessPolicy",
    "default_fairness_policy",
    "TierMismatchError",
    "TierQueue",
    "QueueManager",
    "QueueSizes",
    "UnknownTierError",
]
