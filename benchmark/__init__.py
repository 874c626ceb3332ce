"""
Benchmark subpackage for comparing sort strategies.

Public API:
- AlgorithmComparator
- BenchmarkReport
- StrategyResult
"""

from .comparator import AlgorithmComparator, BenchmarkReport, StrategyResult, build_recommendation

__all__ = [
    "AlgorithmComparator",
    "BenchmarkReport",
    "StrategyResult",
    "build_recommendation",
]
