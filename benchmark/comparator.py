"""
Purpose: Comparative timing of the sort strategies (single entry point for benchmarks).
What it does:

- takes a snapshot/list of customers

- runs each requested strategy on its own copy, timed with perf_counter_ns

- verifies every output is in canonical order (O(n) scan)

- picks the fastest (ties -> declaration order: quick, merge, heap)

- returns a BenchmarkReport with per-strategy results and a recommendation text

Rule: Benchmarks never mutate the caller's list and never raise on a wrong ordering;
a bad result shows up as correct=False in the report.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from customers.models import Customer
from sorting import get_strategy, is_canonically_ordered, resolve_names
from sorting.base import SortStrategy

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data to compare."


@dataclass(frozen=True)
class StrategyResult:
    """
    Timing + correctness of one strategy (averaged when several runs were made).
    """
    name: str
    label: str
    elapsed_ns: int
    correct: bool
    time_complexity: str
    space_complexity: str

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000.0


@dataclass(frozen=True)
class BenchmarkReport:
    """
    Output of a comparison. Derived data only, nothing here is persisted.
    """
    element_count: int
    results: Dict[str, StrategyResult] = field(default_factory=dict)
    fastest: Optional[str] = None
    recommendation: str = NO_DATA_MESSAGE
    runs: int = 1

    @property
    def has_data(self) -> bool:
        return self.element_count > 0 and bool(self.results)

    @property
    def all_correct(self) -> bool:
        return all(result.correct for result in self.results.values())

    @property
    def fastest_label(self) -> str:
        if self.fastest is None:
            return "N/A"
        return self.results[self.fastest].label

    def to_frame(self) -> pd.DataFrame:
        """
        One row per strategy, in the order the strategies were evaluated.
        """
        rows = [
            {
                "strategy": result.name,
                "label": result.label,
                "elapsed_ns": result.elapsed_ns,
                "elapsed_ms": result.elapsed_ms,
                "correct": result.correct,
                "time_complexity": result.time_complexity,
                "space_complexity": result.space_complexity,
                "fastest": result.name == self.fastest,
                "elements": self.element_count,
                "runs": self.runs,
            }
            for result in self.results.values()
        ]
        return pd.DataFrame(
            rows,
            columns=[
                "strategy", "label", "elapsed_ns", "elapsed_ms", "correct",
                "time_complexity", "space_complexity", "fastest", "elements", "runs",
            ],
        )


class AlgorithmComparator:
    """
    Runs the registered sort strategies side by side over the same input.
    """

    def __init__(self, timer: Callable[[], int] = time.perf_counter_ns):
        self.timer = timer

    def compare(
        self,
        customers: Sequence[Customer],
        names: Optional[Sequence[str]] = None,
    ) -> BenchmarkReport:
        """
        Time each requested strategy once.

        Parameters
        ----------
        customers:
            Population to sort. Each strategy gets its own copy.
        names:
            Strategy names to run (default: all three). Unknown names fall back to quicksort;
            duplicates run once.

        Returns
        -------
        BenchmarkReport:
            results keyed by strategy name; an empty input gives a no-data report.
        """
        if not customers:
            logger.warning("Empty input for comparison")
            return _empty_report()

        snapshot = list(customers)
        logger.info("Comparing sort strategies with %d elements", len(snapshot))

        results: Dict[str, StrategyResult] = {}
        for name in resolve_names(names):
            results[name] = self._run_strategy(get_strategy(name), snapshot)

        fastest = _find_fastest(results)
        return BenchmarkReport(
            element_count=len(snapshot),
            results=results,
            fastest=fastest,
            recommendation=build_recommendation(len(snapshot), fastest, results),
            runs=1,
        )

    def compare_repeated(
        self,
        customers: Sequence[Customer],
        runs: int,
        names: Optional[Sequence[str]] = None,
    ) -> BenchmarkReport:
        """
        Run `compare` `runs` times (at least once) and report the mean elapsed time per strategy.
        A strategy is marked correct only if every run produced canonical order.
        """
        if runs <= 0:
            runs = 1

        if not customers:
            logger.warning("Empty input for comparison")
            return _empty_report(runs=runs)

        logger.info("Running %d comparison rounds", runs)

        timings: Dict[str, List[int]] = {}
        correctness: Dict[str, bool] = {}
        last: Optional[BenchmarkReport] = None
        for _ in range(runs):
            last = self.compare(customers, names)
            for name, result in last.results.items():
                timings.setdefault(name, []).append(result.elapsed_ns)
                correctness[name] = correctness.get(name, True) and result.correct

        averaged: Dict[str, StrategyResult] = {}
        for name, samples in timings.items():
            strategy = get_strategy(name)
            averaged[name] = StrategyResult(
                name=name,
                label=strategy.label,
                elapsed_ns=int(round(sum(samples) / len(samples))),
                correct=correctness[name],
                time_complexity=strategy.time_complexity,
                space_complexity=strategy.space_complexity,
            )

        fastest = _find_fastest(averaged)
        return BenchmarkReport(
            element_count=last.element_count,
            results=averaged,
            fastest=fastest,
            recommendation=build_recommendation(last.element_count, fastest, averaged, runs=runs),
            runs=runs,
        )

    def _run_strategy(self, strategy: SortStrategy, customers: List[Customer]) -> StrategyResult:
        working_copy = list(customers)

        started = self.timer()
        ordered = strategy.sort(working_copy)
        elapsed_ns = self.timer() - started

        correct = len(ordered) == len(customers) and is_canonically_ordered(ordered)
        if not correct:
            logger.error("%s produced an out-of-order result", strategy.label)

        logger.debug("%s: %d ns - correct: %s", strategy.label, elapsed_ns, correct)
        return StrategyResult(
            name=strategy.name,
            label=strategy.label,
            elapsed_ns=elapsed_ns,
            correct=correct,
            time_complexity=strategy.time_complexity,
            space_complexity=strategy.space_complexity,
        )


def _find_fastest(results: Dict[str, StrategyResult]) -> Optional[str]:
    # results are in declaration order, so strict < keeps the earliest on ties
    fastest: Optional[str] = None
    for name, result in results.items():
        if fastest is None or result.elapsed_ns < results[fastest].elapsed_ns:
            fastest = name
    return fastest


def _empty_report(runs: int = 1) -> BenchmarkReport:
    return BenchmarkReport(element_count=0, results={}, fastest=None, recommendation=NO_DATA_MESSAGE, runs=runs)


def build_recommendation(
    size: int,
    fastest: Optional[str],
    results: Dict[str, StrategyResult],
    runs: int = 1,
) -> str:
    """
    Human readable performance summary with size-banded advice.
    """
    if size == 0 or fastest is None:
        return NO_DATA_MESSAGE

    lines = [
        "========== PERFORMANCE ANALYSIS ==========",
        "",
        f"Elements: {size}",
        f"Fastest strategy: {fastest.upper()}",
        "",
        "--- Elapsed time ---",
    ]
    for result in results.values():
        flag = "" if result.correct else " (WRONG ORDER)"
        lines.append(f"- {result.label}: {result.elapsed_ms:.3f} ms{flag}")

    lines += ["", "--- Complexity ---"]
    for result in results.values():
        lines.append(f"- {result.label}:")
        lines.append(f"  time: {result.time_complexity}")
        lines.append(f"  space: {result.space_complexity}")

    lines += ["", "--- Recommendation ---"]
    if size < 50:
        lines.append("- Small input: any strategy is efficient")
        lines.append("- Quicksort is usually fastest on small data")
    elif size < 1000:
        lines.append("- Medium input: quicksort or mergesort")
        lines.append("- Quicksort: fastest on average")
        lines.append("- Mergesort: stable and predictable")
    else:
        lines.append("- Large input: mergesort or heapsort")
        lines.append("- Mergesort: O(n log n) guaranteed, uses more memory")
        lines.append("- Heapsort: O(n log n) guaranteed, uses less memory")
        lines.append("- Quicksort: may degrade to O(n²)")

    lines += [
        "",
        "--- When to use each ---",
        "- Quicksort: random data, average speed matters",
        "- Mergesort: stability needed, partially sorted data",
        "- Heapsort: tight memory, O(n log n) guarantee",
        "",
        "==========================================",
    ]
    if runs > 1:
        lines.append(f"(average of {runs} runs)")

    return "\n".join(lines)
