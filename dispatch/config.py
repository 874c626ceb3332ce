"""
Purpose: Runtime settings for the dispatch service.
What it does:
Reads tunables from the environment (a local .env file is honoured):

DISPATCH_DEFAULT_STRATEGY = quicksort   # strategy used by reorder() when none is given
DISPATCH_BENCHMARK_RUNS = 1             # rounds used by compare() when none is given
DISPATCH_SERVICE_TIME_SCALE = 0         # seconds slept per estimated minute of service
DISPATCH_LOG_LEVEL = INFO

Rule: No dispatch logic here, just parameters.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from sorting import DEFAULT_STRATEGY, STRATEGY_NAMES

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class DispatcherSettings:
    default_strategy: str = DEFAULT_STRATEGY
    benchmark_runs: int = 1

    # 0 disables the simulated service delay
    service_time_scale: float = 0.0

    log_level: str = "INFO"

    def validate(self) -> None:
        if self.default_strategy not in STRATEGY_NAMES:
            raise ValueError(f"default_strategy must be one of {STRATEGY_NAMES}")

        if self.benchmark_runs < 1:
            raise ValueError("benchmark_runs must be >= 1")

        if self.service_time_scale < 0:
            raise ValueError("service_time_scale must be >= 0")

        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            raise ValueError(f"unknown log level {self.log_level!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def load_settings(dotenv_path: str | None = None) -> DispatcherSettings:
    """
    Build settings from the environment. Values already in os.environ win over the .env file.
    """
    load_dotenv(dotenv_path)

    settings = DispatcherSettings(
        default_strategy=os.getenv("DISPATCH_DEFAULT_STRATEGY", DEFAULT_STRATEGY).strip().lower(),
        benchmark_runs=_int_env("DISPATCH_BENCHMARK_RUNS", 1),
        service_time_scale=_float_env("DISPATCH_SERVICE_TIME_SCALE", 0.0),
        log_level=os.getenv("DISPATCH_LOG_LEVEL", "INFO").strip().upper(),
    )
    settings.validate()
    return settings


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
