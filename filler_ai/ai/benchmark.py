"""
Timing helpers for comparing cached and uncached move selection.

Used by ``filler-ai --benchmark``; nothing here runs during a normal game.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import numpy as np

from ..models import TurnState
from ..placement import find_all_valid_placements
from .scoring import get_strategy
from .selector import StrategyLike, select_move


@dataclass
class PerformanceMetrics:
    """Accumulated operation durations, in seconds."""
    durations: list[float] = field(default_factory=list)

    def record(self, duration: float) -> None:
        self.durations.append(duration)

    @property
    def count(self) -> int:
        return len(self.durations)

    @property
    def total(self) -> float:
        return float(sum(self.durations))

    @property
    def average(self) -> float:
        return self.total / self.count if self.durations else 0.0

    @property
    def minimum(self) -> float:
        return min(self.durations) if self.durations else 0.0

    @property
    def maximum(self) -> float:
        return max(self.durations) if self.durations else 0.0

    @property
    def throughput(self) -> float:
        """Operations per second."""
        return self.count / self.total if self.total > 0 else 0.0

    def percentile(self, q: float) -> float:
        if not self.durations:
            return 0.0
        return float(np.percentile(np.asarray(self.durations), q))

    def summary(self) -> dict[str, float]:
        return {
            "count": float(self.count),
            "total": self.total,
            "avg": self.average,
            "min": self.minimum,
            "max": self.maximum,
            "p50": self.percentile(50),
            "p95": self.percentile(95),
            "throughput": self.throughput,
        }


class Timer:
    """Context manager recording elapsed wall time into ``metrics``."""

    def __init__(self, metrics: PerformanceMetrics | None = None):
        self.metrics = metrics
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> Timer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self._start
        if self.metrics is not None:
            self.metrics.record(self.elapsed)


@dataclass(frozen=True)
class BenchmarkResult:
    name: str
    baseline: dict[str, float]
    optimized: dict[str, float]

    @property
    def speedup(self) -> float:
        """Baseline average over optimized average (1.0 when unmeasurable)."""
        if self.optimized["avg"] <= 0:
            return 1.0
        return self.baseline["avg"] / self.optimized["avg"]

    @property
    def time_saved_per_op(self) -> float:
        return self.baseline["avg"] - self.optimized["avg"]

    @property
    def improvement_percent(self) -> float:
        if self.baseline["avg"] <= 0:
            return 0.0
        return self.time_saved_per_op / self.baseline["avg"] * 100.0

    def format(self) -> str:
        return (
            f"{self.name}: baseline {self.baseline['avg'] * 1000:.3f}ms, "
            f"cached {self.optimized['avg'] * 1000:.3f}ms, "
            f"speedup {self.speedup:.2f}x ({self.improvement_percent:.1f}%)"
        )


def benchmark_selection(
    turn: TurnState,
    strategy: StrategyLike,
    iterations: int = 100,
) -> BenchmarkResult:
    """Time move selection on ``turn`` with and without the batch caches.

    Raises:
        ValueError: If ``iterations`` is not positive.
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")

    placements = find_all_valid_placements(turn.board, turn.piece)
    baseline = PerformanceMetrics()
    optimized = PerformanceMetrics()

    for _ in range(iterations):
        with Timer(baseline):
            select_move(placements, turn.board, strategy, use_cache=False)
        with Timer(optimized):
            select_move(placements, turn.board, strategy, use_cache=True)

    return BenchmarkResult(
        name=get_strategy(strategy).name,
        baseline=baseline.summary(),
        optimized=optimized.summary(),
    )
