"""Prometheus metrics for the Filler move chooser.

Counters and histograms live here so that the AI player and the batch
scorer can record telemetry without managing their own metric instances.
Nothing is exported unless the CLI is started with ``--metrics-port``.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Histogram, start_http_server

MOVE_DECISIONS: Final[Counter] = Counter(
    "filler_ai_move_decisions_total",
    "Total move decisions, labeled by strategy and outcome (placed/fallback).",
    labelnames=("strategy", "outcome"),
)

MOVE_DECISION_LATENCY: Final[Histogram] = Histogram(
    "filler_ai_move_decision_latency_seconds",
    "Time spent choosing one move in seconds, labeled by strategy.",
    labelnames=("strategy",),
    # Boards are small; most decisions finish well under 100ms.
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

CANDIDATE_PLACEMENTS: Final[Histogram] = Histogram(
    "filler_ai_candidate_placements",
    "Number of legal placements considered per decision.",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000),
)

BATCH_CACHE_LOOKUPS: Final[Counter] = Counter(
    "filler_ai_batch_cache_lookups_total",
    "Batch cache lookups, labeled by cache name and outcome (hit/miss).",
    labelnames=("cache", "outcome"),
)

PROTOCOL_ERRORS: Final[Counter] = Counter(
    "filler_ai_protocol_errors_total",
    "Turns that could not be parsed from the game engine input.",
)


def record_decision(strategy: str, placed: bool, duration: float) -> None:
    """Record one completed move decision."""
    outcome = "placed" if placed else "fallback"
    MOVE_DECISIONS.labels(strategy, outcome).inc()
    MOVE_DECISION_LATENCY.labels(strategy).observe(duration)


def record_cache_lookups(cache: str, hits: int, misses: int) -> None:
    if hits:
        BATCH_CACHE_LOOKUPS.labels(cache, "hit").inc(hits)
    if misses:
        BATCH_CACHE_LOOKUPS.labels(cache, "miss").inc(misses)


def start_metrics_server(port: int) -> None:
    start_http_server(port)


__all__ = [
    "BATCH_CACHE_LOOKUPS",
    "CANDIDATE_PLACEMENTS",
    "MOVE_DECISIONS",
    "MOVE_DECISION_LATENCY",
    "PROTOCOL_ERRORS",
    "record_cache_lookups",
    "record_decision",
    "start_metrics_server",
]
