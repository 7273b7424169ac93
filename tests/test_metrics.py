"""Tests for filler_ai/metrics.py - Prometheus telemetry."""

from prometheus_client import REGISTRY

from filler_ai.ai.batch_cache import BatchScorer
from filler_ai.ai.scoring import get_strategy
from filler_ai.metrics import record_cache_lookups, record_decision
from filler_ai.models import AIStrategy
from filler_ai.placement import find_all_valid_placements


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_record_decision():
    labels = {"strategy": "metrics_test", "outcome": "fallback"}
    before = _sample("filler_ai_move_decisions_total", labels)
    latency_before = _sample(
        "filler_ai_move_decision_latency_seconds_count", {"strategy": "metrics_test"}
    )
    record_decision("metrics_test", placed=False, duration=0.002)
    assert _sample("filler_ai_move_decisions_total", labels) == before + 1
    assert (
        _sample("filler_ai_move_decision_latency_seconds_count", {"strategy": "metrics_test"})
        == latency_before + 1
    )


def test_record_cache_lookups():
    hits = {"cache": "metrics_test", "outcome": "hit"}
    misses = {"cache": "metrics_test", "outcome": "miss"}
    before_hits = _sample("filler_ai_batch_cache_lookups_total", hits)
    before_misses = _sample("filler_ai_batch_cache_lookups_total", misses)
    record_cache_lookups("metrics_test", hits=3, misses=0)
    assert _sample("filler_ai_batch_cache_lookups_total", hits) == before_hits + 3
    assert _sample("filler_ai_batch_cache_lookups_total", misses) == before_misses


def test_batch_scorer_reports_lookups(sample_board, domino):
    labels = {"cache": "flood_fill", "outcome": "miss"}
    before = _sample("filler_ai_batch_cache_lookups_total", labels)
    placements = find_all_valid_placements(sample_board, domino)
    BatchScorer().score_all(placements, sample_board, get_strategy(AIStrategy.ADVANCED_BALANCED))
    assert _sample("filler_ai_batch_cache_lookups_total", labels) == before + len(placements)
