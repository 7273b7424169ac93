"""Tests for filler_ai/ai/batch_cache.py - per-batch memoisation."""

import unittest
from unittest.mock import patch

import pytest

from conftest import make_placement
from filler_ai.ai.batch_cache import (
    BatchCache,
    BatchScorer,
    ScoringCaches,
    has_single_shape,
    uses_batch_cache,
)
from filler_ai.ai.scoring import EvaluationContext, get_strategy
from filler_ai.errors import BatchShapeMismatchError
from filler_ai.models import AIStrategy, Position, Shape
from filler_ai.placement import find_all_valid_placements


class TestBatchCache(unittest.TestCase):
    def setUp(self):
        self.cache = BatchCache("test")
        self.calls = 0

    def _factory(self) -> int:
        self.calls += 1
        return 42

    def test_factory_called_once_per_key(self):
        key = Position(x=1, y=1)
        self.assertEqual(self.cache.get_or_compute(key, self._factory), 42)
        self.assertEqual(self.cache.get_or_compute(key, self._factory), 42)
        self.assertEqual(self.calls, 1)
        self.assertEqual(self.cache.hits, 1)
        self.assertEqual(self.cache.misses, 1)

    def test_distinct_keys_computed_separately(self):
        self.cache.get_or_compute(Position(x=0, y=0), self._factory)
        self.cache.get_or_compute(Position(x=0, y=1), self._factory)
        self.assertEqual(self.calls, 2)
        self.assertEqual(len(self.cache), 2)

    def test_reset_forces_recompute(self):
        key = Position(x=2, y=2)
        self.cache.get_or_compute(key, self._factory)
        self.cache.reset()
        self.assertEqual(len(self.cache), 0)
        self.assertNotIn(key, self.cache)
        self.cache.get_or_compute(key, self._factory)
        self.assertEqual(self.calls, 2)

    def test_stats(self):
        key = Position(x=0, y=0)
        self.cache.get_or_compute(key, self._factory)
        self.cache.get_or_compute(key, self._factory)
        self.cache.get_or_compute(key, self._factory)
        stats = self.cache.stats()
        self.assertEqual(stats.entries, 1)
        self.assertEqual(stats.hits, 2)
        self.assertEqual(stats.misses, 1)
        self.assertAlmostEqual(stats.hit_rate, 2 / 3)

    def test_hit_rate_without_lookups(self):
        self.assertEqual(self.cache.stats().hit_rate, 0.0)


class TestScoringCaches:
    def test_reset_clears_both(self):
        caches = ScoringCaches()
        caches.flood_fill.get_or_compute("a", lambda: 1)
        caches.density.get_or_compute("a", lambda: 2)
        caches.reset()
        assert len(caches.flood_fill) == 0
        assert len(caches.density) == 0
        assert set(caches.stats()) == {"flood_fill", "density"}


class TestBatchScorer:
    def test_cached_scores_match_uncached(self, sample_board, domino):
        placements = find_all_valid_placements(sample_board, domino)
        strategy = get_strategy(AIStrategy.ADVANCED_BALANCED)
        cached = BatchScorer().score_all(placements, sample_board, strategy)
        ctx = EvaluationContext(sample_board)
        uncached = [strategy.score(p, ctx) for p in placements]
        assert cached == pytest.approx(uncached)

    def test_flood_fill_computed_once_per_first_cell(self, sample_board, single_cell):
        # Two hand-built placements sharing an anchor share the cache entry.
        placements = [
            make_placement(1, 1, single_cell, cells_added=0),
            make_placement(1, 1, single_cell, cells_added=3),
        ]
        strategy = get_strategy(AIStrategy.AGGRESSIVE_EXPANSION)
        with patch(
            "filler_ai.ai.scoring.reachable_after_placement", return_value=4
        ) as reachable:
            scores = BatchScorer().score_all(placements, sample_board, strategy)
        assert reachable.call_count == 1
        assert scores == pytest.approx([2 * 4 * 2.5, 10 * 3 + 2 * 4 * 2.5])

    def test_caches_reset_between_batches(self, sample_board, single_cell):
        placements = [make_placement(1, 1, single_cell)]
        scorer = BatchScorer()
        strategy = get_strategy(AIStrategy.AGGRESSIVE_EXPANSION)
        with patch(
            "filler_ai.ai.scoring.reachable_after_placement", return_value=1
        ) as reachable:
            scorer.score_all(placements, sample_board, strategy)
            scorer.score_all(placements, sample_board, strategy)
        assert reachable.call_count == 2
        assert scorer.caches.flood_fill.stats().misses == 1

    def test_mixed_shapes_rejected(self, sample_board, single_cell, domino):
        placements = [make_placement(1, 1, single_cell), make_placement(2, 1, domino)]
        strategy = get_strategy(AIStrategy.GREEDY_EXPANSION)
        with pytest.raises(BatchShapeMismatchError) as exc_info:
            BatchScorer().score_all(placements, sample_board, strategy)
        assert exc_info.value.context["index"] == 1

    def test_equal_shapes_built_separately_are_accepted(self, sample_board):
        placements = [
            make_placement(0, 1, Shape.from_strings(["**"])),
            make_placement(2, 1, Shape.from_strings(["**"])),
        ]
        scores = BatchScorer().score_all(
            placements, sample_board, get_strategy(AIStrategy.GREEDY_EXPANSION)
        )
        assert scores == [0.0, 0.0]

    def test_empty_batch(self, sample_board):
        strategy = get_strategy(AIStrategy.ADVANCED_BALANCED)
        assert BatchScorer().score_all([], sample_board, strategy) == []


class TestCacheEligibility:
    def test_has_single_shape(self, single_cell, domino):
        assert has_single_shape([])
        assert has_single_shape([make_placement(0, 0, domino), make_placement(1, 2, domino)])
        assert not has_single_shape([make_placement(0, 0, domino), make_placement(1, 2, single_cell)])

    @pytest.mark.parametrize(
        "strategy, expected",
        [
            (AIStrategy.GREEDY_EXPANSION, False),
            (AIStrategy.BALANCED, False),
            (AIStrategy.CONSERVATIVE, False),
            (AIStrategy.EVALUATOR, False),
            (AIStrategy.AGGRESSIVE_EXPANSION, True),
            (AIStrategy.ADVANCED_BALANCED, True),
        ],
    )
    def test_uses_batch_cache(self, strategy, expected):
        assert uses_batch_cache(get_strategy(strategy)) is expected
