"""Placement scoring, strategy selection and the heuristic AI player."""

from .base import BaseAI
from .batch_cache import BatchCache, BatchScorer, CacheStats, ScoringCaches
from .heuristic_ai import HeuristicAI
from .scoring import (
    EvaluationContext,
    Strategy,
    get_strategy,
    list_strategies,
    register_strategy,
    unregister_strategy,
)
from .selector import rank_placements, select_best_placement, select_move

__all__ = [
    "BaseAI",
    "BatchCache",
    "BatchScorer",
    "CacheStats",
    "EvaluationContext",
    "HeuristicAI",
    "ScoringCaches",
    "Strategy",
    "get_strategy",
    "list_strategies",
    "rank_placements",
    "register_strategy",
    "select_best_placement",
    "select_move",
    "unregister_strategy",
]
