"""
Strategy selector: pick one placement out of the legal candidates.

Selection is a plain arg-max over strategy scores. Ties go to the candidate
that appears last in the input, and a NaN score compares equal to anything,
so a NaN candidate also wins ties from behind.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from ..models import AIStrategy, Board, Placement, Shape
from ..placement import find_all_valid_placements
from .batch_cache import BatchScorer, has_single_shape, uses_batch_cache
from .scoring import EvaluationContext, Strategy, get_strategy

logger = logging.getLogger(__name__)

StrategyLike = AIStrategy | Strategy | str


def score_placements(
    placements: list[Placement],
    board: Board,
    strategy: Strategy,
    *,
    use_cache: bool = True,
    max_iterations: int | None = None,
) -> list[float]:
    """Score ``placements`` in order, through the batch caches when enabled.

    The caches are only used when the strategy reads a cached feature and
    every placement shares one shape; otherwise scoring runs uncached, so
    mixed-shape candidate lists never fail.
    """
    if use_cache and uses_batch_cache(strategy):
        if has_single_shape(placements):
            return BatchScorer(max_iterations).score_all(placements, board, strategy)
        logger.debug(f"{strategy.name}: mixed piece shapes, scoring without batch cache")
    ctx = EvaluationContext(board, max_iterations=max_iterations)
    return [strategy.score(placement, ctx) for placement in placements]


def _argmax_last(scores: list[float]) -> int:
    best = 0
    for index in range(1, len(scores)):
        # `not <` keeps ties and NaN comparisons moving to the later index
        if not scores[index] < scores[best]:
            best = index
    return best


def select_move(
    placements: Iterable[Placement],
    board: Board,
    strategy: StrategyLike,
    *,
    use_cache: bool = True,
    max_iterations: int | None = None,
) -> Placement | None:
    """Return the highest-scoring placement, or ``None`` when there is none.

    Args:
        placements: Candidate placements, in enumeration order.
        board: Board the candidates were validated against.
        strategy: Strategy enum member, registered name or object.
        use_cache: Score through a fresh :class:`BatchScorer` when the
            strategy reads cached features and the candidates share one
            shape.
        max_iterations: Optional flood-fill bound.

    Raises:
        ConfigurationError: If ``strategy`` is not registered.
    """
    resolved = get_strategy(strategy)
    candidates = resolved.candidates(list(placements), board)
    if not candidates:
        return None

    scores = score_placements(
        candidates, board, resolved, use_cache=use_cache, max_iterations=max_iterations
    )
    best = _argmax_last(scores)
    logger.debug(
        f"{resolved.name}: picked ({candidates[best].x}, {candidates[best].y}) "
        f"score={scores[best]:.2f} out of {len(candidates)} candidates"
    )
    return candidates[best]


def rank_placements(
    placements: Iterable[Placement],
    board: Board,
    strategy: StrategyLike,
    *,
    use_cache: bool = True,
    max_iterations: int | None = None,
) -> list[tuple[Placement, float]]:
    """Return ``(placement, score)`` pairs, best first.

    The sort is stable, so equal scores keep input order; NaN scores sink to
    the bottom. Note that :func:`select_move` breaks ties the other way.
    """
    resolved = get_strategy(strategy)
    candidates = resolved.candidates(list(placements), board)
    scores = score_placements(
        candidates, board, resolved, use_cache=use_cache, max_iterations=max_iterations
    )
    pairs = list(zip(candidates, scores))
    pairs.sort(key=lambda pair: -math.inf if math.isnan(pair[1]) else pair[1], reverse=True)
    return pairs


def select_best_placement(
    board: Board,
    shape: Shape,
    strategy: StrategyLike,
    *,
    use_cache: bool = True,
    max_iterations: int | None = None,
) -> Placement | None:
    """Enumerate legal placements of ``shape`` and pick one."""
    placements = find_all_valid_placements(board, shape)
    return select_move(
        placements, board, strategy, use_cache=use_cache, max_iterations=max_iterations
    )
