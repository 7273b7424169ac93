"""Heuristic AI player driven by a named scoring strategy."""

from __future__ import annotations

import logging
import time

from .. import metrics
from ..models import AIConfig, Board, Placement, PlayerSlot, TurnState
from .base import BaseAI
from .scoring import EvaluationContext, get_strategy
from .selector import select_move

logger = logging.getLogger(__name__)


class HeuristicAI(BaseAI):
    """Picks the placement with the best strategy score each turn.

    Holds no state between turns beyond the move counter; every decision is
    a function of the turn snapshot alone.
    """

    def __init__(self, player: PlayerSlot, config: AIConfig | None = None):
        super().__init__(player, config or AIConfig())
        self.strategy = get_strategy(self.config.strategy)

    def select_placement(self, turn: TurnState) -> Placement | None:
        started = time.perf_counter()
        placements = self.get_valid_placements(turn)
        metrics.CANDIDATE_PLACEMENTS.observe(len(placements))

        selected = select_move(
            placements,
            turn.board,
            self.strategy,
            use_cache=self.config.use_batch_cache,
            max_iterations=self.config.flood_fill_max_iterations,
        )

        metrics.record_decision(
            self.strategy.name, selected is not None, time.perf_counter() - started
        )
        if selected is None:
            logger.warning(
                f"No legal placement for {turn.piece.width}x{turn.piece.height} piece "
                f"on {turn.board.width}x{turn.board.height} board"
            )
            return None

        self.move_count += 1
        return selected

    def _context(self, board: Board) -> EvaluationContext:
        return EvaluationContext(board, max_iterations=self.config.flood_fill_max_iterations)

    def evaluate_placement(self, placement: Placement, board: Board) -> float:
        return self.strategy.score(placement, self._context(board))

    def get_evaluation_breakdown(self, placement: Placement, board: Board) -> dict[str, float]:
        return self.strategy.breakdown(placement, self._context(board))
