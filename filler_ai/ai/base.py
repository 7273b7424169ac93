"""
Base AI player class for Filler
Abstract base class that all AI implementations inherit from
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import AIConfig, Board, Placement, PlayerSlot, TurnState
from ..placement import find_all_valid_placements


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(self, player: PlayerSlot, config: AIConfig):
        """
        Initialize AI player

        Args:
            player: The player slot this AI controls
            config: AI configuration settings
        """
        self.player = player
        self.config = config
        self.move_count = 0

    @abstractmethod
    def select_placement(self, turn: TurnState) -> Placement | None:
        """
        Select the best placement for the current turn

        Args:
            turn: Current turn snapshot

        Returns:
            Selected placement or None if the piece cannot be placed
        """

    @abstractmethod
    def evaluate_placement(self, placement: Placement, board: Board) -> float:
        """
        Evaluate a placement from this AI's perspective

        Args:
            placement: Candidate placement
            board: Board the placement was validated against

        Returns:
            Score (higher is better)
        """

    def get_evaluation_breakdown(self, placement: Placement, board: Board) -> dict[str, float]:
        """
        Get detailed breakdown of a placement evaluation

        Returns:
            Dictionary with evaluation components
        """
        return {"total": self.evaluate_placement(placement, board)}

    def get_valid_placements(self, turn: TurnState) -> list[Placement]:
        """All legal placements of the turn's piece, anchors row-major."""
        return find_all_valid_placements(turn.board, turn.piece)

    def __repr__(self) -> str:
        """String representation of AI"""
        return (
            f"{self.__class__.__name__}"
            f"(player={self.player.value}, "
            f"strategy={self.config.strategy.value})"
        )
