"""
Scoring engine: strategy definitions and feature evaluation.

A :class:`Strategy` is a weight profile over named features plus an
optional candidate filter. Feature values come from an
:class:`EvaluationContext`, which routes the expensive analyzer calls
(flood fill, density) through the batch caches when it has them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from ..geometry import border_distance
from ..models import AIStrategy, Board, Placement
from .heuristic_weights import (
    EDGE_AVOIDANCE_DISTANCE,
    FEATURE_KEYS,
    FLOOD_FILL_MULTIPLIER,
    STRATEGY_WEIGHT_PROFILES,
    HeuristicWeights,
    validate_weights,
)
from .heuristics import (
    analyze_edge_control,
    centrality_bonus,
    covered_cells,
    density_from_total,
    density_total,
    detect_weak_positions,
    reachable_after_placement,
)

if TYPE_CHECKING:
    from .batch_cache import ScoringCaches

logger = logging.getLogger(__name__)

CandidateFilter = Callable[[list[Placement], Board], list[Placement]]


class EvaluationContext:
    """Feature evaluator for one board snapshot.

    Args:
        board: Board the placements are scored against.
        caches: Optional batch caches; when given, flood fill and density
            are memoised per first covered cell.
        max_iterations: Optional flood-fill iteration bound.
    """

    def __init__(
        self,
        board: Board,
        caches: ScoringCaches | None = None,
        max_iterations: int | None = None,
    ):
        self.board = board
        self.caches = caches
        self.max_iterations = max_iterations
        self._features: dict[str, Callable[[Placement], float]] = {
            "cells_added": self.cells_added,
            "territory_touches": self.territory_touches,
            "flood_fill": self.flood_fill,
            "weak_positions": self.weak_positions,
            "density": self.density,
            "edge_control": self.edge_control,
            "centrality": self.centrality,
        }

    def feature(self, name: str, placement: Placement) -> float:
        try:
            evaluate = self._features[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown heuristic feature: {name}",
                context={"known": ", ".join(FEATURE_KEYS)},
            ) from None
        return evaluate(placement)

    def cells_added(self, placement: Placement) -> float:
        return float(placement.cells_added)

    def territory_touches(self, placement: Placement) -> float:
        return float(placement.territory_touches)

    def flood_fill(self, placement: Placement) -> float:
        def compute() -> int:
            return reachable_after_placement(placement, self.board, self.max_iterations)

        key = placement.first_cell()
        if self.caches is None or key is None:
            reachable = compute()
        else:
            reachable = self.caches.flood_fill.get_or_compute(key, compute)
        return reachable * FLOOD_FILL_MULTIPLIER

    def weak_positions(self, placement: Placement) -> float:
        return detect_weak_positions(placement, self.board)

    def density(self, placement: Placement) -> float:
        def compute() -> int:
            return density_total(placement, self.board)

        key = placement.first_cell()
        if self.caches is None or key is None:
            total = compute()
        else:
            total = self.caches.density.get_or_compute(key, compute)
        return density_from_total(total, len(covered_cells(placement, self.board)))

    def edge_control(self, placement: Placement) -> float:
        return analyze_edge_control(placement, self.board)

    def centrality(self, placement: Placement) -> float:
        return centrality_bonus(placement, self.board)


@dataclass(frozen=True)
class Strategy:
    """Weighted sum over named features.

    Attributes:
        name: Registry identifier.
        weights: Feature name to weight; unlisted features are not computed.
        candidate_filter: Optional pre-selection applied before scoring.
    """
    name: str
    weights: HeuristicWeights = field(default_factory=dict)
    candidate_filter: CandidateFilter | None = None

    def score(self, placement: Placement, ctx: EvaluationContext) -> float:
        total = 0.0
        for feature, weight in self.weights.items():
            total += weight * ctx.feature(feature, placement)
        return total

    def breakdown(self, placement: Placement, ctx: EvaluationContext) -> dict[str, float]:
        """Weighted contribution of each feature plus the ``total``."""
        parts = {
            feature: self.weights[feature] * ctx.feature(feature, placement)
            for feature in FEATURE_KEYS
            if feature in self.weights
        }
        parts["total"] = sum(parts.values())
        return parts

    def candidates(self, placements: list[Placement], board: Board) -> list[Placement]:
        if self.candidate_filter is None:
            return placements
        return self.candidate_filter(placements, board)


def avoid_edges(placements: list[Placement], board: Board) -> list[Placement]:
    """Keep anchors at least two cells from every border.

    Falls back to the full candidate list when no anchor qualifies.
    """
    kept = [
        p
        for p in placements
        if border_distance(p.x, p.y, board.width, board.height) >= EDGE_AVOIDANCE_DISTANCE
    ]
    return kept or placements


def _builtin_strategies() -> dict[str, Strategy]:
    strategies = {
        name: Strategy(name=name, weights=dict(weights))
        for name, weights in STRATEGY_WEIGHT_PROFILES.items()
    }
    edge = AIStrategy.EDGE_AVOIDANCE.value
    strategies[edge] = Strategy(
        name=edge,
        weights=strategies[edge].weights,
        candidate_filter=avoid_edges,
    )
    return strategies


_BUILTIN: dict[str, Strategy] = _builtin_strategies()
_custom_registry: dict[str, Strategy] = {}


def register_strategy(
    name: str,
    weights: Mapping[str, float],
    candidate_filter: CandidateFilter | None = None,
) -> Strategy:
    """Register a custom strategy under ``name``.

    Raises:
        ConfigurationError: If ``name`` shadows a built-in strategy or a
            weight names an unknown feature.
    """
    if name in _BUILTIN:
        raise ConfigurationError(f"Cannot replace built-in strategy: {name}")
    try:
        checked = validate_weights(weights)
    except ValueError as exc:
        raise ConfigurationError(str(exc), context={"strategy": name}) from exc
    if name in _custom_registry:
        logger.warning(f"Overwriting existing custom strategy: {name}")
    strategy = Strategy(name=name, weights=checked, candidate_filter=candidate_filter)
    _custom_registry[name] = strategy
    logger.debug(f"Registered custom strategy: {name}")
    return strategy


def unregister_strategy(name: str) -> bool:
    if name in _custom_registry:
        del _custom_registry[name]
        logger.debug(f"Unregistered custom strategy: {name}")
        return True
    return False


def list_strategies() -> list[str]:
    return list(_BUILTIN) + list(_custom_registry)


def get_strategy(strategy: AIStrategy | Strategy | str) -> Strategy:
    """Resolve an enum member, a registered name, or a strategy object.

    Raises:
        ConfigurationError: If the name is not registered.
    """
    if isinstance(strategy, Strategy):
        return strategy
    name = strategy.value if isinstance(strategy, AIStrategy) else str(strategy)
    found = _BUILTIN.get(name) or _custom_registry.get(name)
    if found is None:
        raise ConfigurationError(
            f"Unknown strategy: {name}",
            context={"available": ", ".join(list_strategies())},
        )
    return found
