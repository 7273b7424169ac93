"""Weight profiles for placement scoring.

This module centralises every scalar weight used to rank candidate
placements and exposes one named profile per :class:`AIStrategy`. Each
profile is a flat mapping from feature name to weight; a strategy's score is
the weighted sum of the listed features, and features with no entry are not
computed at all.

Feature names:

* ``cells_added`` / ``territory_touches`` - raw validator metrics.
* ``flood_fill`` - reachable empty cells after the placement, x2.5.
* ``weak_positions`` - bonus for covered cells with few opponent neighbours.
* ``density`` - average own territory within Manhattan distance 2.
* ``edge_control`` - border and corner bonus.
* ``centrality`` - bonus for anchors near the board centre.

These weights are fixed behavioural constants, not tunables.
"""

from __future__ import annotations

from collections.abc import Mapping

HeuristicWeights = dict[str, float]

# --- Analyzer constants ----------------------------------------------------

FLOOD_FILL_MULTIPLIER = 2.5
WEAK_POSITION_HIGH_BONUS = 3.0  # fewer than 2 opponent neighbours
WEAK_POSITION_LOW_BONUS = 1.5  # fewer than 4 opponent neighbours
DENSITY_CELL_VALUE = 0.8
CORNER_BONUS = 2.0
EDGE_BONUS = 1.0
CENTRALITY_RADIUS = 15
CENTRALITY_STEP = 0.5

# Lexicographic ordering for the conservative profile: any extra touch
# outweighs every possible cells_added difference.
CONSERVATIVE_PRIMARY_WEIGHT = 1_000_000.0

# Minimum anchor distance from every border for the edge-avoidance filter
EDGE_AVOIDANCE_DISTANCE = 2


# Canonical ordered list of feature keys. Diagnostics print breakdowns in
# this order.
FEATURE_KEYS: list[str] = [
    "cells_added",
    "territory_touches",
    "flood_fill",
    "weak_positions",
    "density",
    "edge_control",
    "centrality",
]


GREEDY_EXPANSION_WEIGHTS: HeuristicWeights = {
    "cells_added": 1.0,
}

BALANCED_WEIGHTS: HeuristicWeights = {
    "cells_added": 2.0,
    "territory_touches": 1.0,
}

CONSERVATIVE_WEIGHTS: HeuristicWeights = {
    "territory_touches": CONSERVATIVE_PRIMARY_WEIGHT,
    "cells_added": 1.0,
}

AGGRESSIVE_EXPANSION_WEIGHTS: HeuristicWeights = {
    "cells_added": 10.0,
    "flood_fill": 2.0,
}

OPPORTUNISTIC_WEIGHTS: HeuristicWeights = {
    "weak_positions": 2.5,
    "cells_added": 5.0,
}

DEFENSIVE_WEIGHTS: HeuristicWeights = {
    "density": 2.0,
    "territory_touches": 2.0,
    "edge_control": 1.5,
}

STRATEGIC_BLOCKING_WEIGHTS: HeuristicWeights = {
    "weak_positions": 1.8,
    "territory_touches": 3.0,
    "cells_added": 3.0,
}

# Default profile: expansion dominates, the analyzer signals refine it.
ADVANCED_BALANCED_WEIGHTS: HeuristicWeights = {
    "cells_added": 10.0,
    "flood_fill": 1.5,
    "weak_positions": 2.0,
    "density": 1.2,
    "edge_control": 0.5,
}

TERRITORIAL_CONTROL_WEIGHTS: HeuristicWeights = {
    "cells_added": 8.0,
    "flood_fill": 1.5,
    "territory_touches": 1.5,
    "edge_control": 0.8,
}

EVALUATOR_WEIGHTS: HeuristicWeights = {
    "cells_added": 10.0,
    "centrality": 1.0,
    "territory_touches": 1.0,
}

EDGE_AVOIDANCE_WEIGHTS: HeuristicWeights = {
    "cells_added": 1.0,
}


# Keyed by AIStrategy value so profiles stay JSON-friendly.
STRATEGY_WEIGHT_PROFILES: dict[str, HeuristicWeights] = {
    "greedy_expansion": GREEDY_EXPANSION_WEIGHTS,
    "balanced": BALANCED_WEIGHTS,
    "conservative": CONSERVATIVE_WEIGHTS,
    "aggressive_expansion": AGGRESSIVE_EXPANSION_WEIGHTS,
    "opportunistic": OPPORTUNISTIC_WEIGHTS,
    "defensive": DEFENSIVE_WEIGHTS,
    "strategic_blocking": STRATEGIC_BLOCKING_WEIGHTS,
    "advanced_balanced": ADVANCED_BALANCED_WEIGHTS,
    "territorial_control": TERRITORIAL_CONTROL_WEIGHTS,
    "evaluator": EVALUATOR_WEIGHTS,
    "edge_avoidance": EDGE_AVOIDANCE_WEIGHTS,
}


def validate_weights(weights: Mapping[str, float]) -> HeuristicWeights:
    """Return a copy of ``weights`` after checking every key is a known feature.

    Raises:
        ValueError: If a key is not listed in :data:`FEATURE_KEYS`.
    """
    unknown = sorted(set(weights) - set(FEATURE_KEYS))
    if unknown:
        raise ValueError(f"Unknown heuristic features: {', '.join(unknown)}")
    return {key: float(value) for key, value in weights.items()}
