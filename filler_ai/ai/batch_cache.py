"""
Per-batch memoisation of placement metrics.

Within one scoring pass every candidate shares the same board and the same
piece, so a placement is identified by the absolute position of its first
filled cell. The caches store raw integer metrics (reachable empty cells,
summed nearby own cells) and are cleared at the start of every pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass

from .. import metrics
from ..errors import BatchShapeMismatchError
from ..models import Board, Placement
from .scoring import EvaluationContext, Strategy

logger = logging.getLogger(__name__)

# Features whose values are memoised per batch
CACHED_FEATURES = frozenset({"flood_fill", "density"})


@dataclass(frozen=True)
class CacheStats:
    """Diagnostic snapshot of a :class:`BatchCache`."""
    entries: int
    hits: int
    misses: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class BatchCache:
    """Memo table valid for a single scoring batch."""

    def __init__(self, name: str = "batch"):
        self.name = name
        self._table: dict[Hashable, int] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Hashable, factory: Callable[[], int]) -> int:
        """Return the cached value for ``key``, computing it on first use.

        ``factory`` runs at most once per key until :meth:`reset`.
        """
        if key in self._table:
            self.hits += 1
            return self._table[key]
        self.misses += 1
        value = factory()
        self._table[key] = value
        return value

    def reset(self) -> None:
        """Drop every entry and zero the counters."""
        self._table.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(entries=len(self._table), hits=self.hits, misses=self.misses)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._table


class ScoringCaches:
    """The caches consulted by one scoring pass."""

    def __init__(self):
        self.flood_fill = BatchCache("flood_fill")
        self.density = BatchCache("density")

    def reset(self) -> None:
        self.flood_fill.reset()
        self.density.reset()

    def stats(self) -> dict[str, CacheStats]:
        return {
            self.flood_fill.name: self.flood_fill.stats(),
            self.density.name: self.density.stats(),
        }


def _first_shape_mismatch(placements: list[Placement]) -> int | None:
    if not placements:
        return None
    shape = placements[0].shape
    for index, placement in enumerate(placements[1:], start=1):
        if placement.shape != shape:
            return index
    return None


def has_single_shape(placements: list[Placement]) -> bool:
    return _first_shape_mismatch(placements) is None


def uses_batch_cache(strategy: Strategy) -> bool:
    """True when ``strategy`` reads at least one cached feature."""
    return not CACHED_FEATURES.isdisjoint(strategy.weights)


def ensure_single_shape(placements: list[Placement]) -> None:
    """Raise unless every placement uses the same piece shape.

    Raises:
        BatchShapeMismatchError: If two placements differ in shape.
    """
    index = _first_shape_mismatch(placements)
    if index is not None:
        raise BatchShapeMismatchError(
            "Scoring batch mixes piece shapes",
            context={"index": index},
        )


class BatchScorer:
    """Scores a batch of same-shape placements through shared caches."""

    def __init__(self, max_iterations: int | None = None):
        self.max_iterations = max_iterations
        self.caches = ScoringCaches()

    def score_all(
        self,
        placements: Iterable[Placement],
        board: Board,
        strategy: Strategy,
    ) -> list[float]:
        """Score every placement, in input order.

        The caches are reset before scoring so entries never leak between
        batches.
        """
        batch = list(placements)
        ensure_single_shape(batch)
        self.caches.reset()

        ctx = EvaluationContext(board, caches=self.caches, max_iterations=self.max_iterations)
        scores = [strategy.score(placement, ctx) for placement in batch]

        for name, stats in self.caches.stats().items():
            metrics.record_cache_lookups(name, stats.hits, stats.misses)
        logger.debug(
            f"Scored {len(batch)} placements with {strategy.name}: "
            f"{self.caches.stats()}"
        )
        return scores
