"""
Territory analysis heuristics for candidate placements.

Every function here is pure: it reads the board snapshot and the placement
and returns a number. The board itself is never modified; the flood fill
sees the placement through a small overlay that patches the covered cells
to ``OWN_LAST``.

Covered cells that fall outside the board (only possible for hand-built
placements) are skipped, so degenerate inputs score 0 instead of raising.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping

from ..geometry import (
    DIAMOND_OFFSETS_2,
    NEIGHBOR_OFFSETS_4,
    Coord,
    is_border,
    is_corner,
    manhattan_distance,
)
from ..models import OPPONENT_STATES, OWN_STATES, Board, CellState, Placement
from .heuristic_weights import (
    ADVANCED_BALANCED_WEIGHTS,
    CENTRALITY_RADIUS,
    CENTRALITY_STEP,
    CORNER_BONUS,
    DENSITY_CELL_VALUE,
    EDGE_BONUS,
    FLOOD_FILL_MULTIPLIER,
    WEAK_POSITION_HIGH_BONUS,
    WEAK_POSITION_LOW_BONUS,
)


class BoardOverlay:
    """Read-through view of a board with a handful of cells replaced.

    Used in place of a full board copy when a heuristic needs to see the
    board "as if" a placement had been made.
    """

    __slots__ = ("board", "patch")

    def __init__(self, board: Board, patch: Mapping[Coord, CellState] | None = None):
        self.board = board
        self.patch: dict[Coord, CellState] = dict(patch or {})

    @classmethod
    def with_placement(cls, board: Board, placement: Placement) -> BoardOverlay:
        return cls(board, {cell: CellState.OWN_LAST for cell in covered_cells(placement, board)})

    def get(self, x: int, y: int) -> CellState:
        state = self.patch.get((x, y))
        if state is None:
            return self.board.get(x, y)
        return state

    def in_bounds(self, x: int, y: int) -> bool:
        return self.board.in_bounds(x, y)


def covered_cells(placement: Placement, board: Board) -> list[Coord]:
    """In-bounds board cells covered by the placement, row-major."""
    return [
        (x, y)
        for x, y in placement.absolute_cells()
        if 0 <= x < board.width and 0 <= y < board.height
    ]


# =============================================================================
# Flood fill
# =============================================================================


def flood_fill_reachable(
    board: Board,
    seeds: Iterable[Coord],
    overlay: BoardOverlay | None = None,
    max_iterations: int | None = None,
) -> int:
    """Count the empty cells reachable from ``seeds``.

    BFS over 4-neighbours. Opponent cells are walls. Own cells are visited
    but not expanded, so the region grows through empty cells only. The
    result counts distinct empty cells in the explored region, including
    empty seeds, which makes it monotone in the seed set.

    Args:
        board: Board snapshot.
        seeds: Starting coordinates; out-of-bounds and opponent seeds are ignored.
        overlay: Optional patched view used for every cell lookup.
        max_iterations: Upper bound on dequeued cells, ``None`` for no bound.
    """
    patch = overlay.patch if overlay is not None else {}
    width, height = board.width, board.height
    cells = board.cells

    visited: set[Coord] = set()
    queue: deque[Coord] = deque()
    reachable = 0

    for x, y in seeds:
        if (x, y) in visited or not (0 <= x < width and 0 <= y < height):
            continue
        state = patch.get((x, y), cells[y][x])
        if state in OPPONENT_STATES:
            continue
        visited.add((x, y))
        queue.append((x, y))
        if state is CellState.EMPTY:
            reachable += 1

    iterations = 0
    while queue:
        if max_iterations is not None and iterations >= max_iterations:
            break
        iterations += 1
        x, y = queue.popleft()
        for dx, dy in NEIGHBOR_OFFSETS_4:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height) or (nx, ny) in visited:
                continue
            state = patch.get((nx, ny), cells[ny][nx])
            if state in OPPONENT_STATES:
                continue
            visited.add((nx, ny))
            if state is CellState.EMPTY:
                reachable += 1
                queue.append((nx, ny))

    return reachable


def reachable_after_placement(
    placement: Placement,
    board: Board,
    max_iterations: int | None = None,
) -> int:
    """Empty cells reachable from the placement once it is on the board."""
    overlay = BoardOverlay.with_placement(board, placement)
    return flood_fill_reachable(
        board, overlay.patch.keys(), overlay=overlay, max_iterations=max_iterations
    )


def analyze_flood_fill(
    placement: Placement,
    board: Board,
    max_iterations: int | None = None,
) -> float:
    return reachable_after_placement(placement, board, max_iterations) * FLOOD_FILL_MULTIPLIER


# =============================================================================
# Weak positions
# =============================================================================


def count_opponent_neighbors(board: Board, x: int, y: int) -> int:
    cells = board.cells
    count = 0
    for dx, dy in NEIGHBOR_OFFSETS_4:
        nx, ny = x + dx, y + dy
        if 0 <= nx < board.width and 0 <= ny < board.height:
            if cells[ny][nx] in OPPONENT_STATES:
                count += 1
    return count


def detect_weak_positions(placement: Placement, board: Board) -> float:
    """Reward covered cells that the opponent barely surrounds.

    Fewer than two opponent neighbours scores 3.0, fewer than four scores
    1.5, a fully surrounded cell scores nothing.
    """
    score = 0.0
    for x, y in covered_cells(placement, board):
        opponents = count_opponent_neighbors(board, x, y)
        if opponents < 2:
            score += WEAK_POSITION_HIGH_BONUS
        elif opponents < 4:
            score += WEAK_POSITION_LOW_BONUS
    return score


# =============================================================================
# Density
# =============================================================================


def count_nearby_own_territory(board: Board, x: int, y: int) -> int:
    """Own cells at Manhattan distance 1 or 2 from ``(x, y)``."""
    cells = board.cells
    count = 0
    for dx, dy in DIAMOND_OFFSETS_2:
        nx, ny = x + dx, y + dy
        if 0 <= nx < board.width and 0 <= ny < board.height:
            if cells[ny][nx] in OWN_STATES:
                count += 1
    return count


def density_total(placement: Placement, board: Board) -> int:
    """Sum of :func:`count_nearby_own_territory` over the covered cells."""
    return sum(count_nearby_own_territory(board, x, y) for x, y in covered_cells(placement, board))


def density_from_total(total: int, covered: int) -> float:
    if covered == 0:
        return 0.0
    return total * DENSITY_CELL_VALUE / covered


def analyze_density(placement: Placement, board: Board) -> float:
    covered = len(covered_cells(placement, board))
    return density_from_total(density_total(placement, board), covered)


# =============================================================================
# Edges and centre
# =============================================================================


def analyze_edge_control(placement: Placement, board: Board) -> float:
    score = 0.0
    for x, y in covered_cells(placement, board):
        if is_corner(x, y, board.width, board.height):
            score += CORNER_BONUS
        elif is_border(x, y, board.width, board.height):
            score += EDGE_BONUS
    return score


def centrality_bonus(placement: Placement, board: Board) -> float:
    """Linear bonus for anchors close to the board centre."""
    centre = (board.width // 2, board.height // 2)
    distance = manhattan_distance((placement.x, placement.y), centre)
    if distance >= CENTRALITY_RADIUS:
        return 0.0
    return (CENTRALITY_RADIUS - distance) * CENTRALITY_STEP


# =============================================================================
# Composite
# =============================================================================


def advanced_score(
    placement: Placement,
    board: Board,
    max_iterations: int | None = None,
) -> float:
    """Default composite score combining expansion and every analyzer signal."""
    weights = ADVANCED_BALANCED_WEIGHTS
    return (
        weights["cells_added"] * placement.cells_added
        + weights["flood_fill"] * analyze_flood_fill(placement, board, max_iterations)
        + weights["weak_positions"] * detect_weak_positions(placement, board)
        + weights["density"] * analyze_density(placement, board)
        + weights["edge_control"] * analyze_edge_control(placement, board)
    )
