"""Piece placement validation.

A placement is legal when every filled cell of the piece lands on the board,
none covers opponent territory, and exactly one covers the acting player's
own territory (the contact cell).

The bulk enumerators never report why a given anchor failed: they return
the legal placements only and leave fallback decisions to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import (
    CollisionWithOpponentError,
    EmptyShapeError,
    MultipleContactsError,
    NoTerritoryContactError,
    OutOfBoundsError,
    PlacementError,
)
from .geometry import neighbors_4
from .models import OPPONENT_STATES, OWN_STATES, Board, Placement, Position, Shape

logger = logging.getLogger(__name__)


def validate_placement(board: Board, shape: Shape, anchor: Position) -> Placement:
    """Check whether ``shape`` may be placed with its origin at ``anchor``.

    Args:
        board: Current board snapshot.
        shape: Piece to place.
        anchor: Board position of the shape's local origin.

    Returns:
        The validated :class:`Placement`.

    Raises:
        EmptyShapeError: The shape has no filled cells (checked first).
        OutOfBoundsError: A filled cell lands outside the board.
        CollisionWithOpponentError: A filled cell covers opponent territory.
        NoTerritoryContactError: No filled cell covers own territory.
        MultipleContactsError: More than one filled cell covers own territory.
    """
    offsets = shape.filled_offsets()
    if not offsets:
        raise EmptyShapeError(anchor=anchor.as_tuple())

    ax, ay = anchor.x, anchor.y
    width, height = board.width, board.height
    cells = board.cells
    touches = 0

    for dx, dy in offsets:
        x, y = ax + dx, ay + dy
        if not (0 <= x < width and 0 <= y < height):
            raise OutOfBoundsError(anchor=(ax, ay), cell=(x, y))
        state = cells[y][x]
        if state in OPPONENT_STATES:
            raise CollisionWithOpponentError(anchor=(ax, ay), cell=(x, y))
        if state in OWN_STATES:
            touches += 1

    if touches == 0:
        raise NoTerritoryContactError(anchor=(ax, ay))
    if touches > 1:
        raise MultipleContactsError(anchor=(ax, ay), touches=touches)
    return Placement.from_contact(anchor, shape)


def is_valid_placement(board: Board, shape: Shape, anchor: Position) -> bool:
    try:
        validate_placement(board, shape, anchor)
    except PlacementError:
        return False
    return True


def find_all_valid_placements(board: Board, shape: Shape) -> list[Placement]:
    """Enumerate every legal placement, anchors in row-major order."""
    placements: list[Placement] = []
    for y in range(board.height):
        for x in range(board.width):
            try:
                placements.append(validate_placement(board, shape, Position(x=x, y=y)))
            except PlacementError:
                continue
    logger.debug(
        f"Found {len(placements)} valid placements on "
        f"{board.width}x{board.height} board"
    )
    return placements


def find_placements_touching_territory(
    board: Board,
    shape: Shape,
    territory_positions: Iterable[Position],
) -> list[Placement]:
    """Legal placements anchored next to the given territory cells.

    Candidate anchors are the in-bounds 4-neighbours of each territory
    position, deduplicated in first-seen order before validation. A legal
    placement is kept when one of its covered cells is one of the requested
    territory positions.
    """
    targets = [pos.as_tuple() for pos in territory_positions]
    target_set = set(targets)

    anchors: dict[tuple[int, int], None] = {}
    for tx, ty in targets:
        for neighbor in neighbors_4(tx, ty, board.width, board.height):
            anchors.setdefault(neighbor, None)

    placements: list[Placement] = []
    for x, y in anchors:
        try:
            placement = validate_placement(board, shape, Position(x=x, y=y))
        except PlacementError:
            continue
        if target_set.intersection(placement.absolute_cells()):
            placements.append(placement)
    return placements
