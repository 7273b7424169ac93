"""
Shared pytest fixtures for filler_ai tests.

The reference board used throughout, seen from player 1 (``@``)::

    y=0  .....
    y=1  .@@..
    y=2  .@...
    y=3  ...$$
    y=4  ...$.

Own cells: (1,1) (2,1) (1,2). Opponent cells: (3,3) (4,3) (3,4).
"""

from __future__ import annotations

import pytest

from filler_ai.models import Board, Placement, PlayerSlot, Position, Shape, TurnState

SAMPLE_ROWS = [
    ".....",
    ".@@..",
    ".@...",
    "...$$",
    "...$.",
]

SAMPLE_TURN_TEXT = """$$$ exec p1 : [players/filler_ai]
Anfield 5 5:
    01234
000 .....
001 .@@..
002 .@...
003 ...$$
004 ...$.
Piece 2 1:
**
"""


def make_placement(x: int, y: int, shape: Shape, cells_added: int = 0, territory_touches: int = 1) -> Placement:
    """Hand-built placement with arbitrary metrics."""
    return Placement(
        anchor=Position(x=x, y=y),
        shape=shape,
        cells_added=cells_added,
        territory_touches=territory_touches,
    )


@pytest.fixture
def sample_board() -> Board:
    return Board.from_symbols(SAMPLE_ROWS, PlayerSlot.PLAYER_1)


@pytest.fixture
def single_cell() -> Shape:
    return Shape.from_strings(["*"])


@pytest.fixture
def domino() -> Shape:
    return Shape.from_strings(["**"])


@pytest.fixture
def empty_shape() -> Shape:
    return Shape.from_strings(["..", ".."])


@pytest.fixture
def sample_turn(sample_board: Board, domino: Shape) -> TurnState:
    return TurnState(player=PlayerSlot.PLAYER_1, board=sample_board, piece=domino)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every FILLER_AI_* variable for the duration of a test."""
    import os

    for name in list(os.environ):
        if name.startswith("FILLER_AI_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
