"""
Pydantic models for the Filler turn snapshot.

The protocol reader builds one :class:`TurnState` per turn; everything in the
engine treats it as read-only. Cell states are stored relative to the acting
player (own / opponent) so that the validator and heuristics never need to
know which player slot they are playing.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import BoardBoundsError
from .geometry import Coord


class PlayerSlot(int, Enum):
    """Player slot assigned by the game engine."""
    PLAYER_1 = 1
    PLAYER_2 = 2

    @property
    def opponent(self) -> PlayerSlot:
        return PlayerSlot.PLAYER_2 if self is PlayerSlot.PLAYER_1 else PlayerSlot.PLAYER_1


class CellState(str, Enum):
    """Board cell state, relative to the acting player."""
    EMPTY = "empty"
    OWN = "own"
    OWN_LAST = "own_last"
    OPPONENT = "opponent"
    OPPONENT_LAST = "opponent_last"

    @property
    def is_own(self) -> bool:
        return self in OWN_STATES

    @property
    def is_opponent(self) -> bool:
        return self in OPPONENT_STATES

    @classmethod
    def from_symbol(cls, symbol: str, player: PlayerSlot) -> CellState:
        """Convert an absolute board symbol into a relative cell state.

        ``@``/``a`` belong to player 1 (territory / last move), ``$``/``s``
        to player 2. Anything else is empty.
        """
        owner, last = _SYMBOL_OWNERS.get(symbol, (None, False))
        if owner is None:
            return cls.EMPTY
        if owner == player:
            return cls.OWN_LAST if last else cls.OWN
        return cls.OPPONENT_LAST if last else cls.OPPONENT


OWN_STATES = frozenset({CellState.OWN, CellState.OWN_LAST})
OPPONENT_STATES = frozenset({CellState.OPPONENT, CellState.OPPONENT_LAST})

_SYMBOL_OWNERS: dict[str, tuple[PlayerSlot, bool]] = {
    "@": (PlayerSlot.PLAYER_1, False),
    "a": (PlayerSlot.PLAYER_1, True),
    "$": (PlayerSlot.PLAYER_2, False),
    "s": (PlayerSlot.PLAYER_2, True),
}


class AIStrategy(str, Enum):
    """Named weighting schemes understood by the strategy selector."""
    GREEDY_EXPANSION = "greedy_expansion"
    BALANCED = "balanced"
    CONSERVATIVE = "conservative"
    AGGRESSIVE_EXPANSION = "aggressive_expansion"
    OPPORTUNISTIC = "opportunistic"
    DEFENSIVE = "defensive"
    STRATEGIC_BLOCKING = "strategic_blocking"
    ADVANCED_BALANCED = "advanced_balanced"
    TERRITORIAL_CONTROL = "territorial_control"
    EVALUATOR = "evaluator"
    EDGE_AVOIDANCE = "edge_avoidance"

    @classmethod
    def default(cls) -> AIStrategy:
        return cls.ADVANCED_BALANCED


class Position(BaseModel):
    """Board position."""
    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0)
    y: int = Field(ge=0)

    def to_key(self) -> str:
        """Convert position to string key"""
        return f"{self.x},{self.y}"

    def as_tuple(self) -> Coord:
        return (self.x, self.y)


class Board(BaseModel):
    """Rectangular board of relative cell states, indexed ``cells[y][x]``."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    cells: tuple[tuple[CellState, ...], ...]

    @model_validator(mode="after")
    def _check_dimensions(self) -> Board:
        if len(self.cells) != self.height:
            raise ValueError(
                f"board has {len(self.cells)} rows, expected {self.height}"
            )
        for y, row in enumerate(self.cells):
            if len(row) != self.width:
                raise ValueError(
                    f"board row {y} has {len(row)} cells, expected {self.width}"
                )
        return self

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[CellState]]) -> Board:
        cells = tuple(tuple(row) for row in rows)
        width = len(cells[0]) if cells else 0
        return cls(width=width, height=len(cells), cells=cells)

    @classmethod
    def from_symbols(
        cls,
        rows: Iterable[str],
        player: PlayerSlot = PlayerSlot.PLAYER_1,
    ) -> Board:
        """Build a board from protocol symbol rows (``. @ a $ s``)."""
        return cls.from_rows(
            [CellState.from_symbol(ch, player) for ch in row] for row in rows
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> CellState:
        """Return the state at ``(x, y)``.

        Raises:
            BoardBoundsError: If the coordinate is outside the board.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise BoardBoundsError(
                "Board access out of bounds",
                position=(x, y),
                size=(self.width, self.height),
            )
        return self.cells[y][x]

    def get_position(self, pos: Position) -> CellState:
        return self.get(pos.x, pos.y)

    def is_own(self, x: int, y: int) -> bool:
        return self.get(x, y) in OWN_STATES

    def is_opponent(self, x: int, y: int) -> bool:
        return self.get(x, y) in OPPONENT_STATES

    def _positions_in(self, states: frozenset[CellState]) -> list[Position]:
        return [
            Position(x=x, y=y)
            for y, row in enumerate(self.cells)
            for x, state in enumerate(row)
            if state in states
        ]

    def own_positions(self) -> list[Position]:
        return self._positions_in(OWN_STATES)

    def opponent_positions(self) -> list[Position]:
        return self._positions_in(OPPONENT_STATES)

    def empty_positions(self) -> list[Position]:
        return self._positions_in(frozenset({CellState.EMPTY}))

    def count_own(self) -> int:
        return sum(1 for row in self.cells for state in row if state in OWN_STATES)

    def count_opponent(self) -> int:
        return sum(1 for row in self.cells for state in row if state in OPPONENT_STATES)

    def render(self) -> list[str]:
        """Render rows with ``o``/``O`` for own and ``x``/``X`` for opponent."""
        return ["".join(_RENDER[state] for state in row) for row in self.cells]


_RENDER: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.OWN: "o",
    CellState.OWN_LAST: "O",
    CellState.OPPONENT: "x",
    CellState.OPPONENT_LAST: "X",
}


class Shape(BaseModel):
    """Piece shape as a boolean occupancy mask, indexed ``mask[y][x]``."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0)
    height: int = Field(ge=0)
    mask: tuple[tuple[bool, ...], ...]

    @model_validator(mode="after")
    def _check_dimensions(self) -> Shape:
        if len(self.mask) != self.height:
            raise ValueError(
                f"shape has {len(self.mask)} rows, expected {self.height}"
            )
        for y, row in enumerate(self.mask):
            if len(row) != self.width:
                raise ValueError(
                    f"shape row {y} has {len(row)} cells, expected {self.width}"
                )
        return self

    @classmethod
    def from_strings(cls, rows: Iterable[str]) -> Shape:
        """Build a shape from text rows; ``.`` is unfilled, anything else filled."""
        mask = tuple(tuple(ch != "." for ch in row) for row in rows)
        width = len(mask[0]) if mask else 0
        return cls(width=width, height=len(mask), mask=mask)

    def filled_offsets(self) -> list[Coord]:
        """Filled cells relative to the shape origin, in row-major order."""
        return [
            (x, y)
            for y, row in enumerate(self.mask)
            for x, filled in enumerate(row)
            if filled
        ]

    def filled_count(self) -> int:
        return sum(1 for row in self.mask for filled in row if filled)

    def is_empty(self) -> bool:
        return self.filled_count() == 0

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """Return ``(min_x, min_y, width, height)`` of the filled cells."""
        offsets = self.filled_offsets()
        if not offsets:
            return None
        xs = [x for x, _ in offsets]
        ys = [y for _, y in offsets]
        return (min(xs), min(ys), max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)


class Placement(BaseModel):
    """A piece anchored on the board together with its basic metrics.

    Placements returned by the validator are built with
    :meth:`from_contact` and therefore always have exactly one territory
    touch and ``cells_added == filled_count - 1``.
    """
    model_config = ConfigDict(frozen=True)

    anchor: Position
    shape: Shape
    cells_added: int = Field(ge=0)
    territory_touches: int = Field(ge=0)

    @classmethod
    def from_contact(cls, anchor: Position, shape: Shape) -> Placement:
        return cls(
            anchor=anchor,
            shape=shape,
            cells_added=shape.filled_count() - 1,
            territory_touches=1,
        )

    @property
    def x(self) -> int:
        return self.anchor.x

    @property
    def y(self) -> int:
        return self.anchor.y

    def absolute_cells(self) -> list[Coord]:
        """Board coordinates covered by the filled cells, row-major."""
        ax, ay = self.anchor.x, self.anchor.y
        return [(ax + dx, ay + dy) for dx, dy in self.shape.filled_offsets()]

    def first_cell(self) -> Position | None:
        """Absolute position of the first filled cell (batch cache key)."""
        for dx, dy in self.shape.filled_offsets():
            return Position(x=self.anchor.x + dx, y=self.anchor.y + dy)
        return None


class TurnState(BaseModel):
    """Single-turn snapshot handed to the engine."""
    model_config = ConfigDict(frozen=True)

    player: PlayerSlot
    board: Board
    piece: Shape

    def my_positions(self) -> list[Position]:
        return self.board.own_positions()

    def opponent_positions(self) -> list[Position]:
        return self.board.opponent_positions()

    def my_territory_size(self) -> int:
        return self.board.count_own()

    def opponent_territory_size(self) -> int:
        return self.board.count_opponent()


class AIConfig(BaseModel):
    """AI configuration"""
    strategy: AIStrategy = Field(default_factory=AIStrategy.default)
    use_batch_cache: bool = True
    flood_fill_max_iterations: int | None = Field(None, ge=0)
