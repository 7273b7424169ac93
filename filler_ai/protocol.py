"""
Text protocol spoken with the Filler game engine.

Input, once per game::

    $$$ exec p1 : [path/to/player]

Then once per turn::

    Anfield 20 15:
        01234567890123456789
    000 ....................
    ...
    Piece 4 1:
    .**.

Board symbols are ``.`` (empty), ``@``/``a`` (player 1 territory / last
move) and ``$``/``s`` (player 2). Piece cells are ``.`` for empty and
filled otherwise. Each turn is answered with one ``X Y`` line.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import TextIO

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ProtocolError
from .models import Board, Placement, PlayerSlot, Shape, TurnState

logger = logging.getLogger(__name__)

PLAYER_LINE_PREFIX = "$$$"
BOARD_HEADER = "Anfield"
PIECE_HEADER = "Piece"

_PLAYER_RE = re.compile(r"\bp(\d+)\b")


class Move(BaseModel):
    """A move answer: the anchor of the chosen placement."""
    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0)
    y: int = Field(ge=0)

    @classmethod
    def fallback(cls) -> Move:
        """Answer sent when no legal placement exists."""
        return cls(x=0, y=0)

    @classmethod
    def from_placement(cls, placement: Placement | None) -> Move:
        if placement is None:
            return cls.fallback()
        return cls(x=placement.x, y=placement.y)

    def format(self) -> str:
        return f"{self.x} {self.y}"


def parse_player_line(line: str) -> PlayerSlot:
    """Extract the player slot from ``$$$ exec pN : [path]``.

    Raises:
        ProtocolError: If no ``pN`` token is present or N is not 1 or 2.
    """
    match = _PLAYER_RE.search(line)
    if match is None:
        raise ProtocolError("Player line missing player number", line=line)
    try:
        return PlayerSlot(int(match.group(1)))
    except ValueError:
        raise ProtocolError(f"Unsupported player number: {match.group(1)}", line=line) from None


def parse_dimensions(line: str, keyword: str) -> tuple[int, int]:
    """Parse ``<keyword> W H:`` into ``(W, H)``.

    Raises:
        ProtocolError: On a wrong keyword or non-numeric dimensions.
    """
    parts = line.split()
    if len(parts) < 3 or parts[0] != keyword:
        raise ProtocolError(f"Invalid {keyword} header", line=line)
    try:
        width = int(parts[1])
        height = int(parts[2].rstrip(":"))
    except ValueError:
        raise ProtocolError(f"Invalid {keyword} dimensions", line=line) from None
    if width < 0 or height < 0:
        raise ProtocolError(f"Negative {keyword} dimensions", line=line)
    return width, height


def parse_board_row(line: str, width: int) -> str:
    """Return the ``width`` cell symbols of a ``NNN <cells>`` row.

    Raises:
        ProtocolError: If the row has no index prefix or too few cells.
    """
    stripped = line.strip()
    _, sep, content = stripped.partition(" ")
    if not sep:
        raise ProtocolError("Board row missing row index", line=line)
    row = content[:width]
    if len(row) != width:
        raise ProtocolError(f"Board row has {len(row)} cells, expected {width}", line=line)
    return row


def parse_piece_row(line: str, width: int) -> str:
    row = line.rstrip("\r\n")[:width]
    if len(row) != width:
        raise ProtocolError(f"Piece row has {len(row)} cells, expected {width}", line=line)
    return row


class ProtocolReader:
    """Reads the player line and successive turns from the engine stream.

    Lines that are neither a player line nor a board header are skipped
    between turns, so engine chatter such as move echoes is tolerated.
    """

    def __init__(self, stream: TextIO, player: PlayerSlot | None = None):
        self.stream = stream
        self.player = player
        self.turns_read = 0

    def _readline(self, what: str) -> str:
        line = self.stream.readline()
        if line == "":
            raise ProtocolError(f"Unexpected end of input while reading {what}")
        return line

    def read_player(self) -> PlayerSlot:
        self.player = parse_player_line(self._readline("player line"))
        logger.info(f"Playing as player {self.player.value}")
        return self.player

    def _next_header(self) -> str | None:
        while True:
            line = self.stream.readline()
            if line == "":
                return None
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(PLAYER_LINE_PREFIX):
                self.player = parse_player_line(stripped)
                logger.info(f"Playing as player {self.player.value}")
                continue
            if stripped.startswith(BOARD_HEADER):
                return stripped
            logger.debug(f"Skipping engine line: {stripped}")

    def read_turn(self) -> TurnState | None:
        """Read the next turn, or return ``None`` at a clean end of input.

        Raises:
            ProtocolError: If a turn is truncated or malformed, or no
                player line was seen before the first board.
        """
        header = self._next_header()
        if header is None:
            return None
        if self.player is None:
            raise ProtocolError("Board received before player line", line=header)

        width, height = parse_dimensions(header, BOARD_HEADER)
        self._readline("column indices")
        rows = [parse_board_row(self._readline("board row"), width) for _ in range(height)]

        piece_width, piece_height = parse_dimensions(self._readline("piece header"), PIECE_HEADER)
        piece_rows = [
            parse_piece_row(self._readline("piece row"), piece_width)
            for _ in range(piece_height)
        ]

        try:
            board = Board.from_symbols(rows, self.player)
            piece = Shape(
                width=piece_width,
                height=piece_height,
                mask=tuple(tuple(ch != "." for ch in row) for row in piece_rows),
            )
            turn = TurnState(player=self.player, board=board, piece=piece)
        except PydanticValidationError as exc:
            raise ProtocolError(f"Invalid turn data: {exc.error_count()} errors", line=header) from exc

        self.turns_read += 1
        return turn

    def __iter__(self) -> Iterator[TurnState]:
        while True:
            turn = self.read_turn()
            if turn is None:
                return
            yield turn


def write_move(stream: TextIO, move: Move) -> None:
    """Write one answer line and flush; the engine blocks until it arrives."""
    stream.write(move.format() + "\n")
    stream.flush()
