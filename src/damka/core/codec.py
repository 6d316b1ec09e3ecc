"""Compact state snapshots used for replay navigation and persistence.

Format: one character per square 1..50 (``.`` empty, ``w``/``W`` white
man/king, ``b``/``B`` black man/king), then ``-``, the side to move
(``W``/``B``), ``-`` and the quiet-ply counter, e.g.::

    bbbbbbbbbbbbbbbbbbbb..........wwwwwwwwwwwwwwwwwwww-W-0

Move history is not part of a snapshot.
"""

from __future__ import annotations

from typing import Final

from damka.core.board import Board
from damka.core.enums import Color
from damka.core.errors import MalformedState
from damka.core.move_generator import is_promotion_square
from damka.core.piece import Piece
from damka.core.position import Position
from damka.core.types import ALL_SQUARES, SQUARE_COUNT

EMPTY_CHAR: Final = "."
FIELD_SEPARATOR: Final = "-"

_SIDE_CHARS: Final[dict[Color, str]] = {Color.WHITE: "W", Color.BLACK: "B"}
_CHAR_SIDES: Final[dict[str, Color]] = {v: k for k, v in _SIDE_CHARS.items()}

STARTING_STATE: Final = "b" * 20 + EMPTY_CHAR * 10 + "w" * 20 + "-W-0"


def encode_state(position: Position) -> str:
    """Serialize *position* to a snapshot string."""
    board = position.board
    cells = "".join(
        EMPTY_CHAR if (piece := board[sq]) is None else str(piece) for sq in ALL_SQUARES
    )
    side = _SIDE_CHARS[position.side_to_move]
    return FIELD_SEPARATOR.join((cells, side, str(position.quiet_plies)))


def decode_state(text: str) -> Position:
    """Parse a snapshot produced by :func:`encode_state`.

    Raises :class:`MalformedState` on any structural error.
    """
    if not isinstance(text, str):
        raise MalformedState(f"Snapshot must be a string, got {type(text).__name__}")

    parts = text.strip().split(FIELD_SEPARATOR)
    if len(parts) != 3:
        raise MalformedState(f"Snapshot must have 3 fields, got {len(parts)}: {text!r}")
    cells, side_str, counter_str = parts

    if len(cells) != SQUARE_COUNT:
        raise MalformedState(f"Expected {SQUARE_COUNT} squares, got {len(cells)}")

    board = Board()
    for sq, char in zip(ALL_SQUARES, cells):
        if char == EMPTY_CHAR:
            continue
        try:
            piece = Piece.from_char(char)
        except ValueError:
            raise MalformedState(f"Invalid square character {char!r} at {sq}") from None
        if not piece.is_king and is_promotion_square(sq, piece.color):
            raise MalformedState(f"A {piece.color} man cannot stand on {sq}")
        board[sq] = piece

    side = _CHAR_SIDES.get(side_str)
    if side is None:
        raise MalformedState(f"Invalid side to move: {side_str!r}")

    if not (counter_str.isascii() and counter_str.isdigit()):
        raise MalformedState(f"Invalid quiet-ply counter: {counter_str!r}")

    return Position(board=board, side_to_move=side, quiet_plies=int(counter_str))
