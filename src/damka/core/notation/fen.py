"""PDN FEN parsing and serialization.

Draughts FEN lists the side to move and the squares of each color, with
``K`` marking kings: ``W:W31,32,K45:B1,2,3``. Ranges such as ``1-20`` are
accepted on input.
"""

from __future__ import annotations

from damka.core.board import Board
from damka.core.enums import Color, PieceKind
from damka.core.errors import InvalidSquare, MalformedState
from damka.core.move_generator import is_promotion_square
from damka.core.piece import Piece
from damka.core.position import Position
from damka.core.types import Square, parse_square

_COLOR_CHARS: dict[Color, str] = {Color.WHITE: "W", Color.BLACK: "B"}
_CHAR_COLORS: dict[str, Color] = {v: k for k, v in _COLOR_CHARS.items()}
_KING_PREFIX = "K"

STARTING_FEN = (
    "W:W" + ",".join(str(sq) for sq in range(31, 51))
    + ":B" + ",".join(str(sq) for sq in range(1, 21))
)


def _parse_squares(item: str) -> list[Square]:
    if "-" in item:
        first, _, last = item.partition("-")
        start, end = parse_square(first), parse_square(last)
        if start > end:
            raise MalformedState(f"Invalid FEN square range: {item!r}")
        return list(range(start, end + 1))
    return [parse_square(item)]


def position_from_fen(fen: str) -> Position:
    """Parse a PDN FEN string into a :class:`Position`."""
    text = fen.strip().strip('"').rstrip(".")
    parts = [part.strip() for part in text.split(":")]
    if len(parts) < 1 or parts[0] not in _CHAR_COLORS:
        raise MalformedState(f"Invalid FEN side-to-move field: {fen!r}")
    side = _CHAR_COLORS[parts[0]]

    board = Board()
    seen_colors: set[Color] = set()
    for field in parts[1:]:
        if not field:
            continue
        color = _CHAR_COLORS.get(field[0])
        if color is None or color in seen_colors:
            raise MalformedState(f"Invalid FEN piece field: {field!r}")
        seen_colors.add(color)

        for raw_item in field[1:].split(","):
            item = raw_item.strip()
            if not item:
                continue
            kind = PieceKind.MAN
            if item.startswith(_KING_PREFIX):
                kind = PieceKind.KING
                item = item[1:]
            try:
                squares = _parse_squares(item)
            except InvalidSquare as exc:
                raise MalformedState(f"Invalid FEN square {raw_item!r}: {exc}") from exc
            for sq in squares:
                if board[sq] is not None:
                    raise MalformedState(f"Square {sq} listed twice in FEN: {fen!r}")
                if kind == PieceKind.MAN and is_promotion_square(sq, color):
                    raise MalformedState(f"A {color} man cannot stand on {sq}")
                board[sq] = Piece(color, kind)

    return Position(board, side)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to PDN FEN (no ranges)."""
    fields = [_COLOR_CHARS[pos.side_to_move]]
    for color in (Color.WHITE, Color.BLACK):
        items: list[str] = []
        for sq in pos.board.all_pieces(color):
            piece = pos.board[sq]
            assert piece is not None
            items.append(f"{_KING_PREFIX}{sq}" if piece.is_king else str(sq))
        fields.append(_COLOR_CHARS[color] + ",".join(items))
    return ":".join(fields)
