"""Board - piece placement on the 50 playable squares of a 10x10 board."""

from __future__ import annotations

from damka.core.enums import Color, PieceKind
from damka.core.errors import InvalidSquare
from damka.core.piece import Piece
from damka.core.types import (
    BOARD_SIZE,
    SQUARE_COUNT,
    Square,
    is_playable,
    is_valid_square,
    make_square,
)

_KIND_COUNT = 2
_COLOR_COUNT = 2

# Men start on the first four rows of each side.
_BLACK_START = range(1, 21)
_WHITE_START = range(31, 51)


class Board:
    """Mutable board with incremental piece indexes.

    Squares are addressed by their standard number (1–50); bit ``sq`` of an
    index mask is set when the square is occupied.
    """

    __slots__ = ("_squares", "_kind_masks", "_color_masks")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * (SQUARE_COUNT + 1)
        # [color][kind-1] -> mask of occupied squares.
        self._kind_masks: list[list[int]] = [[0] * _KIND_COUNT for _ in range(_COLOR_COUNT)]
        # [color] -> mask of all squares occupied by that color.
        self._color_masks: list[int] = [0] * _COLOR_COUNT

    @staticmethod
    def _squares_from_mask(mask: int) -> list[Square]:
        squares: list[Square] = []
        while mask:
            lsb = mask & -mask
            squares.append(lsb.bit_length() - 1)
            mask ^= lsb
        return squares

    @staticmethod
    def _check(sq: Square) -> None:
        if not is_valid_square(sq):
            raise InvalidSquare(f"Square out of range: {sq!r}")

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        self._check(sq)
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._check(sq)
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        mask = 1 << sq

        if old_piece is not None:
            old_color = int(old_piece.color)
            self._kind_masks[old_color][int(old_piece.kind) - 1] &= ~mask
            self._color_masks[old_color] &= ~mask

        self._squares[sq] = piece

        if piece is None:
            return

        color = int(piece.color)
        self._kind_masks[color][int(piece.kind) - 1] |= mask
        self._color_masks[color] |= mask

    def piece_at(self, row: int, col: int) -> Piece | None:
        """Piece on ``(row, col)``; light cells raise :class:`InvalidSquare`."""
        return self._squares[make_square(row, col)]

    def set_piece_at(self, row: int, col: int, piece: Piece | None) -> None:
        self[make_square(row, col)] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, kind: PieceKind) -> list[Square]:
        """Squares occupied by *color*'s pieces of *kind*."""
        return self._squares_from_mask(self._kind_masks[int(color)][int(kind) - 1])

    def pieces_mask(self, color: Color, kind: PieceKind) -> int:
        return self._kind_masks[int(color)][int(kind) - 1]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in ascending order."""
        return self._squares_from_mask(self._color_masks[int(color)])

    def all_pieces_mask(self, color: Color) -> int:
        return self._color_masks[int(color)]

    def occupied_mask(self) -> int:
        return self._color_masks[0] | self._color_masks[1]

    def occupied(self) -> list[Square]:
        """Every occupied square, in ascending order."""
        return self._squares_from_mask(self.occupied_mask())

    def count(self, color: Color, kind: PieceKind | None = None) -> int:
        """Number of *color*'s pieces, optionally restricted to *kind*."""
        if kind is None:
            return self._color_masks[int(color)].bit_count()
        return self.pieces_mask(color, kind).bit_count()

    def items(self) -> list[tuple[Square, Piece]]:
        """``(square, piece)`` pairs for every occupied square."""
        return [(sq, p) for sq, p in enumerate(self._squares) if p is not None]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._kind_masks = [row.copy() for row in self._kind_masks]
        b._color_masks = self._color_masks.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * (SQUARE_COUNT + 1)
        self._kind_masks = [[0] * _KIND_COUNT for _ in range(_COLOR_COUNT)]
        self._color_masks = [0] * _COLOR_COUNT

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position: 20 men per side."""
        b = cls()
        for sq in _BLACK_START:
            b[sq] = Piece(Color.BLACK)
        for sq in _WHITE_START:
            b[sq] = Piece(Color.WHITE)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                if not is_playable(row, col):
                    cells.append(" ")
                    continue
                p = self._squares[make_square(row, col)]
                cells.append(str(p) if p else ".")
            first = make_square(row, 1 if row % 2 == 0 else 0)
            rows.append(f"{' '.join(cells)}  {first}-{first + 4}")
        return "\n".join(rows)
