"""Legal move generation: mandatory capture, majority rule, flying kings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from damka.core.enums import Color, PieceKind
from damka.core.move import Move
from damka.core.types import (
    ALL_SQUARES,
    BOARD_SIZE,
    DIAGONALS,
    SQUARE_COUNT,
    Square,
    coordinates,
    is_playable,
    make_square,
)

if TYPE_CHECKING:
    from damka.core.board import Board
    from damka.core.piece import Piece
    from damka.core.position import Position


# -- Precomputed lookup tables ---------------------------------------------


def _build_rays() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """``rays[sq][d]``: squares from *sq* outwards along ``DIAGONALS[d]``."""
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = [()]
    for sq in ALL_SQUARES:
        row, col = coordinates(sq)
        square_rays: list[tuple[Square, ...]] = []
        for d_row, d_col in DIAGONALS:
            r = row + d_row
            c = col + d_col
            ray: list[Square] = []
            while is_playable(r, c):
                ray.append(make_square(r, c))
                r += d_row
                c += d_col
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_RAYS = _build_rays()

# Indexes into DIAGONALS that point "forward" for each color.
_FORWARD_DIRS: tuple[tuple[int, ...], tuple[int, ...]] = (
    tuple(i for i, (d_row, _) in enumerate(DIAGONALS) if d_row < 0),
    tuple(i for i, (d_row, _) in enumerate(DIAGONALS) if d_row > 0),
)

# Far row for each color: white promotes on row 0, black on row 9.
_PROMOTION_SQUARES: tuple[frozenset[Square], frozenset[Square]] = (
    frozenset(range(1, 6)),
    frozenset(range(SQUARE_COUNT - 4, SQUARE_COUNT + 1)),
)

assert len(_RAYS) == SQUARE_COUNT + 1 and BOARD_SIZE == 10


def rays(sq: Square) -> tuple[tuple[Square, ...], ...]:
    """The four diagonal rays leaving *sq*."""
    return _RAYS[sq]


def is_promotion_square(sq: Square, color: Color) -> bool:
    """Whether a man of *color* ending on *sq* becomes a king."""
    return sq in _PROMOTION_SQUARES[int(color)]


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Jumped pieces stay on the board until the chain is committed, so they
    block further movement and can never be captured twice. The moving
    piece's own origin counts as empty during its chain.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board: Board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves for *color* (default: the side to move)."""
        side = self._pos.side_to_move if color is None else color
        captures = self.generate_captures(side)
        if captures:
            return captures
        return self.generate_quiet_moves(side)

    def generate_captures(self, color: Color | None = None) -> list[Move]:
        """Maximal capture chains that satisfy the majority rule."""
        side = self._pos.side_to_move if color is None else color
        board = self._board
        chains: list[Move] = []
        for sq in board.all_pieces(side):
            piece = board[sq]
            assert piece is not None
            self._gen_chains(sq, piece, chains)

        if not chains:
            return []

        best = max(move.capture_count for move in chains)
        legal: list[Move] = []
        seen: set[tuple[Square, Square, frozenset[Square]]] = set()
        for move in chains:
            if move.capture_count != best:
                continue
            key = (move.from_sq, move.to_sq, frozenset(move.captured))
            if key in seen:
                continue
            seen.add(key)
            legal.append(move)
        return legal

    def generate_quiet_moves(self, color: Color | None = None) -> list[Move]:
        """Non-capturing moves, ignoring whether a capture is mandatory."""
        side = self._pos.side_to_move if color is None else color
        board = self._board
        moves: list[Move] = []

        for sq in board.pieces(side, PieceKind.MAN):
            square_rays = _RAYS[sq]
            for d in _FORWARD_DIRS[int(side)]:
                ray = square_rays[d]
                if ray and board[ray[0]] is None:
                    to_sq = ray[0]
                    moves.append(
                        Move(
                            sq,
                            to_sq,
                            promotion=is_promotion_square(to_sq, side),
                            path=(sq, to_sq),
                        )
                    )

        for sq in board.pieces(side, PieceKind.KING):
            for ray in _RAYS[sq]:
                for to_sq in ray:
                    if board[to_sq] is not None:
                        break
                    moves.append(Move(sq, to_sq, path=(sq, to_sq)))

        return moves

    def has_capture(self, color: Color | None = None) -> bool:
        """Whether *color* has at least one capture available."""
        side = self._pos.side_to_move if color is None else color
        board = self._board
        for sq in board.all_pieces(side):
            piece = board[sq]
            assert piece is not None
            if self._first_jumps(sq, sq, piece, ()):
                return True
        return False

    def has_legal_moves(self, color: Color | None = None) -> bool:
        side = self._pos.side_to_move if color is None else color
        if self.has_capture(side):
            return True
        board = self._board
        for sq in board.pieces(side, PieceKind.MAN):
            for d in _FORWARD_DIRS[int(side)]:
                ray = _RAYS[sq][d]
                if ray and board[ray[0]] is None:
                    return True
        for sq in board.pieces(side, PieceKind.KING):
            for ray in _RAYS[sq]:
                if ray and board[ray[0]] is None:
                    return True
        return False

    # -- Capture chains (private) -------------------------------------------

    def _gen_chains(self, origin: Square, piece: Piece, out: list[Move]) -> None:
        path: list[Square] = [origin]
        captured: list[Square] = []
        self._extend_chain(origin, origin, piece, path, captured, out)

    def _extend_chain(
        self,
        origin: Square,
        current: Square,
        piece: Piece,
        path: list[Square],
        captured: list[Square],
        out: list[Move],
    ) -> None:
        jumps = self._first_jumps(origin, current, piece, captured)
        if not jumps:
            if captured:
                promotion = not piece.is_king and is_promotion_square(current, piece.color)
                out.append(
                    Move(
                        origin,
                        current,
                        captured=tuple(captured),
                        promotion=promotion,
                        path=tuple(path),
                    )
                )
            return

        for target, landing in jumps:
            path.append(landing)
            captured.append(target)
            self._extend_chain(origin, landing, piece, path, captured, out)
            captured.pop()
            path.pop()

    def _first_jumps(
        self,
        origin: Square,
        current: Square,
        piece: Piece,
        captured: list[Square] | tuple[Square, ...],
    ) -> list[tuple[Square, Square]]:
        """Single jumps ``(jumped, landing)`` available from *current*."""
        board = self._board
        color = piece.color
        jumps: list[tuple[Square, Square]] = []

        for ray in _RAYS[current]:
            if piece.is_king:
                idx = 0
                n = len(ray)
                while idx < n and (ray[idx] == origin or board[ray[idx]] is None):
                    idx += 1
                if idx >= n - 1:
                    continue
                target = ray[idx]
                victim = board[target]
                assert victim is not None
                if victim.color == color or target in captured:
                    continue
                idx += 1
                while idx < n and (ray[idx] == origin or board[ray[idx]] is None):
                    jumps.append((target, ray[idx]))
                    idx += 1
                continue

            if len(ray) < 2:
                continue
            target, landing = ray[0], ray[1]
            victim = board[target]
            if victim is None or victim.color == color or target in captured:
                continue
            if landing == origin or board[landing] is None:
                jumps.append((target, landing))

        return jumps
