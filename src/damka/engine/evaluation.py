"""Static position evaluation used by the search."""

from __future__ import annotations

from typing import Final

from damka.core.enums import Color, PieceKind
from damka.core.move_generator import rays
from damka.core.position import Position
from damka.core.types import ALL_SQUARES, BOARD_SIZE, SQUARE_COUNT, Square, coordinates, mirror

MAN_VALUE: Final = 100
KING_VALUE: Final = 350

_CENTER_BONUS: Final = 8
_ADVANCE_BONUS: Final = 4
_NEAR_PROMOTION_BONUS: Final = 15
_ABOUT_TO_PROMOTE_BONUS: Final = 25
_BACK_ROW_BONUS: Final = 12
_EDGE_PENALTY: Final = -3
_PROTECTED_BONUS: Final = 6
_FORMATION_BONUS: Final = 10
_KING_MOBILITY_BONUS: Final = 2

# Squares 17-19, 22-24, 27-29 and 32-34: the middle of the board.
_CENTER_SQUARES: Final = frozenset((17, 18, 19, 22, 23, 24, 27, 28, 29, 32, 33, 34))

# Ray indexes pointing backwards for each color (white moves up, so its
# back is d_row > 0).
_BACKWARD_DIRS: Final = ((2, 3), (0, 1))


def _man_table() -> tuple[int, ...]:
    """Positional bonus of a white man on each square; index 0 unused."""
    table = [0]
    for sq in ALL_SQUARES:
        row, col = coordinates(sq)
        advancement = BOARD_SIZE - 1 - row
        bonus = advancement * _ADVANCE_BONUS
        if advancement >= 7:
            bonus += _NEAR_PROMOTION_BONUS
        if advancement >= 8:
            bonus += _ABOUT_TO_PROMOTE_BONUS
        if row == BOARD_SIZE - 1:
            bonus += _BACK_ROW_BONUS
        table.append(bonus + _shared_bonus(sq, col))
    return tuple(table)


def _king_table() -> tuple[int, ...]:
    table = [0]
    for sq in ALL_SQUARES:
        table.append(_shared_bonus(sq, coordinates(sq)[1]))
    return tuple(table)


def _shared_bonus(sq: Square, col: int) -> int:
    bonus = 0
    if sq in _CENTER_SQUARES:
        bonus += _CENTER_BONUS
    if col in (0, BOARD_SIZE - 1):
        bonus += _EDGE_PENALTY
    return bonus


# Tables are written from white's side; black reads them through mirror().
_MAN_BONUS: Final = _man_table()
_KING_BONUS: Final = _king_table()

assert len(_MAN_BONUS) == SQUARE_COUNT + 1


class Evaluator:
    """Hand-tuned evaluation: material, advancement, shape, king activity.

    Scores are in centi-men from the side to move's point of view. Every
    term is mirror-symmetric, so the starting position scores exactly 0.
    """

    __slots__ = ()

    def evaluate(self, position: Position) -> int:
        score = self.evaluate_side(position, Color.WHITE) - self.evaluate_side(
            position, Color.BLACK
        )
        if position.side_to_move == Color.WHITE:
            return score
        return -score

    def evaluate_side(self, position: Position, color: Color) -> int:
        """Absolute score of *color*'s pieces, independent of who moves."""
        board = position.board
        own_mask = board.all_pieces_mask(color)
        occupied = board.occupied_mask()
        score = 0

        for sq in board.pieces(color, PieceKind.MAN):
            view = sq if color == Color.WHITE else mirror(sq)
            score += MAN_VALUE + _MAN_BONUS[view]
            score += self._shape_bonus(sq, color, own_mask)

        for sq in board.pieces(color, PieceKind.KING):
            view = sq if color == Color.WHITE else mirror(sq)
            score += KING_VALUE + _KING_BONUS[view]
            score += self._king_mobility(sq, occupied) * _KING_MOBILITY_BONUS

        return score

    @staticmethod
    def _shape_bonus(sq: Square, color: Color, own_mask: int) -> int:
        """Backed-up men are harder to attack; two backers form a triangle."""
        square_rays = rays(sq)
        backers = 0
        for d in _BACKWARD_DIRS[int(color)]:
            ray = square_rays[d]
            if ray and own_mask >> ray[0] & 1:
                backers += 1
        if backers == 0:
            return 0
        if backers == 2:
            return _PROTECTED_BONUS + _FORMATION_BONUS
        return _PROTECTED_BONUS

    @staticmethod
    def _king_mobility(sq: Square, occupied: int) -> int:
        reachable = 0
        for ray in rays(sq):
            for target in ray:
                if occupied >> target & 1:
                    break
                reachable += 1
        return reachable
