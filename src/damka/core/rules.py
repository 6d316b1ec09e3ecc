"""High-level draughts rules: win, loss and draw detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from damka.core.enums import GameEndReason, GameStatus
from damka.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from damka.core.move import Move
    from damka.core.position import Position


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Tunable rule parameters.

    ``draw_ply_limit`` is the number of consecutive plies without a capture
    or promotion after which the game is drawn.
    """

    draw_ply_limit: int = 25

    def __post_init__(self) -> None:
        if self.draw_ply_limit < 1:
            raise ValueError("draw_ply_limit must be positive")


FMJD_RULES = RuleConfig()


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Product policy:
    # - The side to move loses when it has no legal move (or no pieces).
    # - Automatic draw after ``draw_ply_limit`` quiet plies.
    # - No repetition rule.

    @staticmethod
    def is_pivotal(move: Move) -> bool:
        """Whether *move* resets the quiet-ply counter."""
        return move.is_capture or move.promotion

    @staticmethod
    def has_no_moves(position: Position) -> bool:
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def is_quiet_move_draw(position: Position, rules: RuleConfig = FMJD_RULES) -> bool:
        return position.quiet_plies >= rules.draw_ply_limit

    @staticmethod
    def game_status(position: Position, rules: RuleConfig = FMJD_RULES) -> GameStatus:
        """Determine the current game status."""
        if Rules.has_no_moves(position):
            return GameStatus.win_for(position.side_to_move.opposite)
        if Rules.is_quiet_move_draw(position, rules):
            return GameStatus.DRAW
        return GameStatus.ONGOING

    @staticmethod
    def end_reason(position: Position, rules: RuleConfig = FMJD_RULES) -> GameEndReason:
        """Why :meth:`game_status` is terminal, or ``NONE``."""
        if Rules.has_no_moves(position):
            if position.board.count(position.side_to_move) == 0:
                return GameEndReason.NO_PIECES
            return GameEndReason.NO_MOVES
        if Rules.is_quiet_move_draw(position, rules):
            return GameEndReason.QUIET_MOVE_LIMIT
        return GameEndReason.NONE
