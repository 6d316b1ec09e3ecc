"""Game: the authoritative rules engine a caller plays through."""

from __future__ import annotations

from damka.core.board import Board
from damka.core.enums import Color, GameEndReason, GameStatus
from damka.core.errors import IllegalMove
from damka.core.move import Move
from damka.core.move_generator import MoveGenerator
from damka.core.position import Position
from damka.core.rules import FMJD_RULES, RuleConfig, Rules


class Game:
    """Owns one :class:`Position` and only lets legal moves through.

    Every mutation re-derives the legal move set first, so a rejected move
    leaves the game exactly as it was.
    """

    __slots__ = ("_position", "_rules")

    def __init__(self, position: Position | None = None, rules: RuleConfig = FMJD_RULES) -> None:
        self._position = position if position is not None else Position.initial()
        self._rules = rules

    @classmethod
    def standard(cls, rules: RuleConfig = FMJD_RULES) -> Game:
        """A fresh game from the standard starting position."""
        return cls(Position.initial(), rules)

    def new_game(self) -> None:
        """Reset to the standard starting position, clearing history."""
        self._position = Position.initial()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        """The live position. Treat as read-only; mutate via :meth:`apply_move`."""
        return self._position

    @property
    def rules(self) -> RuleConfig:
        return self._rules

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._position.history)

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move; empty once the game is over."""
        if Rules.is_quiet_move_draw(self._position, self._rules):
            return []
        return MoveGenerator(self._position).generate_legal_moves()

    def find_legal(self, move: Move) -> Move | None:
        """The legal move equivalent to *move*, or ``None``."""
        legal = self.legal_moves()
        for candidate in legal:
            if candidate == move:
                return candidate
        for candidate in legal:
            if candidate.same_effect(move):
                return candidate
        return None

    def is_legal(self, move: Move) -> bool:
        return self.find_legal(move) is not None

    def status(self) -> GameStatus:
        return Rules.game_status(self._position, self._rules)

    def end_reason(self) -> GameEndReason:
        return Rules.end_reason(self._position, self._rules)

    def is_over(self) -> bool:
        return self.status().is_terminal

    def current_side(self) -> Color:
        return self._position.side_to_move

    def board_snapshot(self) -> Board:
        """A copy of the board; changing it does not affect the game."""
        return self._position.board.copy()

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Move:
        """Play *move* and return the canonical legal move that was applied.

        Raises :class:`IllegalMove` when *move* is not currently legal or
        the game is already over.
        """
        if self.is_over():
            raise IllegalMove(f"Game is over; cannot play {move}")
        legal = self.find_legal(move)
        if legal is None:
            raise IllegalMove(f"Illegal move: {move.full_notation}")
        self._position.make_move(legal)
        return legal

    def restore(self, position: Position) -> None:
        """Replace the game state with a copy of *position*."""
        self._position = position.copy()

    def copy(self) -> Game:
        return Game(self._position.copy(), self._rules)

    def __repr__(self) -> str:
        return (
            f"Game(side={self.current_side()}, ply={self._position.ply}, "
            f"status={self.status().name})"
        )
