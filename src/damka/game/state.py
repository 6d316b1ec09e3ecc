"""Match state machine: phase, move history, snapshots and replay view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from damka.core.codec import STARTING_STATE, decode_state, encode_state
from damka.core.enums import Color, GameEndReason, GameStatus
from damka.core.game import Game
from damka.core.notation.moves import move_to_text
from damka.game.interfaces import DrawOffer, GamePhase

if TYPE_CHECKING:
    from damka.core.move import Move
    from damka.core.position import Position


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    snapshot: str  # encoded state after the move
    was_capture: bool = False
    was_promotion: bool = False


@dataclass
class MatchState:
    """Manages game lifecycle: phase, result, move history, draw offers.

    Every ply stores an encoded snapshot, so stepping back and forth
    through the game only decodes snapshots. The replay view never
    touches the live :class:`Game`.

    This is a pure data/logic class — no threading, no UI.
    """

    game: Game = field(default_factory=Game, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    draw_offer: DrawOffer = field(default=DrawOffer.NONE, init=False)
    draw_offer_by: Color | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_snapshot: str = field(default=STARTING_STATE, init=False)
    replay_index: int | None = field(default=None, init=False)
    _status_override: GameStatus | None = field(default=None, init=False, repr=False)
    _reason_override: GameEndReason = field(default=GameEndReason.NONE, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, start_state: str | None = None) -> None:
        """Initialise (or reset) the game, optionally from a snapshot.

        Raises :class:`~damka.core.errors.MalformedState` for a bad
        snapshot, leaving the state as it was.
        """
        snapshot = start_state or STARTING_STATE
        position = decode_state(snapshot)
        self.start_snapshot = encode_state(position)
        self.game = Game(position)
        self.draw_offer = DrawOffer.NONE
        self.draw_offer_by = None
        self.move_history.clear()
        self.replay_index = None
        self._status_override = None
        self._reason_override = GameEndReason.NONE
        self.phase = GamePhase.GAME_OVER if self.game.is_over() else GamePhase.AWAITING_MOVE

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* through the rules engine and record it.

        Raises :class:`~damka.core.errors.IllegalMove` when the move is not
        legal; nothing is recorded then.
        """
        legal_before = self.game.legal_moves()
        applied = self.game.apply_move(move)

        record = MoveRecord(
            move=applied,
            notation=move_to_text(applied, legal_before),
            snapshot=encode_state(self.game.position),
            was_capture=applied.is_capture,
            was_promotion=applied.promotion,
        )
        self.move_history.append(record)
        self.replay_index = None

        self._check_game_over()
        self.draw_offer = DrawOffer.NONE  # any move cancels a pending offer
        self.draw_offer_by = None

        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty.

        The live game is rebuilt from the start snapshot so that its
        history stays complete.
        """
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self._rebuild_game()

        self._status_override = None
        self._reason_override = GameEndReason.NONE
        self.replay_index = None
        self.phase = GamePhase.GAME_OVER if self.game.is_over() else GamePhase.AWAITING_MOVE
        return record.move

    def _rebuild_game(self) -> None:
        position = decode_state(self.start_snapshot)
        for record in self.move_history:
            position.make_move(record.move)
        assert encode_state(position) == self.snapshot_at(self.ply_count)
        self.game = Game(position, self.game.rules)

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._status_override = GameStatus.win_for(color.opposite)
        self._reason_override = GameEndReason.RESIGNATION
        self.phase = GamePhase.GAME_OVER

    def set_draw(self, reason: GameEndReason = GameEndReason.AGREEMENT) -> None:
        self._status_override = GameStatus.DRAW
        self._reason_override = reason
        self.phase = GamePhase.GAME_OVER

    def set_result(self, status: GameStatus, reason: GameEndReason) -> None:
        """Record an outcome decided outside the rules (e.g. an imported result)."""
        if not status.is_terminal:
            return
        self._status_override = status
        self._reason_override = reason
        self.phase = GamePhase.GAME_OVER

    # ── Replay navigation ────────────────────────────────────────────────

    def snapshot_at(self, ply: int) -> str:
        """Encoded state after *ply* moves (0 = the starting position)."""
        if not 0 <= ply <= self.ply_count:
            raise IndexError(f"Ply {ply} out of range 0..{self.ply_count}")
        if ply == 0:
            return self.start_snapshot
        return self.move_history[ply - 1].snapshot

    def position_at(self, ply: int) -> Position:
        return decode_state(self.snapshot_at(ply))

    @property
    def is_replaying(self) -> bool:
        return self.replay_index is not None

    @property
    def displayed_ply(self) -> int:
        return self.ply_count if self.replay_index is None else self.replay_index

    def displayed_position(self) -> Position:
        """Position the viewer is looking at (live or replayed)."""
        if self.replay_index is None:
            return self.game.position.copy()
        return self.position_at(self.replay_index)

    def go_to(self, ply: int) -> Position:
        """Show the position after *ply* moves; the last ply means live."""
        position = self.position_at(ply)
        self.replay_index = None if ply == self.ply_count else ply
        return position

    def first(self) -> Position:
        return self.go_to(0)

    def previous(self) -> Position:
        return self.go_to(max(0, self.displayed_ply - 1))

    def next(self) -> Position:
        return self.go_to(min(self.ply_count, self.displayed_ply + 1))

    def last(self) -> Position:
        return self.go_to(self.ply_count)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self.game.position

    @property
    def status(self) -> GameStatus:
        if self._status_override is not None:
            return self._status_override
        return self.game.status()

    @property
    def end_reason(self) -> GameEndReason:
        if self._status_override is not None:
            return self._reason_override
        return self.game.end_reason()

    @property
    def side_to_move(self) -> Color:
        return self.game.current_side()

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of plies played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves(self) -> list[Move]:
        """Legal moves in the live position (empty once the game is over)."""
        if self.is_game_over:
            return []
        return self.game.legal_moves()

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        if self.game.is_over():
            self.phase = GamePhase.GAME_OVER
