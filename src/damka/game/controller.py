"""GameController — the central orchestrator of a draughts game.

Coordinates: Players, MatchState, the rules engine and the search.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import datetime
import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from damka.core.codec import encode_state
from damka.core.enums import Color, GameEndReason, GameStatus
from damka.core.errors import IllegalMove, ImportRejected, MalformedState, NoMoveAvailable
from damka.core.game import Game
from damka.core.move import Move
from damka.core.notation.moves import parse_move
from damka.core.notation.pdn import export_pdn, replay_pdn, status_from_pdn
from damka.engine.difficulty import Difficulty, best_move
from damka.game.interfaces import DrawOffer, GamePhase, IGameController, IPlayer
from damka.game.state import MatchState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str, "MatchState"], None]  # move, notation, state
GameOverCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full draughts game: validates moves, switches turns,
    notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  AI results arrive via ``submit_move``, which
    the ``EngineWorker`` result signal should reach through a queued
    connection on the main thread.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = MatchState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        position = self._state.position
        return next((p for p in self._players.values() if p.to_move(position)), None)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        start_state: str | None = None,
    ) -> None:
        state = MatchState()
        state.setup(start_state)  # MalformedState propagates; nothing changed yet

        self._cancel_thinking()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._state = state

        if state.is_game_over:
            self._emit_game_over(state.status)
            return
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if not self._state.phase.accepts_moves:
            return False

        try:
            record = self._state.apply_move(move)
        except IllegalMove as exc:
            _LOGGER.info("Rejected move %s: %s", move.full_notation, exc)
            return False

        # Notify listeners
        self._emit_move(record.move, record.notation)

        if self._state.is_game_over:
            self._emit_game_over(self._state.status)
            return True

        self._prompt_current_player()
        return True

    def submit_notation(self, text: str) -> bool:
        """Submit a move written as ``32-28`` / ``28x19`` / ``37x28x17x8``."""
        try:
            move = parse_move(text, self._state.legal_moves())
        except IllegalMove as exc:
            _LOGGER.info("Rejected move text %r: %s", text, exc)
            return False
        return self.submit_move(move)

    def request_ai_move(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        *,
        rng: random.Random | None = None,
    ) -> Move | None:
        """Search synchronously for the side to move and play the result."""
        if self._state.is_game_over:
            return None
        try:
            result = best_move(self._state.position, difficulty, rng=rng)
        except NoMoveAvailable:
            return None
        if not self.submit_move(result.best_move):
            return None
        return result.best_move

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._cancel_thinking()
        self._state.resign(color)
        self._emit_game_over(self._state.status)

    def offer_draw(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        if self._state.draw_offer == DrawOffer.OFFERED:
            return
        self._state.draw_offer = DrawOffer.OFFERED
        self._state.draw_offer_by = color

    def accept_draw(self, color: Color) -> None:
        if self._state.draw_offer != DrawOffer.OFFERED:
            return
        if self._state.draw_offer_by in (None, color):
            return
        self._cancel_thinking()
        self._state.draw_offer = DrawOffer.ACCEPTED
        self._state.draw_offer_by = None
        self._state.set_draw(GameEndReason.AGREEMENT)
        self._emit_game_over(GameStatus.DRAW)

    def decline_draw(self) -> None:
        self._state.draw_offer = DrawOffer.DECLINED
        self._state.draw_offer_by = None

    def undo_move(self) -> bool:
        if not self._state.move_history:
            return False
        if self._state.end_reason in (GameEndReason.RESIGNATION, GameEndReason.AGREEMENT):
            return False

        # Cancel AI if it's thinking
        self._cancel_thinking()

        self._state.undo_last_move()
        self._emit_phase(self._state.phase)
        if not self._state.is_game_over:
            self._prompt_current_player()
        return True

    # ── Transcripts ──────────────────────────────────────────────────────

    def export_pdn(
        self,
        headers: Mapping[str, str] | None = None,
        date: datetime.date | None = None,
    ) -> str:
        """Current game as PDN, with player names and the match result."""
        all_headers: dict[str, str] = {}
        for color, header in ((Color.WHITE, "White"), (Color.BLACK, "Black")):
            player = self._players.get(color)
            if player is not None:
                all_headers[header] = player.name
        if headers:
            all_headers.update(headers)
        return export_pdn(self._state.game, all_headers, date, result=self._state.status)

    def import_pdn(self, text: str) -> bool:
        """Load a transcript; on any error the current game is kept."""
        scratch = Game.standard(self._state.game.rules)
        try:
            parsed = replay_pdn(scratch, text)
        except ImportRejected as exc:
            _LOGGER.warning("PDN import rejected (ply %s): %s", exc.ply, exc)
            return False

        state = MatchState()
        try:
            state.setup(encode_state(scratch.position.start_position()))
        except MalformedState as exc:
            _LOGGER.warning("PDN import rejected: %s", exc)
            return False
        for move in scratch.history:
            state.apply_move(move)

        declared = status_from_pdn(parsed.result_token)
        if not state.is_game_over and declared.is_terminal:
            reason = (
                GameEndReason.AGREEMENT
                if declared == GameStatus.DRAW
                else GameEndReason.RESIGNATION
            )
            state.set_result(declared, reason)

        self._cancel_thinking()
        self._state = state
        if state.is_game_over:
            self._emit_game_over(state.status)
            return True
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _cancel_thinking(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human and self._state.phase == GamePhase.THINKING:
            cp.cancel()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.position.copy())

    def _emit_move(self, move: Move, notation: str) -> None:
        for cb in self.events.on_move:
            cb(move, notation, self._state)

    def _emit_game_over(self, status: GameStatus) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(status)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
