"""Tests for MatchState — the game lifecycle state machine."""

import pytest

from damka.core.codec import STARTING_STATE, encode_state
from damka.core.enums import Color, GameEndReason, GameStatus
from damka.core.errors import IllegalMove, MalformedState
from damka.core.move import Move
from damka.core.notation import parse_move
from damka.game.interfaces import DrawOffer, GamePhase
from damka.game.state import MatchState

_OPENING = ("32-28", "19-23", "28x19", "14x23")


def _play(state: MatchState, *texts: str) -> None:
    for text in texts:
        state.apply_move(parse_move(text, state.legal_moves()))


class TestSetup:
    def test_initial_state(self) -> None:
        state = MatchState()
        assert state.phase == GamePhase.NOT_STARTED

    def test_setup(self) -> None:
        state = MatchState()
        state.setup()
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.side_to_move == Color.WHITE
        assert state.ply_count == 0
        assert state.start_snapshot == STARTING_STATE

    def test_setup_from_snapshot(self) -> None:
        state = MatchState()
        state.setup("." * 27 + "w" + "." * 5 + "b" + "." * 16 + "-B-3")
        assert state.side_to_move == Color.BLACK
        assert state.position.quiet_plies == 3

    def test_setup_rejects_malformed(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, "32-28")
        with pytest.raises(MalformedState):
            state.setup("garbage")
        assert state.ply_count == 1

    def test_setup_of_finished_position(self) -> None:
        state = MatchState()
        state.setup("." * 4 + "W" + "." * 4 + "b" + "." * 3 + "b" + "." * 36 + "-W-0")
        assert state.is_game_over
        assert state.status == GameStatus.BLACK_WINS


class TestMoves:
    def test_apply_records_history(self) -> None:
        state = MatchState()
        state.setup()
        record = state.apply_move(Move(32, 28))
        assert record.notation == "32-28"
        assert record.snapshot == encode_state(state.position)
        assert not record.was_capture
        assert state.ply_count == 1
        assert state.fullmove_display == 1

    def test_capture_flag(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, "32-28", "19-23")
        record = state.apply_move(Move(28, 19, captured=(23,)))
        assert record.was_capture
        assert record.notation == "28x19"

    def test_illegal_move_not_recorded(self) -> None:
        state = MatchState()
        state.setup()
        with pytest.raises(IllegalMove):
            state.apply_move(Move(32, 23))
        assert state.ply_count == 0

    def test_move_cancels_draw_offer(self) -> None:
        state = MatchState()
        state.setup()
        state.draw_offer = DrawOffer.OFFERED
        state.draw_offer_by = Color.WHITE
        _play(state, "32-28")
        assert state.draw_offer == DrawOffer.NONE
        assert state.draw_offer_by is None

    def test_game_over_after_last_capture(self) -> None:
        state = MatchState()
        state.setup("." * 22 + "b" + "." * 4 + "w" + "." * 22 + "-W-0")
        state.apply_move(Move(28, 19, captured=(23,)))
        assert state.is_game_over
        assert state.status == GameStatus.WHITE_WINS
        assert state.end_reason == GameEndReason.NO_PIECES
        assert state.legal_moves() == []


class TestUndo:
    def test_undo_restores_position(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, *_OPENING)
        before = state.snapshot_at(3)
        undone = state.undo_last_move()
        assert undone is not None and undone.notation == "14x23"
        assert encode_state(state.position) == before
        assert state.ply_count == 3
        assert len(state.game.history) == 3

    def test_undo_empty(self) -> None:
        state = MatchState()
        state.setup()
        assert state.undo_last_move() is None

    def test_undo_reopens_finished_game(self) -> None:
        state = MatchState()
        state.setup("." * 22 + "b" + "." * 4 + "w" + "." * 22 + "-W-0")
        state.apply_move(Move(28, 19, captured=(23,)))
        state.undo_last_move()
        assert not state.is_game_over
        assert state.phase == GamePhase.AWAITING_MOVE

    def test_undo_clears_resignation(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, "32-28")
        state.resign(Color.BLACK)
        state.undo_last_move()
        assert state.status == GameStatus.ONGOING


class TestResult:
    def test_resign(self) -> None:
        state = MatchState()
        state.setup()
        state.resign(Color.WHITE)
        assert state.is_game_over
        assert state.status == GameStatus.BLACK_WINS
        assert state.end_reason == GameEndReason.RESIGNATION

    def test_draw(self) -> None:
        state = MatchState()
        state.setup()
        state.set_draw()
        assert state.status == GameStatus.DRAW
        assert state.end_reason == GameEndReason.AGREEMENT

    def test_set_result_ignores_ongoing(self) -> None:
        state = MatchState()
        state.setup()
        state.set_result(GameStatus.ONGOING, GameEndReason.NONE)
        assert not state.is_game_over


class TestReplay:
    def test_snapshots(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, *_OPENING)
        assert state.snapshot_at(0) == STARTING_STATE
        assert state.snapshot_at(4) == encode_state(state.position)
        with pytest.raises(IndexError):
            state.snapshot_at(5)

    def test_navigation(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, *_OPENING)

        first = state.first()
        assert encode_state(first) == STARTING_STATE
        assert state.is_replaying
        assert state.displayed_ply == 0

        state.next()
        assert state.displayed_ply == 1
        assert state.displayed_position().board[28] is not None

        state.previous()
        state.previous()
        assert state.displayed_ply == 0

        state.last()
        assert not state.is_replaying
        assert state.displayed_ply == 4

    def test_replay_does_not_touch_live_game(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, *_OPENING)
        live = encode_state(state.position)
        state.go_to(2)
        assert encode_state(state.position) == live
        assert state.ply_count == 4

    def test_move_returns_to_live_view(self) -> None:
        state = MatchState()
        state.setup()
        _play(state, "32-28")
        state.first()
        _play(state, "19-23")
        assert not state.is_replaying
