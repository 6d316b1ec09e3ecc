"""Tests for Player implementations."""

from damka.core.enums import Color
from damka.core.position import Position
from damka.engine.difficulty import Difficulty, settings_for
from damka.game.interfaces import GamePhase
from damka.game.player import AIPlayer, HumanPlayer


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_request_move_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.request_move(Position.initial())  # should not raise

    def test_cancel_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.cancel()  # should not raise

    def test_to_move(self) -> None:
        pos = Position.initial()
        assert HumanPlayer(Color.WHITE).to_move(pos)
        assert not HumanPlayer(Color.BLACK).to_move(pos)


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Color.BLACK, Difficulty.HARD, "Damka AI")
        assert p.color == Color.BLACK
        assert p.name == "Damka AI"
        assert p.difficulty == Difficulty.HARD
        assert p.is_human is False

    def test_default_name_mentions_tier(self) -> None:
        p = AIPlayer(Color.WHITE, Difficulty.EASY)
        assert "Easy" in p.name

    def test_settings_follow_difficulty(self) -> None:
        p = AIPlayer(Color.BLACK, Difficulty.BEGINNER)
        assert p.settings == settings_for(Difficulty.BEGINNER)
        p.set_difficulty(Difficulty.EXPERT)
        assert p.difficulty == Difficulty.EXPERT
        assert p.settings.is_exact

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = AIPlayer(
            Color.BLACK,
            on_request_move=lambda pos: called_with.append(pos),
        )
        pos = Position.initial()
        p.request_move(pos)
        assert len(called_with) == 1
        assert called_with[0] is pos

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = AIPlayer(
            Color.BLACK,
            on_cancel=lambda: cancelled.append(True),
        )
        p.cancel()
        assert cancelled == [True]

    def test_no_callback_no_error(self) -> None:
        p = AIPlayer(Color.BLACK)
        p.request_move(Position.initial())
        p.cancel()


class TestGamePhase:
    def test_accepts_moves(self) -> None:
        assert GamePhase.AWAITING_MOVE.accepts_moves
        assert GamePhase.THINKING.accepts_moves
        assert not GamePhase.NOT_STARTED.accepts_moves
        assert not GamePhase.GAME_OVER.accepts_moves
