"""Human and engine sides of a match."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from damka.core.enums import Color
from damka.engine.difficulty import Difficulty, DifficultySettings, settings_for
from damka.game.interfaces import IPlayer

if TYPE_CHECKING:
    from damka.core.position import Position

MoveRequest = Callable[["Position"], None]


class HumanPlayer(IPlayer):
    """A person at the board; their moves arrive through the controller."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"{color.name.title()} player"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """The search engine playing one side at a given difficulty.

    The player does not search itself. ``on_request_move`` receives the
    position to think about (typically forwarded to
    :meth:`~damka.engine.qt_bridge.EngineWorker.request_move`) and the
    chosen move is later submitted to the controller; ``on_cancel`` aborts
    a search that is no longer wanted.
    """

    __slots__ = ("_color", "_difficulty", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        difficulty: Difficulty = Difficulty.MEDIUM,
        name: str = "",
        on_request_move: MoveRequest | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._difficulty = difficulty
        self._name = name or f"Engine ({difficulty.label})"
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def settings(self) -> DifficultySettings:
        """Search budget and weakness of the current tier."""
        return settings_for(self._difficulty)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Change the tier; takes effect from the next :meth:`request_move`."""
        self._difficulty = difficulty

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
