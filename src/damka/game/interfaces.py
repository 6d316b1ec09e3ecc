"""Contracts between the match controller and the sides that play in it.

The controller only talks to :class:`IPlayer`; whether a side is a person
at the board or the search engine behind a worker thread is the player's
own business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from damka.core.enums import Color

if TYPE_CHECKING:
    from damka.core.move import Move
    from damka.core.position import Position


# ── Match phases ─────────────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Where a match stands between two moves."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human side is to move
    THINKING = auto()  # the engine side is searching
    GAME_OVER = auto()

    @property
    def accepts_moves(self) -> bool:
        return self in (GamePhase.AWAITING_MOVE, GamePhase.THINKING)


class DrawOffer(IntEnum):
    NONE = 0
    OFFERED = auto()
    ACCEPTED = auto()
    DECLINED = auto()


# ── Sides and controller ────────────────────────────────────────────────────


class IPlayer(ABC):
    """One side of a draughts match."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    def to_move(self, position: Position) -> bool:
        """Whether this side has the move in *position*."""
        return position.side_to_move == self.color

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Called when it is this side's turn.

        *position* is a private copy; the answer comes back later through
        :meth:`IGameController.submit_move`.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Drop a pending answer to :meth:`request_move`."""


class IGameController(ABC):
    """Drives a single match between two :class:`IPlayer` sides."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        start_state: str | None = None,
    ) -> None:
        """Start a match, from the standard setup or an encoded snapshot."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Play *move* for the side to move; False when it is not legal."""

    @abstractmethod
    def submit_notation(self, text: str) -> bool:
        """Like :meth:`submit_move`, for ``32-28`` / ``28x19`` text."""

    @abstractmethod
    def resign(self, color: Color) -> None: ...

    @abstractmethod
    def offer_draw(self, color: Color) -> None: ...

    @abstractmethod
    def accept_draw(self, color: Color) -> None:
        """Only the side that did not make the offer can accept it."""

    @abstractmethod
    def decline_draw(self) -> None: ...

    @abstractmethod
    def undo_move(self) -> bool:
        """Take back the last ply; False when there is nothing to take back."""

    @abstractmethod
    def export_pdn(self) -> str: ...

    @abstractmethod
    def import_pdn(self, text: str) -> bool:
        """Replace the match with a transcript; False keeps the current one."""
