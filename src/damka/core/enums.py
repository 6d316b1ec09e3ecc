"""Core enumerations for the draughts domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color. White moves first from the bottom of the board."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Men promote to kings; nothing else."""

    MAN = 1
    KING = 2


class GameStatus(IntEnum):
    """Derived classification of a position."""

    ONGOING = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @property
    def is_terminal(self) -> bool:
        return self != GameStatus.ONGOING

    @classmethod
    def win_for(cls, color: Color) -> GameStatus:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS


class GameEndReason(IntEnum):
    """Why a game ended."""

    NONE = 0
    NO_PIECES = auto()
    NO_MOVES = auto()
    QUIET_MOVE_LIMIT = auto()
    RESIGNATION = auto()
    AGREEMENT = auto()
