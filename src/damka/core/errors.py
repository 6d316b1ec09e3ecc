"""Exception hierarchy for the draughts core.

Every error is recoverable by the caller; none leaves a game half-mutated.
"""

from __future__ import annotations


class DraughtsError(Exception):
    """Base class for all domain errors raised by :mod:`damka`."""


class InvalidSquare(DraughtsError, ValueError):
    """A square reference outside the 50 playable cells."""


class IllegalMove(DraughtsError, ValueError):
    """A move that is not in the current legal set."""


class MalformedState(DraughtsError, ValueError):
    """A serialized position that cannot be decoded."""


class ImportRejected(DraughtsError, ValueError):
    """A transcript that does not fully resolve against the rules."""

    def __init__(self, message: str, *, token: str | None = None, ply: int | None = None) -> None:
        super().__init__(message)
        self.token = token
        self.ply = ply


class NoMoveAvailable(DraughtsError, RuntimeError):
    """Search was invoked on a position without legal moves."""
