"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from damka.core.move import Move
    from damka.core.position import Position

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 4
    time_limit_ms: int | None = 2000


@dataclass(slots=True, frozen=True)
class ScoredMove:
    """A root move with its search score (side to move's view)."""

    move: Move
    score: int


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move
    score: int
    depth: int
    nodes: int
    elapsed_ms: int
    root_scores: tuple[ScoredMove, ...] = ()


class IEngine(Protocol):
    """Protocol for draughts engines used by the game layer."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
