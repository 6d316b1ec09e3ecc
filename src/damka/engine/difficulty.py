"""Difficulty tiers and the machine-move entry point."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from damka.engine.python_search import PythonSearchEngine
from damka.engine.search import CancelCheck, ScoredMove, SearchLimits, SearchResult

if TYPE_CHECKING:
    from damka.core.move import Move
    from damka.core.position import Position

_LOGGER = logging.getLogger(__name__)


class Difficulty(IntEnum):
    BEGINNER = 0
    EASY = 1
    MEDIUM = 2
    HARD = 3
    EXPERT = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(slots=True, frozen=True)
class DifficultySettings:
    """Search budget and deliberate weakness of one tier.

    ``randomness`` is the probability of picking among the ``top_moves``
    best moves instead of the best one; ``evaluation_noise`` is the
    half-width of uniform noise added to each root score.
    """

    max_depth: int
    time_limit_ms: int | None
    randomness: float = 0.0
    evaluation_noise: int = 0
    top_moves: int = 1

    @property
    def limits(self) -> SearchLimits:
        return SearchLimits(max_depth=self.max_depth, time_limit_ms=self.time_limit_ms)

    @property
    def is_exact(self) -> bool:
        """Whether this tier always plays the engine's best move."""
        return self.evaluation_noise == 0 and (self.randomness == 0 or self.top_moves <= 1)


DIFFICULTY_SETTINGS: MappingProxyType[Difficulty, DifficultySettings] = MappingProxyType(
    {
        Difficulty.BEGINNER: DifficultySettings(2, 500, 0.60, 150, 5),
        Difficulty.EASY: DifficultySettings(3, 1000, 0.35, 80, 4),
        Difficulty.MEDIUM: DifficultySettings(4, 2000, 0.15, 30, 3),
        Difficulty.HARD: DifficultySettings(6, 3000, 0.05, 10, 2),
        Difficulty.EXPERT: DifficultySettings(16, 5000),
    }
)


def settings_for(difficulty: Difficulty) -> DifficultySettings:
    return DIFFICULTY_SETTINGS[Difficulty(difficulty)]


def _pick(
    ranked: tuple[ScoredMove, ...],
    settings: DifficultySettings,
    rng: random.Random,
) -> Move:
    """Move to play under the tier's noise and top-N randomness."""
    noisy = ranked
    if settings.evaluation_noise:
        width = settings.evaluation_noise
        noisy = tuple(
            ScoredMove(item.move, item.score + round(rng.uniform(-width, width)))
            for item in ranked
        )
        noisy = tuple(sorted(noisy, key=lambda item: item.score, reverse=True))

    if settings.top_moves > 1 and len(noisy) > 1 and rng.random() < settings.randomness:
        return noisy[rng.randrange(min(settings.top_moves, len(noisy)))].move
    return noisy[0].move


def best_move(
    position: Position,
    difficulty: Difficulty = Difficulty.MEDIUM,
    *,
    rng: random.Random | None = None,
    is_cancelled: CancelCheck | None = None,
    engine: PythonSearchEngine | None = None,
    settings: DifficultySettings | None = None,
) -> SearchResult:
    """Choose a machine move for the side to move in *position*.

    Raises :class:`~damka.core.errors.NoMoveAvailable` when there is no
    legal move. *position* is never mutated.
    """
    tier = settings if settings is not None else settings_for(difficulty)
    searcher = engine if engine is not None else PythonSearchEngine()

    if tier.is_exact:
        return searcher.search(position, tier.limits, is_cancelled)

    result = searcher.rank_moves(position, tier.limits, is_cancelled)
    if len(result.root_scores) < 2:
        return result

    move = _pick(result.root_scores, tier, rng if rng is not None else random.Random())
    if move == result.best_move:
        return result

    # Searched score of the chosen move, without the noise.
    chosen = next(item for item in result.root_scores if item.move == move)
    _LOGGER.debug(
        "%s plays %s instead of %s",
        Difficulty(difficulty).label,
        chosen.move.full_notation,
        result.best_move.full_notation,
    )
    return replace(result, best_move=chosen.move, score=chosen.score)
