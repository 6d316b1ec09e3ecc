"""Draughts engine package: evaluation, search, difficulty tiers, Qt worker bridge."""

from damka.engine.difficulty import (
    DIFFICULTY_SETTINGS,
    Difficulty,
    DifficultySettings,
    best_move,
    settings_for,
)
from damka.engine.evaluation import Evaluator
from damka.engine.python_search import PythonSearchEngine
from damka.engine.qt_bridge import EngineWorker
from damka.engine.search import CancelCheck, IEngine, ScoredMove, SearchLimits, SearchResult

__all__ = [
    "DIFFICULTY_SETTINGS",
    "CancelCheck",
    "Difficulty",
    "DifficultySettings",
    "EngineWorker",
    "Evaluator",
    "IEngine",
    "PythonSearchEngine",
    "ScoredMove",
    "SearchLimits",
    "SearchResult",
    "best_move",
    "settings_for",
]
