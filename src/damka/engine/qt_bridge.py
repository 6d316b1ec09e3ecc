"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import replace

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from damka.core.errors import NoMoveAvailable
from damka.core.position import Position
from damka.engine.difficulty import Difficulty, DifficultySettings, best_move, settings_for
from damka.engine.python_search import PythonSearchEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and drive it through queued signal
    connections; every result carries the ``request_id`` it answers.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_difficulty", "_settings", "_rng")

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        *,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._engine = PythonSearchEngine()
        self._difficulty = difficulty
        self._settings: DifficultySettings = settings_for(difficulty)
        self._rng = rng if rng is not None else random.Random()
        self._cancel_event = threading.Event()

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def settings(self) -> DifficultySettings:
        return self._settings

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            result = best_move(
                position_obj,
                self._difficulty,
                rng=self._rng,
                is_cancelled=self._cancel_event.is_set,
                engine=self._engine,
                settings=self._settings,
            )
        except NoMoveAvailable:
            self.search_no_move.emit(request_id)
            return
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Switch tier (takes effect on the next search)."""
        self._difficulty = Difficulty(difficulty)
        self._settings = settings_for(self._difficulty)

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Override the tier's search budget (takes effect on the next search)."""
        self._settings = replace(self._settings, max_depth=max_depth, time_limit_ms=time_limit_ms)
