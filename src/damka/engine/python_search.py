"""Pure-Python draughts engine search (negamax + alpha-beta)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter, sleep

from damka.core.enums import Color, PieceKind
from damka.core.errors import NoMoveAvailable
from damka.core.move import Move
from damka.core.move_generator import MoveGenerator
from damka.core.position import Position
from damka.core.rules import FMJD_RULES, RuleConfig, Rules
from damka.core.types import SQUARE_COUNT
from damka.engine.evaluation import Evaluator
from damka.engine.search import CancelCheck, IEngine, ScoredMove, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
WIN_SCORE = 100_000
_WIN_THRESHOLD = WIN_SCORE - 1_000
_TT_EXACT = 0
_TT_LOWER = 1
_TT_UPPER = 2
_MAX_KILLER_PLY = 128
_KILLER_PRIMARY_BONUS = 9_000
_KILLER_SECONDARY_BONUS = 8_000
_HISTORY_BONUS_FACTOR = 32
_HISTORY_MAX_SCORE = 7_000
_QUIESCENCE_MAX_DEPTH = 12
_YIELD_EVERY_NODES = 4096
_SLOTS = SQUARE_COUNT + 1


def _never_cancelled() -> bool:
    return False


def _score_to_tt(score: int, ply: int) -> int:
    """Win scores are stored as distance from this node, not from the root."""
    if score >= _WIN_THRESHOLD:
        return score + ply
    if score <= -_WIN_THRESHOLD:
        return score - ply
    return score


def _score_from_tt(score: int, ply: int) -> int:
    if score >= _WIN_THRESHOLD:
        return score - ply
    if score <= -_WIN_THRESHOLD:
        return score + ply
    return score


# Zobrist hash plus quiet-ply counter; the counter decides draws by the limit.
_TTKey = tuple[int, int]


@dataclass(slots=True)
class _TTEntry:
    depth: int
    score: int
    bound: int
    best_move: Move | None


class PythonSearchEngine(IEngine):
    """Iterative-deepening alpha-beta searcher with capture quiescence.

    The position passed to :meth:`search` is never touched; all
    exploration runs on a private copy.
    """

    __slots__ = (
        "_evaluator",
        "_rules",
        "_cancel_check",
        "_deadline",
        "_stopped",
        "_nodes",
        "_last_yield_nodes",
        "_tt",
        "_tt_max_entries",
        "_killer_moves",
        "_history_scores",
    )

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        rules: RuleConfig = FMJD_RULES,
    ) -> None:
        self._evaluator = evaluator if evaluator is not None else Evaluator()
        self._rules = rules
        self._nodes = 0
        self._last_yield_nodes = 0
        self._deadline: float | None = None
        self._stopped = False
        self._cancel_check: CancelCheck = _never_cancelled
        self._tt: dict[_TTKey, _TTEntry] = {}
        self._tt_max_entries = 200_000
        self._killer_moves: list[list[Move | None]] = [
            [None, None] for _ in range(_MAX_KILLER_PLY)
        ]
        self._history_scores: list[list[list[int]]] = self._empty_history()

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        return self._run(position, limits, is_cancelled, rank_all=False)

    def rank_moves(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Like :meth:`search`, but every root move gets an exact score.

        ``root_scores`` of the result is sorted best first.
        """
        return self._run(position, limits, is_cancelled, rank_all=True)

    def _run(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None,
        rank_all: bool,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        started = perf_counter()
        self._nodes = 0
        self._last_yield_nodes = 0
        self._stopped = False
        self._tt.clear()
        self._reset_move_order_heuristics()
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = started + (ms / 1000.0)

        work = position.copy()
        root_moves: list[Move] = []
        if not Rules.is_quiet_move_draw(work, self._rules):
            root_moves = MoveGenerator(work).generate_legal_moves()
        if not root_moves:
            raise NoMoveAvailable(f"No legal move for {work.side_to_move}")

        ordered_root = self._order_moves(work, root_moves, ply=0)
        best_move = ordered_root[0]
        best_score = self._static_eval(work)
        completed_depth = 0
        root_scores: tuple[ScoredMove, ...] = ()

        if len(ordered_root) == 1:
            root_scores = (ScoredMove(best_move, best_score),)
            return SearchResult(
                best_move, best_score, 0, self._nodes, self._elapsed_ms(started), root_scores
            )

        for depth in range(1, limits.max_depth + 1):
            if self._should_stop():
                break

            scored = self._search_root(work, ordered_root, depth, full_window=rank_all)
            if scored is None:
                break

            ranked = sorted(scored, key=lambda item: item.score, reverse=True)
            best_move = ranked[0].move
            best_score = ranked[0].score
            completed_depth = depth
            root_scores = tuple(ranked)
            _LOGGER.debug(
                "depth %d: best %s score %d nodes %d",
                depth,
                best_move.full_notation,
                best_score,
                self._nodes,
            )

            if rank_all:
                ordered_root = [item.move for item in ranked]
            else:
                # Principal variation move first in the next iteration.
                ordered_root = [best_move] + [m for m in ordered_root if m != best_move]

            if abs(best_score) >= _WIN_THRESHOLD:
                break

        return SearchResult(
            best_move,
            best_score,
            completed_depth,
            self._nodes,
            self._elapsed_ms(started),
            root_scores,
        )

    def _search_root(
        self,
        position: Position,
        root_moves: list[Move],
        depth: int,
        full_window: bool,
    ) -> list[ScoredMove] | None:
        """Score every root move; ``None`` when the iteration was interrupted."""
        scored: list[ScoredMove] = []
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            if self._should_stop():
                return None

            position.make_move(move)
            score = -self._negamax(
                position,
                depth - 1,
                -beta,
                -(-_INF_SCORE if full_window else alpha),
                ply=1,
            )
            position.unmake_move(move)

            scored.append(ScoredMove(move, score))
            if score > alpha:
                alpha = score

        if self._stopped:
            return None
        return scored

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        if self._should_stop():
            return self._static_eval(position)

        self._nodes += 1

        if Rules.is_quiet_move_draw(position, self._rules):
            return 0

        legal = MoveGenerator(position).generate_legal_moves()
        if not legal:
            return -WIN_SCORE + ply

        if depth <= 0:
            return self._quiescence(position, alpha, beta, ply, legal)

        alpha_orig = alpha
        beta_orig = beta
        tt_key = (position.zobrist_hash, position.quiet_plies)
        tt_entry = self._tt.get(tt_key)
        tt_move = tt_entry.best_move if tt_entry is not None else None

        if tt_entry is not None and tt_entry.depth >= depth:
            tt_score = _score_from_tt(tt_entry.score, ply)
            if tt_entry.bound == _TT_EXACT:
                return tt_score
            if tt_entry.bound == _TT_LOWER:
                alpha = max(alpha, tt_score)
            else:
                beta = min(beta, tt_score)
            if alpha >= beta:
                return tt_score

        ordered = self._order_moves(position, legal, tt_move=tt_move, ply=ply)
        best_score = -_INF_SCORE
        best_move: Move | None = None
        side_to_move = position.side_to_move

        for move in ordered:
            position.make_move(move)
            score = -self._negamax(position, depth - 1, -beta, -alpha, ply + 1)
            position.unmake_move(move)

            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
            if alpha >= beta:
                if not move.is_capture:
                    self._record_killer(move, ply)
                    self._update_history(side_to_move, move, depth)
                break
            if self._should_stop():
                break

        if self._stopped:
            return best_score

        bound = _TT_EXACT
        if best_score <= alpha_orig:
            bound = _TT_UPPER
        elif best_score >= beta_orig:
            bound = _TT_LOWER
        self._store_tt(tt_key, depth, _score_to_tt(best_score, ply), bound, best_move=best_move)
        return best_score

    def _quiescence(
        self,
        position: Position,
        alpha: int,
        beta: int,
        ply: int,
        legal: list[Move] | None = None,
        q_depth: int = 0,
    ) -> int:
        """Resolve pending captures; capture is mandatory so no stand-pat then."""
        if self._should_stop():
            return self._static_eval(position)

        if legal is None:
            self._nodes += 1
            if Rules.is_quiet_move_draw(position, self._rules):
                return 0
            legal = MoveGenerator(position).generate_legal_moves()
            if not legal:
                return -WIN_SCORE + ply

        if not legal[0].is_capture or q_depth >= _QUIESCENCE_MAX_DEPTH:
            stand_pat = self._static_eval(position)
            if stand_pat >= beta:
                return beta
            return max(alpha, stand_pat)

        for move in self._order_moves(position, legal, ply=ply):
            position.make_move(move)
            score = -self._quiescence(position, -beta, -alpha, ply + 1, None, q_depth + 1)
            position.unmake_move(move)

            if score >= beta:
                return beta
            if score > alpha:
                alpha = score
            if self._should_stop():
                break

        return alpha

    def _should_stop(self) -> bool:
        if self._stopped:
            return True
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if self._cancel_check() or (
            self._deadline is not None and perf_counter() >= self._deadline
        ):
            self._stopped = True
        return self._stopped

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((perf_counter() - started) * 1000)

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_moves(
        self,
        position: Position,
        moves: list[Move],
        tt_move: Move | None = None,
        ply: int = 0,
    ) -> list[Move]:
        return sorted(
            moves,
            key=lambda move: self._move_order_score(position, move, tt_move, ply),
            reverse=True,
        )

    def _move_order_score(
        self,
        position: Position,
        move: Move,
        tt_move: Move | None = None,
        ply: int = 0,
    ) -> int:
        score = 0
        if tt_move is not None and move == tt_move:
            score += 100_000

        if move.promotion:
            score += 20_000

        if move.captured:
            board = position.board
            score += 10_000 + 1_000 * len(move.captured)
            for sq in move.captured:
                victim = board[sq]
                if victim is not None and victim.kind == PieceKind.KING:
                    score += 500
        else:
            score += self._killer_score(move, ply)
            score += self._history_score(position.side_to_move, move)
        return score

    def _store_tt(
        self,
        key: _TTKey,
        depth: int,
        score: int,
        bound: int,
        best_move: Move | None,
    ) -> None:
        existing = self._tt.get(key)
        if existing is not None and existing.depth > depth:
            return
        if len(self._tt) >= self._tt_max_entries and key not in self._tt:
            self._tt.clear()
        self._tt[key] = _TTEntry(depth=depth, score=score, bound=bound, best_move=best_move)

    @staticmethod
    def _empty_history() -> list[list[list[int]]]:
        return [[[0] * _SLOTS for _ in range(_SLOTS)] for _ in range(2)]

    def _reset_move_order_heuristics(self) -> None:
        self._killer_moves = [[None, None] for _ in range(_MAX_KILLER_PLY)]
        self._history_scores = self._empty_history()

    def _record_killer(self, move: Move, ply: int) -> None:
        if ply < 0 or ply >= len(self._killer_moves):
            return
        killers = self._killer_moves[ply]
        if killers[0] == move:
            return
        killers[1] = killers[0]
        killers[0] = move

    def _killer_score(self, move: Move, ply: int) -> int:
        if ply < 0 or ply >= len(self._killer_moves):
            return 0
        killers = self._killer_moves[ply]
        if killers[0] == move:
            return _KILLER_PRIMARY_BONUS
        if killers[1] == move:
            return _KILLER_SECONDARY_BONUS
        return 0

    def _history_score(self, side: Color, move: Move) -> int:
        return self._history_scores[int(side)][move.from_sq][move.to_sq]

    def _update_history(self, side: Color, move: Move, depth: int) -> None:
        bonus = max(depth, 1) * max(depth, 1) * _HISTORY_BONUS_FACTOR
        side_scores = self._history_scores[int(side)]
        current = side_scores[move.from_sq][move.to_sq]
        side_scores[move.from_sq][move.to_sq] = min(_HISTORY_MAX_SCORE, current + bonus)

    def _static_eval(self, position: Position) -> int:
        return self._evaluator.evaluate(position)
