"""Position — complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from damka.core.board import Board
from damka.core.enums import Color
from damka.core.move import Move
from damka.core.piece import Piece
from damka.core.types import Square
from damka.core.zobrist import piece_key as zobrist_piece_key
from damka.core.zobrist import side_to_move_key as zobrist_side_to_move_key


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    quiet_plies: int
    moved_piece: Piece
    captured_pieces: tuple[tuple[Square, Piece], ...]


class Position:
    """Full draughts position: board + side to move + quiet-ply counter.

    ``quiet_plies`` counts plies since the last capture or promotion.
    Supports :meth:`make_move` / :meth:`unmake_move` via an internal undo
    stack. Neither checks legality; that is the job of
    :class:`~damka.core.game.Game`.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "quiet_plies",
        "history",
        "_zobrist_hash",
        "_undo",
        "_key_stack",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        quiet_plies: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.quiet_plies = quiet_plies
        self.history: list[Move] = []
        self._zobrist_hash = self._compute_zobrist_hash()
        self._undo: list[_PositionState] = []
        self._key_stack: list[int] = [self._zobrist_hash]

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, white to move."""
        return cls()

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the stack."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured: list[tuple[Square, Piece]] = []
        for sq in move.captured:
            victim = board[sq]
            if victim is None:
                raise ValueError(f"No piece to capture on {sq}")
            captured.append((sq, victim))

        self._undo.append(
            _PositionState(
                quiet_plies=self.quiet_plies,
                moved_piece=piece,
                captured_pieces=tuple(captured),
            )
        )

        # Lift piece from origin
        self._toggle_piece_hash(piece, move.from_sq)
        board[move.from_sq] = None

        # Captured pieces leave the board together, after the whole chain
        for sq, victim in captured:
            self._toggle_piece_hash(victim, sq)
            board[sq] = None

        placed = piece.promoted() if move.promotion and not piece.is_king else piece
        board[move.to_sq] = placed
        self._toggle_piece_hash(placed, move.to_sq)

        if move.captured or move.promotion:
            self.quiet_plies = 0
        else:
            self.quiet_plies += 1

        self.history.append(move)
        self.side_to_move = self.side_to_move.opposite
        self._toggle_side_hash()
        self._key_stack.append(self._zobrist_hash)

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move`."""
        state = self._undo.pop()
        self._key_stack.pop()
        self.history.pop()

        self.side_to_move = self.side_to_move.opposite
        board = self.board
        board[move.to_sq] = None
        board[move.from_sq] = state.moved_piece
        for sq, victim in state.captured_pieces:
            board[sq] = victim

        self.quiet_plies = state.quiet_plies
        self._zobrist_hash = self._key_stack[-1]

    def _toggle_piece_hash(self, piece: Piece, sq: Square) -> None:
        self._zobrist_hash ^= zobrist_piece_key(piece, sq)

    def _toggle_side_hash(self) -> None:
        self._zobrist_hash ^= zobrist_side_to_move_key()

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy, including history and undo information."""
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            quiet_plies=self.quiet_plies,
        )
        pos.history = self.history.copy()
        pos._undo = self._undo.copy()
        pos._key_stack = self._key_stack.copy()
        pos._zobrist_hash = self._zobrist_hash
        return pos

    def start_position(self) -> Position:
        """A fresh position as it stood before the first move in history."""
        pos = self.copy()
        while pos.history:
            pos.unmake_move(pos.history[-1])
        return Position(pos.board, pos.side_to_move, pos.quiet_plies)

    @property
    def zobrist_hash(self) -> int:
        """Current Zobrist key for the full position."""
        return self._key_stack[-1]

    @property
    def ply(self) -> int:
        """Number of moves applied to this position object."""
        return len(self.history)

    def _compute_zobrist_hash(self) -> int:
        key = 0
        if self.side_to_move == Color.BLACK:
            key ^= zobrist_side_to_move_key()
        for sq, piece in self.board.items():
            key ^= zobrist_piece_key(piece, sq)
        return key

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"quiet_plies={self.quiet_plies}, ply={self.ply})\n{self.board!r}"
        )
