"""Tests for Position make/unmake."""

import pytest

from damka.core.codec import encode_state
from damka.core.enums import Color, PieceKind
from damka.core.move import Move
from damka.core.move_generator import MoveGenerator
from damka.core.notation import position_from_fen
from damka.core.piece import BLACK_MAN, WHITE_KING, WHITE_MAN
from damka.core.position import Position


class TestMakeUnmake:
    def test_side_switches(self) -> None:
        pos = Position.initial()
        pos.make_move(Move(32, 28))
        assert pos.side_to_move == Color.BLACK
        assert pos.board[28] == WHITE_MAN
        assert pos.board[32] is None

    def test_unmake_restores_side(self) -> None:
        pos = Position.initial()
        move = Move(32, 28)
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.side_to_move == Color.WHITE

    def test_unmake_restores_state(self) -> None:
        """After make+unmake of every legal move, the snapshot must match."""
        pos = Position.initial()
        before = encode_state(pos)
        for move in MoveGenerator(pos).generate_legal_moves():
            pos.make_move(move)
            pos.unmake_move(move)
            assert encode_state(pos) == before, f"Failed for {move}"

    def test_capture_removes_pieces(self) -> None:
        pos = position_from_fen("W:W37,44:B12,22,32,39")
        (move,) = MoveGenerator(pos).generate_legal_moves()
        pos.make_move(move)
        for sq in (12, 22, 32):
            assert pos.board[sq] is None
        assert pos.board[8] == WHITE_MAN
        assert pos.board[39] == BLACK_MAN

    def test_unmake_capture_restores_victims(self) -> None:
        pos = position_from_fen("W:W37,44:B12,22,32,39")
        before = encode_state(pos)
        (move,) = MoveGenerator(pos).generate_legal_moves()
        pos.make_move(move)
        pos.unmake_move(move)
        assert encode_state(pos) == before

    def test_promotion(self) -> None:
        pos = position_from_fen("W:W7:B45")
        move = Move(7, 2, promotion=True)
        pos.make_move(move)
        assert pos.board[2] == WHITE_KING
        pos.unmake_move(move)
        assert pos.board[7] == WHITE_MAN
        assert pos.board.count(Color.WHITE, PieceKind.KING) == 0

    def test_no_piece_on_origin(self) -> None:
        pos = Position.initial()
        with pytest.raises(ValueError):
            pos.make_move(Move(28, 23))


class TestQuietPlies:
    def test_man_move_increments(self) -> None:
        pos = Position.initial()
        pos.make_move(Move(32, 28))
        assert pos.quiet_plies == 1

    def test_capture_resets(self) -> None:
        pos = position_from_fen("W:W28,46:B23")
        pos.quiet_plies = 9
        (move,) = MoveGenerator(pos).generate_legal_moves()
        pos.make_move(move)
        assert pos.quiet_plies == 0

    def test_promotion_resets(self) -> None:
        pos = position_from_fen("W:W7:B45")
        pos.quiet_plies = 4
        pos.make_move(Move(7, 1, promotion=True))
        assert pos.quiet_plies == 0

    def test_king_move_increments(self) -> None:
        pos = position_from_fen("W:WK1:BK50")
        pos.make_move(Move(1, 6))
        assert pos.quiet_plies == 1

    def test_unmake_restores_counter(self) -> None:
        pos = position_from_fen("W:W28,46:B23")
        pos.quiet_plies = 9
        (move,) = MoveGenerator(pos).generate_legal_moves()
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.quiet_plies == 9


class TestZobrist:
    def test_hash_changes_after_move(self) -> None:
        pos = Position.initial()
        key = pos.zobrist_hash
        pos.make_move(Move(32, 28))
        assert pos.zobrist_hash != key

    def test_hash_restored_after_unmake(self) -> None:
        pos = Position.initial()
        key = pos.zobrist_hash
        move = Move(32, 28)
        pos.make_move(move)
        pos.unmake_move(move)
        assert pos.zobrist_hash == key

    def test_incremental_matches_fresh(self) -> None:
        pos = Position.initial()
        for move in (Move(32, 28), Move(19, 23)):
            pos.make_move(move)
        fresh = Position(pos.board.copy(), pos.side_to_move, pos.quiet_plies)
        assert pos.zobrist_hash == fresh.zobrist_hash

    def test_transposition_same_hash(self) -> None:
        a = Position.initial()
        for move in (Move(32, 28), Move(19, 23), Move(31, 27), Move(18, 22)):
            a.make_move(move)
        b = Position.initial()
        for move in (Move(31, 27), Move(18, 22), Move(32, 28), Move(19, 23)):
            b.make_move(move)
        assert a.zobrist_hash == b.zobrist_hash

    def test_side_to_move_in_hash(self) -> None:
        white = position_from_fen("W:W28:B1")
        black = position_from_fen("B:W28:B1")
        assert white.zobrist_hash != black.zobrist_hash


class TestCopy:
    def test_copy_is_independent(self) -> None:
        pos = Position.initial()
        clone = pos.copy()
        clone.make_move(Move(32, 28))
        assert pos.board[32] == WHITE_MAN
        assert pos.ply == 0
        assert clone.ply == 1

    def test_copy_keeps_history(self) -> None:
        pos = Position.initial()
        move = Move(32, 28)
        pos.make_move(move)
        clone = pos.copy()
        assert clone.history == [move]
        clone.unmake_move(move)
        assert encode_state(clone) == encode_state(Position.initial())

    def test_start_position(self) -> None:
        pos = position_from_fen("W:W28,46:B17")
        start = encode_state(pos)
        pos.make_move(Move(46, 41))
        pos.make_move(Move(17, 21))
        rewound = pos.start_position()
        assert encode_state(rewound) == start
        assert rewound.ply == 0
        assert pos.ply == 2
