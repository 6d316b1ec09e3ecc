"""Tests for Board."""

import pytest

from damka.core.board import Board
from damka.core.enums import Color, PieceKind
from damka.core.errors import InvalidSquare
from damka.core.piece import BLACK_KING, BLACK_MAN, WHITE_KING, WHITE_MAN, Piece


class TestBoardInitial:
    def test_black_men(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.BLACK, PieceKind.MAN) == list(range(1, 21))

    def test_white_men(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceKind.MAN) == list(range(31, 51))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for sq in range(21, 31):
            assert board[sq] is None

    def test_no_kings(self) -> None:
        board = Board.initial()
        assert board.count(Color.WHITE, PieceKind.KING) == 0
        assert board.count(Color.BLACK, PieceKind.KING) == 0

    def test_counts(self) -> None:
        board = Board.initial()
        assert board.count(Color.WHITE) == 20
        assert board.count(Color.BLACK) == 20


class TestBoardMutation:
    def test_set_and_get(self) -> None:
        board = Board()
        board[28] = WHITE_KING
        assert board[28] == WHITE_KING
        assert board.pieces(Color.WHITE, PieceKind.KING) == [28]

    def test_replace_updates_indexes(self) -> None:
        board = Board()
        board[28] = WHITE_MAN
        board[28] = BLACK_KING
        assert board.all_pieces(Color.WHITE) == []
        assert board.pieces(Color.BLACK, PieceKind.KING) == [28]

    def test_clear_square(self) -> None:
        board = Board()
        board[28] = BLACK_MAN
        board[28] = None
        assert board.is_empty(28)
        assert board.occupied_mask() == 0

    def test_occupied_sorted(self) -> None:
        board = Board()
        board[40] = WHITE_MAN
        board[3] = BLACK_MAN
        assert board.occupied() == [3, 40]

    def test_row_col_access(self) -> None:
        board = Board()
        board.set_piece_at(5, 4, WHITE_MAN)
        assert board[28] == WHITE_MAN
        assert board.piece_at(5, 4) == WHITE_MAN

    @pytest.mark.parametrize("sq", [0, 51])
    def test_invalid_square(self, sq: int) -> None:
        board = Board()
        with pytest.raises(InvalidSquare):
            board[sq] = WHITE_MAN
        with pytest.raises(InvalidSquare):
            board[sq]


class TestBoardCopy:
    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[31] = None
        assert board[31] == Piece(Color.WHITE)
        assert clone != board

    def test_copy_equal(self) -> None:
        board = Board.initial()
        assert board.copy() == board

    def test_items(self) -> None:
        board = Board()
        board[7] = WHITE_KING
        assert board.items() == [(7, WHITE_KING)]
