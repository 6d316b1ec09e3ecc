"""Tests for square numbering helpers."""

import pytest

from damka.core.errors import InvalidSquare
from damka.core.types import (
    ALL_SQUARES,
    coordinates,
    is_playable,
    make_square,
    mirror,
    parse_square,
    square_name,
)


class TestCoordinates:
    def test_corners(self) -> None:
        assert coordinates(1) == (0, 1)
        assert coordinates(5) == (0, 9)
        assert coordinates(46) == (9, 0)
        assert coordinates(50) == (9, 8)

    def test_odd_row_starts_at_column_zero(self) -> None:
        assert coordinates(6) == (1, 0)
        assert coordinates(19) == (3, 6)

    def test_round_trip_every_square(self) -> None:
        for sq in ALL_SQUARES:
            row, col = coordinates(sq)
            assert is_playable(row, col)
            assert make_square(row, col) == sq

    def test_light_cell_rejected(self) -> None:
        with pytest.raises(InvalidSquare):
            make_square(0, 0)

    def test_out_of_range(self) -> None:
        for bad in (0, 51, -3):
            with pytest.raises(InvalidSquare):
                coordinates(bad)


class TestParsing:
    def test_parse(self) -> None:
        assert parse_square("32") == 32
        assert parse_square(" 7 ") == 7

    @pytest.mark.parametrize("text", ["0", "51", "a1", "", "-4", "³"])
    def test_parse_rejects(self, text: str) -> None:
        with pytest.raises(InvalidSquare):
            parse_square(text)

    def test_name(self) -> None:
        assert square_name(50) == "50"
        with pytest.raises(InvalidSquare):
            square_name(99)


class TestMirror:
    def test_mirror(self) -> None:
        assert mirror(1) == 50
        assert mirror(28) == 23

    def test_involution(self) -> None:
        for sq in ALL_SQUARES:
            assert mirror(mirror(sq)) == sq
