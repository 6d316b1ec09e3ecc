"""Square type alias and coordinate helpers.

Board layout (standard numbering, black on top, white at the bottom)::

       0  1  2  3  4  5  6  7  8  9   (col)
    0  .  1  .  2  .  3  .  4  .  5
    1  6  .  7  .  8  .  9  . 10  .
    2  . 11  . 12  . 13  . 14  . 15
    3 16  . 17  . 18  . 19  . 20  .
    4  . 21  . 22  . 23  . 24  . 25
    5 26  . 27  . 28  . 29  . 30  .
    6  . 31  . 32  . 33  . 34  . 35
    7 36  . 37  . 38  . 39  . 40  .
    8  . 41  . 42  . 43  . 44  . 45
    9 46  . 47  . 48  . 49  . 50  .
  (row)

Only cells with an odd ``row + col`` are playable.
"""

from __future__ import annotations

from typing import Final, TypeAlias

from damka.core.errors import InvalidSquare

Square: TypeAlias = int  # 1–50

BOARD_SIZE: Final = 10
SQUARE_COUNT: Final = 50
SQUARES_PER_ROW: Final = BOARD_SIZE // 2

# (d_row, d_col); negative d_row points towards black's side.
DIAGONALS: Final[tuple[tuple[int, int], ...]] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

ALL_SQUARES: Final[tuple[Square, ...]] = tuple(range(1, SQUARE_COUNT + 1))


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_playable(row: int, col: int) -> bool:
    """Whether ``(row, col)`` is one of the 50 dark cells."""
    return is_on_board(row, col) and (row + col) % 2 == 1


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square number."""
    return 1 <= sq <= SQUARE_COUNT


def make_square(row: int, col: int) -> Square:
    """Square number for a playable ``(row, col)`` pair."""
    if not is_playable(row, col):
        raise InvalidSquare(f"Not a playable square: ({row}, {col})")
    return row * SQUARES_PER_ROW + col // 2 + 1


def _build_coordinates() -> tuple[tuple[int, int], ...]:
    coords: list[tuple[int, int]] = [(-1, -1)]  # index 0 unused
    for index in range(SQUARE_COUNT):
        row, pos_in_row = divmod(index, SQUARES_PER_ROW)
        col = pos_in_row * 2 + (1 if row % 2 == 0 else 0)
        coords.append((row, col))
    return tuple(coords)


_COORDS: Final = _build_coordinates()


def coordinates(sq: Square) -> tuple[int, int]:
    """``(row, col)`` of square *sq*."""
    if not is_valid_square(sq):
        raise InvalidSquare(f"Square out of range: {sq!r}")
    return _COORDS[sq]


def row_of(sq: Square) -> int:
    """Row index 0–9 (0 = black's back row)."""
    return coordinates(sq)[0]


def col_of(sq: Square) -> int:
    """Column index 0–9."""
    return coordinates(sq)[1]


def square_name(sq: Square) -> str:
    """Notation name, e.g. 32 → '32'."""
    if not is_valid_square(sq):
        raise InvalidSquare(f"Square out of range: {sq!r}")
    return str(sq)


def parse_square(name: str) -> Square:
    """Parse a square number, e.g. '32' → 32."""
    text = name.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidSquare(f"Invalid square name: {name!r}")
    sq = int(text)
    if not is_valid_square(sq):
        raise InvalidSquare(f"Square out of range: {name!r}")
    return sq


def mirror(sq: Square) -> Square:
    """The square seen from the other side of the board (180° rotation)."""
    return SQUARE_COUNT + 1 - sq
