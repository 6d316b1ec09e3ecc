"""Zobrist hashing keys for incremental position hashing."""

from __future__ import annotations

from typing import Final

from damka.core.piece import Piece
from damka.core.types import SQUARE_COUNT, Square

_SEED: Final = 0xA5B3C7D9E1F23412
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF
_SLOTS: Final = SQUARE_COUNT + 1


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


# [color][kind - 1][sq]; index 0 of each square table is unused.
_PIECE_KEYS: Final = tuple(
    tuple(
        tuple(_nth_key((color * 2 * _SLOTS) + (kind * _SLOTS) + sq) for sq in range(_SLOTS))
        for kind in range(2)
    )
    for color in range(2)
)
_SIDE_TO_MOVE_KEY: Final = _nth_key(2 * 2 * _SLOTS)


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[int(piece.color)][int(piece.kind) - 1][sq]


def side_to_move_key() -> int:
    """Hash toggle key for side to move (set when black is to move)."""
    return _SIDE_TO_MOVE_KEY
