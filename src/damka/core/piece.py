"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from damka.core.enums import Color, PieceKind

# Snapshot character ↔ (Color, PieceKind)
_CHAR_MAP: dict[str, tuple[Color, PieceKind]] = {
    "w": (Color.WHITE, PieceKind.MAN),
    "W": (Color.WHITE, PieceKind.KING),
    "b": (Color.BLACK, PieceKind.MAN),
    "B": (Color.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.MAN): "⛀",
    (Color.WHITE, PieceKind.KING): "⛁",
    (Color.BLACK, PieceKind.MAN): "⛂",
    (Color.BLACK, PieceKind.KING): "⛃",
}

_CHARS: dict[tuple[Color, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a draughts piece."""

    color: Color
    kind: PieceKind = PieceKind.MAN

    @property
    def is_king(self) -> bool:
        return self.kind == PieceKind.KING

    def promoted(self) -> Piece:
        """The king that replaces this man on promotion."""
        return Piece(self.color, PieceKind.KING)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Snapshot character (lowercase = man, uppercase = king)."""
        return _CHARS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from snapshot character, e.g. 'W' → white king."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, kind)

    @property
    def symbol(self) -> str:
        """Unicode draughts symbol, e.g. ⛃."""
        return _UNICODE[(self.color, self.kind)]


WHITE_MAN = Piece(Color.WHITE, PieceKind.MAN)
WHITE_KING = Piece(Color.WHITE, PieceKind.KING)
BLACK_MAN = Piece(Color.BLACK, PieceKind.MAN)
BLACK_KING = Piece(Color.BLACK, PieceKind.KING)
