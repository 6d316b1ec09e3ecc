"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from damka.core.types import Square

QUIET_SEPARATOR = "-"
CAPTURE_SEPARATOR = "x"


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing one complete move.

    A capturing move is the whole jump chain: ``captured`` lists the jumped
    squares in order and ``path`` every landing square starting at
    ``from_sq``. ``path`` is informational and does not take part in
    equality.
    """

    from_sq: Square
    to_sq: Square
    captured: tuple[Square, ...] = ()
    promotion: bool = False
    path: tuple[Square, ...] = field(default=(), compare=False)

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)

    @property
    def capture_count(self) -> int:
        return len(self.captured)

    @property
    def landings(self) -> tuple[Square, ...]:
        """Every square the piece stops on, origin included."""
        if self.path:
            return self.path
        return (self.from_sq, self.to_sq)

    def same_effect(self, other: Move) -> bool:
        """Whether *other* leaves the board in the same state as this move."""
        return (
            self.from_sq == other.from_sq
            and self.to_sq == other.to_sq
            and set(self.captured) == set(other.captured)
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        sep = CAPTURE_SEPARATOR if self.captured else QUIET_SEPARATOR
        return f"{self.from_sq}{sep}{self.to_sq}"

    @property
    def notation(self) -> str:
        """Short standard notation, e.g. ``32-28`` or ``28x19``."""
        return str(self)

    @property
    def full_notation(self) -> str:
        """Notation listing every landing square, e.g. ``37x28x17x8``."""
        if not self.captured:
            return str(self)
        return CAPTURE_SEPARATOR.join(str(sq) for sq in self.landings)
