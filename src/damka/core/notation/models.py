"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

QUIET_PLIES_HEADER = "QuietPlies"


@dataclass(slots=True)
class PdnMove:
    """A single mainline move extracted from PDN movetext."""

    text: str
    comment: str = ""


@dataclass(slots=True)
class ParsedPdn:
    """Structured PDN payload used by game import paths."""

    headers: dict[str, str]
    moves: list[PdnMove]
    result_token: str

    @property
    def move_texts(self) -> list[str]:
        return [move.text for move in self.moves]

    @property
    def fen(self) -> str | None:
        """Start position from the ``FEN`` header, if any."""
        return self.headers.get("FEN")

    @property
    def quiet_plies(self) -> str | None:
        """Quiet-ply counter of the start position from the ``QuietPlies`` header."""
        return self.headers.get(QUIET_PLIES_HEADER)
