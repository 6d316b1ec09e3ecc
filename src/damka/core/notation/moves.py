"""Move notation: ``32-28`` for quiet moves, ``28x19`` for captures.

Captures may also be written with every landing square (``37x28x17x8``),
which is how two chains sharing both endpoints are told apart.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from damka.core.errors import IllegalMove, InvalidSquare
from damka.core.move import CAPTURE_SEPARATOR, QUIET_SEPARATOR, Move
from damka.core.types import Square, parse_square

_QUIET_RE = re.compile(r"^(\d{1,2})-(\d{1,2})$")
_CAPTURE_RE = re.compile(r"^\d{1,2}(?:x\d{1,2})+$")
# Trailing annotation glyphs ("32-28!", "28x19?!") carry no move information.
_ANNOTATION_CHARS = "!?+*#"


def move_to_text(move: Move, legal_moves: Iterable[Move] | None = None) -> str:
    """Standard notation for *move*.

    When *legal_moves* holds another capture with the same endpoints, the
    full path form is returned so that the token stays unambiguous.
    """
    if not move.is_capture or legal_moves is None:
        return move.notation
    for other in legal_moves:
        if (
            other.is_capture
            and other.from_sq == move.from_sq
            and other.to_sq == move.to_sq
            and not other.same_effect(move)
        ):
            return move.full_notation
    return move.notation


def parse_squares(text: str) -> tuple[bool, list[Square]]:
    """Split a move token into ``(is_capture, squares)``.

    Raises :class:`IllegalMove` on malformed text.
    """
    token = text.strip().rstrip(_ANNOTATION_CHARS)
    try:
        if match := _QUIET_RE.match(token):
            return False, [parse_square(match.group(1)), parse_square(match.group(2))]
        if _CAPTURE_RE.match(token):
            return True, [parse_square(part) for part in token.split(CAPTURE_SEPARATOR)]
    except InvalidSquare as exc:
        raise IllegalMove(f"Invalid move text {text!r}: {exc}") from exc
    raise IllegalMove(
        f"Invalid move text {text!r}; expected "
        f"'<from>{QUIET_SEPARATOR}<to>' or '<from>{CAPTURE_SEPARATOR}<to>'"
    )


def _is_subsequence(needle: Sequence[Square], haystack: Sequence[Square]) -> bool:
    it = iter(haystack)
    return all(sq in it for sq in needle)


def parse_move(text: str, legal_moves: Iterable[Move]) -> Move:
    """Resolve *text* to exactly one of *legal_moves*.

    Raises :class:`IllegalMove` when the token is malformed, matches no
    legal move, or matches more than one.
    """
    is_capture, squares = parse_squares(text)
    from_sq, to_sq = squares[0], squares[-1]

    matches: list[Move] = []
    for move in legal_moves:
        if move.is_capture != is_capture:
            continue
        if move.from_sq != from_sq or move.to_sq != to_sq:
            continue
        if len(squares) > 2 and not _is_subsequence(squares, move.landings):
            continue
        matches.append(move)

    if not matches:
        raise IllegalMove(f"No legal move matches {text!r}")
    if len(matches) > 1:
        options = ", ".join(m.full_notation for m in matches)
        raise IllegalMove(f"Ambiguous move {text!r}; could be {options}")
    return matches[0]
