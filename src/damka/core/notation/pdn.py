"""PDN (Portable Draughts Notation) parsing, export and strict replay."""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping

from damka.core.enums import GameStatus
from damka.core.errors import IllegalMove, ImportRejected, MalformedState
from damka.core.game import Game
from damka.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from damka.core.notation.models import QUIET_PLIES_HEADER, ParsedPdn, PdnMove
from damka.core.notation.moves import move_to_text, parse_move
from damka.core.position import Position

_PDN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_MOVE_NUMBER_RE = re.compile(r"^(\d+)\.(?:\.\.)?(.*)$")

GAME_TYPE_INTERNATIONAL = "20"

# Draughts results score 2 points per game; chess-style tokens are
# accepted on input only.
_RESULT_BY_STATUS: dict[GameStatus, str] = {
    GameStatus.WHITE_WINS: "2-0",
    GameStatus.BLACK_WINS: "0-2",
    GameStatus.DRAW: "1-1",
    GameStatus.ONGOING: "*",
}
_STATUS_BY_RESULT: dict[str, GameStatus] = {
    "2-0": GameStatus.WHITE_WINS,
    "0-2": GameStatus.BLACK_WINS,
    "1-1": GameStatus.DRAW,
    "1-0": GameStatus.WHITE_WINS,
    "0-1": GameStatus.BLACK_WINS,
    "1/2-1/2": GameStatus.DRAW,
    "*": GameStatus.ONGOING,
}
_PDN_RESULT_TOKENS = frozenset(_STATUS_BY_RESULT)


def pdn_result_token(status: GameStatus) -> str:
    """Convert :class:`GameStatus` to a PDN result token."""
    return _RESULT_BY_STATUS[status]


def status_from_pdn(token: str) -> GameStatus:
    """Convert a PDN result token to :class:`GameStatus`."""
    return _STATUS_BY_RESULT.get(token.strip(), GameStatus.ONGOING)


def pdn_movetext_from_moves(moves: list[PdnMove], result_token: str) -> str:
    """Build PDN movetext from mainline moves with optional comments."""
    parts: list[str] = []
    for ply, move in enumerate(moves):
        if ply % 2 == 0:
            parts.append(f"{(ply // 2) + 1}.")
        parts.append(move.text)
        if move.comment:
            # PDN comments cannot contain a closing brace.
            safe_comment = move.comment.replace("}", "]")
            parts.append(f"{{{safe_comment}}}")
    parts.append(result_token)
    return " ".join(parts)


def build_pdn(
    headers: Mapping[str, str],
    moves: list[str],
    result_token: str,
    comments: list[str | None] | None = None,
) -> str:
    """Build a single-game PDN document."""
    if comments is not None and len(comments) != len(moves):
        raise ValueError("PDN comments length must match move length")

    pdn_moves = [
        PdnMove(text=text, comment=(comments[idx] or "") if comments is not None else "")
        for idx, text in enumerate(moves)
    ]

    lines: list[str] = []
    for key, value in headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(pdn_movetext_from_moves(pdn_moves, result_token))
    lines.append("")
    return "\n".join(lines)


def _append_comment(move: PdnMove, comment: str) -> None:
    clean = " ".join(comment.split())
    if not clean:
        return
    if move.comment:
        move.comment = f"{move.comment} {clean}"
    else:
        move.comment = clean


def _parse_pdn_movetext_mainline(movetext: str) -> tuple[list[PdnMove], str]:
    """Parse movetext and return mainline moves/comments plus result token."""
    moves: list[PdnMove] = []
    result_token = "*"
    variation_depth = 0
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            if end < 0:
                comment = movetext[idx + 1 :]
                idx = total
            else:
                comment = movetext[idx + 1 : end]
                idx = end + 1
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            if end < 0:
                end = total
            comment = movetext[idx + 1 : end]
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            idx = end
            continue

        if ch == "(":
            variation_depth += 1
            idx += 1
            continue

        if ch == ")":
            variation_depth = max(0, variation_depth - 1)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in "{};()"
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if not token or variation_depth > 0:
            continue

        if token in _PDN_RESULT_TOKENS:
            result_token = token
            continue

        if token.startswith("$") and token[1:].isdigit():
            continue

        # "1." / "1..." on their own, or glued to the move: "1.32-28".
        if match := _MOVE_NUMBER_RE.match(token):
            token = match.group(2).lstrip(".")
        if not token:
            continue

        moves.append(PdnMove(text=token))

    return moves, result_token


def parse_pdn_game(pdn_text: str) -> ParsedPdn:
    """Parse a single PDN game into structured headers/moves/result."""
    headers: dict[str, str] = {}
    move_lines: list[str] = []
    in_headers = True

    for raw_line in pdn_text.splitlines():
        line = raw_line.strip()
        if not line:
            if in_headers and not headers:
                continue
            in_headers = False
            continue

        if in_headers and line.startswith("["):
            match = _PDN_HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PDN header line: {line}")
            key, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            headers[key] = value
            continue

        in_headers = False
        if line.startswith("%"):
            continue
        move_lines.append(line)

    moves, result_token = _parse_pdn_movetext_mainline("\n".join(move_lines))
    header_result = headers.get("Result")
    if result_token == "*" and header_result in _PDN_RESULT_TOKENS:
        result_token = header_result

    return ParsedPdn(headers=headers, moves=moves, result_token=result_token)


# ── Game export / import ─────────────────────────────────────────────────────


def game_move_texts(game: Game) -> list[str]:
    """Notation of every move in *game*'s history, disambiguated in context."""
    scratch = Game(game.position.start_position(), game.rules)
    texts: list[str] = []
    for move in game.history:
        texts.append(move_to_text(move, scratch.legal_moves()))
        scratch.position.make_move(move)
    return texts


def export_pdn(
    game: Game,
    headers: Mapping[str, str] | None = None,
    date: datetime.date | None = None,
    result: GameStatus | None = None,
) -> str:
    """Export *game* as a PDN document.

    *result* overrides the status derived from the position, e.g. after a
    resignation.
    """
    status = game.status() if result is None else result
    result_token = pdn_result_token(status)
    when = date if date is not None else datetime.date.today()

    all_headers: dict[str, str] = {
        "Event": "Casual game",
        "Site": "?",
        "Date": when.strftime("%Y.%m.%d"),
        "White": "White",
        "Black": "Black",
        "Result": result_token,
        "GameType": GAME_TYPE_INTERNATIONAL,
    }
    start = game.position.start_position()
    start_fen = position_to_fen(start)
    if start_fen != STARTING_FEN:
        all_headers["FEN"] = start_fen
    # FEN has no quiet-ply field.
    if start.quiet_plies:
        all_headers[QUIET_PLIES_HEADER] = str(start.quiet_plies)
    if headers:
        all_headers.update(headers)
    all_headers["Result"] = result_token

    return build_pdn(all_headers, game_move_texts(game), result_token)


def replay_pdn(game: Game, text: str) -> ParsedPdn:
    """Replay a PDN transcript into *game*, all or nothing.

    Every move token must resolve to exactly one legal move. On any failure
    :class:`ImportRejected` is raised and *game* is left untouched; on
    success *game* holds the replayed position and history.
    """
    if not text or not text.strip():
        raise ImportRejected("Empty transcript")

    try:
        parsed = parse_pdn_game(text)
    except ValueError as exc:
        raise ImportRejected(f"Malformed transcript: {exc}") from exc

    game_type = parsed.headers.get("GameType")
    if game_type is not None and game_type.split(",")[0].strip() != GAME_TYPE_INTERNATIONAL:
        raise ImportRejected(f"Unsupported game type: {game_type!r}")

    start: Position
    if parsed.fen:
        try:
            start = position_from_fen(parsed.fen)
        except MalformedState as exc:
            raise ImportRejected(f"Invalid FEN header: {exc}") from exc
    else:
        start = Position.initial()

    if parsed.quiet_plies is not None:
        counter = parsed.quiet_plies.strip()
        if not (counter.isascii() and counter.isdigit()):
            raise ImportRejected(f"Invalid {QUIET_PLIES_HEADER} header: {counter!r}")
        start.quiet_plies = int(counter)

    scratch = Game(start, game.rules)
    for ply, pdn_move in enumerate(parsed.moves):
        try:
            move = parse_move(pdn_move.text, scratch.legal_moves())
        except IllegalMove as exc:
            raise ImportRejected(
                f"Move {ply // 2 + 1} ({pdn_move.text!r}) cannot be played: {exc}",
                token=pdn_move.text,
                ply=ply,
            ) from exc
        scratch.apply_move(move)

    game.restore(scratch.position)
    return parsed
