"""Notation package: move text, PDN FEN and PDN transcripts."""

from damka.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from damka.core.notation.models import ParsedPdn, PdnMove
from damka.core.notation.moves import move_to_text, parse_move, parse_squares
from damka.core.notation.pdn import (
    build_pdn,
    export_pdn,
    game_move_texts,
    parse_pdn_game,
    pdn_movetext_from_moves,
    pdn_result_token,
    replay_pdn,
    status_from_pdn,
)

__all__ = [
    "STARTING_FEN",
    "PdnMove",
    "ParsedPdn",
    "position_from_fen",
    "position_to_fen",
    "move_to_text",
    "parse_move",
    "parse_squares",
    "pdn_result_token",
    "status_from_pdn",
    "pdn_movetext_from_moves",
    "build_pdn",
    "parse_pdn_game",
    "game_move_texts",
    "export_pdn",
    "replay_pdn",
]
