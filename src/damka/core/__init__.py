"""Core domain layer — pure draughts logic with zero external dependencies.

Quick start::

    from damka.core import Game

    game = Game.standard()
    for move in game.legal_moves():
        print(move)
    game.apply_move(game.legal_moves()[0])
"""

from damka.core.board import Board
from damka.core.codec import STARTING_STATE, decode_state, encode_state
from damka.core.enums import Color, GameEndReason, GameStatus, PieceKind
from damka.core.errors import (
    DraughtsError,
    IllegalMove,
    ImportRejected,
    InvalidSquare,
    MalformedState,
    NoMoveAvailable,
)
from damka.core.game import Game
from damka.core.move import Move
from damka.core.move_generator import MoveGenerator
from damka.core.notation import (
    STARTING_FEN,
    export_pdn,
    move_to_text,
    parse_move,
    position_from_fen,
    position_to_fen,
    replay_pdn,
)
from damka.core.piece import Piece
from damka.core.position import Position
from damka.core.rules import FMJD_RULES, RuleConfig, Rules
from damka.core.types import (
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameEndReason",
    "GameStatus",
    "PieceKind",
    # Errors
    "DraughtsError",
    "IllegalMove",
    "ImportRejected",
    "InvalidSquare",
    "MalformedState",
    "NoMoveAvailable",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "FMJD_RULES",
    "Game",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "RuleConfig",
    "Rules",
    # Snapshots / notation
    "STARTING_STATE",
    "STARTING_FEN",
    "decode_state",
    "encode_state",
    "export_pdn",
    "move_to_text",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
    "replay_pdn",
]
