"""Game management layer — controller, players, match state and replay.

Quick start::

    from damka.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
    ctrl.submit_notation("32-28")
"""

from damka.game.controller import GameController, GameEvents
from damka.game.interfaces import DrawOffer, GamePhase, IGameController, IPlayer
from damka.game.player import AIPlayer, HumanPlayer
from damka.game.state import MatchState, MoveRecord

__all__ = [
    # Interfaces
    "DrawOffer",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "MatchState",
    "MoveRecord",
]
